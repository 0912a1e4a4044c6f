from upload_api.schemas.upload import ErrorResponse, UploadUrlRequest, UploadUrlResponse

__all__ = [
    "UploadUrlRequest",
    "UploadUrlResponse",
    "ErrorResponse",
]
