from pydantic import BaseModel, ConfigDict, Field


class UploadUrlRequest(BaseModel):
    bucket: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    content_type: str = Field(..., min_length=1, alias="contentType")


class UploadUrlResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    upload_url: str = Field(..., alias="uploadUrl")
    public_url: str = Field(..., alias="publicUrl")


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
