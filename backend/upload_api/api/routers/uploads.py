import asyncio
import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from upload_api.api.deps import require_authorization
from upload_api.core.config import MissingConfigurationError
from upload_api.core.errors import (
    InternalError,
    InvalidRequest,
    ServerMisconfiguration,
    UnsupportedMediaType,
)
from upload_api.schemas import ErrorResponse, UploadUrlRequest, UploadUrlResponse
from upload_api.services.storage import (
    ALLOWED_CONTENT_TYPES,
    UPLOAD_URL_TTL_SECONDS,
    InvalidObjectKey,
    build_object_key,
    get_storage_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])


@router.post(
    "/generate-upload-url",
    response_model=UploadUrlResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    dependencies=[Depends(require_authorization)],
)
async def generate_upload_url(request: Request) -> UploadUrlResponse:
    """Issue a presigned PUT URL and the public URL the object will be served from."""
    # Body is read only after the authorization dependency has passed.
    try:
        payload = UploadUrlRequest.model_validate_json(await request.body())
    except ValidationError as exc:
        logger.info("Rejected request body: %s", exc.errors(include_url=False))
        raise InvalidRequest() from exc

    if payload.content_type not in ALLOWED_CONTENT_TYPES:
        raise UnsupportedMediaType(
            f"Invalid content type. Allowed: {', '.join(ALLOWED_CONTENT_TYPES)}"
        )

    try:
        object_key = build_object_key(payload.bucket, payload.path)
    except InvalidObjectKey as exc:
        logger.warning("Rejected object key part %r", str(exc))
        raise InvalidRequest("Invalid object path") from exc

    try:
        storage = await asyncio.to_thread(get_storage_service)
    except MissingConfigurationError as exc:
        logger.error("Missing storage environment variables: %s", ", ".join(exc.missing))
        raise ServerMisconfiguration() from exc

    try:
        upload_url = await asyncio.to_thread(
            storage.create_presigned_put,
            object_key,
            payload.content_type,
            UPLOAD_URL_TTL_SECONDS,
        )
        public_url = storage.get_public_url(object_key)
    except Exception as exc:
        logger.exception("Error generating upload URL for %s", object_key)
        raise InternalError(details=str(exc)) from exc

    logger.info("Issued upload URL for %s", object_key)
    return UploadUrlResponse(upload_url=upload_url, public_url=public_url)
