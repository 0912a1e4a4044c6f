from typing import Final

import boto3
from botocore.client import Config

from upload_api.core.config import StorageConfig, get_settings

UPLOAD_URL_TTL_SECONDS: Final[int] = 15 * 60

ALLOWED_CONTENT_TYPES: Final[tuple[str, ...]] = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
)


class InvalidObjectKey(ValueError):
    """Raised when caller input would escape its key prefix."""


def _check_key_part(part: str) -> None:
    if part.startswith("/") or "\\" in part:
        raise InvalidObjectKey(part)
    if any(segment in {".", ".."} for segment in part.split("/")):
        raise InvalidObjectKey(part)


def build_object_key(prefix: str, path: str) -> str:
    _check_key_part(prefix)
    _check_key_part(path)
    return f"{prefix}/{path}"


class StorageService:
    """Presigns uploads against an S3-compatible bucket (Cloudflare R2 by default)."""

    def __init__(self, config: StorageConfig) -> None:
        self.config = config
        session = boto3.session.Session()
        self.client = session.client(
            "s3",
            endpoint_url=config.resolved_endpoint,
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            region_name="auto",
            config=Config(
                signature_version="s3v4",
                s3={"addressing_style": config.addressing_style},
            ),
        )
        self.bucket = config.bucket_name

    def get_public_url(self, key: str) -> str:
        return f"https://{self.config.public_domain}/{key}"

    def create_presigned_put(
        self,
        key: str,
        content_type: str,
        expires_in: int = UPLOAD_URL_TTL_SECONDS,
    ) -> str:
        return self.client.generate_presigned_url(
            "put_object",
            Params={
                "Bucket": self.bucket,
                "Key": key,
                "ContentType": content_type,
            },
            ExpiresIn=expires_in,
        )


_storage_service: StorageService | None = None


def get_storage_service() -> StorageService:
    """Return the process-wide signer; raises MissingConfigurationError if unconfigured."""
    global _storage_service
    if _storage_service is None:
        _storage_service = StorageService(get_settings().storage_config())
    return _storage_service


def reset_storage_service() -> None:
    global _storage_service
    _storage_service = None
