from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MissingConfigurationError(Exception):
    """Raised when required storage settings are absent."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing storage settings: {', '.join(missing)}")


class StorageConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    account_id: str
    access_key_id: str
    secret_access_key: str
    bucket_name: str
    public_domain: str
    endpoint_url: str | None = None

    @property
    def resolved_endpoint(self) -> str:
        if self.endpoint_url:
            return self.endpoint_url
        return f"https://{self.account_id}.r2.cloudflarestorage.com"

    @property
    def addressing_style(self) -> str:
        # Overridden endpoints get path-style URLs: scheme://host/bucket/key.
        return "path" if self.endpoint_url else "virtual"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="upload-url-issuer", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    r2_account_id: str | None = Field(default=None, alias="R2_ACCOUNT_ID")
    r2_access_key_id: str | None = Field(default=None, alias="R2_ACCESS_KEY_ID")
    r2_secret_access_key: str | None = Field(default=None, alias="R2_SECRET_ACCESS_KEY")
    r2_bucket_name: str | None = Field(default=None, alias="R2_BUCKET_NAME")
    r2_public_domain: str | None = Field(default=None, alias="R2_PUBLIC_DOMAIN")
    r2_endpoint_url: str | None = Field(default=None, alias="R2_ENDPOINT_URL")

    def missing_storage_settings(self) -> list[str]:
        required = {
            "R2_ACCOUNT_ID": self.r2_account_id,
            "R2_ACCESS_KEY_ID": self.r2_access_key_id,
            "R2_SECRET_ACCESS_KEY": self.r2_secret_access_key,
            "R2_BUCKET_NAME": self.r2_bucket_name,
            "R2_PUBLIC_DOMAIN": self.r2_public_domain,
        }
        return [name for name, value in required.items() if not value]

    def storage_config(self) -> StorageConfig:
        missing = self.missing_storage_settings()
        if missing:
            raise MissingConfigurationError(missing)
        return StorageConfig(
            account_id=self.r2_account_id,
            access_key_id=self.r2_access_key_id,
            secret_access_key=self.r2_secret_access_key,
            bucket_name=self.r2_bucket_name,
            public_domain=self.r2_public_domain,
            endpoint_url=self.r2_endpoint_url or None,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
