import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from upload_api.core.config import StorageConfig, get_settings
from upload_api.services import storage as storage_service

STORAGE_ENV = {
    "R2_ACCOUNT_ID": "acct123",
    "R2_ACCESS_KEY_ID": "AKIDEXAMPLE",
    "R2_SECRET_ACCESS_KEY": "super-secret-value",
    "R2_BUCKET_NAME": "prod-bucket",
    "R2_PUBLIC_DOMAIN": "cdn.example.com",
}


class DummyStorage(storage_service.StorageService):
    def __init__(self) -> None:  # type: ignore[super-init-not-called]
        self.config = StorageConfig(
            account_id=STORAGE_ENV["R2_ACCOUNT_ID"],
            access_key_id=STORAGE_ENV["R2_ACCESS_KEY_ID"],
            secret_access_key=STORAGE_ENV["R2_SECRET_ACCESS_KEY"],
            bucket_name=STORAGE_ENV["R2_BUCKET_NAME"],
            public_domain=STORAGE_ENV["R2_PUBLIC_DOMAIN"],
        )
        self.bucket = self.config.bucket_name
        self.calls: list[tuple[str, str, int]] = []

    def create_presigned_put(self, key: str, content_type: str, expires_in: int = 900) -> str:  # type: ignore[override]
        self.calls.append((key, content_type, expires_in))
        return f"https://example.com/put/{self.bucket}/{key}?expires={expires_in}"


class FailingStorage(DummyStorage):
    def create_presigned_put(self, key: str, content_type: str, expires_in: int = 900) -> str:  # type: ignore[override]
        raise RuntimeError("signing exploded")


@pytest.fixture(autouse=True)
def configure_environment(monkeypatch):
    for name, value in STORAGE_ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("R2_ENDPOINT_URL", raising=False)
    get_settings.cache_clear()
    storage_service.reset_storage_service()
    yield
    get_settings.cache_clear()
    storage_service.reset_storage_service()


@pytest.fixture
def dummy_storage() -> DummyStorage:
    storage = DummyStorage()
    storage_service._storage_service = storage
    return storage


@pytest.fixture
def failing_storage() -> FailingStorage:
    storage = FailingStorage()
    storage_service._storage_service = storage
    return storage


@pytest.fixture(scope="session")
def app_instance():
    from upload_api.main import app

    return app


@pytest_asyncio.fixture
async def client(app_instance):
    transport = ASGITransport(app=app_instance)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
