from __future__ import annotations

import base64

import pytest

from app.android.models import BuildConfig
from app.android.publisher import Publisher

PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


class FakeStorage:
    """In-memory StorageClient that can be told to fail uploads."""

    def __init__(self, *, buckets=None, upload_failures: int = 0, fail_create: bool = False, fail_list: bool = False):
        self.buckets: set[str] = set(buckets or [])
        self.objects: dict[tuple[str, str], dict] = {}
        self.upload_failures = upload_failures
        self.fail_create = fail_create
        self.fail_list = fail_list
        self.calls: list[str] = []
        self.upload_calls = 0

    def list_buckets(self) -> list[str]:
        self.calls.append("list_buckets")
        if self.fail_list:
            raise RuntimeError("list denied")
        return sorted(self.buckets)

    def create_bucket(self, name: str, *, public: bool) -> None:
        self.calls.append("create_bucket")
        if self.fail_create:
            raise RuntimeError("quota exceeded")
        self.buckets.add(name)
        self.public = public

    def upload_object(self, bucket: str, path: str, body: bytes, *, content_type: str, overwrite: bool) -> None:
        self.calls.append("upload_object")
        self.upload_calls += 1
        if self.upload_failures > 0:
            self.upload_failures -= 1
            raise RuntimeError(f"upload failed #{self.upload_calls}")
        self.objects[(bucket, path)] = {"body": body, "content_type": content_type, "overwrite": overwrite}

    def get_public_url(self, bucket: str, path: str) -> str:
        self.calls.append("get_public_url")
        return f"https://storage.test/{bucket}/{path}"


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def png_data_uri() -> str:
    return "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode("ascii")


@pytest.fixture
def demo_config() -> BuildConfig:
    return BuildConfig.model_validate(
        {
            "websiteUrl": "https://example.com",
            "appName": "Demo App",
            "iconData": "data:image/png;base64,AAAA",
            "enableNotifications": True,
            "enableMusicControls": False,
        }
    )


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def publisher(storage: FakeStorage, sleeper: RecordingSleep) -> Publisher:
    return Publisher(storage, bucket="android-apps", sleep=sleeper)
