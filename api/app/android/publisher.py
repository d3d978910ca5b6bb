from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .errors import StorageProvisionError, UploadExhausted
from .storage import StorageClient

logger = logging.getLogger(__name__)

APK_CONTENT_TYPE = "application/vnd.android.package-archive"
APK_FILE_NAME = "app-debug.apk"


def object_path(build_id: str, *, prefix: str = "") -> str:
    return f"{prefix}{build_id}/{APK_FILE_NAME}"


class Publisher:
    """Uploads archives to a public bucket with linear-backoff retries."""

    def __init__(
        self,
        storage: StorageClient,
        *,
        bucket: str,
        prefix: str = "",
        max_attempts: int = 3,
        retry_delay_s: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.storage = storage
        self.bucket = bucket
        self.prefix = prefix
        self.max_attempts = max_attempts
        self.retry_delay_s = retry_delay_s
        self.sleep = sleep

    def ensure_bucket(self) -> None:
        try:
            existing = self.storage.list_buckets()
        except Exception as e:  # noqa: BLE001
            logger.warning("Listing buckets failed, will try to create %s: %s", self.bucket, e)
            existing = []

        if self.bucket in existing:
            return

        logger.info("Creating %s bucket", self.bucket)
        try:
            self.storage.create_bucket(self.bucket, public=True)
        except Exception as e:  # noqa: BLE001
            raise StorageProvisionError(f"Failed to create storage bucket: {e}") from e

    def upload(self, archive_bytes: bytes, path: str) -> None:
        last_error = ""
        for attempt in range(1, self.max_attempts + 1):
            logger.info("Upload attempt %d", attempt)
            try:
                self.storage.upload_object(
                    self.bucket,
                    path,
                    archive_bytes,
                    content_type=APK_CONTENT_TYPE,
                    overwrite=True,
                )
            except Exception as e:  # noqa: BLE001
                last_error = str(e)
                logger.error("Upload attempt %d failed: %s", attempt, last_error)
                if attempt < self.max_attempts:
                    self.sleep(self.retry_delay_s * attempt)
                continue
            logger.info("Upload successful")
            return

        raise UploadExhausted(attempts=self.max_attempts, last_error=last_error)

    def publish(self, archive_bytes: bytes, build_id: str) -> str:
        self.ensure_bucket()
        path = object_path(build_id, prefix=self.prefix)
        self.upload(archive_bytes, path)
        url = self.storage.get_public_url(self.bucket, path)
        logger.info("APK uploaded successfully, public URL: %s", url)
        return url
