from __future__ import annotations

import os
from dataclasses import dataclass

from .naming import DEFAULT_PACKAGE_PREFIX
from .templates import ESCAPERS

DEFAULT_BUCKET = "android-apps"


@dataclass(frozen=True)
class GeneratorConfig:
    region: str
    bucket: str
    prefix: str
    endpoint_url: str
    public_base_url: str
    package_prefix: str
    escaping: str
    upload_max_attempts: int
    upload_retry_delay_s: float


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer") from e
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}")
    return value


def get_generator_config() -> GeneratorConfig:
    region = os.environ.get("AWS_REGION", "").strip()
    bucket = os.environ.get("ANDROID_APPS_BUCKET", "").strip() or DEFAULT_BUCKET
    prefix = os.environ.get("S3_PREFIX", "").strip()
    package_prefix = os.environ.get("ANDROID_PACKAGE_PREFIX", "").strip().strip(".") or DEFAULT_PACKAGE_PREFIX
    escaping = os.environ.get("ANDROID_TEMPLATE_ESCAPING", "").strip().lower() or "literal"

    if not region:
        raise RuntimeError("AWS_REGION is not set")
    if prefix and not prefix.endswith("/"):
        prefix = prefix + "/"
    if escaping not in ESCAPERS:
        raise RuntimeError(f"ANDROID_TEMPLATE_ESCAPING must be one of: {', '.join(sorted(ESCAPERS))}")

    return GeneratorConfig(
        region=region,
        bucket=bucket,
        prefix=prefix,
        endpoint_url=os.environ.get("S3_ENDPOINT_URL", "").strip(),
        public_base_url=os.environ.get("S3_PUBLIC_BASE_URL", "").strip().rstrip("/"),
        package_prefix=package_prefix,
        escaping=escaping,
        upload_max_attempts=_env_int("UPLOAD_MAX_ATTEMPTS", 3, minimum=1),
        upload_retry_delay_s=_env_int("UPLOAD_RETRY_DELAY_MS", 1000) / 1000.0,
    )
