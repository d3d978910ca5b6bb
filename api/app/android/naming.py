from __future__ import annotations

import re
import time

from .models import DerivedIdentity

DEFAULT_PACKAGE_PREFIX = "com.webview"

_INVALID_RE = re.compile(r"[^a-z0-9]")


def sanitize(name: str) -> str:
    """Lowercase and strip everything outside [a-z0-9].

    May return an empty string; callers keep going with the degenerate value.
    """
    return _INVALID_RE.sub("", (name or "").lower())


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def derive_build_id(app_name: str, created_ms: int) -> str:
    return f"{int(created_ms)}-{sanitize(app_name)}"


def derive_package_name(app_name: str, prefix: str = DEFAULT_PACKAGE_PREFIX) -> str:
    return f"{prefix}.{sanitize(app_name)}"


def derive_identity(
    app_name: str,
    *,
    created_ms: int | None = None,
    prefix: str = DEFAULT_PACKAGE_PREFIX,
) -> DerivedIdentity:
    ts = now_ms() if created_ms is None else int(created_ms)
    return DerivedIdentity(
        build_id=derive_build_id(app_name, ts),
        package_name=derive_package_name(app_name, prefix),
        created_ms=ts,
    )


def package_path(package_name: str) -> str:
    # "com.webview." (empty sanitized name) maps to "com/webview".
    return "/".join(part for part in package_name.split(".") if part)
