from __future__ import annotations

import logging
import os
from typing import Any

from fastapi import FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.android.config import get_generator_config
from app.android.errors import MissingFields
from app.android.models import Artifact, BuildConfig
from app.android.pipeline import AndroidAppGenerator, build_generator


def _log_level() -> int:
    name = os.environ.get("LOG_LEVEL", "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


logging.basicConfig(
    level=_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Android App Generator API", docs_url="/docs", redoc_url=None)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-API-Key"],
)


def _auth_disabled() -> bool:
    mode = os.environ.get("AUTH_MODE", "").strip().lower()
    if mode in {"0", "false", "no", "off", "disabled"}:
        return True
    v = os.environ.get("AUTH_DISABLED", "").strip().lower()
    return v in {"1", "true", "yes", "on"}


def _require_api_key(x_api_key: str | None) -> None:
    if _auth_disabled():
        return
    expected = os.environ.get("APP_GENERATOR_API_KEY", "").strip()
    if not expected:
        raise HTTPException(status_code=500, detail="APP_GENERATOR_API_KEY is not set")
    if not x_api_key or x_api_key.strip() != expected:
        raise HTTPException(status_code=401, detail="Invalid API key")


def get_generator() -> AndroidAppGenerator:
    return build_generator(get_generator_config())


def _artifact_response(artifact: Artifact) -> JSONResponse:
    return JSONResponse(status_code=artifact.status_code, content=artifact.to_response())


def _error_response(error: str, details: str = "") -> JSONResponse:
    body: dict[str, Any] = {"success": False, "error": error}
    if details:
        body["details"] = details
    return JSONResponse(status_code=500, content=body)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@app.post("/generate-android-app")
def generate_android_app(
    config: BuildConfig,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
) -> JSONResponse:
    _require_api_key(x_api_key)
    logger.info("Received request with config: %s", config.log_summary())

    missing = config.missing_fields()
    if missing:
        return _artifact_response(Artifact.failure(MissingFields(missing)))

    try:
        generator = get_generator()
    except RuntimeError as e:
        logger.error("Generator is not configured: %s", e)
        return _error_response("Android app generation is not configured")

    try:
        artifact = generator.generate(config)
    except Exception as e:  # noqa: BLE001
        logger.exception("Error in request handler")
        return _error_response("Internal server error", str(e))

    return _artifact_response(artifact)
