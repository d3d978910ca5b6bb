from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .errors import AndroidBuildError

FileContent = Union[str, bytes]

REQUIRED_FIELDS = (
    ("website_url", "websiteUrl"),
    ("app_name", "appName"),
    ("icon_data", "iconData"),
)


class BuildConfig(BaseModel):
    """Website-wrapping request as posted by the generator form.

    Required fields default to None so the pipeline, not pydantic, decides
    what counts as missing.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    website_url: str | None = Field(default=None, alias="websiteUrl")
    app_name: str | None = Field(default=None, alias="appName")
    icon_data: str | None = Field(
        default=None,
        validation_alias=AliasChoices("iconData", "icon", "icon_data"),
        serialization_alias="iconData",
    )
    enable_notifications: bool = Field(default=False, alias="enableNotifications")
    enable_music_controls: bool = Field(default=False, alias="enableMusicControls")

    def missing_fields(self) -> list[str]:
        return [wire for attr, wire in REQUIRED_FIELDS if not getattr(self, attr)]

    def log_summary(self) -> dict[str, object]:
        return {
            "websiteUrl": self.website_url,
            "appName": self.app_name,
            "enableNotifications": self.enable_notifications,
            "enableMusicControls": self.enable_music_controls,
        }


@dataclass(frozen=True)
class DerivedIdentity:
    build_id: str
    package_name: str
    created_ms: int


@dataclass(frozen=True)
class RenderedProject:
    package_name: str
    entries: dict[str, FileContent] = field(default_factory=dict)

    def paths(self) -> list[str]:
        return list(self.entries.keys())


class Artifact(BaseModel):
    """Result returned to the caller; error kind and status stay off the wire."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    download_url: str | None = Field(default=None, alias="downloadUrl")
    app_name: str | None = Field(default=None, alias="appName")
    package_name: str | None = Field(default=None, alias="packageName")
    error: str | None = None
    error_kind: str | None = Field(default=None, exclude=True)
    status_code: int = Field(default=200, exclude=True)

    @classmethod
    def ok(cls, *, download_url: str, app_name: str, package_name: str) -> "Artifact":
        return cls(success=True, download_url=download_url, app_name=app_name, package_name=package_name)

    @classmethod
    def failure(cls, err: AndroidBuildError) -> "Artifact":
        return cls(success=False, error=err.message, error_kind=err.kind, status_code=err.status_code)

    def to_response(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)
