"""Generator for Android WebView wrapper projects published to object storage."""

from .archive import assemble, project_layout
from .errors import (
    AndroidBuildError,
    InternalAssemblyError,
    InvalidIconFormat,
    MissingFields,
    StorageProvisionError,
    UploadExhausted,
)
from .icon import decode_icon, encode_icon
from .models import Artifact, BuildConfig, DerivedIdentity, RenderedProject
from .naming import derive_build_id, derive_identity, derive_package_name, sanitize
from .pipeline import AndroidAppGenerator, build_generator
from .publisher import Publisher
from .templates import render

__all__ = [
    "AndroidAppGenerator",
    "AndroidBuildError",
    "Artifact",
    "BuildConfig",
    "DerivedIdentity",
    "InternalAssemblyError",
    "InvalidIconFormat",
    "MissingFields",
    "Publisher",
    "RenderedProject",
    "StorageProvisionError",
    "UploadExhausted",
    "assemble",
    "build_generator",
    "decode_icon",
    "derive_build_id",
    "derive_identity",
    "derive_package_name",
    "encode_icon",
    "project_layout",
    "render",
    "sanitize",
]
