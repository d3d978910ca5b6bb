# Purpose: Pack a rendered Android project into a deflated ZIP archive.
# Scope: android generator (archive assembly only; no storage access).
# Dependencies: stdlib zipfile.
# Notes: Every folder lookup yields a real node or raises InternalAssemblyError.
from __future__ import annotations

import io
import zipfile

from .errors import InternalAssemblyError
from .models import FileContent, RenderedProject
from .naming import package_path

SETTINGS_GRADLE = "settings.gradle"
GRADLE_WRAPPER_PROPERTIES = "gradle/wrapper/gradle-wrapper.properties"
APP_BUILD_GRADLE = "app/build.gradle"
MAIN_DIR = "app/src/main"
MANIFEST = f"{MAIN_DIR}/AndroidManifest.xml"
JAVA_DIR = f"{MAIN_DIR}/java"
RES_DIR = f"{MAIN_DIR}/res"
LAYOUT_MAIN = f"{RES_DIR}/layout/activity_main.xml"
VALUES_STRINGS = f"{RES_DIR}/values/strings.xml"
VALUES_STYLES = f"{RES_DIR}/values/styles.xml"
NETWORK_SECURITY_CONFIG = f"{RES_DIR}/xml/network_security_config.xml"
LAUNCHER_ICON = f"{RES_DIR}/mipmap-xxxhdpi/ic_launcher.png"

COMPRESSION_LEVEL = 9


def main_activity_path(package_name: str) -> str:
    pkg_dir = package_path(package_name)
    if pkg_dir:
        return f"{JAVA_DIR}/{pkg_dir}/MainActivity.java"
    return f"{JAVA_DIR}/MainActivity.java"


def project_layout(package_name: str) -> list[str]:
    """All archive paths for a WebView wrapper project, in write order."""
    return [
        SETTINGS_GRADLE,
        GRADLE_WRAPPER_PROPERTIES,
        APP_BUILD_GRADLE,
        MANIFEST,
        main_activity_path(package_name),
        LAYOUT_MAIN,
        VALUES_STRINGS,
        VALUES_STYLES,
        NETWORK_SECURITY_CONFIG,
        LAUNCHER_ICON,
    ]


class ArchiveFolder:
    """Directory node inside an in-memory archive tree."""

    def __init__(self, name: str = "", parent: "ArchiveFolder | None" = None) -> None:
        self.name = name
        self.parent = parent
        self.folders: dict[str, ArchiveFolder] = {}
        self.files: dict[str, FileContent] = {}

    @property
    def path(self) -> str:
        if self.parent is None:
            return ""
        prefix = self.parent.path
        return f"{prefix}{self.name}/"

    def folder(self, name: str) -> "ArchiveFolder":
        node = self
        for part in name.split("/"):
            node = node._child(part)
        return node

    def _child(self, part: str) -> "ArchiveFolder":
        if part in {"", ".", ".."} or "\\" in part:
            raise InternalAssemblyError(f"Invalid archive folder name {part!r} under '{self.path or '/'}'")
        if part in self.files:
            raise InternalAssemblyError(f"Archive folder '{self.path}{part}' collides with a file")
        node = self.folders.get(part)
        if node is None:
            node = ArchiveFolder(part, self)
            self.folders[part] = node
        return node

    def file(self, name: str, content: FileContent) -> None:
        if not name or "/" in name or "\\" in name:
            raise InternalAssemblyError(f"Invalid archive file name {name!r} under '{self.path or '/'}'")
        if name in self.files or name in self.folders:
            raise InternalAssemblyError(f"Duplicate archive entry '{self.path}{name}'")
        self.files[name] = content

    def walk(self):
        for name, content in self.files.items():
            yield f"{self.path}{name}", content
        for child in self.folders.values():
            yield from child.walk()


def build_tree(project: RenderedProject) -> ArchiveFolder:
    expected = project_layout(project.package_name)
    unknown = [p for p in project.entries if p not in expected]
    if unknown:
        raise InternalAssemblyError(f"Rendered entries outside the project layout: {', '.join(unknown)}")
    missing = [p for p in expected if p not in project.entries]
    if missing:
        raise InternalAssemblyError(f"Rendered project is missing: {', '.join(missing)}")

    root = ArchiveFolder()
    for path in expected:
        dir_part, _, file_name = path.rpartition("/")
        target = root.folder(dir_part) if dir_part else root
        target.file(file_name, project.entries[path])
    return root


def assemble(project: RenderedProject) -> bytes:
    root = build_tree(project)
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=COMPRESSION_LEVEL) as zf:
        for path, content in root.walk():
            data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
            zf.writestr(path, data)
    return buf.getvalue()
