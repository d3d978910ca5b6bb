import importlib.util
import io
import sys
import zipfile
from pathlib import Path

import pytest

from app.android.archive import project_layout
from conftest import PNG_BYTES

SCRIPT = Path(__file__).resolve().parents[1] / "api" / "scripts" / "generate_android_app.py"


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("generate_android_app", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def icon_file(tmp_path):
    path = tmp_path / "icon.png"
    path.write_bytes(PNG_BYTES)
    return path


def test_out_writes_archive_without_storage(script, icon_file, tmp_path, monkeypatch, capsys):
    out = tmp_path / "build" / "x.zip"
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "generate_android_app.py",
            "--url",
            "https://example.com",
            "--name",
            "Demo App",
            "--icon",
            str(icon_file),
            "--notifications",
            "--out",
            str(out),
        ],
    )
    script.main()

    with zipfile.ZipFile(io.BytesIO(out.read_bytes())) as zf:
        assert sorted(zf.namelist()) == sorted(project_layout("com.webview.demoapp"))
        assert zf.read("app/src/main/res/mipmap-xxxhdpi/ic_launcher.png") == PNG_BYTES
        manifest = zf.read("app/src/main/AndroidManifest.xml").decode("utf-8")
    assert "POST_NOTIFICATIONS" in manifest
    assert "MEDIA_CONTENT_CONTROL" not in manifest
    assert "package com.webview.demoapp" in capsys.readouterr().out


def test_out_with_custom_prefix(script, icon_file, tmp_path, monkeypatch):
    out = tmp_path / "x.zip"
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "generate_android_app.py",
            "--url",
            "https://example.com",
            "--name",
            "Demo",
            "--icon",
            str(icon_file),
            "--package-prefix",
            "org.example",
            "--out",
            str(out),
        ],
    )
    script.main()

    with zipfile.ZipFile(out) as zf:
        assert "app/src/main/java/org/example/demo/MainActivity.java" in zf.namelist()
