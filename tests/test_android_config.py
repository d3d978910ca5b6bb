import pytest

from app.android.config import get_generator_config

ENV_VARS = [
    "AWS_REGION",
    "ANDROID_APPS_BUCKET",
    "S3_PREFIX",
    "S3_ENDPOINT_URL",
    "S3_PUBLIC_BASE_URL",
    "ANDROID_PACKAGE_PREFIX",
    "ANDROID_TEMPLATE_ESCAPING",
    "UPLOAD_MAX_ATTEMPTS",
    "UPLOAD_RETRY_DELAY_MS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    cfg = get_generator_config()
    assert cfg.bucket == "android-apps"
    assert cfg.prefix == ""
    assert cfg.package_prefix == "com.webview"
    assert cfg.escaping == "literal"
    assert cfg.upload_max_attempts == 3
    assert cfg.upload_retry_delay_s == 1.0


def test_overrides(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "eu-west-1")
    monkeypatch.setenv("ANDROID_APPS_BUCKET", "apps")
    monkeypatch.setenv("S3_PREFIX", "builds")
    monkeypatch.setenv("S3_PUBLIC_BASE_URL", "https://cdn.test/")
    monkeypatch.setenv("ANDROID_PACKAGE_PREFIX", "org.example.")
    monkeypatch.setenv("ANDROID_TEMPLATE_ESCAPING", "Markup")
    monkeypatch.setenv("UPLOAD_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("UPLOAD_RETRY_DELAY_MS", "250")
    cfg = get_generator_config()
    assert cfg.bucket == "apps"
    assert cfg.prefix == "builds/"
    assert cfg.public_base_url == "https://cdn.test"
    assert cfg.package_prefix == "org.example"
    assert cfg.escaping == "markup"
    assert cfg.upload_max_attempts == 5
    assert cfg.upload_retry_delay_s == 0.25


def test_region_is_required():
    with pytest.raises(RuntimeError, match="AWS_REGION"):
        get_generator_config()


@pytest.mark.parametrize(
    ("name", "value"),
    [("UPLOAD_MAX_ATTEMPTS", "0"), ("UPLOAD_MAX_ATTEMPTS", "three"), ("ANDROID_TEMPLATE_ESCAPING", "html")],
)
def test_invalid_values(monkeypatch, name, value):
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv(name, value)
    with pytest.raises(RuntimeError, match=name):
        get_generator_config()
