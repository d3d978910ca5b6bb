import pytest

from app.android.naming import (
    derive_build_id,
    derive_identity,
    derive_package_name,
    package_path,
    sanitize,
)


@pytest.mark.parametrize(
    "raw",
    ["My App!", "  Spaces  and\tTabs ", "ÄÖÜ café", "already123", "", "!!!", "MiXeD-Case_42"],
)
def test_sanitize_is_idempotent_and_lowercase_alnum(raw):
    once = sanitize(raw)
    assert sanitize(once) == once
    assert all(ch in "abcdefghijklmnopqrstuvwxyz0123456789" for ch in once)


def test_sanitize_strips_everything_but_ascii_alnum():
    assert sanitize("My App!") == "myapp"
    assert sanitize("Demo App 2.0") == "demoapp20"


def test_sanitize_all_invalid_yields_empty_string():
    assert sanitize("!!! ???") == ""
    assert derive_package_name("!!!") == "com.webview."
    assert derive_build_id("!!!", 5) == "5-"


def test_package_name_for_my_app():
    pkg = derive_package_name("My App!")
    assert pkg == "com.webview.myapp"
    assert all(part.isalnum() and part == part.lower() for part in pkg.split("."))


def test_build_id_is_timestamp_dash_sanitized_name():
    assert derive_build_id("Demo App", 1700000000123) == "1700000000123-demoapp"


def test_derive_identity_uses_given_clock_and_prefix():
    identity = derive_identity("Demo App", created_ms=42, prefix="org.example")
    assert identity.build_id == "42-demoapp"
    assert identity.package_name == "org.example.demoapp"
    assert identity.created_ms == 42


def test_derive_identity_defaults_to_wall_clock():
    identity = derive_identity("x")
    assert identity.created_ms > 1_600_000_000_000
    assert identity.build_id == f"{identity.created_ms}-x"


def test_package_path_splits_on_dots_and_drops_empty_segments():
    assert package_path("com.webview.demoapp") == "com/webview/demoapp"
    assert package_path("com.webview.") == "com/webview"
