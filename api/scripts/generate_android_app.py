#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import mimetypes
from pathlib import Path

from app.android.config import get_generator_config
from app.android.errors import AndroidBuildError
from app.android.icon import encode_icon
from app.android.models import Artifact, BuildConfig
from app.android.pipeline import build_archive, build_generator
from app.android.templates import get_escaper


def load_icon(path: Path) -> str:
    media_type = mimetypes.guess_type(path.name)[0] or "image/png"
    return encode_icon(path.read_bytes(), media_type)


def main() -> None:
    ap = argparse.ArgumentParser(description="Generate an Android WebView project archive for a website.")
    ap.add_argument("--url", required=True, help="Website URL the app opens")
    ap.add_argument("--name", required=True, help="App display name")
    ap.add_argument("--icon", type=Path, required=True, help="Launcher icon image (PNG recommended)")
    ap.add_argument("--notifications", action="store_true", help="Request the POST_NOTIFICATIONS permission")
    ap.add_argument("--music-controls", action="store_true", help="Request the MEDIA_CONTENT_CONTROL permission")
    ap.add_argument("--out", type=Path, required=False, help="Write the archive here instead of publishing it")
    ap.add_argument("--package-prefix", default="com.webview", help="Package prefix used with --out (default: com.webview)")
    ap.add_argument("--escaping", choices=["literal", "markup"], default="literal", help="Template escaping used with --out")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = BuildConfig(
        website_url=args.url,
        app_name=args.name,
        icon_data=load_icon(args.icon),
        enable_notifications=args.notifications,
        enable_music_controls=args.music_controls,
    )

    if args.out:
        try:
            identity, data = build_archive(config, package_prefix=args.package_prefix, escaper=get_escaper(args.escaping))
        except AndroidBuildError as e:
            raise SystemExit(f"error: {e.message}") from e
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_bytes(data)
        print(f"Wrote {args.out} ({len(data)} bytes, package {identity.package_name})")
        return

    artifact: Artifact = build_generator(get_generator_config()).generate(config)
    print(json.dumps(artifact.to_response(), indent=2))
    if not artifact.success:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
