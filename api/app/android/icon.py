from __future__ import annotations

import base64
import binascii

from .errors import InvalidIconFormat

DATA_URI_PREFIX = "data:image"


def decode_icon(data_uri: str) -> bytes:
    """Return the raw bytes of an image data URI.

    Only the declaration prefix is checked. The payload is not inspected, so
    any bytes behind a valid-looking header are accepted as the launcher icon.
    """
    text = data_uri or ""
    if not text.startswith(DATA_URI_PREFIX):
        raise InvalidIconFormat("Icon must be an image data URI (data:image/...;base64,...)")

    _, sep, payload = text.partition(",")
    if not sep:
        raise InvalidIconFormat("Icon data URI has no payload")
    # Unpadded payloads are accepted.
    payload = "".join(payload.split())
    payload += "=" * (-len(payload) % 4)
    try:
        return base64.b64decode(payload)
    except (binascii.Error, ValueError) as e:
        raise InvalidIconFormat(f"Icon payload is not valid base64: {e}") from e


def encode_icon(raw: bytes, media_type: str = "image/png") -> str:
    return f"data:{media_type};base64,{base64.b64encode(raw).decode('ascii')}"
