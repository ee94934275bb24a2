from __future__ import annotations

import base64
import binascii
import hashlib
import re

DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)
ALLOWED_IMAGE_MIME_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}


def parse_image_data_url(data_url: str) -> tuple[str, bytes]:
    match = DATA_URL_RE.match((data_url or "").strip())
    if not match:
        raise ValueError("not a base64 data url")

    mime_type = match.group("mime").lower()
    if mime_type not in ALLOWED_IMAGE_MIME_TYPES:
        raise ValueError(f"unsupported image type: {mime_type}")

    try:
        content = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("invalid base64 payload") from exc
    if not content:
        raise ValueError("empty image payload")
    return mime_type, content


def build_image_data_url(mime_type: str, content: bytes) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def image_digest(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def extension_for(mime_type: str) -> str:
    return MIME_EXTENSIONS.get(mime_type, "bin")
