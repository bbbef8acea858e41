"""Data URL Encoder — raw image bytes → "data:<mime>;base64,<payload>"."""

import base64

WEBP_MIME_TYPE = "image/webp"


def to_data_url(data: bytes, mime_type: str = WEBP_MIME_TYPE) -> str:
    """Inline raw bytes as a data URL. Empty input still yields a well-formed URL."""
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"
