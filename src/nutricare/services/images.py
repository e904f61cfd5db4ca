"""Image payload helpers for assistant requests."""

import base64
from dataclasses import dataclass

DEFAULT_MIME_TYPE = "image/jpeg"
_HEADER_MIME_TYPES = ("image/png", "image/webp", "image/gif")


@dataclass(frozen=True)
class ImagePayload:
    """Base64 image data with its MIME type."""

    data: str
    mime_type: str

    def to_data_url(self) -> str:
        """Render the payload as a data URL."""
        return f"data:{self.mime_type};base64,{self.data}"


def split_data_url(image: str) -> ImagePayload:
    """Split a data URL into base64 data and a MIME type sniffed from its header.

    Bare base64 strings are accepted and treated as JPEG.
    """
    if not image.startswith("data:"):
        return ImagePayload(data=image, mime_type=DEFAULT_MIME_TYPE)
    header, _, data = image.partition(",")
    mime_type = DEFAULT_MIME_TYPE
    for candidate in _HEADER_MIME_TYPES:
        if candidate in header:
            mime_type = candidate
            break
    return ImagePayload(data=data, mime_type=mime_type)


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes.startswith((b"GIF87a", b"GIF89a")):
        return "image/gif"
    return DEFAULT_MIME_TYPE
