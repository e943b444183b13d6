from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from PIL import Image


IsoTime = str


@dataclass(slots=True)
class EmojiImage:
    """
    A decoded emoji combination returned by the Emoji Kitchen service.

    Attributes:
        url: fully-qualified request URL (percent-encoded).
        size: requested output size in pixels.
        image_data: raw response body, exactly as received.
        image: decoded Pillow image (fully loaded, safe to use after the body is gone).
        content_type: Content-Type header from the API, if any.
        fetched_at: ISO-8601 (UTC) time the response was decoded.
    """
    url: str
    size: int
    image_data: bytes = field(repr=False)
    image: Image.Image = field(repr=False)
    content_type: Optional[str] = None
    fetched_at: IsoTime = ""

    def __post_init__(self) -> None:
        if not isinstance(self.image_data, (bytes, bytearray)):
            raise TypeError("image_data must be bytes")
        if not self.image_data:
            raise ValueError("image_data must not be empty")

    @property
    def format(self) -> Optional[str]:
        """Pillow format name of the decoded body, e.g. 'PNG' or 'JPEG'."""
        return self.image.format

    @property
    def width(self) -> int:
        return int(self.image.width)

    @property
    def height(self) -> int:
        return int(self.image.height)

    @property
    def media_type(self) -> str:
        """MIME type derived from the decoded format (falls back to the upstream header)."""
        fmt = self.format
        if fmt:
            mime = Image.MIME.get(fmt.upper())
            if mime:
                return mime
        return self.content_type or "application/octet-stream"

    @property
    def extension(self) -> str:
        fmt = (self.format or "").lower()
        return {"jpeg": "jpg"}.get(fmt, fmt or "bin")

    def to_meta(self) -> Dict[str, Any]:
        """Metadata without image bytes (safe to log/serialize)."""
        return {
            "url": self.url,
            "size": self.size,
            "format": self.format,
            "width": self.width,
            "height": self.height,
            "bytes": len(self.image_data),
            "content_type": self.content_type,
            "fetched_at": self.fetched_at,
        }
