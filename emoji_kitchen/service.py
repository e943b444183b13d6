from __future__ import annotations

"""
Emoji Kitchen client (https://emojik.vercel.app).

The API combines two emoji into one image:
    GET https://emojik.vercel.app/s/{emoji1}_{emoji2}?size={16..512}

The URL is assembled piece by piece (scheme, host, path, query), wrapped in a
GET request and sent exactly once. The body is decoded with Pillow.

Usage:
    svc = EmojiKitchenService()
    result = svc.get_emoji_combination("🥹", "😗", size=128)
    # result.image       -> PIL.Image.Image
    # result.image_data  -> raw PNG bytes
    # result.to_meta()   -> {'url': ..., 'format': 'PNG', 'width': 128, ...}

Errors (emoji_kitchen.errors): SizeOutOfRange, BadURL, NetworkError,
ImageDecodeError. Nothing is retried or cached.
"""

import io
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

import requests
from PIL import Image, UnidentifiedImageError

from common.types import EmojiImage
from common.utils import iso_now_ms
from emoji_kitchen.errors import BadURL, ImageDecodeError, NetworkError, SizeOutOfRange


log = logging.getLogger(__name__)

MIN_SIZE = 16
MAX_SIZE = 512
DEFAULT_SIZE = 100

# Formats the API is known to answer with; anything else is a decode failure
ACCEPTED_FORMATS = ("PNG", "JPEG", "GIF", "WEBP")

# requests only ships adapters for these
SUPPORTED_SCHEMES = ("http", "https")

_AUTHORITY_FORBIDDEN = set(" \t\r\n/?#@\\")


@dataclass(frozen=True)
class EmojiCombinationEndpoint:
    """Path template for the combination endpoint: /s/{emoji1}_{emoji2}."""
    emoji1: str
    emoji2: str

    def __post_init__(self) -> None:
        if not self.emoji1 or not self.emoji2:
            raise ValueError("both emoji are required")

    @property
    def path(self) -> str:
        return f"/s/{self.emoji1}_{self.emoji2}"

    @property
    def encoded_path(self) -> str:
        # No safe chars: a literal "/" inside an emoji input is escaped, not treated as a separator
        return f"/s/{quote(self.emoji1, safe='')}_{quote(self.emoji2, safe='')}"


class EmojiKitchenService:
    def __init__(
        self,
        scheme: str = "https",
        host: str = "emojik.vercel.app",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Params:
            scheme: URL scheme, normally https
            host: API host (everything between '://' and the path)
            timeout: seconds for connect + read, handed to requests
            session: optional requests.Session (tests pass a mock here)
        """
        self.scheme = scheme
        self.host = host
        self.timeout = float(timeout)
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any], session: Optional[requests.Session] = None) -> "EmojiKitchenService":
        ek = cfg.get("emoji_kitchen", {})
        return cls(
            scheme=str(ek.get("scheme", "https")),
            host=str(ek.get("host", "emojik.vercel.app")),
            timeout=float(ek.get("timeout_s", 10.0)),
            session=session,
        )

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}"

    # ----------------------------
    # Request construction
    # ----------------------------
    @staticmethod
    def validate_size(size: int) -> int:
        """Raise SizeOutOfRange unless MIN_SIZE <= size <= MAX_SIZE."""
        if isinstance(size, bool) or not isinstance(size, int):
            raise SizeOutOfRange(size, MIN_SIZE, MAX_SIZE)
        if size < MIN_SIZE or size > MAX_SIZE:
            raise SizeOutOfRange(size, MIN_SIZE, MAX_SIZE)
        return size

    def build_url(self, emoji1: str, emoji2: str, size: int = DEFAULT_SIZE) -> str:
        """
        Construct the combination URL (no request performed).

        Returns:
            Fully-qualified, percent-encoded HTTPS URL, e.g.
            https://emojik.vercel.app/s/%F0%9F%A5%B9_%F0%9F%98%97?size=128
        """
        self.validate_size(size)
        endpoint = EmojiCombinationEndpoint(emoji1=emoji1, emoji2=emoji2)

        if not self.scheme or not self.host:
            raise BadURL(f"Scheme and host are required (got {self.scheme!r}, {self.host!r}).")
        if self.scheme.lower() not in SUPPORTED_SCHEMES:
            raise BadURL(f"Unsupported URL scheme {self.scheme!r} (expected http or https).")
        if _AUTHORITY_FORBIDDEN.intersection(self.host):
            raise BadURL(f"Invalid URL host {self.host!r}.")

        query = urlencode({"size": str(size)})
        url = urlunsplit((self.scheme.lower(), self.host, endpoint.encoded_path, query, ""))

        parts = urlsplit(url)
        if parts.scheme != self.scheme.lower() or parts.netloc != self.host:
            raise BadURL(f"URL {url!r} does not round-trip to {self.base_url!r}.")
        return url

    def build_request(self, emoji1: str, emoji2: str, size: int = DEFAULT_SIZE) -> requests.PreparedRequest:
        """
        Wrap the URL in a GET request. No custom headers and no body: the API
        needs neither.
        """
        url = self.build_url(emoji1, emoji2, size)
        req = requests.Request(method="GET", url=url)
        try:
            return req.prepare()
        except requests.exceptions.InvalidURL as e:
            raise BadURL(f"requests rejected URL {url!r}: {e}") from e

    # ----------------------------
    # Public API
    # ----------------------------
    def get_emoji_combination(self, emoji1: str, emoji2: str, size: int = DEFAULT_SIZE) -> EmojiImage:
        """
        Fetch the combination of two emoji and decode it.

        Exactly one HTTP request is made, and only after size and URL
        validation have passed.

        Raises:
            SizeOutOfRange, BadURL, NetworkError, ImageDecodeError
        """
        prepared = self.build_request(emoji1, emoji2, size)
        url = prepared.url or ""
        log.debug("GET %s", url)

        try:
            r = self.session.send(prepared, timeout=self.timeout)
        except requests.RequestException as e:
            log.warning("Emoji Kitchen request failed: %s (%s)", url, e)
            raise NetworkError(f"Could not reach the Emoji Kitchen API: {e}") from e

        body = r.content or b""
        if not 200 <= r.status_code < 300:
            # The body may still be an image; the decoder has the final word
            log.warning("Emoji Kitchen returned HTTP %s for %s (%d bytes)", r.status_code, url, len(body))

        image = self._decode(body, url)
        result = EmojiImage(
            url=url,
            size=size,
            image_data=body,
            image=image,
            content_type=r.headers.get("Content-Type"),
            fetched_at=iso_now_ms(),
        )
        log.info("Fetched emoji combination", extra={"extra": result.to_meta()})
        return result

    # ----------------------------
    # Decoding
    # ----------------------------
    @staticmethod
    def _decode(body: bytes, url: str) -> Image.Image:
        if not body:
            raise ImageDecodeError(url, 0, "empty response body")
        try:
            img = Image.open(io.BytesIO(body), formats=ACCEPTED_FORMATS)
            # open() only reads the header; load() forces a full decode
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
            raise ImageDecodeError(url, len(body), str(e) or type(e).__name__) from e
        return img
