from __future__ import annotations

from typing import Optional


class EmojiServiceError(Exception):
    """Base class for every failure of an Emoji Kitchen request."""

    message = "Emoji Kitchen request failed."

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class SizeOutOfRange(EmojiServiceError, ValueError):
    def __init__(self, size: object, min_size: int, max_size: int) -> None:
        self.size = size
        self.min_size = min_size
        self.max_size = max_size
        super().__init__(f"Size must be an integer between {min_size} and {max_size} (got {size!r}).")


class BadURL(EmojiServiceError):
    message = "Could not construct a valid URL for the request."


class NetworkError(EmojiServiceError):
    """Transport failure (DNS, timeout, reset). The requests exception is chained as __cause__."""

    message = "Could not reach the Emoji Kitchen API."


class ImageDecodeError(EmojiServiceError):
    def __init__(self, url: str, n_bytes: int, reason: Optional[str] = None) -> None:
        self.url = url
        self.n_bytes = n_bytes
        msg = f"Could not construct an image from the response ({n_bytes} bytes)."
        if reason:
            msg = f"{msg[:-1]}: {reason}"
        super().__init__(msg)
