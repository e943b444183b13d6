from __future__ import annotations

import unicodedata
from datetime import datetime, timezone
from typing import Optional


ZWJ = "\u200d"
KEYCAP = "\u20e3"


def iso_now_ms() -> str:
    """UTC ISO-8601 timestamp with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _is_regional_indicator(ch: str) -> bool:
    return 0x1F1E6 <= ord(ch) <= 0x1F1FF


def _is_extend(ch: str) -> bool:
    """Code points that attach to the preceding character instead of starting a new one."""
    cp = ord(ch)
    if 0xFE00 <= cp <= 0xFE0F:  # variation selectors (text/emoji presentation)
        return True
    if 0x1F3FB <= cp <= 0x1F3FF:  # skin-tone modifiers
        return True
    if 0xE0020 <= cp <= 0xE007F:  # tag sequence (subdivision flags)
        return True
    if ch == KEYCAP:
        return True
    return unicodedata.category(ch) in ("Mn", "Me", "Mc")


def first_grapheme(text: Optional[str]) -> Optional[str]:
    """
    Return the first user-perceived character of `text`, or None when empty.

    Emoji-oriented approximation of extended grapheme clusters:
      - combining marks, variation selectors, skin tones, tags and the
        keycap mark stay attached to their base
      - ZWJ joins the next character into the same cluster
        (👨‍👩‍👧 is one cluster, not 👨)
      - two regional indicators form one flag (🇫🇷)
    Hangul jamo and CRLF are not special-cased.
    """
    if not text:
        return None

    n = len(text)
    i = 1
    if _is_regional_indicator(text[0]) and n > 1 and _is_regional_indicator(text[1]):
        i = 2

    while i < n:
        ch = text[i]
        if _is_extend(ch):
            i += 1
        elif ch == ZWJ:
            # ZWJ glues the following character (if any) onto the cluster
            i += 2 if i + 1 < n else 1
        else:
            break
    return text[:i]


def is_single_grapheme(text: Optional[str]) -> bool:
    """True when `text` is exactly one user-perceived character."""
    if not text:
        return False
    return first_grapheme(text) == text
