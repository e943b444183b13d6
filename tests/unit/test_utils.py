"""
Unit tests for common helpers (first-emoji extraction, timestamps)
"""

import os
import sys

import pytest

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from common.utils import first_grapheme, is_single_grapheme, iso_now_ms


FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467"  # man, woman, girl
FLAG_FR = "\U0001F1EB\U0001F1F7"
THUMBS_MEDIUM = "\U0001F44D\U0001F3FD"
KEYCAP_ONE = "1\ufe0f\u20e3"
HEART = "\u2764\ufe0f"
SCOTLAND = "\U0001F3F4\U000E0067\U000E0062\U000E0073\U000E0063\U000E0074\U000E007F"


class TestFirstGrapheme:
    """Test cases for first_grapheme"""

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty(self, text):
        assert first_grapheme(text) is None

    def test_plain_emoji(self):
        assert first_grapheme("🥹😗") == "🥹"

    def test_ascii(self):
        assert first_grapheme("abc") == "a"

    @pytest.mark.parametrize("cluster", [FAMILY, FLAG_FR, THUMBS_MEDIUM, KEYCAP_ONE, HEART, SCOTLAND])
    def test_multi_codepoint_clusters_stay_whole(self, cluster):
        assert first_grapheme(cluster + "😗") == cluster
        assert first_grapheme(cluster) == cluster

    def test_two_flags(self):
        """Regional indicators pair up: 🇫🇷🇩🇪 is two flags"""
        assert first_grapheme(FLAG_FR + "\U0001F1E9\U0001F1EA") == FLAG_FR

    def test_combining_accent(self):
        assert first_grapheme("e\u0301tude") == "e\u0301"

    def test_trailing_zwj(self):
        assert first_grapheme("\U0001F468\u200d") == "\U0001F468\u200d"


class TestIsSingleGrapheme:
    """Test cases for is_single_grapheme"""

    def test_single(self):
        assert is_single_grapheme(FAMILY)
        assert is_single_grapheme("😗")

    def test_multiple(self):
        assert not is_single_grapheme("😗😗")
        assert not is_single_grapheme("ab")

    def test_empty(self):
        assert not is_single_grapheme("")
        assert not is_single_grapheme(None)


def test_iso_now_ms_format():
    ts = iso_now_ms()
    assert ts.endswith("Z")
    assert "T" in ts
    assert len(ts.split(".")[-1]) == 4  # 3 digits of millis + 'Z'
