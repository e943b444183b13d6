"""
Unit tests for the EmojiImage result type
"""

import io
import os
import sys

import pytest
from PIL import Image

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from common.types import EmojiImage


def _decoded(fmt="PNG", size=(20, 10)):
    buf = io.BytesIO()
    Image.new("RGB", size, (10, 20, 30)).save(buf, format=fmt)
    data = buf.getvalue()
    img = Image.open(io.BytesIO(data))
    img.load()
    return data, img


class TestEmojiImage:
    """Test cases for EmojiImage"""

    def test_properties(self):
        data, img = _decoded()
        e = EmojiImage(url="https://x/s/a_b?size=20", size=20, image_data=data, image=img)
        assert e.format == "PNG"
        assert (e.width, e.height) == (20, 10)
        assert e.media_type == "image/png"
        assert e.extension == "png"

    def test_jpeg_extension(self):
        data, img = _decoded("JPEG")
        e = EmojiImage(url="u", size=20, image_data=data, image=img, content_type="image/jpeg")
        assert e.media_type == "image/jpeg"
        assert e.extension == "jpg"

    def test_empty_bytes_rejected(self):
        _, img = _decoded()
        with pytest.raises(ValueError):
            EmojiImage(url="u", size=20, image_data=b"", image=img)

    def test_non_bytes_rejected(self):
        _, img = _decoded()
        with pytest.raises(TypeError):
            EmojiImage(url="u", size=20, image_data="not bytes", image=img)

    def test_repr_hides_payload(self):
        data, img = _decoded()
        e = EmojiImage(url="u", size=20, image_data=data, image=img)
        assert "image_data" not in repr(e)

    def test_to_meta(self):
        data, img = _decoded()
        e = EmojiImage(url="u", size=20, image_data=data, image=img, fetched_at="2024-02-06T12:00:00.000Z")
        assert e.to_meta() == {
            "url": "u",
            "size": 20,
            "format": "PNG",
            "width": 20,
            "height": 10,
            "bytes": len(data),
            "content_type": None,
            "fetched_at": "2024-02-06T12:00:00.000Z",
        }
