#!/usr/bin/env python3
"""
Fetch one Emoji Kitchen combination and save it to disk.

Only the first emoji of each argument is used; extra text is dropped with a
warning.

Examples:
  python scripts/combine_emoji.py 🥹 😗
  python scripts/combine_emoji.py 🥹 😗 --size 256 --out data/emoji/combo.png
  EMOJI_KITCHEN_TIMEOUT=3 python scripts/combine_emoji.py 👨‍👩‍👧 🇫🇷
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.logging_setup import setup_logging
from common.utils import first_grapheme
from emoji_kitchen.config import load_config
from emoji_kitchen.errors import EmojiServiceError
from emoji_kitchen.service import EmojiKitchenService

ONE_EMOJI_EACH = "Please enter exactly 1 emoji in each text field."

log = logging.getLogger("combine_emoji")


def default_out_path(emoji1: str, emoji2: str, size: int, ext: str) -> Path:
    """emoji_<hex codepoints>_<hex codepoints>_<size>.<ext> in the working directory."""
    def cps(s: str) -> str:
        return "-".join(f"{ord(c):x}" for c in s)

    return Path(f"emoji_{cps(emoji1)}_{cps(emoji2)}_{size}.{ext}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Combine two emoji with the Emoji Kitchen API")
    ap.add_argument("emoji1", help="first emoji (only the first character is used)")
    ap.add_argument("emoji2", help="second emoji (only the first character is used)")
    ap.add_argument("--size", type=int, default=None, help="output size in pixels, 16..512 (default from config: 100)")
    ap.add_argument("--out", type=Path, default=None, help="output file (default: emoji_<a>_<b>_<size>.<ext>)")
    ap.add_argument("--config", default=None, help="YAML config path (default: config/params.yaml)")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None, service: Optional[EmojiKitchenService] = None) -> int:
    args = parse_args(argv)
    cfg = load_config(args.config)

    first = first_grapheme(args.emoji1)
    second = first_grapheme(args.emoji2)
    if first is None or second is None:
        print(f" Error: {ONE_EMOJI_EACH}")
        return 1
    for raw, kept in ((args.emoji1, first), (args.emoji2, second)):
        if raw != kept:
            log.warning("Using only the first emoji of %r: %r", raw, kept)

    size = args.size if args.size is not None else int(cfg["emoji_kitchen"].get("default_size", 100))
    svc = service or EmojiKitchenService.from_config(cfg)

    try:
        result = svc.get_emoji_combination(first, second, size)
    except EmojiServiceError as e:
        print(f" Error: {e.message}")
        return 1

    out = args.out or default_out_path(first, second, size, result.extension)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "wb") as f:
        f.write(result.image_data)

    print(f"  Saved {out} ({len(result.image_data)} bytes, {result.format} {result.width}x{result.height})")
    print(f"       {first} + {second}  <- {result.url}")
    return 0


if __name__ == "__main__":
    setup_logging({"format": "text"})
    sys.exit(main())
