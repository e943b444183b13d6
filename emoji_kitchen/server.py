from __future__ import annotations

"""
Emoji Kitchen proxy (FastAPI).

Endpoints:
  GET /health
  GET /combine?emoji1=🥹&emoji2=😗&size=128   -> image bytes + X-Emoji-Metadata (JSON)

Only the first user-perceived character of each emoji parameter is used, the
same way a two-field form would read it. Every error, including a size that
is not a number, comes back as {"error": <kind>, "detail": <message>}.

Each request gets its own EmojiKitchenService and requests.Session, closed
when the response is done; concurrent requests share no connection pool.

Run:
    uvicorn emoji_kitchen.server:app --port 8000
"""

import json
import logging
from typing import Dict, Iterator, Optional

import requests
import uvicorn
from fastapi import Depends, FastAPI, Query
from fastapi.responses import JSONResponse, Response

from common.logging_setup import setup_logging
from common.utils import first_grapheme
from emoji_kitchen.config import load_config
from emoji_kitchen.errors import BadURL, EmojiServiceError, ImageDecodeError, NetworkError, SizeOutOfRange
from emoji_kitchen.service import MAX_SIZE, MIN_SIZE, EmojiKitchenService


ONE_EMOJI_EACH = "Please enter exactly 1 emoji in each text field."

P = load_config()
setup_logging(P["logging"])
log = logging.getLogger(__name__)

DEFAULT_SIZE = int(P["emoji_kitchen"].get("default_size", 100))

# error kind -> HTTP status
_STATUS: Dict[type, int] = {
    SizeOutOfRange: 400,
    BadURL: 500,
    NetworkError: 502,
    ImageDecodeError: 502,
}

app = FastAPI(title="Emoji Kitchen Proxy", version="0.1.0")


def get_service() -> Iterator[EmojiKitchenService]:
    """Per-request service with a private session (tests override this dependency)."""
    with requests.Session() as session:
        yield EmojiKitchenService.from_config(P, session=session)


def _error(kind: str, detail: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": kind, "detail": detail}, status_code=status_code)


def _parse_size(raw: Optional[str]) -> int:
    if raw is None or raw == "":
        return DEFAULT_SIZE
    try:
        return int(raw)
    except ValueError:
        raise SizeOutOfRange(raw, MIN_SIZE, MAX_SIZE) from None


@app.get("/health")
def health():
    ek = P["emoji_kitchen"]
    return {
        "status": "ok",
        "upstream": f"{ek['scheme']}://{ek['host']}",
        "timeout_s": float(ek["timeout_s"]),
        "default_size": DEFAULT_SIZE,
    }


@app.get("/combine")
def combine(
    emoji1: Optional[str] = Query(None),
    emoji2: Optional[str] = Query(None),
    size: Optional[str] = Query(None, description=f"output size, {MIN_SIZE}..{MAX_SIZE} (default {DEFAULT_SIZE})"),
    service: EmojiKitchenService = Depends(get_service),
):
    """
    Return the combined image with its media type and an `X-Emoji-Metadata`
    header.
    """
    first = first_grapheme(emoji1)
    second = first_grapheme(emoji2)
    if first is None or second is None:
        return _error("missing_emoji", ONE_EMOJI_EACH, 400)

    try:
        result = service.get_emoji_combination(first, second, _parse_size(size))
    except EmojiServiceError as e:
        status = _STATUS.get(type(e), 500)
        log.warning("combine failed: %s", e.message)
        return _error(type(e).__name__, e.message, status)

    headers = {
        "X-Emoji-Metadata": json.dumps(result.to_meta()),
        "Cache-Control": "no-store",
    }
    return Response(content=result.image_data, media_type=result.media_type, headers=headers)


# -------- local dev entrypoint --------
if __name__ == "__main__":
    srv = P["server"]
    uvicorn.run(app, host=str(srv.get("host", "0.0.0.0")), port=int(srv.get("port", 8000)))
