from __future__ import annotations

import logging
import os
import sys
import json
import time
from typing import Any, Mapping, Optional


LOG_FORMATS = ("json", "text")
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# Handler installed by setup_logging; replaced (not stacked) on reconfiguration
_handler: Optional[logging.Handler] = None


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line, used by the proxy:
      { "t": 169, "lvl": "INFO", "name": "emoji_kitchen.service", "msg": "text", "extra": {...} }

    `extra` carries EmojiImage.to_meta() and similar, passed as
    log.info(..., extra={"extra": {...}}).
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload = {
            "t": int(time.time() * 1000),
            "lvl": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if hasattr(record, "extra") and isinstance(record.extra, dict):  # type: ignore[attr-defined]
            payload["extra"] = record.extra  # type: ignore[attr-defined]
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _resolve_level(section: Mapping[str, Any], env: Mapping[str, str]) -> int:
    name = str(env.get("LOG_LEVEL") or section.get("level") or "INFO").upper()
    lvl = logging.getLevelName(name)
    if not isinstance(lvl, int):
        raise ValueError(f"Unknown log level {name!r}")
    return lvl


def setup_logging(
    section: Optional[Mapping[str, Any]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> logging.Handler:
    """
    Configure the root logger from the config `logging` section:
        logging:
          level: INFO        # env LOG_LEVEL wins over this
          format: json       # json -> stdout (proxy), text -> stderr (CLI)

    Calling it again swaps this module's handler instead of adding a second
    one; handlers installed by anyone else are left in place.
    """
    global _handler
    section = section or {}
    env = os.environ if env is None else env

    lvl = _resolve_level(section, env)
    fmt = str(section.get("format") or "json").lower()
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {fmt!r} (expected one of {', '.join(LOG_FORMATS)})")

    if fmt == "json":
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(lvl)
    _handler = handler
    return handler
