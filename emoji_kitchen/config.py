from __future__ import annotations

"""
Configuration for the Emoji Kitchen client, proxy server and CLI.

Sources, lowest to highest precedence:
  1. built-in defaults (DEFAULTS)
  2. YAML file (config/params.yaml, or EMOJI_KITCHEN_CONFIG)
  3. environment: EMOJI_KITCHEN_SCHEME, EMOJI_KITCHEN_HOST, EMOJI_KITCHEN_TIMEOUT

Example params.yaml:
    emoji_kitchen:
      scheme: https
      host: emojik.vercel.app
      timeout_s: 10.0
      default_size: 100
    server:
      host: 0.0.0.0
      port: 8000
    logging:
      level: INFO
      format: json
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml


log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/params.yaml"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "emoji_kitchen": {
        "scheme": "https",
        "host": "emojik.vercel.app",
        "timeout_s": 10.0,
        "default_size": 100,
    },
    "server": {"host": "0.0.0.0", "port": 8000},
    "logging": {"level": "INFO", "format": "json"},
}


def _merge(base: Dict[str, Any], override: Mapping[str, Any], where: str = "") -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        key = f"{where}{k}"
        if isinstance(out.get(k), dict):
            # A section left empty in YAML (`emoji_kitchen:`) loads as None: keep its defaults
            if v is None:
                continue
            if not isinstance(v, Mapping):
                raise ValueError(f"Config section {key!r} must be a mapping (got {type(v).__name__})")
            out[k] = _merge(out[k], v, f"{key}.")
        else:
            out[k] = v
    return out


def _apply_env(cfg: Dict[str, Any], env: Mapping[str, str]) -> Dict[str, Any]:
    ek = cfg["emoji_kitchen"]
    if env.get("EMOJI_KITCHEN_SCHEME"):
        ek["scheme"] = env["EMOJI_KITCHEN_SCHEME"]
    if env.get("EMOJI_KITCHEN_HOST"):
        ek["host"] = env["EMOJI_KITCHEN_HOST"]
    if env.get("EMOJI_KITCHEN_TIMEOUT"):
        try:
            ek["timeout_s"] = float(env["EMOJI_KITCHEN_TIMEOUT"])
        except ValueError:
            raise ValueError(
                f"EMOJI_KITCHEN_TIMEOUT must be a number (got {env['EMOJI_KITCHEN_TIMEOUT']!r})"
            ) from None
    return cfg


def load_config(path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Load configuration as a plain nested dict.

    A missing file is not an error (defaults apply); a file that is not a
    YAML mapping raises ValueError.
    """
    env = os.environ if env is None else env
    path = path or env.get("EMOJI_KITCHEN_CONFIG") or DEFAULT_CONFIG_PATH

    cfg = copy.deepcopy(DEFAULTS)
    p = Path(path)
    if p.exists():
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, Mapping):
            raise ValueError(f"Config file {path} must contain a mapping at the top level")
        cfg = _merge(cfg, data)
    else:
        log.debug("Config file %s not found; using defaults", path)

    return _apply_env(cfg, env)
