"""Unified configuration layer for the client.

Merge order (later wins)
------------------------
1. Built-in defaults (``config.defaults``)
2. Optional external config file (JSON or YAML) pointed to by ZAGUAN_CONFIG_FILE
3. Environment variables (ZAGUAN_BASE_URL, ZAGUAN_API_KEY, ZAGUAN_TIMEOUT_MS, ...)
4. In-code overrides passed to :func:`get_client_config`

A ``.env`` file (path from DOTENV_FILE, default ``.env``) is loaded once before
the environment is read. It only fills variables that are unset or hold a
placeholder value.

External Config File
--------------------
Either a flat mapping or one nested under a ``zaguan`` key::

    zaguan:
      base_url: https://gateway.internal
      timeout_ms: 30000
      max_retries: 2

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    ZAGUAN_DEFAULT_BACKOFF_MULTIPLIER,
    ZAGUAN_DEFAULT_BASE_URL,
    ZAGUAN_DEFAULT_INITIAL_DELAY_MS,
    ZAGUAN_DEFAULT_MAX_DELAY_MS,
    ZAGUAN_DEFAULT_MAX_RETRIES,
    ZAGUAN_DEFAULT_TIMEOUT_MS,
)
from .env import CONFIG_FILE_ENV, DOTENV_FILE_ENV, ENV_MAP, is_placeholder, read_env_settings

DEFAULTS: Dict[str, Any] = {
    "base_url": ZAGUAN_DEFAULT_BASE_URL,
    "api_key": None,
    "timeout_ms": ZAGUAN_DEFAULT_TIMEOUT_MS,
    "max_retries": ZAGUAN_DEFAULT_MAX_RETRIES,
    "initial_delay_ms": ZAGUAN_DEFAULT_INITIAL_DELAY_MS,
    "max_delay_ms": ZAGUAN_DEFAULT_MAX_DELAY_MS,
    "backoff_multiplier": ZAGUAN_DEFAULT_BACKOFF_MULTIPLIER,
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Parse KEY=VALUE lines from the .env file, once per process.

    Comments and blank lines are ignored. Existing environment variables win
    unless their current value looks like a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv(DOTENV_FILE_ENV, ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).exists():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        # YAML is a superset of JSON; a parse error here is a real config error.
        data = yaml.safe_load(text) or {}
    if isinstance(data, dict) and isinstance(data.get("zaguan"), dict):
        data = data["zaguan"]
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = {k: v for k, v in data.items() if k in ENV_MAP}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached config file and .env state (used by tests)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged client configuration.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` do not replace lower layers. A placeholder
    API key from the file or environment is treated as missing.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= read_env_settings()
    if is_placeholder(cfg.get("api_key")):
        cfg["api_key"] = None
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


__all__ = [
    "get_client_config",
    "reset_config_cache",
    "DEFAULTS",
]
