"""zaguan_sdk.config.env
=====================

Environment variable names and helpers for client settings.

Design Notes
------------
- ``ENV_MAP`` maps each config field to its environment variable; numeric
  fields are listed in ``ENV_CASTS`` with the type they are coerced to.
- Helpers never raise on unset variables; a value that cannot be coerced
  raises ``ValueError`` naming the variable, since silently ignoring a typo'd
  timeout is worse than failing at startup.
"""

from __future__ import annotations

import os
from typing import Any, Callable, Dict, Optional

ENV_MAP: Dict[str, str] = {
    "base_url": "ZAGUAN_BASE_URL",
    "api_key": "ZAGUAN_API_KEY",  # pragma: allowlist secret - env var name, not a secret
    "timeout_ms": "ZAGUAN_TIMEOUT_MS",
    "max_retries": "ZAGUAN_MAX_RETRIES",
    "initial_delay_ms": "ZAGUAN_INITIAL_DELAY_MS",
    "max_delay_ms": "ZAGUAN_MAX_DELAY_MS",
    "backoff_multiplier": "ZAGUAN_BACKOFF_MULTIPLIER",
}

ENV_CASTS: Dict[str, Callable[[str], Any]] = {
    "timeout_ms": int,
    "max_retries": int,
    "initial_delay_ms": int,
    "max_delay_ms": int,
    "backoff_multiplier": float,
}

CONFIG_FILE_ENV = "ZAGUAN_CONFIG_FILE"
DOTENV_FILE_ENV = "DOTENV_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', 'your-api-key',
    or starts with 'test_'. Case-insensitive; surrounding spaces are ignored.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or "your-api-key" in v
        or v.startswith("test_")
    )


def read_env_settings() -> Dict[str, Any]:
    """Return the settings present in the process environment, coerced."""
    out: Dict[str, Any] = {}
    for field, name in ENV_MAP.items():
        raw = os.environ.get(name)
        if raw is None or raw.strip() == "":
            continue
        cast = ENV_CASTS.get(field)
        if cast is None:
            out[field] = raw.strip()
            continue
        try:
            out[field] = cast(raw.strip())
        except ValueError as e:
            raise ValueError(f"{name} must be a number, got {raw!r}") from e
    return out


__all__ = [
    "ENV_MAP",
    "ENV_CASTS",
    "CONFIG_FILE_ENV",
    "DOTENV_FILE_ENV",
    "is_placeholder",
    "read_env_settings",
]
