"""zaguan_sdk.config.defaults
==========================

Central place for small, stable default values used by the client. These
defaults can be overridden via environment variables, an external config file,
or constructor arguments, but provide sensible fallbacks for local development
and tests.

This module intentionally imports nothing from the rest of the package; only
plain constants live here.
"""

from __future__ import annotations

# ---- Connection ----
# No default base URL: every deployment runs its own gateway.
ZAGUAN_DEFAULT_BASE_URL = None
# No client-wide timeout unless configured; per-call options may still set one.
ZAGUAN_DEFAULT_TIMEOUT_MS = None

# ---- Retry ----
# Retries are opt-in.
ZAGUAN_DEFAULT_MAX_RETRIES = 0
ZAGUAN_DEFAULT_INITIAL_DELAY_MS = 1000
ZAGUAN_DEFAULT_MAX_DELAY_MS = 10000
ZAGUAN_DEFAULT_BACKOFF_MULTIPLIER = 2.0


__all__ = [
    "ZAGUAN_DEFAULT_BASE_URL",
    "ZAGUAN_DEFAULT_TIMEOUT_MS",
    "ZAGUAN_DEFAULT_MAX_RETRIES",
    "ZAGUAN_DEFAULT_INITIAL_DELAY_MS",
    "ZAGUAN_DEFAULT_MAX_DELAY_MS",
    "ZAGUAN_DEFAULT_BACKOFF_MULTIPLIER",
]
