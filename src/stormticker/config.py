"""Centralised configuration loaded from environment variables and dotenv."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back on bad values."""
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r; using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%d; using %d", name, value, default)
        return default
    return value


# ── Feed ───────────────────────────────────────────────────────────────────
DEFAULT_FEED_URL = "https://mesonet.agron.iastate.edu/geojson/lsr.geojson?hours=2"
FEED_URL: str = os.getenv("API_URL", DEFAULT_FEED_URL)
FEED_TIMEOUT: int = _int_env("FEED_TIMEOUT", 10)
USER_AGENT = "OBS-JSON-Parser/1.0"

# ── Refresh ────────────────────────────────────────────────────────────────
REFRESH_INTERVAL: int = _int_env("REFRESH_INTERVAL", 60)

# ── Server ─────────────────────────────────────────────────────────────────
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = _int_env("PORT", 3000)

# ── Display ────────────────────────────────────────────────────────────────
DISPLAY_TIMEZONE: str = os.getenv("DISPLAY_TIMEZONE", "America/Chicago")
WINDOW_LABEL = "2 hrs"


def request_headers() -> dict[str, str]:
    """Headers sent with every feed request."""
    return {"User-Agent": USER_AGENT, "Accept": "application/json"}
