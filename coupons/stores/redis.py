"""Redis store for page payload caching.

Handles:
- Caching with TTL policies
- JSON (de)serialization of rendered catalog payloads

TTL policies:
- UI payload cache: settings.ui_cache_ttl_seconds (default 60s)
"""

import json
import logging
from typing import Any

import redis.asyncio as redis

from coupons.settings import get_settings

# Key prefixes
PREFIX_UI_PAYLOAD = "ui:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# UI payload cache
# ============================================================


async def get_ui_payload_cache(key: str) -> dict[str, Any] | None:
    """Get a cached page payload (e.g. "stores:p=1:n=20:s=:o=name:c=").

    Returns:
        Parsed JSON dict or None on miss.
    """
    value = await _get_redis().get(f"{PREFIX_UI_PAYLOAD}{key}")
    if value:
        return json.loads(value)
    return None


async def set_ui_payload_cache(key: str, payload: dict[str, Any]) -> None:
    """Cache a page payload as JSON for the configured UI TTL."""
    ttl = get_settings().ui_cache_ttl_seconds
    await _get_redis().setex(f"{PREFIX_UI_PAYLOAD}{key}", ttl, json.dumps(payload))
