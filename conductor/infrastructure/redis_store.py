"""
Redis Store Client

Builds the shared ``redis.asyncio`` client and translates Redis failures into
the monitor's typed store errors.

Keys used by the monitor (kept stable for existing stores):

    boss:conductor:delegation       hash    total, agent:<name>
    boss:conductor:direct_actions   hash    total, type:<action_type>
    boss:conductor:events           list    JSON events, newest first
    boss:conductor:alert_threshold  string  float
    boss:conductor:last_alert       string  epoch milliseconds
    boss:conductor:message_count    string  integer
    boss:conductor:interval         string  integer
"""

from collections.abc import Iterator
from contextlib import contextmanager

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from ..config import Settings
from ..core.exceptions import StoreError, StoreUnavailable

# Redis keys
DELEGATION_KEY = "boss:conductor:delegation"
DIRECT_ACTION_KEY = "boss:conductor:direct_actions"
EVENTS_KEY = "boss:conductor:events"
ALERT_THRESHOLD_KEY = "boss:conductor:alert_threshold"
LAST_ALERT_KEY = "boss:conductor:last_alert"
MESSAGE_COUNT_KEY = "boss:conductor:message_count"
INTERVAL_KEY = "boss:conductor:interval"


def create_redis(settings: Settings) -> redis.Redis:
    """
    Create a Redis client from settings.

    Socket timeouts bound every command so an unreachable store surfaces as
    ``StoreUnavailable`` instead of blocking the caller.
    """
    return redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_connect_timeout,
    )


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """
    Translate Redis exceptions raised inside the block.

    Usage:
        with store_errors("record_delegation"):
            await redis.hincrby(DELEGATION_KEY, "total", 1)
    """
    try:
        yield
    except (RedisConnectionError, RedisTimeoutError, OSError) as e:
        raise StoreUnavailable(f"Redis unavailable during {operation}: {e}") from e
    except RedisError as e:
        raise StoreError(f"Redis error during {operation}: {e}") from e


def decode(value: str | bytes | None) -> str | None:
    """Decode a Redis value that may arrive as bytes"""
    if isinstance(value, bytes):
        return value.decode()
    return value
