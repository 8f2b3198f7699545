"""Pytest Configuration and Fixtures

Shared fixtures for all tests.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from conductor.config import Settings
from conductor.monitoring import AlertLog, AlertThrottler, EventLog, EventRecorder, RatioAnalyzer
from conductor.services import ConductorService

# =============================================================================
# Clock
# =============================================================================


class FakeClock:
    """Controllable clock for throttle and window tests"""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# Redis Mock
# =============================================================================


@pytest.fixture
def mock_redis():
    """In-memory Redis double (decode_responses=True semantics)"""
    redis = AsyncMock()

    redis._data = {}
    redis._hashes = {}
    redis._lists = {}

    async def mock_set(key, value):
        redis._data[key] = str(value)
        return True

    async def mock_get(key):
        return redis._data.get(key)

    async def mock_incr(key, amount=1):
        current = int(redis._data.get(key, 0))
        redis._data[key] = str(current + amount)
        return current + amount

    async def mock_delete(*keys):
        removed = 0
        for key in keys:
            for store in (redis._data, redis._hashes, redis._lists):
                if key in store:
                    del store[key]
                    removed += 1
        return removed

    async def mock_hincrby(key, field, amount=1):
        fields = redis._hashes.setdefault(key, {})
        value = int(fields.get(field, 0)) + amount
        fields[field] = str(value)
        return value

    async def mock_hgetall(key):
        return dict(redis._hashes.get(key, {}))

    async def mock_lpush(key, *values):
        if key not in redis._lists:
            redis._lists[key] = []
        for v in values:
            redis._lists[key].insert(0, v)
        return len(redis._lists[key])

    async def mock_lrange(key, start, end):
        if key not in redis._lists:
            return []
        if end == -1:
            return redis._lists[key][start:]
        return redis._lists[key][start : end + 1]

    async def mock_ltrim(key, start, end):
        if key in redis._lists:
            redis._lists[key] = redis._lists[key][start : end + 1]
        return True

    async def mock_llen(key):
        return len(redis._lists.get(key, []))

    async def mock_ping():
        return True

    redis.set = mock_set
    redis.get = mock_get
    redis.incr = mock_incr
    redis.delete = mock_delete
    redis.hincrby = mock_hincrby
    redis.hgetall = mock_hgetall
    redis.lpush = mock_lpush
    redis.lrange = mock_lrange
    redis.ltrim = mock_ltrim
    redis.llen = mock_llen
    redis.ping = mock_ping

    return redis


@pytest.fixture
def failing_redis():
    """Redis double whose every command fails with a connection error"""
    redis = AsyncMock()
    for name in (
        "set",
        "get",
        "incr",
        "delete",
        "hincrby",
        "hgetall",
        "lpush",
        "lrange",
        "ltrim",
        "llen",
        "ping",
    ):
        setattr(redis, name, AsyncMock(side_effect=RedisConnectionError("Connection refused")))
    return redis


# =============================================================================
# Components
# =============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from .env files, alert log under tmp_path"""
    return Settings(_env_file=None, alert_log_path=tmp_path / "conductor-alerts.log")


@pytest.fixture
def alert_log(settings) -> AlertLog:
    return AlertLog(settings.alert_log_path)


@pytest.fixture
def event_log(mock_redis) -> EventLog:
    return EventLog(mock_redis)


@pytest.fixture
def analyzer(mock_redis, event_log, clock) -> RatioAnalyzer:
    return RatioAnalyzer(mock_redis, event_log, clock=clock)


@pytest.fixture
def throttler(mock_redis, alert_log, clock) -> AlertThrottler:
    return AlertThrottler(mock_redis, alert_log, clock=clock)


@pytest.fixture
def recorder(mock_redis, event_log, analyzer, throttler, clock) -> EventRecorder:
    return EventRecorder(mock_redis, event_log, analyzer, throttler, clock)


@pytest.fixture
def service(mock_redis, settings, clock) -> ConductorService:
    return ConductorService(mock_redis, settings, clock=clock)
