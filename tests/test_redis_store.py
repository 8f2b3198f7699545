"""Tests for Redis client construction and error translation"""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError
from redis.exceptions import TimeoutError as RedisTimeoutError

from conductor.config import Settings
from conductor.core.exceptions import StoreError, StoreUnavailable
from conductor.infrastructure.redis_store import create_redis, decode, store_errors


class TestStoreErrors:
    """Tests for store_errors translation"""

    @pytest.mark.parametrize("error", [RedisConnectionError("refused"), RedisTimeoutError("slow")])
    def test_connection_failures_become_store_unavailable(self, error):
        with pytest.raises(StoreUnavailable) as exc_info:
            with store_errors("test_op"):
                raise error

        assert "test_op" in str(exc_info.value)
        assert exc_info.value.__cause__ is error

    def test_other_redis_errors_become_store_error(self):
        with pytest.raises(StoreError) as exc_info:
            with store_errors("test_op"):
                raise ResponseError("WRONGTYPE")

        assert not isinstance(exc_info.value, StoreUnavailable)

    def test_non_redis_errors_pass_through(self):
        with pytest.raises(KeyError):
            with store_errors("test_op"):
                raise KeyError("x")


class TestCreateRedis:
    def test_client_uses_settings(self):
        settings = Settings(
            _env_file=None, redis_url="redis://example:6380/2", redis_socket_timeout=1.5
        )

        client = create_redis(settings)
        kwargs = client.connection_pool.connection_kwargs

        assert kwargs["host"] == "example"
        assert kwargs["port"] == 6380
        assert kwargs["db"] == 2
        assert kwargs["socket_timeout"] == 1.5
        assert kwargs["decode_responses"] is True


def test_decode():
    assert decode(b"abc") == "abc"
    assert decode("abc") == "abc"
    assert decode(None) is None
