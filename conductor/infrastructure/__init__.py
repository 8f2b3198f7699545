"""Infrastructure Layer

Redis client construction and store error translation.
"""

from .redis_store import create_redis, store_errors

__all__ = ["create_redis", "store_errors"]
