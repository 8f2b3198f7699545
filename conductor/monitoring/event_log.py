"""
Bounded Event Log

Newest-first Redis list of serialized delegation / direct-action events,
trimmed after every push. Entries beyond ``max_events`` are dropped silently,
so windowed analysis only covers the retained tail.
"""

import structlog
from redis.asyncio import Redis

from ..core.entities import Event
from ..core.exceptions import MalformedEvent, ValidationError
from ..infrastructure.redis_store import EVENTS_KEY, store_errors

logger = structlog.get_logger()


class EventLog:
    """Bounded list of events stored under ``boss:conductor:events``"""

    def __init__(self, redis: Redis, max_events: int = 1000):
        if max_events < 1:
            raise ValidationError("max_events must be at least 1")
        self.redis = redis
        self.max_events = max_events

    async def append(self, event: Event) -> None:
        """Push an event to the front and trim to ``max_events``"""
        with store_errors("append_event"):
            await self.redis.lpush(EVENTS_KEY, event.to_json())
            await self.redis.ltrim(EVENTS_KEY, 0, self.max_events - 1)

    async def recent(self, limit: int = 50) -> list[Event]:
        """
        Read the newest ``limit`` events.

        Entries that fail to deserialize are skipped.
        """
        if limit < 1:
            raise ValidationError(f"limit must be a positive integer, got {limit}")

        with store_errors("list_recent_events"):
            raw_events = await self.redis.lrange(EVENTS_KEY, 0, limit - 1)

        events = []
        for raw in raw_events:
            try:
                events.append(Event.from_json(raw))
            except MalformedEvent as e:
                logger.warning("skip_malformed_event", error=str(e))
        return events

    async def length(self) -> int:
        with store_errors("event_log_length"):
            return await self.redis.llen(EVENTS_KEY)

    async def clear(self) -> None:
        with store_errors("clear_event_log"):
            await self.redis.delete(EVENTS_KEY)
