"""
Event Recorder

Records delegation and direct-action events: bumps the counter hashes, pushes
the event onto the bounded log, recomputes stats and runs the alert check.

The ``total`` and per-agent (or per-type) increments are two separate
HINCRBY calls. A failure between them leaves ``total`` ahead of the
breakdown; totals stay consistent with each other either way.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import structlog
from redis.asyncio import Redis

from ..core.entities import DelegationStats, Event
from ..core.exceptions import ValidationError
from ..infrastructure.redis_store import (
    DELEGATION_KEY,
    DIRECT_ACTION_KEY,
    store_errors,
)
from .alerts import AlertThrottler
from .analyzer import RatioAnalyzer
from .event_log import EventLog

logger = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _require_name(value: str, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{what} must be a non-empty string")
    return value


class EventRecorder:
    """
    Records conductor events and keeps counters up to date.

    Example:
        recorder = EventRecorder(redis_client, event_log, analyzer, throttler)

        stats = await recorder.record_delegation(
            "backend-engineer", "Implement login endpoint", {"ticket": "AUTH-12"}
        )
        stats = await recorder.record_direct_action("file_edit", "Fixed a typo")
    """

    def __init__(
        self,
        redis: Redis,
        event_log: EventLog,
        analyzer: RatioAnalyzer,
        throttler: AlertThrottler,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.redis = redis
        self.event_log = event_log
        self.analyzer = analyzer
        self.throttler = throttler
        self.clock = clock

    async def record_delegation(
        self,
        agent_name: str,
        task_description: str = "",
        metadata: dict[str, Any] | None = None,
    ) -> DelegationStats:
        """
        Record a task delegated to a sub-agent.

        Args:
            agent_name: Name of the agent that received the task
            task_description: What was delegated
            metadata: Additional opaque data stored with the event

        Returns:
            Freshly computed delegation stats

        Raises:
            ValidationError: If agent_name is empty
            StoreError: If Redis fails
        """
        _require_name(agent_name, "agent_name")

        with store_errors("record_delegation"):
            await self.redis.hincrby(DELEGATION_KEY, "total", 1)
            await self.redis.hincrby(DELEGATION_KEY, f"agent:{agent_name}", 1)

        event = Event.delegation(agent_name, task_description, self.clock(), metadata)
        await self.event_log.append(event)

        logger.info("delegation_recorded", agent=agent_name)
        return await self._refresh()

    async def record_direct_action(
        self,
        action_type: str,
        description: str = "",
        metadata: dict[str, Any] | None = None,
    ) -> DelegationStats:
        """
        Record work the conductor did itself instead of delegating.

        Args:
            action_type: Kind of action (e.g. "file_edit", "bash")
            description: What was done
            metadata: Additional opaque data stored with the event

        Returns:
            Freshly computed delegation stats
        """
        _require_name(action_type, "action_type")

        with store_errors("record_direct_action"):
            await self.redis.hincrby(DIRECT_ACTION_KEY, "total", 1)
            await self.redis.hincrby(DIRECT_ACTION_KEY, f"type:{action_type}", 1)

        event = Event.direct_action(action_type, description, self.clock(), metadata)
        await self.event_log.append(event)

        logger.info("direct_action_recorded", action_type=action_type)
        return await self._refresh()

    async def list_recent_events(self, limit: int = 50) -> list[Event]:
        """Get the newest ``limit`` events, newest first"""
        return await self.event_log.recent(limit)

    async def reset_tracking(self) -> None:
        """
        Clear counters, the event log and the last-alert marker.

        The threshold and the reminder counter are left alone.
        """
        with store_errors("reset_tracking"):
            await self.redis.delete(DELEGATION_KEY)
            await self.redis.delete(DIRECT_ACTION_KEY)
        await self.event_log.clear()
        await self.throttler.clear_last_alert()

        logger.info("delegation_tracking_reset")

    async def _refresh(self) -> DelegationStats:
        stats = await self.analyzer.compute_stats()
        await self.throttler.check_and_alert(stats)
        return stats
