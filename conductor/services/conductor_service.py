"""Conductor Service

Top-level owner of the Redis client. Wires the monitoring components with one
shared client and exposes their operations to the API and CLI.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import structlog
from redis.asyncio import Redis

from ..config import Settings, get_settings
from ..core.entities import DelegationReport, DelegationStats, Event, ReminderCheck
from ..infrastructure.redis_store import create_redis, store_errors
from ..monitoring import (
    AlertLog,
    AlertThrottler,
    EventLog,
    EventRecorder,
    RatioAnalyzer,
    ReminderCounter,
    format_status,
)

logger = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ConductorService:
    """
    Delegation monitoring service.

    Example:
        service = ConductorService.from_settings()
        try:
            stats = await service.record_delegation("qa-engineer", "Run the test suite")
            print(await service.get_formatted_status())
        finally:
            await service.close()
    """

    def __init__(
        self,
        redis: Redis,
        settings: Settings | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the service around an existing client.

        Args:
            redis: Redis client; closed by ``close()``
            settings: Settings (default: cached process settings)
            clock: Returns the current aware datetime
        """
        self.redis = redis
        self.settings = settings or get_settings()

        self.event_log = EventLog(redis, max_events=self.settings.event_log_max)
        self.alert_log = AlertLog(self.settings.alert_log_path)
        self.analyzer = RatioAnalyzer(
            redis,
            self.event_log,
            default_threshold=self.settings.alert_threshold_default,
            clock=clock,
        )
        self.throttler = AlertThrottler(
            redis,
            self.alert_log,
            min_actions=self.settings.alert_min_actions,
            resend_interval=timedelta(seconds=self.settings.alert_resend_seconds),
            clock=clock,
        )
        self.recorder = EventRecorder(redis, self.event_log, self.analyzer, self.throttler, clock)
        self.reminder = ReminderCounter(
            redis, default_interval=self.settings.reminder_interval_default
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ConductorService":
        """Build the service with a new Redis client"""
        settings = settings or get_settings()
        return cls(create_redis(settings), settings)

    async def ping(self) -> bool:
        """Check that Redis answers"""
        with store_errors("ping"):
            return bool(await self.redis.ping())

    async def close(self) -> None:
        await self.redis.aclose()
        logger.info("conductor_service_closed")

    # =========================================================================
    # Tracking
    # =========================================================================

    async def record_delegation(
        self, agent_name: str, task_description: str = "", metadata: dict[str, Any] | None = None
    ) -> DelegationStats:
        return await self.recorder.record_delegation(agent_name, task_description, metadata)

    async def record_direct_action(
        self, action_type: str, description: str = "", metadata: dict[str, Any] | None = None
    ) -> DelegationStats:
        return await self.recorder.record_direct_action(action_type, description, metadata)

    async def list_recent_events(self, limit: int = 50) -> list[Event]:
        return await self.recorder.list_recent_events(limit)

    async def reset_tracking(self) -> None:
        await self.recorder.reset_tracking()

    # =========================================================================
    # Analysis & Alerts
    # =========================================================================

    async def compute_stats(self) -> DelegationStats:
        return await self.analyzer.compute_stats()

    async def generate_report(self, event_limit: int = 50) -> DelegationReport:
        return await self.analyzer.generate_report(event_limit)

    async def get_formatted_status(self) -> str:
        report = await self.analyzer.generate_report()
        return format_status(report, self.alert_log.path)

    async def get_alert_threshold(self) -> float:
        return await self.analyzer.get_alert_threshold()

    async def set_alert_threshold(self, threshold: float) -> float:
        return await self.throttler.set_alert_threshold(threshold)

    # =========================================================================
    # Reminders
    # =========================================================================

    async def check_reminder(self, interval: int | None = None) -> ReminderCheck:
        return await self.reminder.check_reminder(interval)

    async def auto_reminder(self, interval: int | None = None) -> str | None:
        return await self.reminder.auto_reminder(interval)

    async def show_reminder(self) -> str:
        return await self.reminder.show_reminder()

    async def get_message_count(self) -> int:
        return await self.reminder.get_message_count()

    async def reset_reminder_counter(self) -> None:
        await self.reminder.reset_counter()

    async def get_reminder_interval(self) -> int:
        return await self.reminder.get_interval()

    async def set_reminder_interval(self, interval: int) -> None:
        await self.reminder.set_interval(interval)
