"""
Ratio Analyzer

Computes delegation statistics from the counter hashes and time-windowed
ratios from the bounded event log.

Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                   RatioAnalyzer                       │
    │                                                        │
    │  Data Sources:                                        │
    │  ├─ boss:conductor:delegation      -> agent counts    │
    │  ├─ boss:conductor:direct_actions  -> action counts   │
    │  ├─ boss:conductor:alert_threshold -> threshold       │
    │  └─ EventLog                       -> 24h / 7d ratios │
    └──────────────────────────────────────────────────────┘
"""

import math
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog
from redis.asyncio import Redis

from ..core.entities import DelegationReport, DelegationStats, WindowStats
from ..infrastructure.redis_store import (
    ALERT_THRESHOLD_KEY,
    DELEGATION_KEY,
    DIRECT_ACTION_KEY,
    decode,
    store_errors,
)
from .event_log import EventLog

logger = structlog.get_logger()

DEFAULT_THRESHOLD = 0.95
RECENT_EVENTS_IN_REPORT = 10


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _breakdown(data: dict, prefix: str) -> tuple[int, dict[str, int]]:
    """Split a counter hash into its ``total`` and per-prefix breakdown"""
    total = 0
    breakdown: dict[str, int] = {}

    for raw_key, raw_value in data.items():
        key = decode(raw_key)
        try:
            value = int(decode(raw_value))
        except (TypeError, ValueError):
            logger.warning("skip_invalid_counter", field=key, value=raw_value)
            continue

        if key == "total":
            total = value
        elif key.startswith(prefix):
            breakdown[key[len(prefix) :]] = value

    return total, breakdown


class RatioAnalyzer:
    """
    Delegation ratio analytics.

    Example:
        analyzer = RatioAnalyzer(redis_client, EventLog(redis_client))

        stats = await analyzer.compute_stats()
        report = await analyzer.generate_report(event_limit=100)
    """

    def __init__(
        self,
        redis: Redis,
        event_log: EventLog,
        default_threshold: float = DEFAULT_THRESHOLD,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the analyzer.

        Args:
            redis: Redis client shared with the recorder
            event_log: Bounded event log to window over
            default_threshold: Threshold used while none is stored
            clock: Returns the current aware datetime
        """
        self.redis = redis
        self.event_log = event_log
        self.default_threshold = default_threshold
        self.clock = clock

    async def get_alert_threshold(self) -> float:
        """Get the stored alert threshold, or the default when unset or invalid"""
        with store_errors("get_alert_threshold"):
            raw = await self.redis.get(ALERT_THRESHOLD_KEY)

        if raw is None:
            return self.default_threshold
        try:
            threshold = float(decode(raw))
        except ValueError:
            threshold = math.nan

        # NaN fails the comparison as well
        if not 0 <= threshold <= 1:
            logger.warning("invalid_stored_threshold", value=raw, default=self.default_threshold)
            return self.default_threshold
        return threshold

    async def compute_stats(self) -> DelegationStats:
        """Read both counter hashes and the threshold"""
        with store_errors("compute_stats"):
            delegation_data = await self.redis.hgetall(DELEGATION_KEY)
            direct_action_data = await self.redis.hgetall(DIRECT_ACTION_KEY)

        total_delegations, agent_breakdown = _breakdown(delegation_data or {}, "agent:")
        total_direct_actions, action_breakdown = _breakdown(direct_action_data or {}, "type:")

        return DelegationStats(
            total_delegations=total_delegations,
            total_direct_actions=total_direct_actions,
            threshold=await self.get_alert_threshold(),
            agent_breakdown=agent_breakdown,
            direct_action_breakdown=action_breakdown,
        )

    async def generate_report(self, event_limit: int = 50) -> DelegationReport:
        """
        Generate a delegation report.

        Windows include events whose timestamp is strictly after the cutoff.
        Timestamps are taken as recorded; skewed or future timestamps are
        neither reordered nor rejected.

        Args:
            event_limit: Number of recent events to analyze

        Returns:
            Overall stats, 24h and 7d windows, and the 10 newest events
        """
        stats = await self.compute_stats()
        events = await self.event_log.recent(event_limit)

        now = self.clock()
        one_day_ago = now - timedelta(hours=24)
        one_week_ago = now - timedelta(days=7)

        return DelegationReport(
            overall=stats,
            last_24h=WindowStats.from_events([e for e in events if e.timestamp > one_day_ago]),
            last_7d=WindowStats.from_events([e for e in events if e.timestamp > one_week_ago]),
            recent_events=events[:RECENT_EVENTS_IN_REPORT],
            generated_at=now,
        )
