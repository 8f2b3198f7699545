"""
Delegation Alerts

Decides whether a degraded delegation ratio produces a new alert and writes
fired alerts to an append-only text log.

Alert rule, evaluated on every fresh ``DelegationStats``:

    total_actions < min_actions           -> no alert (cold start)
    meets_threshold                       -> no alert
    last alert younger than resend floor  -> no alert (throttled)
    otherwise                             -> log file entry + warning, store now

Only the last-alert timestamp is persisted. The read-compare-write on it is
not atomic, so concurrent processes can both fire inside one resend window.
"""

import json
import math
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import structlog
from redis.asyncio import Redis

from ..core.entities import DelegationStats, format_timestamp
from ..core.exceptions import StoreError, ValidationError
from ..infrastructure.redis_store import ALERT_THRESHOLD_KEY, LAST_ALERT_KEY, decode, store_errors

logger = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AlertLog:
    """
    Append-only alert file.

    Entry layout:
        [2026-01-01T12:00:00.000Z] ALERT: <message>
        { ...pretty-printed payload... }
        <blank line>
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def append(self, message: str, data: dict[str, Any], timestamp: datetime) -> None:
        """Append one entry, creating parent directories on first use"""
        entry = (
            f"[{format_timestamp(timestamp)}] ALERT: {message}\n"
            f"{json.dumps(data, indent=2, default=str)}\n\n"
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(entry)

    def read(self) -> str:
        """Return the whole log, or an empty string if nothing was written yet"""
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8")


class AlertThrottler:
    """
    Throttled delegation-ratio alerting.

    Example:
        throttler = AlertThrottler(redis_client, AlertLog("~/.boss-claude/conductor-alerts.log"))

        fired = await throttler.check_and_alert(stats)
        await throttler.set_alert_threshold(0.8)
    """

    def __init__(
        self,
        redis: Redis,
        alert_log: AlertLog,
        min_actions: int = 10,
        resend_interval: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize the throttler.

        Args:
            redis: Redis client
            alert_log: File sink for fired alerts
            min_actions: Sample size below which no alert fires
            resend_interval: Minimum time between two alerts
            clock: Returns the current aware datetime
        """
        self.redis = redis
        self.alert_log = alert_log
        self.min_actions = min_actions
        self.resend_interval = resend_interval
        self.clock = clock

    async def check_and_alert(self, stats: DelegationStats) -> bool:
        """
        Fire an alert for a degraded ratio unless suppressed.

        Never raises on store or file failures; they are logged. Once the
        operator warning is emitted the alert counts as fired, even if the
        alert file or the last-alert marker could not be written.

        Returns:
            True if an alert was fired
        """
        if stats.total_actions < self.min_actions:
            return False
        if stats.meets_threshold:
            return False

        try:
            return await self._fire_unless_throttled(stats)
        except StoreError as e:
            logger.error("alert_check_failed", error=str(e))
            return False

    async def _fire_unless_throttled(self, stats: DelegationStats) -> bool:
        now = self.clock()
        last_alert = await self.get_last_alert()
        if last_alert is not None and now - last_alert < self.resend_interval:
            logger.debug("alert_throttled", last_alert=format_timestamp(last_alert))
            return False

        message = f"CONDUCTOR delegation ratio dropped below {stats.threshold_percentage}%"
        alert_data = {
            "current_ratio": f"{stats.delegation_percentage}%",
            "threshold": f"{stats.threshold_percentage}%",
            "total_actions": stats.total_actions,
            "delegations": stats.total_delegations,
            "direct_actions": stats.total_direct_actions,
            "agent_breakdown": stats.agent_breakdown,
            "direct_action_breakdown": stats.direct_action_breakdown,
        }

        try:
            self.alert_log.append(message, alert_data, now)
        except OSError as e:
            logger.error("alert_log_write_failed", path=str(self.alert_log.path), error=str(e))

        logger.warning(
            "delegation_ratio_below_threshold",
            message=message,
            ratio=f"{stats.delegation_percentage}%",
            delegations=stats.total_delegations,
            total_actions=stats.total_actions,
            alert_log=str(self.alert_log.path),
        )

        try:
            with store_errors("record_last_alert"):
                await self.redis.set(LAST_ALERT_KEY, str(int(now.timestamp() * 1000)))
        except StoreError as e:
            logger.error("last_alert_persist_failed", error=str(e))
        return True

    async def get_last_alert(self) -> datetime | None:
        """Get the time of the last fired alert, if any"""
        with store_errors("get_last_alert"):
            raw = await self.redis.get(LAST_ALERT_KEY)

        if raw is None:
            return None
        try:
            return datetime.fromtimestamp(int(decode(raw)) / 1000, tz=UTC)
        except ValueError:
            logger.warning("invalid_last_alert", value=raw)
            return None

    async def clear_last_alert(self) -> None:
        with store_errors("clear_last_alert"):
            await self.redis.delete(LAST_ALERT_KEY)

    async def set_alert_threshold(self, threshold: float) -> float:
        """
        Set the alert threshold.

        Args:
            threshold: Minimum acceptable delegation ratio (0.0 to 1.0)

        Returns:
            The stored threshold

        Raises:
            ValidationError: If threshold is outside [0, 1]
        """
        try:
            threshold = float(threshold)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Threshold must be a number, got {threshold!r}") from e
        if math.isnan(threshold) or threshold < 0 or threshold > 1:
            raise ValidationError("Threshold must be between 0 and 1")

        with store_errors("set_alert_threshold"):
            await self.redis.set(ALERT_THRESHOLD_KEY, str(threshold))

        logger.info("alert_threshold_set", threshold=threshold)
        return threshold
