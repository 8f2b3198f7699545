"""
Conductor Reminder

Counts messages and surfaces a reminder every ``interval`` messages.
Reminders are best-effort: store failures are logged and turn into a
"nothing to show" result instead of reaching the caller. Invalid intervals
are configuration errors and are raised.
"""

import structlog
from redis.asyncio import Redis

from ..core.entities import ReminderCheck
from ..core.exceptions import StoreError, ValidationError
from ..infrastructure.redis_store import INTERVAL_KEY, MESSAGE_COUNT_KEY, decode, store_errors
from .formatting import format_reminder

logger = structlog.get_logger()

DEFAULT_INTERVAL = 5


def _validate_interval(interval: int) -> int:
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
        raise ValidationError(f"Reminder interval must be a positive integer, got {interval!r}")
    return interval


class ReminderCounter:
    """
    Periodic reminder counter.

    Example:
        reminder = ReminderCounter(redis_client)

        check = await reminder.check_reminder(interval=5)
        if check.should_show:
            print(check.reminder_text)
    """

    def __init__(self, redis: Redis, default_interval: int = DEFAULT_INTERVAL):
        self.redis = redis
        self.default_interval = _validate_interval(default_interval)

    async def check_reminder(self, interval: int | None = None) -> ReminderCheck:
        """
        Count one message and decide whether the reminder is due.

        Args:
            interval: Messages between reminders (default: configured default)

        Raises:
            ValidationError: If interval is not a positive integer
        """
        interval = _validate_interval(self.default_interval if interval is None else interval)

        try:
            with store_errors("check_reminder"):
                count = int(await self.redis.incr(MESSAGE_COUNT_KEY))
        except StoreError as e:
            logger.error("reminder_check_failed", error=str(e))
            return ReminderCheck(should_show=False, count=0, reminder_text=None)

        should_show = count % interval == 0
        return ReminderCheck(
            should_show=should_show,
            count=count,
            reminder_text=format_reminder(count) if should_show else None,
        )

    async def auto_reminder(self, interval: int | None = None) -> str | None:
        """
        Per-message hook: count the message using the stored interval.

        Returns:
            Reminder text when due, otherwise None
        """
        if interval is None:
            interval = await self.get_interval()
        check = await self.check_reminder(interval)
        return check.reminder_text if check.should_show else None

    async def show_reminder(self) -> str:
        """Render the reminder for the current count without counting"""
        return format_reminder(await self.get_message_count())

    async def get_message_count(self) -> int:
        try:
            with store_errors("get_message_count"):
                raw = await self.redis.get(MESSAGE_COUNT_KEY)
            return int(decode(raw) or 0)
        except (StoreError, ValueError) as e:
            logger.error("reminder_count_failed", error=str(e))
            return 0

    async def reset_counter(self) -> None:
        """Delete the message count only"""
        try:
            with store_errors("reset_counter"):
                await self.redis.delete(MESSAGE_COUNT_KEY)
        except StoreError as e:
            logger.error("reminder_reset_failed", error=str(e))

    async def set_interval(self, interval: int) -> None:
        """
        Persist the reminder interval.

        Raises:
            ValidationError: If interval is not a positive integer
        """
        interval = _validate_interval(interval)
        try:
            with store_errors("set_interval"):
                await self.redis.set(INTERVAL_KEY, str(interval))
        except StoreError as e:
            logger.error("reminder_set_interval_failed", interval=interval, error=str(e))

    async def get_interval(self) -> int:
        """Get the stored interval, or the default when unset or unreadable"""
        try:
            with store_errors("get_interval"):
                raw = await self.redis.get(INTERVAL_KEY)
        except StoreError as e:
            logger.error("reminder_get_interval_failed", error=str(e))
            return self.default_interval

        if raw is None:
            return self.default_interval
        try:
            return _validate_interval(int(decode(raw)))
        except ValueError:
            logger.warning("invalid_stored_interval", value=raw, default=self.default_interval)
            return self.default_interval
