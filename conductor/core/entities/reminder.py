"""Reminder Entity"""

from dataclasses import dataclass


@dataclass
class ReminderCheck:
    """Result of one message-boundary reminder check"""

    should_show: bool
    count: int
    reminder_text: str | None = None

    def to_dict(self) -> dict:
        return {
            "should_show": self.should_show,
            "count": self.count,
            "reminder_text": self.reminder_text,
        }
