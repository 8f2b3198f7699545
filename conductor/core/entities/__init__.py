"""Domain Entities"""

from .event import Event, EventType, format_timestamp, parse_timestamp
from .reminder import ReminderCheck
from .stats import DelegationReport, DelegationStats, WindowStats

__all__ = [
    "Event",
    "EventType",
    "format_timestamp",
    "parse_timestamp",
    "ReminderCheck",
    "DelegationStats",
    "WindowStats",
    "DelegationReport",
]
