"""
Conductor Monitoring Layer

Tracks how often the conductor delegates versus acts directly, providing:
- EventRecorder: Records delegation / direct-action events
- RatioAnalyzer: Aggregate and 24h / 7d delegation ratios
- AlertThrottler: Throttled alerts when the ratio drops below threshold
- ReminderCounter: Periodic "delegate, don't execute" reminders

Architecture:
    ┌─────────────────────────────────────────────────────┐
    │  record_delegation / record_direct_action           │
    │                     │                                │
    │                     ▼                                │
    │  ┌──────────────────┐  ┌──────────────────┐        │
    │  │  EventRecorder   │->│    EventLog      │        │
    │  │ - HINCRBY x2     │  │ - LPUSH + LTRIM  │        │
    │  └──────────────────┘  └──────────────────┘        │
    │           │                     │                    │
    │           ▼                     ▼                    │
    │  ┌──────────────────┐  ┌──────────────────┐        │
    │  │  RatioAnalyzer   │->│  AlertThrottler  │        │
    │  │ - compute_stats  │  │ - 10-action floor│        │
    │  │ - generate_report│  │ - 1h resend floor│        │
    │  └──────────────────┘  └──────────────────┘        │
    │                                                      │
    │  ┌──────────────────────────────────────────┐      │
    │  │  ReminderCounter (independent)            │      │
    │  └──────────────────────────────────────────┘      │
    └─────────────────────────────────────────────────────┘
"""

from .alerts import AlertLog, AlertThrottler
from .analyzer import RatioAnalyzer
from .event_log import EventLog
from .formatting import format_reminder, format_status
from .recorder import EventRecorder
from .reminder import ReminderCounter

__all__ = [
    "AlertLog",
    "AlertThrottler",
    "RatioAnalyzer",
    "EventLog",
    "EventRecorder",
    "ReminderCounter",
    "format_reminder",
    "format_status",
]
