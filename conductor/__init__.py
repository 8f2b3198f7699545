"""
Conductor Monitor - Delegation ratio monitoring for orchestrating agents

Records how often the conductor delegates work to sub-agents versus acting
directly, and warns when the delegation ratio drops below a threshold.

Architecture:
┌─────────────────────────────────────────────────────────┐
│  Surfaces                                                │
│  - FastAPI app (conductor.api)                           │
│  - CLI (conductor.cli)                                   │
└─────────────────────────────────────────────────────────┘
                        │ uses
                        ▼
┌─────────────────────────────────────────────────────────┐
│  ConductorService: owns the Redis client                 │
└─────────────────────────────────────────────────────────┘
                        │ wires
                        ▼
┌─────────────────────────────────────────────────────────┐
│  Monitoring                                              │
│  - EventRecorder / EventLog                              │
│  - RatioAnalyzer                                         │
│  - AlertThrottler / AlertLog                             │
│  - ReminderCounter                                       │
└─────────────────────────────────────────────────────────┘
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .core.entities import DelegationReport, DelegationStats, Event, EventType, ReminderCheck
from .core.exceptions import (
    ConductorException,
    MalformedEvent,
    StoreError,
    StoreUnavailable,
    ValidationError,
)
from .monitoring import AlertThrottler, EventRecorder, RatioAnalyzer, ReminderCounter
from .services import ConductorService

__all__ = [
    # Version
    "__version__",
    # Config
    "Settings",
    "get_settings",
    # Entities
    "Event",
    "EventType",
    "DelegationStats",
    "DelegationReport",
    "ReminderCheck",
    # Exceptions
    "ConductorException",
    "ValidationError",
    "StoreError",
    "StoreUnavailable",
    "MalformedEvent",
    # Components
    "EventRecorder",
    "RatioAnalyzer",
    "AlertThrottler",
    "ReminderCounter",
    "ConductorService",
]
