"""Delegation Statistics Entities

Aggregate and windowed delegation ratios. Derived values are computed from
the stored counters, so ``total_actions`` always equals the sum of both
totals and the ratio is 0 when nothing has been recorded.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .event import Event, format_timestamp


def ratio(part: int, total: int) -> float:
    """part / total, defined as 0 for an empty total"""
    return part / total if total > 0 else 0.0


def percentage(value: float, places: int = 2) -> str:
    """Format a 0..1 fraction as a percentage string, rounding half up"""
    quantum = Decimal(1).scaleb(-places)
    return str((Decimal(repr(value)) * 100).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass
class DelegationStats:
    """Aggregate delegation statistics"""

    total_delegations: int
    total_direct_actions: int
    threshold: float
    agent_breakdown: dict[str, int] = field(default_factory=dict)
    direct_action_breakdown: dict[str, int] = field(default_factory=dict)

    @property
    def total_actions(self) -> int:
        return self.total_delegations + self.total_direct_actions

    @property
    def delegation_ratio(self) -> float:
        return ratio(self.total_delegations, self.total_actions)

    @property
    def delegation_percentage(self) -> str:
        return percentage(self.delegation_ratio, 2)

    @property
    def threshold_percentage(self) -> str:
        return percentage(self.threshold, 0)

    @property
    def meets_threshold(self) -> bool:
        return self.delegation_ratio >= self.threshold

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_delegations": self.total_delegations,
            "total_direct_actions": self.total_direct_actions,
            "total_actions": self.total_actions,
            "delegation_ratio": self.delegation_ratio,
            "delegation_percentage": self.delegation_percentage,
            "threshold": self.threshold,
            "threshold_percentage": self.threshold_percentage,
            "meets_threshold": self.meets_threshold,
            "agent_breakdown": dict(self.agent_breakdown),
            "direct_action_breakdown": dict(self.direct_action_breakdown),
        }


@dataclass
class WindowStats:
    """Delegation counts within a time window of the event log"""

    delegations: int = 0
    direct_actions: int = 0

    @classmethod
    def from_events(cls, events: list[Event]) -> "WindowStats":
        delegations = sum(1 for e in events if e.is_delegation)
        return cls(delegations=delegations, direct_actions=len(events) - delegations)

    @property
    def total(self) -> int:
        return self.delegations + self.direct_actions

    @property
    def ratio(self) -> float:
        return ratio(self.delegations, self.total)

    @property
    def percentage(self) -> str:
        return percentage(self.ratio, 2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "delegations": self.delegations,
            "direct_actions": self.direct_actions,
            "total": self.total,
            "ratio": self.ratio,
            "percentage": self.percentage,
        }


@dataclass
class DelegationReport:
    """Overall stats plus 24h / 7d windows over the recent event log"""

    overall: DelegationStats
    last_24h: WindowStats
    last_7d: WindowStats
    recent_events: list[Event]
    generated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "overall": self.overall.to_dict(),
            "time_periods": {
                "last_24h": self.last_24h.to_dict(),
                "last_7d": self.last_7d.to_dict(),
            },
            "recent_events": [e.to_dict() for e in self.recent_events],
            "generated_at": format_timestamp(self.generated_at),
        }
