"""Event Domain Entity

A single delegation or direct-action record, as kept in the bounded event log.
"""

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from ..exceptions import MalformedEvent


class EventType(str, Enum):
    """Event type"""

    DELEGATION = "delegation"  # Work handed to a named sub-agent
    DIRECT_ACTION = "direct_action"  # Work done by the conductor itself


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix"""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC"""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass
class Event:
    """
    Event Domain Entity

    ``subject`` is the agent name for delegations and the action type for
    direct actions. The JSON form keeps the field names already used in the
    store (``agent``/``task`` and ``action_type``/``description``).
    """

    type: EventType
    subject: str
    description: str
    timestamp: datetime
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def delegation(
        cls, agent_name: str, task_description: str, timestamp: datetime, metadata: dict | None = None
    ) -> "Event":
        return cls(EventType.DELEGATION, agent_name, task_description, timestamp, metadata or {})

    @classmethod
    def direct_action(
        cls, action_type: str, description: str, timestamp: datetime, metadata: dict | None = None
    ) -> "Event":
        return cls(EventType.DIRECT_ACTION, action_type, description, timestamp, metadata or {})

    @property
    def is_delegation(self) -> bool:
        return self.type == EventType.DELEGATION

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored mapping"""
        if self.is_delegation:
            data = {"type": self.type.value, "agent": self.subject, "task": self.description}
        else:
            data = {
                "type": self.type.value,
                "action_type": self.subject,
                "description": self.description,
            }
        data["timestamp"] = format_timestamp(self.timestamp)
        data["metadata"] = self.metadata
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    @classmethod
    def from_json(cls, raw: str | bytes) -> "Event":
        """
        Deserialize a stored event.

        Raises:
            MalformedEvent: If the entry is not valid JSON or lacks required fields
        """
        try:
            data = json.loads(raw)
            event_type = EventType(data["type"])
            if event_type == EventType.DELEGATION:
                subject, description = data["agent"], data.get("task", "")
            else:
                subject, description = data["action_type"], data.get("description", "")
            timestamp = parse_timestamp(data["timestamp"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedEvent(f"Invalid event log entry: {e}") from e

        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            metadata = {"value": metadata}
        return cls(event_type, str(subject), str(description or ""), timestamp, metadata)
