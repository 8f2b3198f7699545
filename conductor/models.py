"""
Conductor Monitor API Models

Pydantic request/response models for the HTTP API
"""

from typing import Any

from pydantic import BaseModel, Field


class DelegationRequest(BaseModel):
    """Record a delegation"""

    agent_name: str = Field(..., min_length=1, description="Agent that received the task")
    task_description: str = Field(default="", description="What was delegated")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Opaque extra data")


class DirectActionRequest(BaseModel):
    """Record a direct action"""

    action_type: str = Field(..., min_length=1, description="Kind of action (e.g. 'file_edit')")
    description: str = Field(default="", description="What was done")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Opaque extra data")


class ThresholdRequest(BaseModel):
    """Set the alert threshold"""

    threshold: float = Field(..., description="Minimum acceptable delegation ratio (0.0 to 1.0)")


class ThresholdResponse(BaseModel):
    threshold: float


class ReminderCheckRequest(BaseModel):
    """Count one message"""

    interval: int | None = Field(None, description="Messages between reminders")


class IntervalRequest(BaseModel):
    interval: int = Field(..., description="Messages between reminders")


class IntervalResponse(BaseModel):
    interval: int


class MessageCountResponse(BaseModel):
    count: int
