"""
Event type definitions.

Defines event data structures published by the schedule store.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from aurorawake_core.models.alarm import Alarm


class EventType(str, Enum):
    """Event type enumeration."""

    # Alarm transitions
    ALARM_CREATED = "alarm.created"
    ALARM_UPDATED = "alarm.updated"
    ALARM_TOGGLED = "alarm.toggled"
    ALARM_DELETED = "alarm.deleted"
    ALARM_SNOOZED = "alarm.snoozed"
    ALARM_DISMISSED = "alarm.dismissed"

    # Collection events
    ALARMS_REFRESHED = "alarms.refreshed"

    # Degraded conditions
    SCHEDULING_DEGRADED = "scheduling.degraded"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Event(BaseModel):
    """
    Base event class.

    Attributes:
        event_id: Unique event identifier
        event_type: Type of event
        timestamp: Event timestamp (UTC)
        data: Event payload
        metadata: Additional metadata
    """

    model_config = ConfigDict(use_enum_values=True)

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    event_type: EventType
    timestamp: datetime = Field(default_factory=_utcnow)
    data: Dict[str, Any] = Field(default_factory=dict)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class AlarmEvent(Event):
    """
    Alarm-related event.

    Carries the alarm's scheduling state after the transition.

    Attributes:
        alarm_id: Alarm identifier
        active: Whether the alarm is enabled
        next_ring_time: Next fire time, if scheduled
        notification_id: Armed reminder handle, if any
    """

    alarm_id: str
    active: Optional[bool] = None
    next_ring_time: Optional[datetime] = None
    notification_id: Optional[str] = None

    @classmethod
    def from_alarm(cls, event_type: EventType, alarm: Alarm, **data: Any) -> "AlarmEvent":
        """Build an event snapshotting ``alarm``."""
        return cls(
            event_type=event_type,
            alarm_id=alarm.id,
            active=alarm.active,
            next_ring_time=alarm.next_ring_time,
            notification_id=alarm.notification_id,
            data=data,
        )
