"""
Event System.

Provides the pub/sub event bus the schedule store reports transitions on.
"""

from aurorawake_core.events.bus import EventBus
from aurorawake_core.events.types import AlarmEvent, Event, EventType

__all__ = [
    "EventBus",
    "Event",
    "EventType",
    "AlarmEvent",
]
