"""
Scheduling engine.

Modules:
    recurrence: Next ring time computation from time of day and repeat days
    ordering: Collection ordering, next alarm and ringing-window queries
    store: AlarmScheduleStore - the alarm collection and its transitions
"""

from aurorawake_core.scheduling.ordering import (DEFAULT_RING_WINDOW_SECONDS,
                                                 due_alarms, is_ringing,
                                                 next_alarm_to_ring, sort_alarms)
from aurorawake_core.scheduling.recurrence import (RecurrenceRule,
                                                   compute_next_ring_time,
                                                   is_one_shot, next_ring_times)
from aurorawake_core.scheduling.store import AlarmScheduleStore

__all__ = [
    # Recurrence
    "RecurrenceRule",
    "compute_next_ring_time",
    "next_ring_times",
    "is_one_shot",
    # Ordering
    "DEFAULT_RING_WINDOW_SECONDS",
    "sort_alarms",
    "next_alarm_to_ring",
    "is_ringing",
    "due_alarms",
    # Store
    "AlarmScheduleStore",
]
