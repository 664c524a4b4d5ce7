"""
AuroraWake Core - Alarm scheduling engine for the AuroraWake alarm clock.

This package owns the alarm collection of the AuroraWake app: when each
alarm rings next, which alarm rings first, and how creating, editing,
snoozing and dismissing alarms keep stored state and platform reminders in
agreement. Storage and notification delivery are supplied by the host.

Core Components:
    - Models: Pydantic models for alarms, wake-up modes and configuration
    - Scheduling: Recurrence calculation, ordering and the schedule store
    - Interfaces: Abstract contracts for persistence and reminders
    - Storage: Reference persistence adapters (memory, JSON file)
    - Notifications: Reminder content built from an alarm
    - Events: Event bus reporting alarm transitions
    - Utils: Logging, config, clock, formatting and validation helpers

Example:
    >>> from aurorawake_core.models import AlarmDraft, RadioWakeUp, WeekDay
    >>> from aurorawake_core.scheduling import AlarmScheduleStore
    >>> from aurorawake_core.storage import InMemoryAlarmPersistence
    >>>
    >>> store = AlarmScheduleStore(InMemoryAlarmPersistence(), my_notifier)
    >>> alarms = await store.create(
    ...     AlarmDraft(
    ...         name="Work",
    ...         hour=7,
    ...         minute=0,
    ...         repeat_days=[WeekDay.MONDAY, WeekDay.TUESDAY],
    ...         wake_up_settings=RadioWakeUp(station_id="fip", station_url="https://..."),
    ...     )
    ... )
    >>> print(alarms[0].next_ring_time)
"""

from aurorawake_core.__version__ import (
    __version__,
    __version_info__,
    __title__,
    __description__,
    __author__,
    __author_email__,
    __license__,
    __url__,
)

__all__ = [
    "__version__",
    "__version_info__",
    "__title__",
    "__description__",
    "__author__",
    "__author_email__",
    "__license__",
    "__url__",
]

# Components are imported from their respective modules, for example:
#   from aurorawake_core.scheduling import AlarmScheduleStore
#   from aurorawake_core.models import Alarm, AlarmDraft, AlarmPatch
#   from aurorawake_core.interfaces import NotificationSchedulerInterface
