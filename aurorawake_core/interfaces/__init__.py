"""
Interface definitions for aurorawake-core.

Abstract base classes for the collaborators the schedule store depends on.
They are implemented by the host application (device storage, platform
notifications) and by the reference adapters in ``aurorawake_core.storage``.

Modules:
    persistence: AlarmPersistenceInterface - alarm collection storage
    notifications: NotificationSchedulerInterface - platform reminders
"""

from aurorawake_core.interfaces.notifications import NotificationSchedulerInterface
from aurorawake_core.interfaces.persistence import AlarmPersistenceInterface

__all__ = [
    "AlarmPersistenceInterface",
    "NotificationSchedulerInterface",
]
