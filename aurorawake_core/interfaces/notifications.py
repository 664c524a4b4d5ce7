"""
Notification Scheduling Interface - platform reminder contract.

Defines the contract for arming and cancelling the platform-level
reminder that wakes the app when an alarm is due.
"""

from abc import ABC, abstractmethod
from typing import Optional

from aurorawake_core.models.alarm import Alarm
from aurorawake_core.notifications.content import (DEFAULT_NOTIFICATION_LEAD_SECONDS,
                                                   NotificationRequest,
                                                   build_notification_request)


class NotificationSchedulerInterface(ABC):
    """
    Abstract interface for platform notification scheduling.

    Implementations build their payload with ``build_request`` so the
    wake-up mode and its parameters reach the ringing screen unchanged and
    the reminder fires ``lead_seconds`` before the alarm. The schedule store
    sets the lead from ``SchedulerConfig.notification_lead_seconds``.

    Example:
        >>> class LocalNotifications(NotificationSchedulerInterface):
        ...     async def arm(self, alarm):
        ...         request = self.build_request(alarm)
        ...         return await platform.schedule(request.title, request.body,
        ...                                        request.data, request.trigger_at)
        ...     async def disarm(self, handle):
        ...         await platform.cancel(handle)
    """

    lead_seconds: int = DEFAULT_NOTIFICATION_LEAD_SECONDS

    def set_lead_time(self, seconds: int) -> None:
        """Set how long before the alarm its reminder fires."""
        self.lead_seconds = seconds

    def build_request(self, alarm: Alarm) -> NotificationRequest:
        """Build the reminder for ``alarm`` with the configured lead time."""
        return build_notification_request(alarm, self.lead_seconds)

    @abstractmethod
    async def arm(self, alarm: Alarm) -> Optional[str]:
        """
        Schedule a reminder for ``alarm.next_ring_time``.

        Args:
            alarm: Active alarm with a next ring time

        Returns:
            Handle of the scheduled reminder, or None when permission was
            denied or the platform refused the request. None is not an
            error: the alarm stays active without a reminder.
        """
        pass

    @abstractmethod
    async def disarm(self, handle: str) -> None:
        """
        Cancel a reminder.

        Must be idempotent: cancelling a reminder that already fired or was
        already cancelled must not raise.

        Args:
            handle: Handle returned by ``arm``
        """
        pass
