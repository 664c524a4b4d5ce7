"""
Notification helpers.

Content shared by notification collaborators.
"""

from aurorawake_core.notifications.content import (DEFAULT_NOTIFICATION_LEAD_SECONDS,
                                                   NotificationRequest,
                                                   build_notification_request)

__all__ = [
    "DEFAULT_NOTIFICATION_LEAD_SECONDS",
    "NotificationRequest",
    "build_notification_request",
]
