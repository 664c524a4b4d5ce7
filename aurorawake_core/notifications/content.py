"""
Notification content.

Builds the reminder payload a notification collaborator schedules for an
alarm, so every platform shows the same text and forwards the same wake-up
parameters to the ringing screen.
"""

from datetime import datetime, timedelta
from typing import Any, Dict

from pydantic import BaseModel, Field
from typing_extensions import assert_never

from aurorawake_core.models.alarm import (Alarm, HoroscopeWakeUp, MusicWakeUp,
                                          RadioWakeUp, WakeUpMode)
from aurorawake_core.utils.exceptions import ValidationError

DEFAULT_NOTIFICATION_LEAD_SECONDS = 10
DEFAULT_TITLE = "AuroraWake alarm"


class NotificationRequest(BaseModel):
    """
    A reminder ready to hand to the platform scheduler.

    Attributes:
        alarm_id: Alarm the reminder belongs to
        title: Notification title
        body: Notification body
        data: Payload delivered back to the app when the reminder fires
        trigger_at: Instant the reminder fires
    """

    alarm_id: str
    title: str
    body: str
    data: Dict[str, Any] = Field(default_factory=dict)
    trigger_at: datetime


def build_notification_request(
    alarm: Alarm,
    lead_seconds: int = DEFAULT_NOTIFICATION_LEAD_SECONDS,
) -> NotificationRequest:
    """
    Build the reminder for an armed alarm.

    The reminder fires ``lead_seconds`` before the alarm so the app has time
    to load the wake-up audio. The payload always carries ``alarm_id`` and
    ``mode`` plus the fields of the alarm's wake-up mode.

    Args:
        alarm: Active alarm with a next ring time
        lead_seconds: Seconds between the reminder and the alarm

    Returns:
        NotificationRequest

    Raises:
        ValidationError: If the alarm is inactive or has no next ring time
    """
    if not alarm.active or alarm.next_ring_time is None:
        raise ValidationError(
            "Only active, scheduled alarms can be notified",
            details={"alarm_id": alarm.id, "active": alarm.active},
        )

    settings = alarm.wake_up_settings
    data: Dict[str, Any] = {"alarm_id": alarm.id, "mode": WakeUpMode(settings.mode).value}

    if isinstance(settings, RadioWakeUp):
        body = f"Radio wake-up: {settings.station_name or settings.station_id}"
        data["station_id"] = settings.station_id
        data["station_url"] = settings.station_url
    elif isinstance(settings, MusicWakeUp):
        label = settings.playlist_name or settings.track_name or "Music"
        body = f"Music wake-up: {label}"
        data["provider"] = settings.provider
        data["playlist_id"] = settings.playlist_id
        data["track_id"] = settings.track_id
    elif isinstance(settings, HoroscopeWakeUp):
        body = "Horoscope wake-up: discover today's horoscope"
        data["zodiac_sign"] = settings.zodiac_sign.value
        data["sound_id"] = settings.sound_id
    else:
        assert_never(settings)

    return NotificationRequest(
        alarm_id=alarm.id,
        title=alarm.name or DEFAULT_TITLE,
        body=body,
        data=data,
        trigger_at=alarm.next_ring_time - timedelta(seconds=lead_seconds),
    )
