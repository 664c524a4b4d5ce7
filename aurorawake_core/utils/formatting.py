"""
Display formatting helpers for aurorawake-core.

Turns alarm fields into short human-readable strings for list rows and
notifications.
"""

from datetime import datetime
from typing import Iterable, Tuple

from typing_extensions import assert_never

from aurorawake_core.models.alarm import (Alarm, AlarmSummary, HoroscopeWakeUp,
                                          MusicWakeUp, RadioWakeUp,
                                          WakeUpSettings, WeekDay)

WEEKDAY_SHORT_NAMES = {
    WeekDay.MONDAY: "Mon",
    WeekDay.TUESDAY: "Tue",
    WeekDay.WEDNESDAY: "Wed",
    WeekDay.THURSDAY: "Thu",
    WeekDay.FRIDAY: "Fri",
    WeekDay.SATURDAY: "Sat",
    WeekDay.SUNDAY: "Sun",
}

WORKING_DAYS = frozenset(
    [WeekDay.MONDAY, WeekDay.TUESDAY, WeekDay.WEDNESDAY, WeekDay.THURSDAY, WeekDay.FRIDAY]
)
WEEKEND_DAYS = frozenset([WeekDay.SATURDAY, WeekDay.SUNDAY])

TIME_FORMAT_12H = "12h"
TIME_FORMAT_24H = "24h"


def format_time(hour: int, minute: int, time_format: str = TIME_FORMAT_24H) -> str:
    """
    Format a time of day.

    Args:
        hour: Hour (0-23)
        minute: Minute (0-59)
        time_format: "24h" or "12h"

    Returns:
        Formatted time

    Example:
        >>> format_time(7, 5)
        '07:05'
        >>> format_time(0, 30, "12h")
        '12:30 AM'
    """
    if time_format == TIME_FORMAT_12H:
        period = "AM" if hour < 12 else "PM"
        display_hour = hour % 12 or 12
        return f"{display_hour}:{minute:02d} {period}"
    return f"{hour:02d}:{minute:02d}"


def format_repeat_days(repeat_days: Iterable[WeekDay]) -> str:
    """
    Describe a repeat rule.

    Args:
        repeat_days: Weekdays the alarm repeats on

    Returns:
        "Once", "Every day", "Weekdays", "Weekends" or a short day list

    Example:
        >>> format_repeat_days([WeekDay.WEDNESDAY, WeekDay.MONDAY])
        'Mon, Wed'
    """
    days = frozenset(WeekDay(d) for d in repeat_days)

    if not days:
        return "Once"
    if len(days) == 7:
        return "Every day"
    if days == WORKING_DAYS:
        return "Weekdays"
    if days == WEEKEND_DAYS:
        return "Weekends"

    return ", ".join(WEEKDAY_SHORT_NAMES[d] for d in sorted(days))


def format_time_remaining(target: datetime, now: datetime) -> str:
    """
    Describe the time left until ``target``.

    Only the largest unit is kept.

    Example:
        >>> format_time_remaining(now + timedelta(hours=3, minutes=20), now)
        'In 3 hours'
    """
    seconds = int((target - now).total_seconds())

    if seconds <= 0:
        return "Now"

    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return "In 1 day" if days == 1 else f"In {days} days"
    if hours > 0:
        return "In 1 hour" if hours == 1 else f"In {hours} hours"
    if minutes > 0:
        return "In 1 minute" if minutes == 1 else f"In {minutes} minutes"
    return "Less than a minute"


def describe_wake_up(settings: WakeUpSettings) -> Tuple[str, str]:
    """
    Return the display name of a wake-up mode and its detail line.

    Example:
        >>> describe_wake_up(RadioWakeUp(station_id="fip", station_name="FIP", station_url="..."))
        ('Radio', 'FIP')
    """
    if isinstance(settings, RadioWakeUp):
        return "Radio", settings.station_name
    elif isinstance(settings, MusicWakeUp):
        return "Music", settings.playlist_name or settings.track_name or ""
    elif isinstance(settings, HoroscopeWakeUp):
        return "Horoscope", f"Sign: {settings.zodiac_sign.value}"
    else:
        assert_never(settings)


def summarize_alarm(
    alarm: Alarm,
    now: datetime,
    time_format: str = TIME_FORMAT_24H,
) -> AlarmSummary:
    """
    Build the display view of an alarm.

    The countdown is only filled in for active alarms with a scheduled time.

    Args:
        alarm: Alarm to summarize
        now: Reference time for the countdown
        time_format: "24h" or "12h"

    Returns:
        AlarmSummary
    """
    mode_name, mode_detail = describe_wake_up(alarm.wake_up_settings)

    next_ring_time = None
    time_remaining = None
    if alarm.active and alarm.next_ring_time is not None:
        next_ring_time = alarm.next_ring_time
        time_remaining = format_time_remaining(alarm.next_ring_time, now)

    return AlarmSummary(
        id=alarm.id,
        name=alarm.name,
        time_formatted=format_time(alarm.hour, alarm.minute, time_format),
        repeat_days_formatted=format_repeat_days(alarm.repeat_days),
        next_ring_time=next_ring_time,
        time_remaining=time_remaining,
        active=alarm.active,
        mode=alarm.wake_up_settings.mode,
        mode_name=mode_name,
        mode_detail=mode_detail,
    )
