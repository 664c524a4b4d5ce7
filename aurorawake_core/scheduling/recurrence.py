"""
Recurrence calculation.

Pure functions computing when an alarm fires next from its time of day and
repeat weekdays. No I/O and no clock access: the caller supplies ``now``.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Protocol, runtime_checkable

from aurorawake_core.models.alarm import WeekDay
from aurorawake_core.utils.clock import ensure_aware


@runtime_checkable
class RecurrenceRule(Protocol):
    """
    Fields the calculator reads.

    ``Alarm`` and ``AlarmDraft`` both satisfy it.
    """

    hour: int
    minute: int
    repeat_days: List[WeekDay]
    active: bool


def _sorted_days(repeat_days: Iterable[int]) -> List[WeekDay]:
    return sorted({WeekDay(day) for day in repeat_days})


def _shift_days(value: datetime, days: int) -> datetime:
    # Same wall-clock time on the target date, even across a DST change.
    return value + timedelta(days=days)


def compute_next_ring_time(rule: RecurrenceRule, now: datetime) -> Optional[datetime]:
    """
    Compute the next instant an alarm must fire.

    The alarm time is taken in ``now``'s timezone (system local time when
    ``now`` is naive). A slot exactly equal to ``now`` counts as passed.

    Args:
        rule: Alarm (or draft) with hour, minute, repeat_days and active
        now: Reference instant

    Returns:
        Next fire time, strictly after ``now``, or None if the alarm is inactive

    Example:
        >>> monday_10am = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        >>> draft = AlarmDraft(hour=9, minute=0, repeat_days=[WeekDay.MONDAY], ...)
        >>> compute_next_ring_time(draft, monday_10am)
        datetime.datetime(2024, 1, 8, 9, 0, tzinfo=datetime.timezone.utc)
    """
    if not rule.active:
        return None

    now = ensure_aware(now)
    today_at = now.replace(hour=rule.hour, minute=rule.minute, second=0, microsecond=0)

    # One-shot: later today, otherwise tomorrow
    if not rule.repeat_days:
        if today_at > now:
            return today_at
        return _shift_days(today_at, 1)

    days = _sorted_days(rule.repeat_days)
    current = WeekDay.from_date(now)

    if current in days and today_at > now:
        return today_at

    for day in days:
        if day > current:
            return _shift_days(today_at, day - current)

    # Wrap to the first repeat day of next week
    return _shift_days(today_at, 7 - current + days[0])


def next_ring_times(rule: RecurrenceRule, now: datetime, count: int) -> List[datetime]:
    """
    List the upcoming occurrences of an alarm.

    A one-shot alarm yields at most one occurrence; an inactive alarm none.

    Args:
        rule: Alarm (or draft)
        now: Reference instant
        count: Maximum number of occurrences

    Returns:
        Ascending fire times, all strictly after ``now``
    """
    occurrences: List[datetime] = []
    cursor = now

    while len(occurrences) < count:
        upcoming = compute_next_ring_time(rule, cursor)
        if upcoming is None:
            break
        occurrences.append(upcoming)
        if not rule.repeat_days:
            break
        cursor = upcoming

    return occurrences


def is_one_shot(rule: RecurrenceRule) -> bool:
    """True when the alarm has no repeat days and deactivates after firing."""
    return not rule.repeat_days
