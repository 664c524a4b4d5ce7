"""
Collection ordering and "what rings next" queries.

All functions are pure; they never mutate the alarms they receive.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from aurorawake_core.models.alarm import Alarm
from aurorawake_core.utils.clock import ensure_aware

DEFAULT_RING_WINDOW_SECONDS = 60.0


def _sort_key(alarm: Alarm) -> Tuple[int, int, float, int, int]:
    if not alarm.active:
        return (1, 0, 0.0, alarm.hour, alarm.minute)
    if alarm.next_ring_time is None:
        return (0, 1, 0.0, alarm.hour, alarm.minute)
    return (0, 0, alarm.next_ring_time.timestamp(), alarm.hour, alarm.minute)


def sort_alarms(alarms: Iterable[Alarm]) -> List[Alarm]:
    """
    Order alarms by when they ring.

    Active alarms come first, soonest ``next_ring_time`` first; active
    alarms without a time follow them; inactive alarms come last, ordered
    by time of day. Equal keys keep their input order.

    Args:
        alarms: Alarms to order

    Returns:
        New sorted list
    """
    return sorted(alarms, key=_sort_key)


def next_alarm_to_ring(alarms: Iterable[Alarm]) -> Optional[Alarm]:
    """
    Return the alarm that will ring next, or None if nothing is scheduled.

    Args:
        alarms: Alarms in any order

    Returns:
        First alarm of the sorted collection when it is active and scheduled
    """
    ordered = sort_alarms(alarms)
    if not ordered:
        return None

    first = ordered[0]
    if first.active and first.next_ring_time is not None:
        return first
    return None


def is_ringing(
    alarm: Alarm,
    now: datetime,
    tolerance_seconds: float = DEFAULT_RING_WINDOW_SECONDS,
) -> bool:
    """
    Check whether an alarm should be ringing at ``now``.

    An alarm rings while ``now`` is within ``tolerance_seconds`` of its
    scheduled instant, on either side.
    """
    if not alarm.active or alarm.next_ring_time is None:
        return False

    delta = abs((alarm.next_ring_time - ensure_aware(now)).total_seconds())
    return delta < tolerance_seconds


def due_alarms(
    alarms: Iterable[Alarm],
    now: datetime,
    tolerance_seconds: float = DEFAULT_RING_WINDOW_SECONDS,
) -> List[Alarm]:
    """
    Return the alarms that should be ringing at ``now``.

    Callers poll this at whatever cadence suits them.

    Args:
        alarms: Alarms in any order
        now: Reference instant
        tolerance_seconds: Ringing window around each scheduled instant

    Returns:
        Ringing alarms, soonest first
    """
    return sort_alarms(a for a in alarms if is_ringing(a, now, tolerance_seconds))
