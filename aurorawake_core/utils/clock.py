"""
Clock helpers for aurorawake-core.

All scheduling arithmetic happens on timezone-aware datetimes expressed in
a real IANA zone, so adding days keeps the wall-clock time across DST
changes. "Local time" is the system zone as reported by tzlocal, never a
fixed UTC offset.
"""

from datetime import datetime, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzlocal import get_localzone

from aurorawake_core.utils.exceptions import ConfigError

Clock = Callable[[], datetime]


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Resolve an IANA timezone name.

    Args:
        name: Timezone name, or None for the system local timezone

    Returns:
        tzinfo instance

    Raises:
        ConfigError: If the name is unknown

    Example:
        >>> resolve_timezone("Europe/Paris")
        zoneinfo.ZoneInfo(key='Europe/Paris')
    """
    if not name:
        return get_localzone()

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"Unknown timezone: {name}", details={"timezone": name}, cause=e)


def ensure_aware(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Attach a timezone to a naive datetime.

    Naive values are interpreted in ``tz``, or in the system local zone when
    ``tz`` is None. Aware values are returned unchanged.
    """
    if value.tzinfo is not None and value.utcoffset() is not None:
        return value
    return value.replace(tzinfo=tz or resolve_timezone(None))


def to_zone(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Express ``value`` in ``tz`` (system local zone when None)."""
    tz = tz or resolve_timezone(None)
    return ensure_aware(value, tz).astimezone(tz)


def system_clock(tz: Optional[tzinfo] = None) -> Clock:
    """Build a clock returning the current aware time in ``tz``."""

    def now() -> datetime:
        return datetime.now(tz or resolve_timezone(None))

    return now
