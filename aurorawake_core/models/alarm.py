"""
Alarm models for aurorawake-core.

Defines alarm records, the wake-up mode variants and the input shapes
accepted by the schedule store.
"""

from datetime import date, datetime
from enum import Enum, IntEnum
from typing import Any, Dict, List, Literal, Optional, Union
from uuid import uuid4

from pydantic import AwareDatetime, BaseModel, Field, field_validator
from typing_extensions import Annotated


class WeekDay(IntEnum):
    """
    Day of the week, Monday first.

    Matches ``date.weekday()``. Mobile platforms count from Sunday, use
    ``from_sunday_first`` / ``to_sunday_first`` at that boundary.
    """

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def from_date(cls, value: date) -> "WeekDay":
        """Weekday of a date or datetime."""
        return cls(value.weekday())

    @classmethod
    def from_sunday_first(cls, ordinal: int) -> "WeekDay":
        """
        Convert a Sunday=0..Saturday=6 ordinal.

        Example:
            >>> WeekDay.from_sunday_first(0)
            <WeekDay.SUNDAY: 6>
        """
        return cls((ordinal + 6) % 7)

    def to_sunday_first(self) -> int:
        """Convert to a Sunday=0..Saturday=6 ordinal."""
        return (self.value + 1) % 7


class WakeUpMode(str, Enum):
    """Discriminant of the wake-up settings variants."""

    RADIO = "radio"
    MUSIC = "music"
    HOROSCOPE = "horoscope"


class ZodiacSign(str, Enum):
    """Zodiac signs for the horoscope wake-up mode."""

    ARIES = "aries"
    TAURUS = "taurus"
    GEMINI = "gemini"
    CANCER = "cancer"
    LEO = "leo"
    VIRGO = "virgo"
    LIBRA = "libra"
    SCORPIO = "scorpio"
    SAGITTARIUS = "sagittarius"
    CAPRICORN = "capricorn"
    AQUARIUS = "aquarius"
    PISCES = "pisces"


class RadioWakeUp(BaseModel):
    """
    Wake up to an internet radio stream.

    Attributes:
        station_id: Station identifier in the radio directory
        station_name: Display name of the station
        station_url: Stream URL
    """

    mode: Literal["radio"] = "radio"
    station_id: str = Field(..., min_length=1, description="Station identifier")
    station_name: str = Field(default="", description="Station display name")
    station_url: str = Field(..., min_length=1, description="Stream URL")


class MusicWakeUp(BaseModel):
    """
    Wake up to a playlist or track from a music service.

    Attributes:
        provider: Music service name
        playlist_id: Playlist reference
        track_id: Track reference
        playlist_name: Playlist display name
        track_name: Track display name
    """

    mode: Literal["music"] = "music"
    provider: str = Field(default="spotify", description="Music service")
    playlist_id: Optional[str] = Field(default=None, description="Playlist reference")
    track_id: Optional[str] = Field(default=None, description="Track reference")
    playlist_name: Optional[str] = Field(default=None, description="Playlist name")
    track_name: Optional[str] = Field(default=None, description="Track name")


class HoroscopeWakeUp(BaseModel):
    """
    Wake up to a sound followed by the daily horoscope.

    Attributes:
        zodiac_sign: Sign to read the horoscope for
        sound_id: Alarm sound played before the reading
    """

    mode: Literal["horoscope"] = "horoscope"
    zodiac_sign: ZodiacSign = Field(..., description="Zodiac sign")
    sound_id: str = Field(default="default", description="Alarm sound identifier")


WakeUpSettings = Annotated[
    Union[RadioWakeUp, MusicWakeUp, HoroscopeWakeUp],
    Field(discriminator="mode"),
]


def generate_alarm_id() -> str:
    """Generate a fresh opaque alarm identifier."""
    return f"alarm_{uuid4().hex}"


def _normalize_days(days: Any) -> List[WeekDay]:
    return sorted({WeekDay(day) for day in days})


class Alarm(BaseModel):
    """
    A configured alarm and its derived scheduling state.

    ``next_ring_time`` is derived from the other fields and always
    timezone-aware, so it survives serialization as an absolute instant.
    ``notification_id`` is present only while a reminder is armed.

    Attributes:
        id: Unique identifier, immutable after creation
        name: Display label (may be empty)
        hour: Hour of day (0-23, local time)
        minute: Minute (0-59)
        repeat_days: Weekdays the alarm repeats on; empty for a one-shot alarm
        active: Whether the alarm is enabled
        wake_up_settings: Wake-up mode and its parameters
        next_ring_time: Next instant the alarm fires
        notification_id: Handle of the armed reminder

    Example:
        >>> alarm = Alarm(
        ...     name="Work",
        ...     hour=7,
        ...     minute=30,
        ...     repeat_days=[WeekDay.MONDAY, WeekDay.FRIDAY],
        ...     wake_up_settings=HoroscopeWakeUp(zodiac_sign=ZodiacSign.LEO),
        ... )
    """

    id: str = Field(default_factory=generate_alarm_id, min_length=1)
    name: str = Field(default="", description="Display label")
    hour: int = Field(..., ge=0, le=23, description="Hour of day")
    minute: int = Field(..., ge=0, le=59, description="Minute")
    repeat_days: List[WeekDay] = Field(default_factory=list, description="Repeat weekdays")
    active: bool = Field(default=True, description="Alarm enabled")
    wake_up_settings: WakeUpSettings
    next_ring_time: Optional[AwareDatetime] = Field(default=None, description="Next fire time")
    notification_id: Optional[str] = Field(default=None, description="Armed reminder handle")

    @field_validator("repeat_days", mode="before")
    @classmethod
    def dedupe_repeat_days(cls, v: Any) -> Any:
        """Drop duplicates and sort; order carries no meaning."""
        if v is None:
            return []
        return _normalize_days(v)

    @property
    def is_one_shot(self) -> bool:
        """True when the alarm has no repeat days."""
        return not self.repeat_days

    @property
    def is_armed(self) -> bool:
        """True when a reminder is currently armed."""
        return self.notification_id is not None


class AlarmDraft(BaseModel):
    """
    Fields supplied by the caller when creating an alarm.

    ``id``, ``next_ring_time`` and ``notification_id`` are assigned by the store.
    """

    name: str = Field(default="", description="Display label")
    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)
    repeat_days: List[WeekDay] = Field(default_factory=list)
    wake_up_settings: WakeUpSettings
    active: bool = Field(default=True)

    @field_validator("repeat_days", mode="before")
    @classmethod
    def dedupe_repeat_days(cls, v: Any) -> Any:
        """Drop duplicates and sort."""
        if v is None:
            return []
        return _normalize_days(v)


class AlarmPatch(BaseModel):
    """
    Partial update of an alarm.

    Only the fields explicitly set are applied; everything else keeps its
    previous value.

    Example:
        >>> patch = AlarmPatch(hour=8)
        >>> patch.changes()
        {'hour': 8}
    """

    name: Optional[str] = None
    hour: Optional[int] = Field(default=None, ge=0, le=23)
    minute: Optional[int] = Field(default=None, ge=0, le=59)
    repeat_days: Optional[List[WeekDay]] = None
    wake_up_settings: Optional[WakeUpSettings] = None
    active: Optional[bool] = None

    @field_validator("repeat_days", mode="before")
    @classmethod
    def dedupe_repeat_days(cls, v: Any) -> Any:
        """Drop duplicates and sort."""
        if v is None:
            return None
        return _normalize_days(v)

    def changes(self) -> Dict[str, Any]:
        """Return the fields to merge, as model instances where nested."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class AlarmSummary(BaseModel):
    """
    Display-ready view of an alarm.

    Attributes:
        id: Alarm identifier
        name: Display label
        time_formatted: Time of day ("07:30" or "7:30 AM")
        repeat_days_formatted: Human-readable repeat rule
        next_ring_time: Next fire time, if scheduled
        time_remaining: Human-readable countdown, if scheduled
        active: Whether the alarm is enabled
        mode: Wake-up mode
        mode_name: Display name of the mode
        mode_detail: Station, playlist or sign
    """

    id: str
    name: str
    time_formatted: str
    repeat_days_formatted: str
    next_ring_time: Optional[datetime] = None
    time_remaining: Optional[str] = None
    active: bool
    mode: WakeUpMode
    mode_name: str
    mode_detail: str = ""
