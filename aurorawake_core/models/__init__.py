"""
Data models package for aurorawake-core.

Pydantic models for alarms, wake-up modes and configuration.

Modules:
    alarm: Alarm records, wake-up variants, draft/patch inputs, summaries
    config: Scheduler, storage and top-level configuration
"""

from aurorawake_core.models.alarm import (Alarm, AlarmDraft, AlarmPatch,
                                          AlarmSummary, HoroscopeWakeUp,
                                          MusicWakeUp, RadioWakeUp, WakeUpMode,
                                          WakeUpSettings, WeekDay, ZodiacSign,
                                          generate_alarm_id)
from aurorawake_core.models.config import (AuroraConfig, SchedulerConfig,
                                           StorageConfig)

__all__ = [
    # Alarm models
    "Alarm",
    "AlarmDraft",
    "AlarmPatch",
    "AlarmSummary",
    "WeekDay",
    "generate_alarm_id",
    # Wake-up modes
    "WakeUpMode",
    "WakeUpSettings",
    "RadioWakeUp",
    "MusicWakeUp",
    "HoroscopeWakeUp",
    "ZodiacSign",
    # Config models
    "AuroraConfig",
    "SchedulerConfig",
    "StorageConfig",
]
