"""Pytest configuration and shared fixtures."""

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from aurorawake_core.events.bus import EventBus
from aurorawake_core.interfaces.notifications import NotificationSchedulerInterface
from aurorawake_core.interfaces.persistence import AlarmPersistenceInterface
from aurorawake_core.models.alarm import Alarm
from aurorawake_core.models.config import SchedulerConfig
from aurorawake_core.scheduling.store import AlarmScheduleStore
from aurorawake_core.utils import clock

# Monday 2024-01-01 08:00 UTC
FIXED_NOW = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


# Mock Persistence Implementation
class MockPersistence(AlarmPersistenceInterface):
    """Mock persistence for testing."""

    def __init__(self, alarms: Optional[List[Alarm]] = None):
        """Initialize with optional seed alarms."""
        self.records = [a.model_dump(mode="json") for a in alarms or []]
        self.load_count = 0
        self.save_count = 0
        self.fail_load = False
        self.fail_save = False
        self.save_failures = 0  # upcoming saves that fail, then succeed
        self.delay = 0.0

    async def load_all(self) -> List[Alarm]:
        """Return stored alarms."""
        self.load_count += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_load:
            raise OSError("storage unavailable")
        return [Alarm.model_validate(r) for r in self.records]

    async def save_all(self, alarms: List[Alarm]) -> None:
        """Replace stored alarms."""
        self.save_count += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.save_failures:
            self.save_failures -= 1
            raise OSError("storage full")
        if self.fail_save:
            raise OSError("storage full")
        self.records = [a.model_dump(mode="json") for a in alarms]

    @property
    def alarms(self) -> List[Alarm]:
        """Stored alarms, bypassing failure injection."""
        return [Alarm.model_validate(r) for r in self.records]

    def get(self, alarm_id: str) -> Optional[Alarm]:
        """Stored alarm by id."""
        return next((a for a in self.alarms if a.id == alarm_id), None)


# Mock Notifier Implementation
class MockNotifier(NotificationSchedulerInterface):
    """Mock notification scheduler recording every call."""

    def __init__(self):
        """Initialize mock notifier."""
        self.armed: Dict[str, str] = {}  # handle -> alarm id
        self.arm_calls: List[Alarm] = []
        self.disarm_calls: List[str] = []
        self.deny = False
        self.arm_error: Optional[Exception] = None
        self.disarm_error: Optional[Exception] = None
        self.arm_delay = 0.0
        self._counter = 0

    async def arm(self, alarm: Alarm) -> Optional[str]:
        """Arm a reminder unless configured to deny or fail."""
        self.arm_calls.append(alarm)
        if self.arm_delay:
            await asyncio.sleep(self.arm_delay)
        if self.arm_error:
            raise self.arm_error
        if self.deny:
            return None

        self._counter += 1
        handle = f"notif-{self._counter}"
        self.armed[handle] = alarm.id
        return handle

    async def disarm(self, handle: str) -> None:
        """Cancel a reminder; unknown handles are ignored."""
        self.disarm_calls.append(handle)
        if self.disarm_error:
            raise self.disarm_error
        self.armed.pop(handle, None)

    def handles_for(self, alarm_id: str) -> List[str]:
        """Live handles armed for an alarm."""
        return [h for h, a in self.armed.items() if a == alarm_id]


def assert_consistent(alarms: List[Alarm], notifier: MockNotifier) -> None:
    """Check stored alarms against the reminders actually armed."""
    for alarm in alarms:
        if not alarm.active:
            assert alarm.notification_id is None
        if alarm.notification_id is not None:
            assert alarm.active
            assert alarm.next_ring_time is not None
            assert notifier.armed.get(alarm.notification_id) == alarm.id
        assert len(notifier.handles_for(alarm.id)) <= 1


class SequentialIds:
    """Deterministic alarm id factory."""

    def __init__(self):
        """Initialize counter."""
        self.count = 0

    def __call__(self) -> str:
        """Return the next id."""
        self.count += 1
        return f"alarm-{self.count}"


# Fixtures
@pytest.fixture
def persistence() -> MockPersistence:
    """Provide mock persistence."""
    return MockPersistence()


@pytest.fixture
def notifier() -> MockNotifier:
    """Provide mock notifier."""
    return MockNotifier()


@pytest.fixture
def scheduler_config() -> SchedulerConfig:
    """Provide test scheduler configuration."""
    return SchedulerConfig(
        timezone="UTC",
        notification_retries=0,
        retry_delay_seconds=0,
        io_timeout_seconds=1.0,
    )


@pytest.fixture
def event_bus() -> EventBus:
    """Provide event bus with history."""
    return EventBus(enable_history=True)


@pytest.fixture
def store(
    persistence: MockPersistence,
    notifier: MockNotifier,
    scheduler_config: SchedulerConfig,
    event_bus: EventBus,
) -> AlarmScheduleStore:
    """Provide schedule store on a fixed clock."""
    return AlarmScheduleStore(
        persistence,
        notifier,
        config=scheduler_config,
        event_bus=event_bus,
        clock=lambda: FIXED_NOW,
        id_factory=SequentialIds(),
    )


@pytest.fixture
def local_zone(monkeypatch):
    """Make the system local zone a given IANA zone for the test."""

    def use(name: str) -> ZoneInfo:
        try:
            zone = ZoneInfo(name)
        except ZoneInfoNotFoundError:
            pytest.skip("tz database not installed")
        monkeypatch.setattr(clock, "get_localzone", lambda: zone)
        return zone

    return use
