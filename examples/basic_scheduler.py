"""
Basic Scheduler Example

Demonstrates creating, snoozing and dismissing alarms with aurorawake-core,
and following the store through its event bus.
"""

import asyncio
from datetime import timedelta
from typing import Dict, Optional

from aurorawake_core.events import EventBus, EventType
from aurorawake_core.interfaces import NotificationSchedulerInterface
from aurorawake_core.models import (Alarm, AlarmDraft, AlarmPatch, HoroscopeWakeUp,
                                    RadioWakeUp, SchedulerConfig, WeekDay, ZodiacSign)
from aurorawake_core.scheduling import AlarmScheduleStore
from aurorawake_core.storage import JsonFileAlarmPersistence
from aurorawake_core.utils import setup_logging, summarize_alarm, system_clock


class ConsoleNotifier(NotificationSchedulerInterface):
    """Print reminders instead of handing them to a platform."""

    def __init__(self):
        self.pending: Dict[str, str] = {}
        self._counter = 0

    async def arm(self, alarm: Alarm) -> Optional[str]:
        request = self.build_request(alarm)
        self._counter += 1
        handle = f"reminder-{self._counter}"
        self.pending[handle] = alarm.id
        print(f"🔔 armed {handle}: '{request.body}' at {request.trigger_at:%a %H:%M}")
        return handle

    async def disarm(self, handle: str) -> None:
        if self.pending.pop(handle, None):
            print(f"🔕 cancelled {handle}")


def print_alarms(alarms, now):
    for alarm in alarms:
        summary = summarize_alarm(alarm, now)
        state = summary.time_remaining or "off"
        print(
            f"   {summary.time_formatted}  {summary.name or '(no name)':<10} "
            f"{summary.repeat_days_formatted:<12} {summary.mode_name:<10} {state}"
        )


async def main():
    """Run the example."""
    setup_logging(level="WARNING")

    print("⏰ AuroraWake Core - Basic Scheduler")
    print("=" * 60)

    bus = EventBus(enable_history=True)
    bus.subscribe_all(lambda event: print(f"   📣 {event.event_type}"))

    store = AlarmScheduleStore(
        JsonFileAlarmPersistence("./example_alarms.json"),
        ConsoleNotifier(),
        config=SchedulerConfig(snooze_minutes=5),
        event_bus=bus,
    )

    print("\n1. Creating alarms")
    work = await store.create(
        AlarmDraft(
            name="Work",
            hour=7,
            minute=0,
            repeat_days=[WeekDay.MONDAY, WeekDay.TUESDAY, WeekDay.WEDNESDAY,
                         WeekDay.THURSDAY, WeekDay.FRIDAY],
            wake_up_settings=RadioWakeUp(
                station_id="fip",
                station_name="FIP",
                station_url="https://icecast.radiofrance.fr/fip-hifi.aac",
            ),
        )
    )
    alarms = await store.create(
        AlarmDraft(
            name="Weekend",
            hour=9,
            minute=30,
            repeat_days=[WeekDay.SATURDAY, WeekDay.SUNDAY],
            wake_up_settings=HoroscopeWakeUp(zodiac_sign=ZodiacSign.LEO),
        )
    )
    work_id = work[0].id
    weekend_id = next(a.id for a in alarms if a.id != work_id)

    now = system_clock()()
    print_alarms(alarms, now)

    print("\n2. Next alarm")
    upcoming = await store.next_alarm()
    print(f"   {upcoming.name} rings at {upcoming.next_ring_time:%A %H:%M}")

    print("\n3. Ringing: snooze, then dismiss")
    ringing_at = upcoming.next_ring_time
    snoozed = await store.snooze(upcoming.id, now=ringing_at)
    print(f"   snoozed until {snoozed.next_ring_time:%H:%M}")
    alarms = await store.dismiss(upcoming.id, now=snoozed.next_ring_time + timedelta(seconds=5))
    print_alarms(alarms, now)

    print("\n4. Editing and disabling")
    await store.update(work_id, AlarmPatch(hour=6, minute=45))
    alarms = await store.toggle(weekend_id, False)
    print_alarms(alarms, now)

    print("\n5. Cleaning up")
    for alarm in alarms:
        await store.delete(alarm.id)

    print(f"\n📊 Store statistics: {store.get_statistics()}")
    print(f"📊 Events published: {bus.get_statistics()['published']}")


if __name__ == "__main__":
    asyncio.run(main())
