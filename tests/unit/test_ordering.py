"""Tests for collection ordering queries."""

from datetime import timedelta

from aurorawake_core.scheduling.ordering import (due_alarms, is_ringing,
                                                 next_alarm_to_ring, sort_alarms)
from tests.conftest import FIXED_NOW
from tests.fixtures.sample_data import create_alarm, create_weekly_alarms


class TestSortAlarms:
    """Tests for sort_alarms."""

    def test_order(self):
        """Test scheduled first, then unscheduled, then inactive."""
        ordered = sort_alarms(create_weekly_alarms())

        assert [a.id for a in ordered] == ["soon", "late", "weekly", "pending", "off"]

    def test_inactive_by_time_of_day(self):
        """Test inactive alarms are ordered by hour and minute."""
        alarms = [
            create_alarm(id="b", hour=9, minute=5, active=False, next_ring_time=None),
            create_alarm(id="a", hour=9, minute=0, active=False, next_ring_time=None),
            create_alarm(id="c", hour=6, minute=0, active=False, next_ring_time=None),
        ]

        assert [a.id for a in sort_alarms(alarms)] == ["c", "a", "b"]

    def test_does_not_mutate_input(self):
        """Test the input list is left as is."""
        alarms = create_weekly_alarms()
        ids = [a.id for a in alarms]

        sort_alarms(alarms)

        assert [a.id for a in alarms] == ids

    def test_empty(self):
        """Test empty input."""
        assert sort_alarms([]) == []


class TestNextAlarmToRing:
    """Tests for next_alarm_to_ring."""

    def test_soonest(self):
        """Test the soonest scheduled alarm is returned."""
        assert next_alarm_to_ring(create_weekly_alarms()).id == "soon"

    def test_none_when_empty(self):
        """Test no alarms."""
        assert next_alarm_to_ring([]) is None

    def test_none_when_nothing_scheduled(self):
        """Test alarms exist but none is scheduled."""
        alarms = [
            create_alarm(id="off", active=False, next_ring_time=None),
            create_alarm(id="pending", next_ring_time=None),
        ]

        assert next_alarm_to_ring(alarms) is None


class TestRinging:
    """Tests for the ringing window."""

    def test_within_window(self):
        """Test either side of the scheduled instant."""
        alarm = create_alarm(next_ring_time=FIXED_NOW)

        assert is_ringing(alarm, FIXED_NOW + timedelta(seconds=30))
        assert is_ringing(alarm, FIXED_NOW - timedelta(seconds=30))

    def test_window_is_exclusive(self):
        """Test exactly one window away is not ringing."""
        alarm = create_alarm(next_ring_time=FIXED_NOW)

        assert not is_ringing(alarm, FIXED_NOW + timedelta(seconds=60))

    def test_custom_tolerance(self):
        """Test a wider window."""
        alarm = create_alarm(next_ring_time=FIXED_NOW)

        assert is_ringing(alarm, FIXED_NOW + timedelta(minutes=2), tolerance_seconds=300)

    def test_inactive_never_rings(self):
        """Test inactive alarms are ignored."""
        alarm = create_alarm(active=False, next_ring_time=FIXED_NOW)

        assert not is_ringing(alarm, FIXED_NOW)

    def test_due_alarms(self):
        """Test only ringing alarms are returned."""
        alarms = create_weekly_alarms()

        due = due_alarms(alarms, FIXED_NOW + timedelta(minutes=30, seconds=10))

        assert [a.id for a in due] == ["soon"]
