"""Tests for clock helpers."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from aurorawake_core.utils.clock import ensure_aware, resolve_timezone, system_clock, to_zone
from aurorawake_core.utils.exceptions import ConfigError

PLUS_TWO = timezone(timedelta(hours=2))


def _zone_available(name: str) -> bool:
    try:
        ZoneInfo(name)
    except ZoneInfoNotFoundError:
        return False
    return True


class TestResolveTimezone:
    """Tests for resolve_timezone."""

    def test_none_is_system_zone(self, local_zone):
        """Test a missing name resolves to the named system zone, not an offset."""
        paris = local_zone("Europe/Paris")

        assert resolve_timezone(None) is paris
        assert resolve_timezone("") is paris

    @pytest.mark.skipif(not _zone_available("Europe/Paris"), reason="tzdata not installed")
    def test_named_zone(self):
        """Test IANA names resolve to ZoneInfo."""
        assert resolve_timezone("Europe/Paris") == ZoneInfo("Europe/Paris")

    def test_unknown_zone(self):
        """Test unknown names raise ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            resolve_timezone("Nowhere/Atlantis")

        assert exc_info.value.details == {"timezone": "Nowhere/Atlantis"}


class TestEnsureAware:
    """Tests for ensure_aware."""

    def test_aware_unchanged(self):
        """Test aware values pass through."""
        value = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)

        assert ensure_aware(value, PLUS_TWO) is value

    def test_naive_gets_zone(self):
        """Test naive values are read in the given zone."""
        value = ensure_aware(datetime(2024, 1, 1, 8, 0), PLUS_TWO)

        assert value.tzinfo is PLUS_TWO
        assert value.hour == 8

    def test_naive_without_zone_is_system_zone(self, local_zone):
        """Test naive values default to the system zone."""
        paris = local_zone("Europe/Paris")

        value = ensure_aware(datetime(2024, 7, 1, 8, 0))

        assert value.tzinfo is paris
        assert value.utcoffset() == timedelta(hours=2)


class TestToZone:
    """Tests for to_zone."""

    def test_converts_aware_value(self):
        """Test aware values are converted, keeping the instant."""
        value = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)

        converted = to_zone(value, PLUS_TWO)

        assert converted == value
        assert converted.hour == 10

    def test_defaults_to_system_zone(self, local_zone):
        """Test conversion without a zone uses the system zone."""
        new_york = local_zone("America/New_York")

        converted = to_zone(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))

        assert converted.tzinfo is new_york
        assert converted.hour == 7


class TestSystemClock:
    """Tests for system_clock."""

    def test_clock_in_zone(self):
        """Test clock reports aware time in the configured zone."""
        now = system_clock(PLUS_TWO)()

        assert now.utcoffset() == timedelta(hours=2)

    def test_clock_local(self, local_zone):
        """Test clock without zone reports time in the system zone."""
        paris = local_zone("Europe/Paris")

        assert system_clock()().tzinfo is paris
