"""Tests for persistence adapters."""

import json
import threading

import pytest

from aurorawake_core.models.config import StorageConfig
from aurorawake_core.storage import (InMemoryAlarmPersistence,
                                     JsonFileAlarmPersistence, create_persistence)
from aurorawake_core.utils.exceptions import StorageError
from tests.fixtures.sample_data import create_alarm, create_weekly_alarms


@pytest.mark.asyncio
class TestInMemoryPersistence:
    """Tests for InMemoryAlarmPersistence."""

    async def test_empty(self):
        """Test a new store is empty."""
        assert await InMemoryAlarmPersistence().load_all() == []

    async def test_save_and_load(self):
        """Test the collection is replaced on save."""
        persistence = InMemoryAlarmPersistence()
        alarms = create_weekly_alarms()

        await persistence.save_all(alarms)
        await persistence.save_all(alarms[:2])
        loaded = await persistence.load_all()

        assert [a.id for a in loaded] == [a.id for a in alarms[:2]]
        assert persistence.save_count == 2

    async def test_loads_are_copies(self):
        """Test callers cannot mutate stored state."""
        persistence = InMemoryAlarmPersistence()
        await persistence.save_all([create_alarm()])

        first = await persistence.load_all()
        first[0].name = "changed"

        assert (await persistence.load_all())[0].name == "Seeded"


@pytest.mark.asyncio
class TestJsonFilePersistence:
    """Tests for JsonFileAlarmPersistence."""

    async def test_missing_file(self, tmp_path):
        """Test a missing file reads as empty."""
        persistence = JsonFileAlarmPersistence(tmp_path / "alarms.json")

        assert await persistence.load_all() == []

    async def test_save_and_load(self, tmp_path):
        """Test alarms survive a save and load."""
        path = tmp_path / "data" / "alarms.json"
        persistence = JsonFileAlarmPersistence(path)
        alarms = create_weekly_alarms()

        await persistence.save_all(alarms)
        loaded = await persistence.load_all()

        assert [a.model_dump() for a in loaded] == [a.model_dump() for a in alarms]
        document = json.loads(path.read_text())
        assert document["version"] == 1
        assert len(document["alarms"]) == len(alarms)
        assert not path.with_suffix(".tmp").exists()

    async def test_bare_list(self, tmp_path):
        """Test a document holding only the alarm list."""
        path = tmp_path / "alarms.json"
        path.write_text(json.dumps([create_alarm().model_dump(mode="json")]))

        loaded = await JsonFileAlarmPersistence(path).load_all()

        assert loaded[0].id == "alarm-seed"

    async def test_corrupt_file(self, tmp_path):
        """Test unreadable content raises StorageError."""
        path = tmp_path / "alarms.json"
        path.write_text("{not json")

        with pytest.raises(StorageError):
            await JsonFileAlarmPersistence(path).load_all()

    async def test_invalid_record(self, tmp_path):
        """Test schema violations raise StorageError."""
        path = tmp_path / "alarms.json"
        path.write_text(json.dumps({"version": 1, "alarms": [{"hour": 99}]}))

        with pytest.raises(StorageError):
            await JsonFileAlarmPersistence(path).load_all()

    async def test_unwritable(self, tmp_path):
        """Test write failures raise StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        persistence = JsonFileAlarmPersistence(blocker / "alarms.json")

        with pytest.raises(StorageError):
            await persistence.save_all([create_alarm()])

    async def test_file_io_off_the_loop(self, tmp_path):
        """Test reads and writes run outside the event loop thread."""
        persistence = JsonFileAlarmPersistence(tmp_path / "alarms.json")
        read, write = persistence._read, persistence._write
        threads = []

        def record(func):
            def wrapper(*args):
                threads.append(threading.get_ident())
                return func(*args)
            return wrapper

        persistence._read = record(read)
        persistence._write = record(write)

        await persistence.save_all([create_alarm()])
        loaded = await persistence.load_all()

        assert loaded[0].id == "alarm-seed"
        assert len(threads) == 2
        assert threading.get_ident() not in threads


class TestCreatePersistence:
    """Tests for create_persistence."""

    def test_memory(self):
        """Test memory backend."""
        assert isinstance(create_persistence(StorageConfig()), InMemoryAlarmPersistence)

    def test_json(self, tmp_path):
        """Test json backend."""
        persistence = create_persistence(
            StorageConfig(backend="json", path=str(tmp_path / "alarms.json"))
        )

        assert isinstance(persistence, JsonFileAlarmPersistence)
        assert persistence.path == tmp_path / "alarms.json"
