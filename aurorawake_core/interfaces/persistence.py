"""
Persistence Interface - alarm collection storage contract.

Defines the contract for storage backends (device key-value store, JSON
file, SQLite, etc.).
"""

from abc import ABC, abstractmethod
from typing import List

from aurorawake_core.models.alarm import Alarm


class AlarmPersistenceInterface(ABC):
    """
    Abstract interface for alarm collection storage.

    Implementations load and save the whole collection at once. They must
    round-trip ``next_ring_time`` as an absolute instant: serialize it as an
    ISO-8601 timestamp with its UTC offset, never as naive wall-clock time.
    ``Alarm.model_dump(mode="json")`` / ``Alarm.model_validate`` already
    do this.

    Example:
        >>> class DeviceStorage(AlarmPersistenceInterface):
        ...     async def load_all(self):
        ...         raw = await kv.get("alarms") or "[]"
        ...         return [Alarm.model_validate(a) for a in json.loads(raw)]
        ...     async def save_all(self, alarms):
        ...         await kv.set("alarms", json.dumps([a.model_dump(mode="json") for a in alarms]))
    """

    @abstractmethod
    async def load_all(self) -> List[Alarm]:
        """
        Load every stored alarm.

        Returns:
            Stored alarms (empty list if nothing was saved yet)

        Raises:
            StorageError: If the storage cannot be read
        """
        pass

    @abstractmethod
    async def save_all(self, alarms: List[Alarm]) -> None:
        """
        Replace the stored collection.

        Args:
            alarms: Complete collection to store

        Raises:
            StorageError: If the storage cannot be written
        """
        pass
