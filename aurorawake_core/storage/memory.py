"""
In-memory alarm persistence.

Keeps serialized snapshots rather than live objects, so callers never share
mutable state with the store and every load exercises the same JSON
round-trip as a real backend.
"""

from typing import Any, Dict, List

from aurorawake_core.interfaces.persistence import AlarmPersistenceInterface
from aurorawake_core.models.alarm import Alarm


class InMemoryAlarmPersistence(AlarmPersistenceInterface):
    """
    Process-local alarm storage.

    Example:
        >>> persistence = InMemoryAlarmPersistence()
        >>> await persistence.save_all([alarm])
        >>> await persistence.load_all()
        [Alarm(...)]
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._records: List[Dict[str, Any]] = []
        self.save_count = 0

    async def load_all(self) -> List[Alarm]:
        """Load every stored alarm."""
        return [Alarm.model_validate(record) for record in self._records]

    async def save_all(self, alarms: List[Alarm]) -> None:
        """Replace the stored collection."""
        self._records = [alarm.model_dump(mode="json") for alarm in alarms]
        self.save_count += 1
