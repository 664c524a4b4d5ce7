"""
JSON file alarm persistence.

Stores the whole collection as one JSON document. Timestamps are written as
ISO-8601 strings with their UTC offset.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from aurorawake_core.interfaces.persistence import AlarmPersistenceInterface
from aurorawake_core.models.alarm import Alarm
from aurorawake_core.utils.async_utils import run_in_executor
from aurorawake_core.utils.exceptions import StorageError
from aurorawake_core.utils.logging import get_logger

logger = get_logger(__name__)

FORMAT_VERSION = 1


class JsonFileAlarmPersistence(AlarmPersistenceInterface):
    """
    Alarm storage backed by a single JSON file.

    Features:
    - Atomic writes (temp file + replace)
    - Missing file reads as an empty collection
    - Any read, decode or write failure raises StorageError
    - File I/O runs in the default executor, off the event loop

    Example:
        >>> persistence = JsonFileAlarmPersistence("~/.aurorawake/alarms.json")
        >>> alarms = await persistence.load_all()
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize JSON file persistence.

        Args:
            path: File to read and write
        """
        self.path = Path(path).expanduser()
        logger.info("json_persistence_initialized", path=str(self.path))

    def _read(self) -> List[Alarm]:
        if not self.path.exists():
            return []

        with open(self.path, "r", encoding="utf-8") as f:
            document = json.load(f)

        records = document["alarms"] if isinstance(document, dict) else document
        return [Alarm.model_validate(record) for record in records]

    def _write(self, document: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        temp_file = self.path.with_suffix(".tmp")
        with open(temp_file, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, ensure_ascii=False)

        temp_file.replace(self.path)

    async def load_all(self) -> List[Alarm]:
        """
        Load every stored alarm.

        Raises:
            StorageError: If the file cannot be read or decoded
        """
        try:
            alarms = await run_in_executor(self._read)
        except Exception as e:
            logger.error("alarms_load_failed", path=str(self.path), error=str(e))
            raise StorageError(
                "Failed to load alarms",
                details={"path": str(self.path)},
                cause=e,
            )

        logger.debug("alarms_loaded", path=str(self.path), count=len(alarms))
        return alarms

    async def save_all(self, alarms: List[Alarm]) -> None:
        """
        Replace the stored collection.

        Raises:
            StorageError: If the file cannot be written
        """
        document = {
            "version": FORMAT_VERSION,
            "alarms": [alarm.model_dump(mode="json") for alarm in alarms],
        }

        try:
            await run_in_executor(self._write, document)
        except Exception as e:
            logger.error("alarms_save_failed", path=str(self.path), error=str(e))
            raise StorageError(
                "Failed to save alarms",
                details={"path": str(self.path)},
                cause=e,
            )

        logger.debug("alarms_saved", path=str(self.path), count=len(alarms))
