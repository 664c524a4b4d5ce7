"""
Reference persistence adapters.

Host applications usually provide their own ``AlarmPersistenceInterface``
over device storage; these adapters cover tests, tooling and desktop use.
"""

from aurorawake_core.interfaces.persistence import AlarmPersistenceInterface
from aurorawake_core.models.config import StorageConfig
from aurorawake_core.storage.json_file import JsonFileAlarmPersistence
from aurorawake_core.storage.memory import InMemoryAlarmPersistence
from aurorawake_core.utils.exceptions import ConfigError


def create_persistence(config: StorageConfig) -> AlarmPersistenceInterface:
    """
    Build the persistence adapter named by ``config``.

    Args:
        config: Storage configuration

    Returns:
        Persistence adapter

    Raises:
        ConfigError: If the backend is unknown
    """
    if config.backend == "memory":
        return InMemoryAlarmPersistence()
    if config.backend == "json":
        return JsonFileAlarmPersistence(config.path)
    raise ConfigError("Unsupported storage backend", details={"backend": config.backend})


__all__ = [
    "InMemoryAlarmPersistence",
    "JsonFileAlarmPersistence",
    "create_persistence",
]
