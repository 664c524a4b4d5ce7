"""
Utility modules for aurorawake-core.

Modules:
    exceptions: Custom exception hierarchy
    logging: Structured logging configuration
    validation: Argument validation helpers
    async_utils: Timeouts, retries and keyed locks
    clock: Timezone resolution and aware clocks
    formatting: Display formatting helpers
    config: Configuration loading and management
"""

from aurorawake_core.utils.async_utils import (KeyedLock, retry_async, run_in_executor,
                                               run_with_timeout)
from aurorawake_core.utils.clock import ensure_aware, resolve_timezone, system_clock, to_zone
from aurorawake_core.utils.config import load_config, merge_configs, save_config
from aurorawake_core.utils.exceptions import (AuroraError, ConfigError,
                                              NotFoundError, NotificationError,
                                              StorageError, ValidationError)
from aurorawake_core.utils.formatting import (describe_wake_up, format_repeat_days,
                                              format_time, format_time_remaining,
                                              summarize_alarm)
from aurorawake_core.utils.logging import (get_logger, log_alarm, log_error, setup_logging,
                                           setup_logging_from_config)
from aurorawake_core.utils.validation import validate_alarm_id, validate_duration_minutes

__all__ = [
    # Exceptions
    "AuroraError",
    "ConfigError",
    "NotFoundError",
    "NotificationError",
    "StorageError",
    "ValidationError",
    # Logging
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "log_error",
    "log_alarm",
    # Validation
    "validate_alarm_id",
    "validate_duration_minutes",
    # Async
    "KeyedLock",
    "retry_async",
    "run_in_executor",
    "run_with_timeout",
    # Clock
    "ensure_aware",
    "resolve_timezone",
    "system_clock",
    "to_zone",
    # Formatting
    "describe_wake_up",
    "format_repeat_days",
    "format_time",
    "format_time_remaining",
    "summarize_alarm",
    # Config
    "load_config",
    "save_config",
    "merge_configs",
]
