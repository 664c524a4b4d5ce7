"""
Configuration models for aurorawake-core.

Defines configuration structures for the scheduler and its collaborators.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class SchedulerConfig(BaseModel):
    """
    Configuration for the alarm schedule store.

    Attributes:
        snooze_minutes: Default snooze duration
        ring_window_seconds: Distance from the scheduled instant within which
            an alarm is considered ringing
        notification_lead_seconds: How long before the alarm the reminder fires
        io_timeout_seconds: Upper bound on any single collaborator call
        notification_retries: Extra attempts when arming a reminder raises
        retry_delay_seconds: Initial delay between arm attempts
        timezone: IANA timezone name used for "now"; system local if unset

    Example:
        >>> config = SchedulerConfig(snooze_minutes=5, timezone="Europe/Paris")
    """

    snooze_minutes: int = Field(default=9, ge=1, description="Default snooze duration")
    ring_window_seconds: float = Field(default=60.0, gt=0, description="Ringing tolerance")
    notification_lead_seconds: int = Field(
        default=10, ge=0, description="Reminder lead time"
    )
    io_timeout_seconds: float = Field(default=10.0, gt=0, description="Collaborator timeout")
    notification_retries: int = Field(default=1, ge=0, description="Arm retries")
    retry_delay_seconds: float = Field(default=0.5, ge=0, description="Arm retry delay")
    timezone: Optional[str] = Field(default=None, description="IANA timezone name")


class StorageConfig(BaseModel):
    """
    Configuration for the persistence adapter.

    Attributes:
        backend: Adapter type ("memory" or "json")
        path: JSON file path (json backend only)

    Example:
        >>> config = StorageConfig(backend="json", path="alarms.json")
    """

    backend: str = Field(default="memory", min_length=1, description="Storage backend")
    path: Optional[str] = Field(default=None, description="JSON file path")

    @field_validator("backend")
    @classmethod
    def backend_lowercase(cls, v: str) -> str:
        """Convert backend name to lowercase."""
        v = v.lower()
        if v not in ["memory", "json"]:
            raise ValueError("backend must be 'memory' or 'json'")
        return v

    @model_validator(mode="after")
    def json_requires_path(self) -> "StorageConfig":
        """The json backend needs a file to write to."""
        if self.backend == "json" and not self.path:
            raise ValueError("path is required for the json backend")
        return self


class AuroraConfig(BaseModel):
    """
    Complete AuroraWake core configuration.

    Attributes:
        scheduler: Scheduler configuration
        storage: Storage configuration
        log_level: Logging level
        log_format: Log format (json, text)
        environment: Environment (development, production)
    """

    scheduler: SchedulerConfig = Field(
        default_factory=SchedulerConfig, description="Scheduler configuration"
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="Storage configuration"
    )
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="text", description="Log format")
    environment: str = Field(default="development", description="Environment")

    @field_validator("log_level")
    @classmethod
    def log_level_uppercase(cls, v: str) -> str:
        """Convert log level to uppercase."""
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        v = v.lower()
        if v not in ["json", "text"]:
            raise ValueError("log_format must be 'json' or 'text'")
        return v
