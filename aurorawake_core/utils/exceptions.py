"""
Custom exceptions for aurorawake-core.

Defines a hierarchy of exceptions raised by the scheduling engine.
"""

from typing import Any, Dict, Optional


class AuroraError(Exception):
    """
    Base exception for all AuroraWake errors.

    Attributes:
        message: Error message
        details: Additional error details
        cause: Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """
        Initialize AuroraWake error.

        Args:
            message: Error message
            details: Additional error details
            cause: Original exception
        """
        self.message = message
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        """String representation of error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message='{self.message}', details={self.details})"


class ConfigError(AuroraError):
    """
    Configuration-related errors.

    Raised when configuration is invalid, missing, or cannot be loaded.

    Example:
        >>> raise ConfigError("Unsupported storage backend", details={"backend": "redis"})
    """

    pass


class NotFoundError(AuroraError):
    """
    An operation targeted an alarm id that does not exist.

    Only raised where absence is a caller bug (editing an alarm the UI
    selected). Deleting, snoozing or dismissing a missing alarm is tolerated.

    Example:
        >>> raise NotFoundError("Alarm not found", details={"alarm_id": "alarm_42"})
    """

    pass


class StorageError(AuroraError):
    """
    Persistence I/O failure.

    Always propagated to the caller; the store never retries internally.

    Example:
        >>> raise StorageError("Failed to save alarms", details={"path": "alarms.json"})
    """

    pass


class NotificationError(AuroraError):
    """
    Notification scheduling failure that must abort a transition.

    Raised when disarming an existing reminder fails or times out.
    A failed *arm* is not an error: the alarm stays active but unreminded.
    """

    pass


class ValidationError(AuroraError):
    """
    Validation errors.

    Raised when arguments passed to a store operation are invalid.

    Example:
        >>> raise ValidationError(
        ...     "Snooze duration must be positive",
        ...     details={"duration_minutes": 0}
        ... )
    """

    pass
