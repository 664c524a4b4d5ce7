"""
Validation utilities for aurorawake-core.

Provides argument checks for schedule store operations.
"""

from typing import Any

from aurorawake_core.utils.exceptions import ValidationError


def validate_alarm_id(alarm_id: Any) -> str:
    """
    Validate an alarm identifier.

    Args:
        alarm_id: Identifier to validate

    Returns:
        Validated identifier

    Raises:
        ValidationError: If the identifier is empty or not a string

    Example:
        >>> validate_alarm_id("alarm_123")
        'alarm_123'
    """
    if not isinstance(alarm_id, str) or not alarm_id.strip():
        raise ValidationError("alarm_id cannot be empty", details={"alarm_id": alarm_id})
    return alarm_id


def validate_duration_minutes(duration_minutes: Any, max_minutes: int = 24 * 60) -> int:
    """
    Validate a snooze duration.

    Args:
        duration_minutes: Duration to validate
        max_minutes: Upper bound (one day by default)

    Returns:
        Validated duration

    Raises:
        ValidationError: If the duration is not a positive integer within bounds
    """
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int):
        raise ValidationError(
            "Snooze duration must be an integer",
            details={"duration_minutes": duration_minutes},
        )

    if duration_minutes < 1 or duration_minutes > max_minutes:
        raise ValidationError(
            "Snooze duration out of range",
            details={"duration_minutes": duration_minutes, "max_minutes": max_minutes},
        )

    return duration_minutes
