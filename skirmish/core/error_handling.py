"""
Validation helpers used when building combatants, items and effects.

Invalid construction arguments are programming errors: they are logged with
their context and raised as ValueError. Values that can be safely corrected
are clamped with a warning instead.
"""

from typing import Any, Optional

from catchery import log_critical, log_warning


def require_non_empty_string(
    value: Any, param_name: str, context: Optional[dict[str, Any]] = None
) -> str:
    """
    Validates that a value is a non-empty string.

    Args:
        value (Any): The value to validate.
        param_name (str): Human-readable parameter name for error messages.
        context (Optional[dict[str, Any]]): Additional context for logging.

    Returns:
        str: The validated string value.

    Raises:
        ValueError: If the value is not a non-empty string.

    """
    if not value or not isinstance(value, str) or not value.strip():
        log_critical(
            f"{param_name} must be a non-empty string, got: {value!r}",
            {
                **(context or {}),
                "param_name": param_name,
                "type": type(value).__name__,
            },
        )
        raise ValueError(f"Invalid {param_name}: {value!r}")
    return value


def require_enum_type(
    value: Any,
    enum_class: type,
    param_name: str,
    context: Optional[dict[str, Any]] = None,
) -> Any:
    """
    Validates that a value is a member of the given enum.

    Raises:
        ValueError: If the value is not a member of the enum.

    """
    if not isinstance(value, enum_class):
        log_critical(
            f"{param_name} must be {enum_class.__name__}, got: {type(value).__name__}",
            {
                **(context or {}),
                "param_name": param_name,
                "expected_type": enum_class.__name__,
            },
        )
        raise ValueError(
            f"Invalid {param_name}: expected {enum_class.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def require_positive_int(
    value: Any, param_name: str, context: Optional[dict[str, Any]] = None
) -> int:
    """
    Validates that a value is an integer greater than zero.

    Raises:
        ValueError: If the value is not a positive integer.

    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        log_critical(
            f"{param_name} must be a positive integer, got: {value!r}",
            {**(context or {}), "param_name": param_name},
        )
        raise ValueError(f"Invalid {param_name}: {value!r}")
    return value


def ensure_non_negative_int(
    value: Any,
    param_name: str,
    default: int = 0,
    context: Optional[dict[str, Any]] = None,
) -> int:
    """
    Ensures a value is a non-negative integer, correcting if needed.
    Logs a warning for invalid values but continues execution.

    Args:
        value (Any): The value to ensure is a non-negative integer.
        param_name (str): Human-readable parameter name for log messages.
        default (int): Value used when the input is not numeric.
        context (Optional[dict[str, Any]]): Additional context for logging.

    Returns:
        int: The corrected integer value.

    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        corrected = (
            max(0, int(value)) if isinstance(value, (int, float)) else default
        )
        log_warning(
            f"{param_name} must be non-negative integer, got: {value!r}, "
            f"correcting to {corrected}",
            {
                **(context or {}),
                "param_name": param_name,
                "corrected_to": corrected,
            },
        )
        return corrected
    return value


def ensure_int_in_range(
    value: Any,
    param_name: str,
    min_val: int,
    max_val: Optional[int] = None,
    context: Optional[dict[str, Any]] = None,
) -> int:
    """
    Ensures a value is an integer within the specified range, clamping it if
    needed. Logs a warning for out-of-range values but continues execution.

    Args:
        value (Any): The value to validate.
        param_name (str): Human-readable parameter name for log messages.
        min_val (int): Minimum allowed value (inclusive).
        max_val (Optional[int]): Maximum allowed value (inclusive), None for
            no maximum.
        context (Optional[dict[str, Any]]): Additional context for logging.

    Returns:
        int: The clamped integer value.

    """
    converted = int(value) if isinstance(value, (int, float)) else min_val
    clamped = max(min_val, converted)
    if max_val is not None:
        clamped = min(max_val, clamped)
    if clamped != value:
        log_warning(
            f"{param_name} out of range, got: {value!r}, correcting to {clamped}",
            {
                **(context or {}),
                "param_name": param_name,
                "min_val": min_val,
                "max_val": max_val,
            },
        )
    return clamped


def validate_required_object(
    value: Any, param_name: str, context: Optional[dict[str, Any]] = None
) -> Any:
    """
    Validates that a required object is present.

    Raises:
        ValueError: If the value is None.

    """
    if value is None:
        log_critical(
            f"Required value '{param_name}' is None",
            {**(context or {}), "param_name": param_name},
        )
        raise ValueError(f"Required value '{param_name}' cannot be None")
    return value
