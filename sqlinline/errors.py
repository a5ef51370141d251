"""Error taxonomy for sqlinline.

This module defines the exception hierarchy and error codes (E101-E899)
raised while expanding SQL templates. Every error carries a code, the
pipeline stage that raised it and structured details, so callers can log
or render guidance without parsing messages.

Delegation failures (exceptions raised by a value's ``sql_value()`` hook)
are never wrapped: they reach the caller unchanged.
"""

from typing import Any


class SQLInlineError(Exception):
    """Base exception for all sqlinline errors.

    Attributes:
        code: Error code (E101-E899)
        message: Human-readable error message
        layer: Pipeline stage that raised the error
        details: Additional context-specific details
    """

    def __init__(
        self,
        code: str,
        message: str,
        layer: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize sqlinline error.

        Args:
            code: Error code (e.g., 'E101')
            message: Error message
            layer: Pipeline stage name
            details: Optional additional details
        """
        self.code = code
        self.message = message
        self.layer = layer
        self.details = details or {}
        super().__init__(f"[{code}] {message}")


# Placeholder expansion errors (E101-E199)


class ExpansionError(SQLInlineError):
    """Base class for template expansion errors."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize expansion error."""
        super().__init__(code, message, "expansion", details)


class ArityMismatchError(ExpansionError):
    """Placeholder count does not match the number of supplied values."""

    def __init__(self, code: str, message: str, placeholders: int, values: int) -> None:
        """Initialize arity mismatch error.

        Args:
            code: Error code
            message: Error message
            placeholders: Placeholders seen when the mismatch was detected
            values: Number of supplied values
        """
        self.placeholders = placeholders
        self.values = values
        details = {"placeholders": placeholders, "values": values}
        super().__init__(code, message, details)


class TooFewValuesError(ArityMismatchError):
    """Error E101: Template has more placeholders than supplied values."""

    def __init__(self, placeholders: int, values: int, position: int) -> None:
        """Initialize too-few-values error.

        Args:
            placeholders: Placeholders seen so far, including the unfilled one
            values: Number of supplied values
            position: Offset of the unfilled placeholder in the template
        """
        message = (
            f"More placeholders than values: placeholder #{placeholders} at offset "
            f"{position} has no value ({values} supplied)"
        )
        super().__init__("E101", message, placeholders, values)
        self.position = position
        self.details["position"] = position


class TooManyValuesError(ArityMismatchError):
    """Error E102: More values supplied than the template has placeholders."""

    def __init__(self, placeholders: int, values: int) -> None:
        """Initialize too-many-values error.

        Args:
            placeholders: Number of placeholders in the template
            values: Number of supplied values
        """
        message = (
            f"More values than placeholders: template has {placeholders} "
            f"placeholder(s) but {values} value(s) were supplied"
        )
        super().__init__("E102", message, placeholders, values)


# Literal encoding errors (E201-E299)


class EncodingError(SQLInlineError):
    """Base class for literal encoding errors."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize encoding error."""
        super().__init__(code, message, "encoding", details)


class UnsupportedTypeError(EncodingError, TypeError):
    """Error E201: Value has no SQL literal encoding."""

    def __init__(self, value: Any) -> None:
        """Initialize unsupported type error.

        Args:
            value: The value that could not be encoded
        """
        value_type = type(value)
        type_name = f"{value_type.__module__}.{value_type.__qualname__}"
        message = (
            f"Unsupported type {type_name}: values must be None, bool, int, float, "
            f"Decimal, str, bytes, date/datetime or implement sql_value()"
        )
        self.value_type = value_type
        super().__init__("E201", message, {"type": type_name})


# System errors (E801-E899)


class SystemError(SQLInlineError):  # noqa: A001
    """Base class for system-level errors."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize system error."""
        super().__init__(code, message, "system", details)


class ConfigurationError(SystemError):
    """Error E801: Pattern configuration file error."""

    def __init__(self, config_file: str, reason: str) -> None:
        """Initialize configuration error.

        Args:
            config_file: Path to configuration file
            reason: Reason for configuration error
        """
        message = f"Configuration error in '{config_file}': {reason}"
        details = {"config_file": config_file, "reason": reason}
        super().__init__("E801", message, details)
