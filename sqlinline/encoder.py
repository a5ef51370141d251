"""Value to SQL literal encoding.

This module converts runtime Python values into the text they take when
embedded directly in SQL. Strings and byte sequences go through the
type-aware sanitizer (type inference, validator, escaper); scalars get
their canonical unquoted form.

Extension point: any object implementing ``sql_value()`` (the
``SupportsSQLValue`` protocol) is resolved through that hook and the
result is encoded in its place. Exceptions raised by the hook propagate
unchanged.
"""

import logging
import math
import numbers
from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from .errors import UnsupportedTypeError
from .escaper import quote_string
from .models import SanitizedText
from .registry import Sanitizer, default_sanitizer

logger = logging.getLogger(__name__)

NULL_LITERAL = "NULL"


@runtime_checkable
class SupportsSQLValue(Protocol):
    """Object that can resolve itself to a database-native scalar."""

    def sql_value(self) -> Any:
        """Return a value the encoder knows how to render."""
        ...


class LiteralEncoder:
    """Encodes Python values as SQL literals.

    Attributes:
        sanitizer: Sanitizer used for string values
        on_sanitized: Optional callback invoked with every SanitizedText
    """

    def __init__(
        self,
        sanitizer: Sanitizer | None = None,
        on_sanitized: Callable[[SanitizedText], None] | None = None,
    ) -> None:
        """Initialize literal encoder.

        Args:
            sanitizer: Sanitizer for strings (default sanitizer if None)
            on_sanitized: Callback receiving each sanitized string value
        """
        self.sanitizer = sanitizer or default_sanitizer()
        self.on_sanitized = on_sanitized

    def encode(self, value: Any) -> str:
        """Encode a value as SQL literal text.

        Args:
            value: Value to encode

        Returns:
            SQL literal text

        Raises:
            UnsupportedTypeError: If the value has no literal encoding
        """
        if value is None:
            return NULL_LITERAL

        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return "true" if value else "false"

        if isinstance(value, numbers.Integral):
            return str(int(value))

        if isinstance(value, Decimal):
            return format_decimal(value)

        if isinstance(value, numbers.Real):
            return format_float(float(value))

        if isinstance(value, str):
            return self.encode_text(value)

        if isinstance(value, (bytes, bytearray, memoryview)):
            return self.encode_text(bytes(value).decode("utf-8", errors="replace"))

        # datetime before date: datetime is a date subclass
        if isinstance(value, datetime):
            return quote_string(format_timestamp(value))

        if isinstance(value, date):
            return quote_string(value.isoformat())

        if isinstance(value, SupportsSQLValue):
            resolved = value.sql_value()
            logger.debug(
                "Resolved %s to %s via sql_value()",
                type(value).__name__,
                type(resolved).__name__,
            )
            return self.encode(resolved)

        raise UnsupportedTypeError(value)

    def encode_text(self, value: str) -> str:
        """Sanitize a string for its inferred type and quote it.

        Args:
            value: Raw string

        Returns:
            Quoted, escaped SQL string literal
        """
        sanitized = self.sanitizer.sanitize(value)
        if self.on_sanitized is not None:
            self.on_sanitized(sanitized)
        return quote_string(sanitized.cleaned)


def format_float(value: float) -> str:
    """Render a float as the shortest text that reparses to the same value.

    Non-finite values have no numeric literal and are rendered as the
    quoted strings PostgreSQL accepts for them.

    Args:
        value: Float to render

    Returns:
        Literal text

    Examples:
        >>> format_float(123.45)
        '123.45'
        >>> format_float(2.0)
        '2'
    """
    if not isinstance(value, float):
        raise AssertionError(f"format_float() called with {type(value).__name__}")

    if math.isnan(value):
        return "'NaN'"
    if math.isinf(value):
        return "'Infinity'" if value > 0 else "'-Infinity'"

    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_decimal(value: Decimal) -> str:
    """Render a Decimal without losing precision.

    Args:
        value: Decimal to render

    Returns:
        Literal text
    """
    if value.is_nan():
        return "'NaN'"
    if value.is_infinite():
        return "'Infinity'" if value > 0 else "'-Infinity'"
    return str(value)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DD HH:MM:SS``.

    The wall-clock time is used as-is; no timezone conversion happens here.

    Args:
        value: Datetime to format

    Returns:
        Formatted timestamp (unquoted)
    """
    return value.replace(tzinfo=None, microsecond=0).isoformat(sep=" ")


def literal(value: Any, sanitizer: Sanitizer | None = None) -> str:
    """Encode a single value as SQL literal text.

    Args:
        value: Value to encode
        sanitizer: Sanitizer for string values (default sanitizer if None)

    Returns:
        SQL literal text

    Raises:
        UnsupportedTypeError: If the value has no literal encoding

    Examples:
        >>> literal(None)
        'NULL'
        >>> literal("'; DROP TABLE users;--")
        "'''; drop_table users;__'"
    """
    return LiteralEncoder(sanitizer).encode(value)
