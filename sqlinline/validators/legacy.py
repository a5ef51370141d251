"""Standalone string sanitizer, independent of type inference.

A lower-level primitive kept for callers that sanitize text outside the
type-aware pipeline: no normalization and no whitespace policy, just a
length cap (the size of a TEXT column) and a fixed blocklist.
"""

from ..patterns.loader import PatternTable, default_pattern_config
from .neutralizer import neutralize


def sanitize_string_input(value: str, table: PatternTable | None = None) -> str:
    """Truncate a string and neutralize common injection sequences.

    Args:
        value: Raw string
        table: Pattern table to apply (defaults to the configured legacy table)

    Returns:
        Sanitized string

    Examples:
        >>> sanitize_string_input("admin' OR 1=1--")
        "admin'_or_1=1__"
    """
    if table is None:
        table = default_pattern_config().legacy

    if len(value) > table.max_length:
        value = value[: table.max_length]

    return neutralize(value, table.patterns)
