"""Placeholder expansion: the main entry point.

``expand`` scans a SQL template left to right and replaces each ``?``
placeholder with the literal for the value at the same position. The
placeholder count must match the number of values exactly; on any failure
no text is returned.

Placeholders are found by a plain character scan. A ``?`` inside a quoted
string in the template is a placeholder too.

When auditing is enabled and an audit log directory is configured, every
expansion, failure and neutralized value is recorded as a hashed JSONL
audit event.
"""

import logging
import time
from collections.abc import Sequence
from typing import Any

from .audit.events import (
    classify_statement,
    create_error_event,
    create_expansion_event,
    create_sanitization_event,
    hash_text,
)
from .audit.logger import get_audit_logger
from .encoder import LiteralEncoder
from .errors import SQLInlineError, TooFewValuesError, TooManyValuesError
from .models import SanitizedText
from .registry import Sanitizer

logger = logging.getLogger(__name__)

PLACEHOLDER = "?"


def count_placeholders(template: str) -> int:
    """Count the placeholders ``expand`` would fill.

    Args:
        template: SQL template

    Returns:
        Number of placeholder markers
    """
    return template.count(PLACEHOLDER)


class PlaceholderExpander:
    """Expands positional placeholders with encoded literals."""

    def __init__(self, encoder: LiteralEncoder) -> None:
        """Initialize expander.

        Args:
            encoder: Encoder used for every value
        """
        self.encoder = encoder

    def expand(self, template: str, values: Sequence[Any]) -> str:
        """Replace every placeholder with the matching value's literal.

        Args:
            template: SQL template with ``?`` placeholders
            values: One value per placeholder, in order

        Returns:
            Fully inlined SQL text

        Raises:
            TooFewValuesError: If a placeholder has no value
            TooManyValuesError: If values remain after the scan
            UnsupportedTypeError: If a value cannot be encoded
        """
        parts: list[str] = []
        used = 0
        start = 0

        position = template.find(PLACEHOLDER)
        while position != -1:
            if used >= len(values):
                raise TooFewValuesError(
                    placeholders=used + 1, values=len(values), position=position
                )
            parts.append(template[start:position])
            parts.append(self.encoder.encode(values[used]))
            used += 1
            start = position + len(PLACEHOLDER)
            position = template.find(PLACEHOLDER, start)

        if used != len(values):
            raise TooManyValuesError(placeholders=used, values=len(values))

        parts.append(template[start:])
        return "".join(parts)


def expand(
    template: str,
    values: Sequence[Any],
    sanitizer: Sanitizer | None = None,
    audit: bool = True,
) -> str:
    """Expand a SQL template into directly executable text.

    Args:
        template: SQL template with ``?`` placeholders
        values: One value per placeholder, in order
        sanitizer: Sanitizer for string values (default sanitizer if None)
        audit: Whether to emit audit events (default True)

    Returns:
        Fully inlined SQL text

    Raises:
        ArityMismatchError: If placeholder and value counts differ
        UnsupportedTypeError: If a value cannot be encoded

    Example:
        >>> expand("SELECT * FROM users WHERE id = ?", [123])
        'SELECT * FROM users WHERE id = 123'
    """
    audit_logger = get_audit_logger() if audit else None
    if audit_logger is not None and not audit_logger.enabled:
        audit_logger = None

    if audit_logger is None:
        return PlaceholderExpander(LiteralEncoder(sanitizer)).expand(template, values)

    sanitized_values: list[SanitizedText] = []
    encoder = LiteralEncoder(sanitizer, on_sanitized=sanitized_values.append)
    template_hash = hash_text(template)
    start_time = time.perf_counter()

    try:
        result = PlaceholderExpander(encoder).expand(template, values)
    except SQLInlineError as e:
        logger.debug("Expansion of template %s failed: %s", template_hash[:12], e.code)
        audit_logger.log_event(
            create_error_event(
                template_hash=template_hash,
                error_code=e.code,
                error_type=type(e).__name__,
                layer=e.layer,
                message=str(e),
            )
        )
        raise

    total_time_ms = (time.perf_counter() - start_time) * 1000

    neutralized = 0
    for string_index, sanitized in enumerate(sanitized_values):
        if sanitized.changed:
            neutralized += 1
            audit_logger.log_event(create_sanitization_event(template_hash, string_index, sanitized))

    audit_logger.log_event(
        create_expansion_event(
            template_hash=template_hash,
            statement_type=classify_statement(template),
            placeholder_count=count_placeholders(template),
            neutralized_count=neutralized,
            total_time_ms=total_time_ms,
        )
    )
    return result
