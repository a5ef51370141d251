"""Audit event definitions for template expansion.

This module defines audit event structures and creation functions for
tracking expansions, expansion failures and values the sanitizer had to
neutralize. All events follow a standardized schema.

Event Types:
- EXPANSION: A template was expanded successfully
- EXPANSION_ERROR: An expansion failed (arity mismatch, unsupported type)
- SECURITY_EVENT: A value was altered by its validator

CRITICAL: Never log templates or values - only SHA-256 hashes, since
values routinely carry user data.
"""

import hashlib
import uuid
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from typing import Any

import sqlparse  # type: ignore[import-untyped]

from ..models import SanitizedText


@dataclass
class AuditEvent:
    """Base audit event structure.

    Attributes:
        version: Schema version for event format evolution
        timestamp: ISO 8601 UTC timestamp with 'Z' suffix
        event_id: Unique UUID for this event
        event_type: Category of event (EXPANSION, EXPANSION_ERROR, etc.)
        severity: Log severity level (INFO, WARNING, ERROR)
        template_hash: SHA-256 hash of the SQL template (NEVER the template)
        data: Event-specific structured data
    """

    version: str = "1.0"
    timestamp: str = ""
    event_id: str = ""
    event_type: str = ""
    severity: str = "INFO"
    template_hash: str = ""
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Initialize computed fields after dataclass creation."""
        if not self.timestamp:
            self.timestamp = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        if not self.event_id:
            self.event_id = str(uuid.uuid4())

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the event
        """
        return asdict(self)


def create_expansion_event(
    template_hash: str,
    statement_type: str,
    placeholder_count: int,
    neutralized_count: int,
    total_time_ms: float,
) -> AuditEvent:
    """Create template expansion completion event.

    Args:
        template_hash: SHA-256 hash of the template
        statement_type: Statement type of the template (SELECT, INSERT, ...)
        placeholder_count: Number of placeholders substituted
        neutralized_count: Number of string values altered by a validator
        total_time_ms: Total expansion time in milliseconds

    Returns:
        AuditEvent configured for expansion logging
    """
    return AuditEvent(
        event_type="EXPANSION",
        severity="INFO",
        template_hash=template_hash,
        data={
            "statement_type": statement_type,
            "placeholder_count": placeholder_count,
            "neutralized_count": neutralized_count,
            "total_time_ms": round(total_time_ms, 2),
        },
    )


def create_error_event(
    template_hash: str,
    error_code: str,
    error_type: str,
    layer: str,
    message: str,
) -> AuditEvent:
    """Create expansion error event.

    Args:
        template_hash: SHA-256 hash of the template
        error_code: Error code (e.g., E101, E201)
        error_type: Error class name (e.g., TooFewValuesError)
        layer: Pipeline stage that raised the error
        message: Error message (truncated to 200 chars to prevent log bloat)

    Returns:
        AuditEvent configured for error logging
    """
    return AuditEvent(
        event_type="EXPANSION_ERROR",
        severity="WARNING",
        template_hash=template_hash,
        data={
            "error_code": error_code,
            "error_type": error_type,
            "layer": layer,
            "message": message[:200],
        },
    )


def create_sanitization_event(
    template_hash: str,
    string_index: int,
    sanitized: SanitizedText,
) -> AuditEvent:
    """Create security event for a value altered by its validator.

    A changed value is not necessarily an attack (an ID with a space is
    also rewritten), so these events are WARNING, never ERROR.

    Args:
        template_hash: SHA-256 hash of the template
        string_index: Zero-based index among the string values of the expansion
        sanitized: Sanitizer outcome for the value

    Returns:
        AuditEvent configured for security logging
    """
    return AuditEvent(
        event_type="SECURITY_EVENT",
        severity="WARNING",
        template_hash=template_hash,
        data={
            "event_subtype": "VALUE_NEUTRALIZED",
            "string_index": string_index,
            "value_hash": hash_text(sanitized.original),
            **sanitized.to_dict(),
        },
    )


def hash_text(text: str) -> str:
    """Generate SHA-256 hash of text for audit logging.

    Args:
        text: Template or value to hash

    Returns:
        64-character hexadecimal SHA-256 hash
    """
    return hashlib.sha256(text.encode("utf-8", errors="surrogatepass")).hexdigest()


def classify_statement(template: str) -> str:
    """Get the statement type of a SQL template.

    Only the template is parsed, never the expanded text, so user values
    cannot influence the classification.

    Args:
        template: SQL template

    Returns:
        Statement type (e.g., 'SELECT', 'INSERT') or 'UNKNOWN'
    """
    parsed = sqlparse.parse(template)
    if not parsed:
        return "UNKNOWN"
    statement_type: str = parsed[0].get_type()
    return statement_type
