"""Audit logging for template expansion.

This module provides tamper-evident audit logging in JSONL format.

Key features:
- JSONL event format
- HMAC-SHA256 log signing
- Template and value hashing (NEVER logs raw SQL or values)
- Time-based log rotation

Modules:
- events: Audit event definitions and creation functions
- logger: JSONL logger with signing and rotation
"""

from .events import (
    AuditEvent,
    classify_statement,
    create_error_event,
    create_expansion_event,
    create_sanitization_event,
    hash_text,
)
from .logger import AuditLogger, get_audit_logger, log_event, verify_signature

__all__ = [
    "AuditEvent",
    "AuditLogger",
    "classify_statement",
    "create_error_event",
    "create_expansion_event",
    "create_sanitization_event",
    "get_audit_logger",
    "hash_text",
    "log_event",
    "verify_signature",
]
