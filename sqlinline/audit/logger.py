"""Audit logger with tamper-evident signing.

Features:
- JSONL format (one event per line for efficient parsing)
- Optional HMAC-SHA256 signing for tamper detection
- Time-based log rotation
- Singleton pattern for consistent logging across the application

The logger only writes to disk when a log directory is configured, either
explicitly or through ``SQLINLINE_AUDIT_LOG_DIR``. Without one, events go
to a NullHandler so importing the library never touches the filesystem.
"""

import hashlib
import hmac
import json
import logging
import os
import threading
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Optional

from .events import AuditEvent

LOG_DIR_ENV_VAR = "SQLINLINE_AUDIT_LOG_DIR"
SIGNING_KEY_ENV_VAR = "SQLINLINE_AUDIT_SIGNING_KEY"
AUDIT_LOGGER_NAME = "sqlinline.audit"

SEVERITY_LEVELS = {
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class JSONLFormatter(logging.Formatter):
    """Format log records as JSONL with optional HMAC signing.

    Attributes:
        signing_key: Optional HMAC signing key (bytes)
    """

    def __init__(self, signing_key: bytes | None = None):
        """Initialize formatter.

        Args:
            signing_key: Optional HMAC signing key (minimum 32 bytes recommended)
        """
        super().__init__()
        self.signing_key = signing_key

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON line.

        Args:
            record: Log record to format

        Returns:
            JSON string representing the log record
        """
        if hasattr(record, "event"):
            event_dict = record.event.to_dict()
        else:
            event_dict = {
                "timestamp": self.formatTime(record),
                "level": record.levelname,
                "message": record.getMessage(),
            }

        if self.signing_key:
            event_dict = self._sign_event(event_dict)

        return json.dumps(event_dict, ensure_ascii=False)

    def _sign_event(self, event: dict[str, Any]) -> dict[str, Any]:
        """Add HMAC-SHA256 signature to event.

        The signature is computed over the canonical JSON representation
        (sorted keys) of the event.

        Args:
            event: Event dictionary to sign

        Returns:
            Event dictionary with 'signature' field added
        """
        if self.signing_key is None:
            msg = "Signing key must not be None"
            raise ValueError(msg)

        event_json = json.dumps(event, sort_keys=True, ensure_ascii=False)
        signature = hmac.new(self.signing_key, event_json.encode(), hashlib.sha256).hexdigest()

        event["signature"] = signature
        return event


def verify_signature(line: str, signing_key: bytes) -> bool:
    """Check the HMAC signature of one JSONL audit line.

    Args:
        line: A line written by JSONLFormatter with a signing key
        signing_key: Key the line was signed with

    Returns:
        True if the signature matches the event content
    """
    event = json.loads(line)
    signature = event.pop("signature", None)
    if not signature:
        return False
    event_json = json.dumps(event, sort_keys=True, ensure_ascii=False)
    expected = hmac.new(signing_key, event_json.encode(), hashlib.sha256).hexdigest()
    return hmac.compare_digest(signature, expected)


class AuditLogger:
    """Audit logger with optional file output, rotation and signing.

    This is a singleton: the first construction configures it and later
    constructions return the same instance unchanged.

    Example:
        >>> from sqlinline.audit.logger import AuditLogger
        >>> from sqlinline.audit.events import AuditEvent
        >>>
        >>> AuditLogger().log_event(AuditEvent(event_type="TEST"))
    """

    _instance: Optional["AuditLogger"] = None
    _initialized: bool = False
    _lock = threading.Lock()

    def __new__(cls, *args: Any, **kwargs: Any) -> "AuditLogger":
        """Ensure singleton pattern.

        Returns:
            The single AuditLogger instance
        """
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._initialized = False
            return cls._instance

    def __init__(
        self,
        log_dir: str | Path | None = None,
        signing_key: bytes | None = None,
        rotation: str = "midnight",
        backup_count: int = 90,
    ):
        """Initialize audit logger.

        Only initializes once (singleton pattern). Subsequent calls with
        different parameters are ignored.

        Args:
            log_dir: Directory for audit logs (from env if None; no file if unset)
            signing_key: Optional HMAC signing key (fetched from env if None)
            rotation: Rotation schedule ('midnight', 'H' for hourly, etc.)
            backup_count: Number of rotated files to keep
        """
        if self._initialized:
            return

        with self._lock:
            # Another thread may have finished setup while this one waited
            if self._initialized:
                return
            self._configure(log_dir, signing_key, rotation, backup_count)
            self._initialized = True

    def _configure(
        self,
        log_dir: str | Path | None,
        signing_key: bytes | None,
        rotation: str,
        backup_count: int,
    ) -> None:
        """Attach the audit handler; runs once, under the class lock."""
        if log_dir is None:
            env_dir = os.environ.get(LOG_DIR_ENV_VAR, "")
            log_dir = env_dir or None

        if signing_key is None:
            key_str = os.environ.get(SIGNING_KEY_ENV_VAR, "")
            signing_key = key_str.encode() if key_str else None

        self.logger = logging.getLogger(AUDIT_LOGGER_NAME)
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False

        for stale in self.logger.handlers:
            stale.close()
        self.logger.handlers.clear()

        handler: logging.Handler
        if log_dir is None:
            self.log_dir: Path | None = None
            handler = logging.NullHandler()
        else:
            self.log_dir = Path(log_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            handler = TimedRotatingFileHandler(
                filename=str(self.log_dir / "audit.jsonl"),
                when=rotation,
                interval=1,
                backupCount=backup_count,
                encoding="utf-8",
            )
            handler.setFormatter(JSONLFormatter(signing_key=signing_key))

        self.logger.addHandler(handler)

    @property
    def enabled(self) -> bool:
        """Whether events are written anywhere."""
        return self.log_dir is not None

    def log_event(self, event: AuditEvent) -> None:
        """Log audit event.

        Args:
            event: AuditEvent to log
        """
        record = self.logger.makeRecord(
            name=self.logger.name,
            level=SEVERITY_LEVELS.get(event.severity, logging.INFO),
            fn="",
            lno=0,
            msg=event.event_type,
            args=(),
            exc_info=None,
        )
        record.event = event

        self.logger.handle(record)

        # Flush handlers to ensure immediate write
        for handler in self.logger.handlers:
            handler.flush()

    @classmethod
    def _reset_instance(cls) -> None:
        """Reset singleton instance (for testing only).

        WARNING: This method should only be used in tests to reset the
        singleton state between test cases. Never use in production code.
        """
        with cls._lock:
            if cls._instance is not None:
                if hasattr(cls._instance, "logger"):
                    for handler in cls._instance.logger.handlers:
                        handler.close()
                    cls._instance.logger.handlers.clear()
            cls._instance = None


def get_audit_logger() -> AuditLogger:
    """Get the process-wide audit logger, creating it from the environment."""
    return AuditLogger()


def log_event(event: AuditEvent) -> None:
    """Convenience function to log event using the singleton.

    Args:
        event: AuditEvent to log
    """
    get_audit_logger().log_event(event)
