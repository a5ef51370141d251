"""Unit tests for audit events and the JSONL audit logger."""

import json
import logging
import re
import threading
import time
from pathlib import Path

import pytest

from sqlinline.audit.events import (
    AuditEvent,
    classify_statement,
    create_error_event,
    create_expansion_event,
    create_sanitization_event,
    hash_text,
)
from sqlinline.audit.logger import (
    AUDIT_LOGGER_NAME,
    LOG_DIR_ENV_VAR,
    SIGNING_KEY_ENV_VAR,
    AuditLogger,
    JSONLFormatter,
    get_audit_logger,
    verify_signature,
)
from sqlinline.errors import TooFewValuesError
from sqlinline.expander import expand
from sqlinline.models import ParameterType, SanitizedText

SIGNING_KEY = b"k" * 32


@pytest.fixture(autouse=True)
def reset_audit_logger(monkeypatch):
    """Give every test a fresh, unconfigured audit logger."""
    monkeypatch.delenv(LOG_DIR_ENV_VAR, raising=False)
    monkeypatch.delenv(SIGNING_KEY_ENV_VAR, raising=False)
    AuditLogger._reset_instance()
    yield
    AuditLogger._reset_instance()


def read_events(log_dir):
    lines = (log_dir / "audit.jsonl").read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines]


class TestEvents:
    """Tests for event construction."""

    def test_hash_text(self):
        digest = hash_text("SELECT 1")
        assert re.fullmatch(r"[0-9a-f]{64}", digest)
        assert digest == hash_text("SELECT 1")
        assert digest != hash_text("SELECT 2")

    def test_event_defaults(self):
        event = AuditEvent(event_type="TEST")

        assert event.version == "1.0"
        assert event.timestamp.endswith("Z")
        assert len(event.event_id) == 36
        assert event.to_dict()["event_type"] == "TEST"

    def test_expansion_event(self):
        event = create_expansion_event("h", "SELECT", 2, 1, 1.23456)

        assert event.event_type == "EXPANSION"
        assert event.severity == "INFO"
        assert event.data == {
            "statement_type": "SELECT",
            "placeholder_count": 2,
            "neutralized_count": 1,
            "total_time_ms": 1.23,
        }

    def test_error_event_truncates_message(self):
        event = create_error_event("h", "E101", "TooFewValuesError", "expansion", "m" * 500)

        assert event.event_type == "EXPANSION_ERROR"
        assert event.severity == "WARNING"
        assert len(event.data["message"]) == 200

    def test_sanitization_event_has_no_raw_text(self):
        sanitized = SanitizedText("x' OR 1=1", ParameterType.GENERIC, "x'_or_1=1")
        event = create_sanitization_event("h", 0, sanitized)

        serialized = json.dumps(event.to_dict())
        assert "OR 1=1" not in serialized
        assert "_or_" not in serialized
        assert event.data["event_subtype"] == "VALUE_NEUTRALIZED"
        assert event.data["parameter_type"] == "generic"
        assert event.data["value_hash"] == hash_text("x' OR 1=1")

    @pytest.mark.parametrize(
        "template,expected",
        [
            ("SELECT * FROM users WHERE id = ?", "SELECT"),
            ("insert into t values (?)", "INSERT"),
            ("UPDATE t SET a = ?", "UPDATE"),
            ("DELETE FROM t WHERE id = ?", "DELETE"),
            ("", "UNKNOWN"),
        ],
    )
    def test_classify_statement(self, template, expected):
        assert classify_statement(template) == expected


class TestAuditLogger:
    """Tests for logger configuration and output."""

    def test_disabled_without_directory(self):
        logger = get_audit_logger()

        assert logger.enabled is False
        logger.log_event(AuditEvent(event_type="TEST"))

    def test_singleton(self):
        assert AuditLogger() is AuditLogger()

    def test_writes_jsonl(self, tmp_path):
        logger = AuditLogger(log_dir=tmp_path)
        logger.log_event(AuditEvent(event_type="TEST", template_hash="abc"))

        events = read_events(tmp_path)
        assert len(events) == 1
        assert events[0]["event_type"] == "TEST"
        assert "signature" not in events[0]

    def test_directory_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv(LOG_DIR_ENV_VAR, str(tmp_path / "logs"))

        assert get_audit_logger().enabled is True
        assert (tmp_path / "logs").is_dir()

    def test_signed_lines_verify(self, tmp_path):
        AuditLogger(log_dir=tmp_path, signing_key=SIGNING_KEY).log_event(
            AuditEvent(event_type="TEST")
        )

        line = (tmp_path / "audit.jsonl").read_text(encoding="utf-8").splitlines()[0]
        assert verify_signature(line, SIGNING_KEY)
        assert not verify_signature(line, b"x" * 32)

    def test_tampered_line_fails_verification(self, tmp_path):
        AuditLogger(log_dir=tmp_path, signing_key=SIGNING_KEY).log_event(
            AuditEvent(event_type="TEST", severity="INFO")
        )

        line = (tmp_path / "audit.jsonl").read_text(encoding="utf-8").splitlines()[0]
        tampered = line.replace('"INFO"', '"ERROR"')
        assert not verify_signature(tampered, SIGNING_KEY)

    def test_unsigned_line_fails_verification(self):
        assert not verify_signature(json.dumps({"event_type": "TEST"}), SIGNING_KEY)

    def test_formatter_without_event(self):
        """Plain records are still emitted as JSON."""
        record = logging.LogRecord("x", logging.INFO, "", 0, "hello", (), None)
        output = json.loads(JSONLFormatter().format(record))
        assert output["message"] == "hello"
        assert output["level"] == "INFO"


class TestExpansionAudit:
    """Tests for events emitted by expand()."""

    def test_expansion_and_sanitization_events(self, tmp_path):
        AuditLogger(log_dir=tmp_path)

        expand("SELECT * FROM t WHERE a = ? AND b = ?", ["ok", "x'; DROP TABLE t"])

        events = read_events(tmp_path)
        assert [e["event_type"] for e in events] == ["SECURITY_EVENT", "EXPANSION"]
        assert events[0]["data"]["string_index"] == 1
        assert events[1]["data"]["statement_type"] == "SELECT"
        assert events[1]["data"]["placeholder_count"] == 2
        assert events[1]["data"]["neutralized_count"] == 1

        raw = (tmp_path / "audit.jsonl").read_text(encoding="utf-8")
        assert "DROP TABLE" not in raw
        assert "SELECT * FROM t" not in raw

    def test_error_event(self, tmp_path):
        AuditLogger(log_dir=tmp_path)

        with pytest.raises(TooFewValuesError):
            expand("? ?", [1])

        events = read_events(tmp_path)
        assert len(events) == 1
        assert events[0]["event_type"] == "EXPANSION_ERROR"
        assert events[0]["data"]["error_code"] == "E101"
        assert events[0]["data"]["layer"] == "expansion"

    def test_audit_disabled_per_call(self, tmp_path):
        AuditLogger(log_dir=tmp_path)

        expand("?", ["x'; DROP TABLE t"], audit=False)

        assert (tmp_path / "audit.jsonl").read_text(encoding="utf-8") == ""


class TestConcurrentSetup:
    """Tests for first use of the logger from several threads at once."""

    def test_one_handler_under_concurrent_first_use(self, tmp_path, monkeypatch):
        monkeypatch.setenv(LOG_DIR_ENV_VAR, str(tmp_path))
        original_mkdir = Path.mkdir

        def slow_mkdir(self, *args, **kwargs):
            time.sleep(0.05)
            return original_mkdir(self, *args, **kwargs)

        monkeypatch.setattr(Path, "mkdir", slow_mkdir)

        thread_count = 4
        barrier = threading.Barrier(thread_count)
        errors = []

        def worker():
            try:
                barrier.wait()
                expand("SELECT ?", [1])
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(logging.getLogger(AUDIT_LOGGER_NAME).handlers) == 1
        assert len(read_events(tmp_path)) == thread_count

        expand("SELECT ?", [1])
        assert len(read_events(tmp_path)) == thread_count + 1
