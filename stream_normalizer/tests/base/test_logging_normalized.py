"""Structured logging helpers.

Covers:
- _parse_level string parsing
- normalized_log_event emits required keys and keeps explicit values
- LogContext fields land in the payload
"""

from __future__ import annotations

import json
import logging

from stream_normalizer.base.log_support import JsonFormatter, LogContext
from stream_normalizer.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    configure_logger,
    _parse_level,  # type: ignore[attr-defined]
    get_logger,
    log_event,
    normalized_log_event,
)


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - exercised via tests
        self.records.append(record)


def _capture(name: str):
    logger = get_logger(name)
    handler = _ListHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger, handler


def test_parse_level_variants():
    assert _parse_level(None) == logging.INFO  # nosec B101
    assert _parse_level("debug") == logging.DEBUG  # nosec B101
    assert _parse_level("WARN") == logging.WARNING  # nosec B101
    assert _parse_level("unknown", default=logging.ERROR) == logging.ERROR  # nosec B101


def test_child_loggers_are_namespaced():
    assert get_logger("normalizer.x").name == "stream_normalizer.normalizer.x"  # nosec B101
    assert get_logger("stream_normalizer.y").name == "stream_normalizer.y"  # nosec B101


def test_normalized_log_event_emits_required_keys():
    logger, handler = _capture("tests.logging.required")
    try:
        ctx = LogContext(provider="anthropic", model="claude-sonnet-4-5", conversation_id="c1")
        normalized_log_event(
            logger,
            "stream.end",
            ctx,
            phase="finalize",
            emitted=True,
            emitted_extra=None,
            wrapper="email_copy",
        )
        payload = json.loads(handler.records[-1].getMessage())
    finally:
        logger.removeHandler(handler)

    for key in REQUIRED_NORMALIZED_KEYS:
        if key == "error_code":
            continue
        assert key in payload  # nosec B101
    assert "error_code" not in payload  # nosec B101
    assert payload["event"] == "stream.end" and payload["wrapper"] == "email_copy"  # nosec B101
    assert payload["provider"] == "anthropic" and payload["conversation_id"] == "c1"  # nosec B101
    assert payload["attempt"] is None and payload["emitted"] is True  # nosec B101
    assert "emitted_extra" not in payload  # nosec B101


def test_explicit_error_code_and_none_pruning():
    logger, handler = _capture("tests.logging.pruning")
    try:
        normalized_log_event(logger, "stream.error", phase="stream", error_code="timeout", note=None)
        log_event(logger, "plain", dropped=None, kept=0)
        first = json.loads(handler.records[-2].getMessage())
        second = json.loads(handler.records[-1].getMessage())
    finally:
        logger.removeHandler(handler)

    assert first["error_code"] == "timeout" and first["phase"] == "stream"  # nosec B101
    assert first["attempt"] is None and "note" not in first  # nosec B101
    assert second == {"event": "plain", "kept": 0}  # nosec B101


def test_json_formatter_hoists_event_keys():
    record = logging.LogRecord("stream_normalizer.t", logging.INFO, __file__, 1, '{"event": "x", "n": 1}', None, None)
    line = json.loads(JsonFormatter().format(record))
    assert line["event"] == "x" and line["n"] == 1 and line["level"] == "INFO"  # nosec B101
    assert "msg" not in line  # nosec B101


def test_configure_logger_file_handler_round_trip(tmp_path):
    log_file = tmp_path / "logs" / "normalizer.log"
    logger = configure_logger(level="DEBUG", file_path=str(log_file))
    try:
        assert logger.level == logging.DEBUG  # nosec B101
        normalized_log_event(get_logger("tests.logging.file"), "stream.start", phase="start")
        for handler in logger.handlers:
            handler.flush()
        line = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert line["event"] == "stream.start"  # nosec B101
    finally:
        configure_logger(level=logging.INFO, file_path=None)
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)  # nosec B101
