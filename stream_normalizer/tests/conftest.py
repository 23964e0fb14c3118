"""Pytest configuration for the normalizer test suite.

Isolates every test from the developer's environment: no ``.env`` file,
no external config file and no ``NORMALIZER_*`` overrides leak in, and the
config cache is reset around each test.
"""

from __future__ import annotations

import json
import logging
from typing import Iterator, List

import pytest

from stream_normalizer.config import ENV_FIELD_MAP, NORMALIZER_ENV_MAP, reset_config_cache


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Point config loading at empty sources for the duration of a test."""
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.delenv("NORMALIZER_CONFIG_FILE", raising=False)
    monkeypatch.delenv("NORMALIZER_LOG_LEVEL", raising=False)
    for provider in ("ANTHROPIC", "OPENAI"):
        for suffix in ENV_FIELD_MAP.values():
            monkeypatch.delenv(f"{provider}_{suffix}", raising=False)
    for env_name in NORMALIZER_ENV_MAP.values():
        monkeypatch.delenv(env_name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def log_events(caplog: pytest.LogCaptureFixture):
    """Return a callable listing captured structured events as dicts.

    ``log_events("stream.end")`` filters by event name.
    """
    caplog.set_level(logging.DEBUG, logger="stream_normalizer")

    def _collect(name: str | None = None) -> List[dict]:
        out: List[dict] = []
        for record in caplog.records:
            if not record.name.startswith("stream_normalizer"):
                continue
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if not isinstance(payload, dict) or "event" not in payload:
                continue
            if name is None or payload["event"] == name:
                payload["_level"] = record.levelno
                out.append(payload)
        return out

    return _collect
