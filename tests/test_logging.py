from __future__ import annotations

import json
import logging

import pytest
import structlog

from envschema.logging_config import (
    REDACTED,
    _redact_sensitive_data,
    configure_logging,
    get_logger,
    is_sensitive,
)
from envschema.schema.errors import SettingsError


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("DB_PASSWORD", True),
        ("STRIPE_API_KEY", True),
        ("AUTH_TOKEN_SECRET", True),
        ("PORT", False),
        ("NODE_ENV", False),
    ],
)
def test_is_sensitive(name: str, expected: bool) -> None:
    assert is_sensitive(name) is expected


def test_redacts_values_of_secret_variables() -> None:
    event = {
        "event": "env_variable",
        "name": "DB_PASSWORD",
        "value": "hunter2",
        "entry": "DB_PASSWORD=hunter2",
        "source": "environment",
    }

    redacted = _redact_sensitive_data(None, "info", event)

    assert redacted["value"] == REDACTED
    assert redacted["entry"] == REDACTED
    assert redacted["name"] == "DB_PASSWORD"
    assert redacted["source"] == "environment"


def test_keeps_values_of_ordinary_variables() -> None:
    event = {"event": "env_variable", "name": "PORT", "value": 8080}

    assert _redact_sensitive_data(None, "info", dict(event)) == event


def test_redacts_sensitive_keys() -> None:
    event = {"event": "login", "api_key": "abc", "user": "me"}

    redacted = _redact_sensitive_data(None, "info", event)

    assert redacted == {"event": "login", "api_key": REDACTED, "user": "me"}


def test_configure_logging_json(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(log_level="INFO", log_format="json")

    structlog.get_logger("tests").info("env_variable", name="API_TOKEN", value="t0k3n")

    lines = [line for line in capsys.readouterr().err.splitlines() if line.strip()]
    payload = json.loads(lines[-1])
    assert payload["event"] == "env_variable"
    assert payload["value"] == REDACTED
    assert payload["level"] == "info"
    assert logging.getLogger().level == logging.INFO


def test_configure_logging_uses_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVSCHEMA_LOG_LEVEL", "warning")

    configure_logging()

    assert logging.getLogger().level == logging.WARNING


def test_get_logger_emits_structlog_events() -> None:
    with structlog.testing.capture_logs() as logs:
        get_logger("envschema.tests").info("env_file_read", keys=2)

    assert logs == [{"event": "env_file_read", "keys": 2, "log_level": "info"}]


def test_configure_logging_rejects_invalid_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVSCHEMA_LOG_FORMAT", "xml")

    with pytest.raises(SettingsError, match="ENVSCHEMA_LOG_FORMAT"):
        configure_logging()
