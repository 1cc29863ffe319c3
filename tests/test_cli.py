from __future__ import annotations

import json
from pathlib import Path

import pytest

from envschema.cli import EXIT_INVALID, EXIT_OK, EXIT_USAGE, load_schema_file, main
from envschema.schema.errors import SchemaError
from envschema.schema.fields import EnumField, NumberField

SCHEMA = {
    "APP_NODE_ENV": {
        "kind": "enum",
        "allowed_values": ["development", "production", "test"],
        "default": "development",
        "description": "Deployment stage",
    },
    "APP_PORT": {"kind": "number", "default": 3000},
    "APP_DB_PASSWORD": {"kind": "string"},
}


@pytest.fixture
def schema_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in SCHEMA:
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(SCHEMA), encoding="utf-8")
    return path


def test_load_schema_file(schema_file: Path) -> None:
    schema = load_schema_file(schema_file)

    assert isinstance(schema["APP_NODE_ENV"], EnumField)
    assert schema["APP_PORT"] == NumberField(default=3000)


def test_load_schema_file_rejects_bad_json(tmp_path: Path) -> None:
    path = tmp_path / "schema.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SchemaError, match="not valid JSON"):
        load_schema_file(path)


def test_check_success(
    schema_file: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("APP_PORT", "8080")
    monkeypatch.setenv("APP_DB_PASSWORD", "s3cret")

    exit_code = main(["check", str(schema_file)])

    out = capsys.readouterr().out.splitlines()
    assert exit_code == EXIT_OK
    assert out == [
        "APP_NODE_ENV=development",
        "APP_PORT=8080",
        "APP_DB_PASSWORD=[REDACTED]",
    ]


def test_check_show_secrets(
    schema_file: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("APP_DB_PASSWORD", "s3cret")

    main(["check", str(schema_file), "--show-secrets"])

    assert "APP_DB_PASSWORD=s3cret" in capsys.readouterr().out


def test_check_missing_variable(
    schema_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["check", str(schema_file)])

    captured = capsys.readouterr()
    assert exit_code == EXIT_INVALID
    assert 'Environment variable "APP_DB_PASSWORD" is required but not set' in captured.err


def test_check_json_no_throw(
    schema_file: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("APP_NODE_ENV", "staging")

    exit_code = main(["check", str(schema_file), "--no-throw", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == EXIT_INVALID
    assert payload["ok"] is False
    assert payload["values"] == {"APP_PORT": 3000}
    assert [error["field"] for error in payload["errors"]] == [
        "APP_NODE_ENV",
        "APP_DB_PASSWORD",
    ]
    assert payload["errors"][0]["kind"] == "invalid_enum"


def test_check_with_env_file(
    schema_file: Path,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    env_file = tmp_path / "app.env"
    env_file.write_text("APP_DB_PASSWORD=from-file\nAPP_PORT=9000\n", encoding="utf-8")

    exit_code = main(["check", str(schema_file), "--env-file", str(env_file), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == EXIT_OK
    assert payload["values"]["APP_PORT"] == 9000


def test_check_missing_env_file(
    schema_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["check", str(schema_file), "--env-file", str(tmp_path / "nope.env")])

    assert exit_code == EXIT_USAGE
    assert "Missing .env file" in capsys.readouterr().err


def test_check_invalid_schema(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({"MODE": {"kind": "enum"}}), encoding="utf-8")

    exit_code = main(["check", str(path)])

    assert exit_code == EXIT_USAGE
    assert 'Enum "MODE" missing allowed values' in capsys.readouterr().err


@pytest.mark.parametrize(
    ("key", "value"),
    [("ENVSCHEMA_LOG_LEVEL", "verbose"), ("ENVSCHEMA_LOG_FORMAT", "xml")],
)
def test_invalid_settings_exit_with_usage_error(
    schema_file: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    key: str,
    value: str,
) -> None:
    monkeypatch.setenv(key, value)

    exit_code = main(["check", str(schema_file)])

    err = capsys.readouterr().err
    assert exit_code == EXIT_USAGE
    assert "Invalid envschema settings" in err
    assert key in err


def test_describe(schema_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["describe", str(schema_file)])

    lines = capsys.readouterr().out.splitlines()
    assert exit_code == EXIT_OK
    assert lines == [
        "APP_NODE_ENV  enum  default=development  one of: development, production, test"
        "  - Deployment stage",
        "APP_PORT  number  default=3000",
        "APP_DB_PASSWORD  string  required",
    ]
