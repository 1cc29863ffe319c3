"""
Command line interface for checking an environment against a JSON schema.

    python -m envschema check schema.json --env-file .env
    python -m envschema check schema.json --no-throw --json
    python -m envschema describe schema.json

The schema file holds a JSON object mapping variable names to field
mappings, e.g. {"PORT": {"kind": "number", "default": 8000}}. Custom
validators cannot be expressed in JSON.

Exit codes: 0 when the environment is valid, 1 when validation fails, 2 when
the schema or an input file cannot be used.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from envschema import __version__
from envschema.config.settings import get_settings
from envschema.environment import snapshot_environ
from envschema.logging_config import REDACTED, configure_logging, is_sensitive
from envschema.schema.errors import (
    AggregatedEnvError,
    EnvValidationError,
    SchemaError,
    SettingsError,
)
from envschema.schema.fields import EnumField, FieldSpec, build_schema
from envschema.validation.validator import validate_env

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2

GREEN = "\033[32m"
RED = "\033[31m"
YELLOW = "\033[33m"
RESET = "\033[0m"


def color(text: str, color_code: str, enabled: bool = True) -> str:
    """Apply an ANSI color code to text."""

    if not enabled:
        return text
    return f"{color_code}{text}{RESET}"


def load_schema_file(path: str | Path) -> dict[str, FieldSpec]:
    """
    Read and normalize a JSON schema file.

    Raises:
        OSError: If the file cannot be read.
        SchemaError: If the content is not a valid schema.
    """
    schema_path = Path(path)
    try:
        data = json.loads(schema_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaError(f"{schema_path} is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise SchemaError(f"{schema_path} must contain a JSON object")
    return build_schema(data)


def _display(name: str, value: Any, show_secrets: bool) -> Any:
    if not show_secrets and is_sensitive(name):
        return REDACTED
    return value


def _error_payload(error: EnvValidationError) -> dict[str, str]:
    return {"field": error.field, "kind": error.kind.value, "message": error.message}


def _check(args: argparse.Namespace) -> int:
    schema = load_schema_file(args.schema)
    raw_env = snapshot_environ(args.env_file)
    config = get_settings().to_config(
        throw=False if args.no_throw else None,
        debug_mode=True if args.debug else None,
    )

    values: dict[str, Any] = {}
    errors: list[EnvValidationError] = []
    try:
        values = validate_env(schema, raw_env, config)
    except AggregatedEnvError as exc:
        values = exc.values
        errors = exc.errors
    except EnvValidationError as exc:
        errors = [exc]

    shown = {name: _display(name, value, args.show_secrets) for name, value in values.items()}

    if args.json:
        payload = {
            "ok": not errors,
            "values": shown,
            "errors": [_error_payload(error) for error in errors],
        }
        print(json.dumps(payload, indent=2, default=str))
        return EXIT_INVALID if errors else EXIT_OK

    use_color = sys.stdout.isatty()
    for name, value in shown.items():
        print(f"{name}={value}")
    for error in errors:
        print(f"[{color('FAIL', RED, use_color)}] {error.message}", file=sys.stderr)

    if errors:
        return EXIT_INVALID
    print(color(f"{len(values)} variables valid", GREEN, use_color), file=sys.stderr)
    return EXIT_OK


def _describe_field(name: str, spec: FieldSpec) -> str:
    parts = [name, spec.kind]
    if spec.is_required:
        parts.append("required")
    else:
        parts.append(f"default={spec.default}")
    if isinstance(spec, EnumField):
        parts.append(f"one of: {', '.join(spec.allowed_texts)}")
    if spec.description:
        parts.append(f"- {spec.description}")
    return "  ".join(parts)


def _describe(args: argparse.Namespace) -> int:
    schema = load_schema_file(args.schema)
    for name, spec in schema.items():
        print(_describe_field(name, spec))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envschema",
        description="Validate environment variables against a JSON schema.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Validate the current environment.")
    check.add_argument("schema", help="Path to the JSON schema file.")
    check.add_argument("--env-file", help=".env file overlaid on the environment.")
    check.add_argument(
        "--no-throw",
        action="store_true",
        help="Report every invalid variable instead of stopping at the first.",
    )
    check.add_argument("--debug", action="store_true", help="Log each resolved variable.")
    check.add_argument("--json", action="store_true", help="Print a JSON document.")
    check.add_argument(
        "--show-secrets",
        action="store_true",
        help="Print values of variables whose names look secret.",
    )
    check.set_defaults(handler=_check)

    describe = subparsers.add_parser("describe", help="List the fields of a schema.")
    describe.add_argument("schema", help="Path to the JSON schema file.")
    describe.set_defaults(handler=_describe)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface and return its exit code."""

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging()
        return args.handler(args)
    except (SchemaError, SettingsError) as exc:
        print(f"[{color('ERROR', YELLOW, sys.stderr.isatty())}] {exc}", file=sys.stderr)
        return EXIT_USAGE
    except OSError as exc:
        print(f"[{color('ERROR', YELLOW, sys.stderr.isatty())}] {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
