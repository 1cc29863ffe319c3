"""
Logging configuration for envschema.

envschema logs through structlog. Libraries should not configure logging
on import, so nothing here runs until the host application (or the
`envschema` command) calls configure_logging(). Until then structlog's
defaults apply and events still reach the console.

Features:
    - Colored console output for local use, JSON lines for log collectors
    - Integration with standard library logging for third-party libraries
    - Redaction of variables whose names look secret (passwords, tokens, keys)

Usage:
    from envschema.logging_config import configure_logging

    configure_logging(log_level="DEBUG", log_format="console")

    # In modules
    from envschema.logging_config import get_logger
    logger = get_logger(__name__)

    logger.info("env_variable", name="PORT", value=8000, source="environment")
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from envschema.config.settings import get_settings

# Name fragments that mark a variable (or an event key) as secret
SENSITIVE_FIELDS = frozenset(
    {
        "password",
        "passwd",
        "api_key",
        "apikey",
        "secret",
        "token",
        "authorization",
        "access_key",
        "private_key",
        "credential",
    }
)

REDACTED = "[REDACTED]"

# Event keys that hold the value of the variable named by the "name" key
_VALUE_KEYS = ("value", "entry", "error")


def is_sensitive(name: str) -> bool:
    """Return True if a variable or key name looks like it holds a secret."""
    lowered = name.lower()
    return any(fragment in lowered for fragment in SENSITIVE_FIELDS)


def _redact_sensitive_data(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    Redact sensitive data from log events.

    Values of keys with sensitive names are replaced, and so are the
    value-carrying keys of env_variable events whose `name` is sensitive
    (e.g. name="DB_PASSWORD", value="hunter2").
    """
    for key in list(event_dict.keys()):
        if key != "event" and is_sensitive(key):
            event_dict[key] = REDACTED

    name = event_dict.get("name")
    if isinstance(name, str) and is_sensitive(name):
        for key in _VALUE_KEYS:
            if key in event_dict:
                event_dict[key] = REDACTED
    return event_dict


def configure_logging(
    log_level: str | None = None,
    log_format: str | None = None,
) -> None:
    """
    Configure structlog and the root stdlib logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to ENVSCHEMA_LOG_LEVEL.
        log_format: 'console' or 'json'. Defaults to ENVSCHEMA_LOG_FORMAT.

    Raises:
        SettingsError: If the ENVSCHEMA_* logging variables are invalid.
    """
    settings = get_settings()
    if log_level is None:
        log_level = settings.log_level
    if log_format is None:
        log_format = settings.log_format

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # Shared processors for both structlog and stdlib integration
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _redact_sensitive_data,
    ]

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    logger = structlog.get_logger("envschema.logging")
    logger.debug(
        "logging_configured",
        log_level=log_level,
        output_format=log_format,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger.

    Args:
        name: Logger name (typically __name__).
    """
    return structlog.get_logger(name)


__all__ = [
    "configure_logging",
    "get_logger",
    "is_sensitive",
    "SENSITIVE_FIELDS",
    "REDACTED",
]
