"""
Read-only snapshots of the process environment.

Validation always runs against a plain dict copied once per call, so a run
never observes os.environ changing underneath it and never writes to it.
An optional .env file can be overlaid on the snapshot with python-dotenv;
unlike load_dotenv() the overlay stays local to the snapshot.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

from envschema.logging_config import get_logger

logger = get_logger(__name__)


def read_env_file(path: str | os.PathLike[str]) -> dict[str, str]:
    """
    Parse a .env file without touching os.environ.

    Bare `KEY` lines (no `=`) have no value and are skipped.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    env_path = Path(path)
    if not env_path.is_file():
        raise FileNotFoundError(f"Missing .env file at {env_path}")

    values = {
        key: value
        for key, value in dotenv_values(env_path, encoding="utf-8").items()
        if value is not None
    }
    logger.debug("env_file_read", path=str(env_path), keys=len(values))
    return values


def snapshot_environ(
    env_file: str | os.PathLike[str] | None = None,
    *,
    override: bool = False,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """
    Copy the environment, optionally overlaid with a .env file.

    Args:
        env_file: Path to a .env file to merge into the snapshot.
        override: Let .env values replace variables already set in the
            environment. By default the process environment wins, matching
            load_dotenv(override=False).
        environ: Base mapping to copy instead of os.environ.

    Returns:
        A new dict; mutating it has no effect on the process.
    """
    snapshot = dict(os.environ if environ is None else environ)
    if env_file is None:
        return snapshot

    file_values = read_env_file(env_file)
    if override:
        snapshot.update(file_values)
    else:
        for key, value in file_values.items():
            snapshot.setdefault(key, value)
    return snapshot


__all__ = ["read_env_file", "snapshot_environ"]
