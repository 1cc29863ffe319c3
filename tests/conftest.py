from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from envschema.config import settings as settings_module


@pytest.fixture(autouse=True)
def isolated_settings(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None, None, None]:
    """
    Run every test with clean ENVSCHEMA_* settings and default logging.

    Settings also read a .env file from the working directory, so tests run
    from an empty temporary directory.
    """
    for key in list(os.environ):
        if key.upper().startswith("ENVSCHEMA_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    settings_module.get_settings.cache_clear()

    try:
        yield
    finally:
        settings_module.get_settings.cache_clear()
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
