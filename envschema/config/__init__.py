"""
Configuration package for envschema's own settings.

Usage:
    from envschema.config import EnvConfig, get_settings

    # Options for one run
    config = EnvConfig(throw=False, debug_mode=True)

    # Defaults taken from ENVSCHEMA_* variables (cached)
    config = get_settings().to_config()
"""

from envschema.config.settings import EnvConfig, EnvSchemaSettings, get_settings

__all__ = [
    "EnvConfig",
    "EnvSchemaSettings",
    "get_settings",
]
