"""
Configuration loading.

Each environment has its own TOML file under ``carbon_ledger/config``.
Secrets can be supplied through environment variables instead of the file.
"""
import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from carbon_ledger.utils.constants import ConfigFile

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

# environment variable -> (section, key)
ENV_OVERRIDES = {
    "CARBON_LEDGER_DB_HOST": ("db", "host"),
    "CARBON_LEDGER_DB_PASSWORD": ("db", "password"),
    "CARBON_LEDGER_SECRET_KEY": ("auth", "secret_key"),
    "ANTHROPIC_API_KEY": ("ocr", "api_key"),
}

__all__ = ["Config", "ConfigFile", "get_config"]


class Config:
    """
    Parsed configuration for one environment.

    The raw mapping is available as ``data`` and mirrors the TOML layout.
    """

    def __init__(self, config_file: str):
        self.config_file = config_file
        path = CONFIG_DIR / config_file
        with path.open("rb") as fh:
            self.data: dict[str, Any] = tomllib.load(fh)

        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                self.data.setdefault(section, {})[key] = value
                logging.debug(f"Config value {section}.{key} taken from {env_name}")

    def section(self, name: str) -> dict[str, Any]:
        """Return a config section, empty when absent."""
        return self.data.get(name, {})


@lru_cache
def get_config(config_file: str = ConfigFile.DEVELOPMENT) -> Config:
    """Load and cache the configuration for ``config_file``."""
    return Config(config_file)
