"""Configuration management for Roster.

This module handles loading and saving application configuration to/from
a JSON file. The config directory can be customized via CLI argument.

The backend base URL is the one required setting. It may come from the
config file, the ROSTER_BASE_URL environment variable, or an explicit
override (the --base-url flag), in increasing order of precedence.

CRITICAL: This module must have NO UI dependencies.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

__all__ = ["Config", "BASE_URL_ENV_VAR", "DEFAULT_TIMEOUT_SECONDS"]

BASE_URL_ENV_VAR = "ROSTER_BASE_URL"
DEFAULT_TIMEOUT_SECONDS = 10.0


class Config:
    """Manages application configuration stored in JSON format.

    Attributes:
        config_dir: Path to the configuration directory
        config_file: Path to config.json inside config_dir
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize configuration manager.

        Args:
            config_dir: Custom config directory path. If None, uses ~/.config/roster/
            environ: Environment mapping to read overrides from (default: os.environ)
        """
        if config_dir is None:
            config_dir = Path.home() / ".config" / "roster"
        self.config_dir = Path(config_dir)
        self.config_file = self.config_dir / "config.json"
        self._environ = os.environ if environ is None else environ
        self.config_data = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        """Load configuration from file. A missing file means an empty config."""
        if not self.config_file.exists():
            return {}
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Config file {self.config_file} is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.config_file} must contain a JSON object")
        return data

    def save_config(self) -> None:
        """Write the current configuration to file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(self.config_data, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self.config_data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value and save to file."""
        self.config_data[key] = value
        self.save_config()

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        return self.config_dir

    def get_base_url(self, override: Optional[str] = None) -> str:
        """Get the backend base URL.

        Args:
            override: Value that wins over file and environment (e.g. CLI flag)

        Returns:
            Base URL without trailing slash

        Raises:
            ConfigError: If no non-blank base URL is configured anywhere
        """
        for source, value in (
            ("override", override),
            (BASE_URL_ENV_VAR, self._environ.get(BASE_URL_ENV_VAR)),
            (str(self.config_file), self.get("base_url")),
        ):
            if value is None:
                continue
            if not isinstance(value, str) or not value.strip():
                logger.warning(f"Ignoring blank base URL from {source}")
                continue
            return value.strip().rstrip("/")
        raise ConfigError(
            "No backend base URL configured. Set 'base_url' in "
            f"{self.config_file}, export {BASE_URL_ENV_VAR}, or pass --base-url."
        )

    def get_timeout(self) -> float:
        """Get the HTTP request timeout in seconds."""
        value = self.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"timeout_seconds must be a number, got {value!r}") from None
        if timeout <= 0:
            raise ConfigError(f"timeout_seconds must be positive, got {timeout}")
        return timeout
