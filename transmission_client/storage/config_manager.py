"""
Manages loading and saving of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from transmission_client.exceptions import ConfigurationError
from transmission_client.models.config import ClientConfig

log = logging.getLogger(__name__)

SECTION = "transmission"


class ConfigManager:
    """Handles all operations related to the client's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = Path(config_file_path)
        # URLs may contain percent-encoded characters
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, overrides: dict[str, Any] | None = None) -> ClientConfig:
        """
        Loads configuration from the INI file, applies overrides, and validates it.

        Args:
            overrides: Values taking precedence over the file, e.g. from the caller.

        Returns:
            A validated ClientConfig object.

        Raises:
            ConfigurationError: If the config file is missing, invalid, or validation
            fails.
        """
        if not self.config_file_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found at '{self.config_file_path}'."
            )

        try:
            self._parser.read(self.config_file_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

        if not self._parser.has_section(SECTION):
            raise ConfigurationError(
                f"Configuration file '{self.config_file_path}' has no "
                f"[{SECTION}] section."
            )

        config_from_file = self._get_config_as_dict()

        if overrides:
            config_from_file.update(overrides)

        try:
            return ClientConfig(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_config(self, config: ClientConfig) -> None:
        """
        Writes the configuration to the INI file, replacing its [transmission] section.

        Args:
            config: The configuration to save.
        """
        parser = configparser.ConfigParser(interpolation=None)
        if self.config_file_path.is_file():
            parser.read(self.config_file_path, encoding="utf-8")
        parser[SECTION] = {}

        for key in sorted(ClientConfig.get_ini_keys()):
            value = getattr(config, key)
            if isinstance(value, bool):
                parser[SECTION][key] = "true" if value else "false"
            elif value is not None:
                parser[SECTION][key] = str(value)

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                parser.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e
        log.debug(f"Configuration saved to {self.config_file_path}")

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the [transmission] section of the INI file into a dictionary."""
        section = self._parser[SECTION]
        try:
            config = {
                "verbose": section.getboolean("verbose", False),
                "timeout": section.getfloat("timeout", None),
            }
        except ValueError as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e
        if "base_url" in section:
            config["base_url"] = section["base_url"]
        if "proxy_url" in section:
            config["proxy_url"] = section["proxy_url"]
        return config
