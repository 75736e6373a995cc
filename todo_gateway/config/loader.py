"""
Configuration loader for todo_gateway.

This module handles loading configuration from configuration files and
environment variables.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..exceptions import ConfigurationError
from .models import AppConfig


class ConfigLoader:
    """Configuration loader with support for files and environment variables."""

    def __init__(self) -> None:
        """Initialize configuration loader."""
        self.config_paths = [
            Path("todo_gateway.yaml"),
            Path("todo_gateway.yml"),
            Path("todo_gateway.json"),
            Path("config/todo_gateway.yaml"),
            Path("config/todo_gateway.yml"),
            Path("config/todo_gateway.json"),
        ]

        # Environment variable prefix
        self.env_prefix = "TODO_GATEWAY_"

    def load_config(self, config_file: Optional[Union[str, Path]] = None) -> AppConfig:
        """
        Load configuration from all available sources.

        Later sources win: defaults, then the config file, then environment
        variables.

        Args:
            config_file: Specific config file to load

        Returns:
            AppConfig instance with merged configuration
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_from_file(config_file)
        if file_config:
            config_data.update(file_config)

        env_config = self._load_from_environment()
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        try:
            return AppConfig(**config_data)
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigurationError(f"Config file not found: {config_path}")
            return self._parse_config_file(config_path)

        for config_path in self.config_paths:
            if config_path.exists():
                return self._parse_config_file(config_path)

        return None

    def _parse_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Parse configuration file based on extension."""
        suffix = config_path.suffix.lower()
        if suffix not in (".yaml", ".yml", ".json"):
            raise ConfigurationError(
                f"Unsupported config file format: {config_path.suffix}"
            )
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    return json.load(f) or {}
                return yaml.safe_load(f) or {}
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse config file {config_path}: {e}")

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config: Dict[str, Any] = {}

        env_mappings = {
            # Gateway
            f"{self.env_prefix}HOST": ("gateway", "host"),
            f"{self.env_prefix}PORT": ("gateway", "port"),
            # Upstream
            f"{self.env_prefix}UPSTREAM_URL": ("upstream", "base_url"),
            f"{self.env_prefix}UPSTREAM_TIMEOUT": ("upstream", "timeout"),
            # Client
            f"{self.env_prefix}ENDPOINT": ("client", "endpoint"),
            f"{self.env_prefix}CLIENT_TIMEOUT": ("client", "timeout"),
            # View
            f"{self.env_prefix}USE_TEMPLATE": ("view", "use_template"),
            f"{self.env_prefix}FULL_RELOAD_ON_TOGGLE": ("view", "full_reload_on_toggle"),
            # Logging
            f"{self.env_prefix}LOG_LEVEL": ("logging", "level"),
            f"{self.env_prefix}LOG_FILE": ("logging", "file_path"),
            f"{self.env_prefix}LOG_FORMAT": ("logging", "format"),
        }

        for env_var, config_path in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                self._set_nested(config, config_path, self._convert_env_value(value))

        # PLAYGROUND_PORT and GRAPHQL_PORT yield to their prefixed counterparts
        playground_port = os.getenv("PLAYGROUND_PORT")
        if playground_port and f"{self.env_prefix}PORT" not in os.environ:
            self._set_nested(
                config, ("gateway", "port"), self._convert_env_value(playground_port)
            )

        graphql_port = os.getenv("GRAPHQL_PORT")
        if graphql_port and f"{self.env_prefix}UPSTREAM_URL" not in os.environ:
            self._set_nested(
                config, ("upstream", "base_url"), f"http://localhost:{graphql_port}/"
            )

        return config

    @staticmethod
    def _set_nested(config: Dict[str, Any], path: tuple, value: Any) -> None:
        current = config
        for key in path[:-1]:
            current = current.setdefault(key, {})
        current[path[-1]] = value

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type."""
        lower = value.lower()
        if lower in ("true", "yes", "on"):
            return True
        if lower in ("false", "no", "off"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def _deep_merge(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(config_file: Optional[Union[str, Path]] = None) -> AppConfig:
    """Load configuration with the default loader."""
    return ConfigLoader().load_config(config_file)
