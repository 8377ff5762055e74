"""
Configuration Manager - Settings and preferences.

Handles YAML/JSON configuration with environment variable overrides.
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml
from loguru import logger


def _parse_bool(value: str) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes", "y", "on"}


class ConfigManager:
    """
    Configuration manager for the contact book.

    Features:
    - YAML/JSON configuration files
    - Environment variable overrides
    - Change watchers
    - Default values
    """

    DEFAULT_CONFIG = {
        "app": {
            "name": "Contact Manager",
            "debug": False,
        },
        "storage": {
            "path": "contacts.json",
        },
        "ui": {
            "title": "Contact Manager",
            "width": 600,
            "height": 400,
        },
        "logging": {
            "level": "INFO",
            "dir": "logs",
        },
    }

    ENV_MAPPINGS = {
        "CONTACTBOOK_DEBUG": ("app.debug", _parse_bool),
        "CONTACTBOOK_DATA_FILE": ("storage.path", str),
        "CONTACTBOOK_LOG_LEVEL": ("logging.level", lambda x: x.strip().upper()),
    }

    def __init__(self, config_path: Optional[str] = None, create_if_missing: bool = True):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file
            create_if_missing: Write the defaults when the file does not exist
        """
        self._config_path = Path(config_path) if config_path else Path("config.yaml")
        self._create_if_missing = create_if_missing
        self._config: Dict[str, Any] = self._deep_copy(self.DEFAULT_CONFIG)
        self._watchers: List[Callable[[str, Any], None]] = []
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._config_path

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        """Load configuration from file."""
        self._config = self._deep_copy(self.DEFAULT_CONFIG)

        if self._config_path.exists():
            try:
                content = self._config_path.read_text(encoding="utf-8")

                if self._is_yaml:
                    file_config = yaml.safe_load(content) or {}
                else:
                    file_config = json.loads(content)

                if not isinstance(file_config, dict):
                    raise ValueError("top level must be a mapping")

                self._deep_merge(self._config, file_config)
                logger.info(f"Configuration loaded from {self._config_path}")

            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config: {e}, using defaults")
        elif self._create_if_missing:
            self.save()
            logger.info("Created default configuration file")

        self._apply_env_overrides()

        self._loaded = True

    def save(self) -> None:
        """Save configuration to file."""
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)

            if self._is_yaml:
                content = yaml.dump(self._config, default_flow_style=False, sort_keys=False)
            else:
                content = json.dumps(self._config, indent=2)

            self._config_path.write_text(content, encoding="utf-8")
            logger.debug(f"Configuration saved to {self._config_path}")

        except OSError as e:
            logger.error(f"Failed to save config: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-notation key (e.g., "storage.path")
            default: Default value if not found

        Returns:
            Configuration value
        """
        parts = key.split(".")
        value = self._config

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value.

        Args:
            key: Dot-notation key
            value: Value to set
        """
        parts = key.split(".")
        config = self._config

        for part in parts[:-1]:
            if not isinstance(config.get(part), dict):
                config[part] = {}
            config = config[part]

        config[parts[-1]] = value

        for watcher in self._watchers:
            try:
                watcher(key, value)
            except Exception as e:
                logger.warning(f"Config watcher error: {e}")

    def watch(self, callback: Callable[[str, Any], None]) -> None:
        """Register a configuration change watcher."""
        self._watchers.append(callback)

    def unwatch(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a watcher."""
        if callback in self._watchers:
            self._watchers.remove(callback)

    @property
    def _is_yaml(self) -> bool:
        return self._config_path.suffix in [".yaml", ".yml"]

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        for env_var, (config_key, converter) in self.ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value:
                self.set(config_key, converter(value))
                logger.debug(f"Applied env override: {env_var}")

    def _deep_merge(self, base: dict, override: dict) -> None:
        """Deep merge override into base dict."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _deep_copy(self, obj: Any) -> Any:
        """Deep copy a dictionary."""
        if isinstance(obj, dict):
            return {k: self._deep_copy(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._deep_copy(item) for item in obj]
        return obj

    @property
    def all(self) -> Dict[str, Any]:
        """Get all configuration."""
        return self._deep_copy(self._config)
