# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Configuration loading and validation for NextScope."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from nextscope.errors import NextScopeError
from nextscope.logging_setup import resolve_level
from nextscope.models import PluginConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".nextscope.yml"

PLUGIN_SECTION_KEYS = ("enabled", "priority", "dependencies", "options")


class ConfigurationError(NextScopeError):
    """Raised when configuration validation fails critically."""

    pass


class Config:
    """Configuration for the NextScope extraction engine.

    Loads configuration from .nextscope.yml with validation and defaults.
    """

    DEFAULTS: Dict[str, Any] = {
        "cache_ttl_seconds": 300,
        "log_level": "INFO",
        "max_file_size_kb": 1024,
        "batch_size": 10,
        "parallel": True,
        "include_node_modules": False,
        "exclude_patterns": [],
        "translation_functions": ["t", "translate", "$t", "i18n.t", "i18next.t"],
        "min_string_length": 3,
        # Per-plugin overrides: {name: {enabled, priority, dependencies, options}}
        "plugins": {},
    }

    def __init__(self, config_path: Optional[Path] = None, must_exist: bool = False):
        """Initialize configuration.

        Args:
            config_path: Path to configuration file. If None, uses
                .nextscope.yml in the current directory.
            must_exist: Raise instead of falling back to defaults when the
                file is absent (used for paths the user named explicitly).

        Raises:
            ConfigurationError: If must_exist is set and the file does not exist.
        """
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILE_NAME

        self.config_path = Path(config_path)
        if must_exist and not self.config_path.is_file():
            raise ConfigurationError(f"Configuration file not found: {self.config_path}")

        self._config: Dict[str, Any] = {}
        self._load_config()

    @classmethod
    def for_project(cls, project_path: Path) -> "Config":
        """Load .nextscope.yml from a project root, defaults if absent."""
        return cls(Path(project_path) / CONFIG_FILE_NAME)

    def _defaults(self) -> Dict[str, Any]:
        return {
            key: (value.copy() if isinstance(value, (list, dict)) else value)
            for key, value in self.DEFAULTS.items()
        }

    def _load_config(self) -> None:
        """Load and validate configuration from file."""
        if not self.config_path.exists():
            logger.info(f"Configuration file not found at {self.config_path}, using defaults")
            self._config = self._defaults()
            return

        try:
            with open(self.config_path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f)

            if loaded_config is None:
                logger.warning("Configuration file is empty, using defaults")
                self._config = self._defaults()
                return

            if not isinstance(loaded_config, dict):
                logger.warning(
                    f"Configuration file must contain a YAML dictionary, "
                    f"got {type(loaded_config)}, using defaults"
                )
                self._config = self._defaults()
                return

            # Start with defaults and override with loaded values
            self._config = self._defaults()
            self._validate_and_merge(loaded_config)

        except yaml.YAMLError as e:
            logger.warning(
                f"Error parsing configuration file {self.config_path}: {e}, using defaults"
            )
            self._config = self._defaults()
        except OSError as e:
            logger.warning(
                f"Error reading configuration file {self.config_path}: {e}, using defaults"
            )
            self._config = self._defaults()

    def _validate_and_merge(self, loaded_config: Dict[str, Any]) -> None:
        """Validate loaded configuration and merge with defaults.

        Invalid parameters are logged as warnings and defaults are used.
        """
        for key, value in loaded_config.items():
            if key not in self.DEFAULTS:
                logger.warning(f"Unknown configuration parameter '{key}', ignoring")
                continue

            if not self._validate_parameter(key, value):
                logger.warning(
                    f"Invalid value for '{key}': {value}, using default {self.DEFAULTS[key]}"
                )
                continue

            self._config[key] = value

    def _validate_parameter(self, key: str, value: Any) -> bool:
        """Validate a configuration parameter.

        Returns:
            True if valid, False if invalid
        """
        # bool is an int subclass, keep the two apart
        if isinstance(value, bool) != isinstance(self.DEFAULTS[key], bool):
            return False

        if key == "cache_ttl_seconds":
            return isinstance(value, (int, float)) and value > 0

        expected_type = type(self.DEFAULTS[key])
        if not isinstance(value, expected_type):
            return False

        if key in ("max_file_size_kb", "batch_size", "min_string_length"):
            return value > 0
        elif key == "log_level":
            try:
                resolve_level(value)
            except ValueError:
                return False
            return True
        elif key == "exclude_patterns":
            return all(isinstance(p, str) for p in value)
        elif key == "translation_functions":
            return bool(value) and all(isinstance(f, str) and f for f in value)
        elif key == "plugins":
            return all(
                isinstance(name, str) and self._validate_plugin_section(name, section)
                for name, section in value.items()
            )

        return True

    def _validate_plugin_section(self, name: str, section: Any) -> bool:
        if not isinstance(section, dict):
            return False

        for key, value in section.items():
            if key not in PLUGIN_SECTION_KEYS:
                logger.warning(f"Unknown setting '{key}' for plugin '{name}', ignoring")
                continue
            if key == "enabled" and not isinstance(value, bool):
                return False
            if key == "priority" and (isinstance(value, bool) or not isinstance(value, int)):
                return False
            if key == "dependencies" and not (
                isinstance(value, list) and all(isinstance(d, str) for d in value)
            ):
                return False
            if key == "options" and not isinstance(value, dict):
                return False
        return True

    def plugin_section(self, name: str) -> Dict[str, Any]:
        """Raw per-plugin overrides, empty if the plugin is not configured."""
        section = self.plugins.get(name, {})
        return {key: section[key] for key in PLUGIN_SECTION_KEYS if key in section}

    def apply_to_plugin(self, name: str, plugin_config: PluginConfig) -> PluginConfig:
        """Return plugin_config with this file's overrides for plugin `name` applied.

        Options are merged key by key; everything else is replaced.
        """
        section = self.plugin_section(name)
        if not section:
            return plugin_config

        options = dict(plugin_config.options)
        options.update(section.get("options", {}))
        return PluginConfig(
            enabled=section.get("enabled", plugin_config.enabled),
            priority=section.get("priority", plugin_config.priority),
            dependencies=list(section.get("dependencies", plugin_config.dependencies)),
            options=options,
        )

    # Property accessors for all configuration values
    @property
    def cache_ttl_seconds(self) -> float:
        """Lifetime of parse-cache entries in seconds."""
        value = self._config["cache_ttl_seconds"]
        assert isinstance(value, (int, float))
        return float(value)

    @property
    def log_level(self) -> str:
        """Level name for the context logger."""
        value = self._config["log_level"]
        assert isinstance(value, str)
        return value.upper()

    @property
    def max_file_size_kb(self) -> int:
        """Files larger than this are skipped by extractors."""
        value = self._config["max_file_size_kb"]
        assert isinstance(value, int)
        return value

    @property
    def batch_size(self) -> int:
        """Number of files processed per batch."""
        value = self._config["batch_size"]
        assert isinstance(value, int)
        return value

    @property
    def parallel(self) -> bool:
        """Whether files within a batch are processed concurrently."""
        value = self._config["parallel"]
        assert isinstance(value, bool)
        return value

    @property
    def include_node_modules(self) -> bool:
        """Whether files under node_modules are processed."""
        value = self._config["include_node_modules"]
        assert isinstance(value, bool)
        return value

    @property
    def exclude_patterns(self) -> List[str]:
        """Glob patterns excluded in addition to each extractor's defaults."""
        value = self._config["exclude_patterns"]
        assert isinstance(value, list)
        return value

    @property
    def translation_functions(self) -> List[str]:
        """Callee names treated as translation functions."""
        value = self._config["translation_functions"]
        assert isinstance(value, list)
        return value

    @property
    def min_string_length(self) -> int:
        """Shortest string the i18n extractor reports."""
        value = self._config["min_string_length"]
        assert isinstance(value, int)
        return value

    @property
    def plugins(self) -> Dict[str, Dict[str, Any]]:
        """Per-plugin overrides keyed by plugin name."""
        value = self._config["plugins"]
        assert isinstance(value, dict)
        return value
