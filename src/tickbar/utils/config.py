"""Configuration management."""

import json
import logging
import os
from typing import Dict, Any, Optional
from pathlib import Path

# Configure logging
logger = logging.getLogger(__name__)

ENV_PREFIX = "TICKBAR_"


class ConfigError(Exception):
    """Base exception for configuration problems."""
    pass


class InvalidConfigValueError(ConfigError):
    """Raised when a configuration value has the wrong type or range."""
    pass


class Config:
    """Renderer defaults for programs embedding a progress bar.

    Values come from, in order of precedence: environment variables
    (``TICKBAR_BAR_WIDTH`` and friends), the JSON config file, built-in
    defaults.
    """

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to configuration file
        """
        self.config_file = Path(config_file) if config_file else Path("tickbar.json")
        self._config: Dict[str, Any] = self._get_default_config()
        self._load_config()
        self._load_environment()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "bar_width": 40,
            "min_refresh_interval": 0.1,
            "prefix": ""
        }

    def _load_config(self) -> None:
        """Load configuration from file."""
        if not self.config_file.exists():
            return

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config file {self.config_file}: {e}")
            return

        if not isinstance(data, dict):
            logger.warning(f"Ignoring config file {self.config_file}: expected a JSON object")
            return

        self._config.update(data)
        logger.info(f"Configuration loaded from {self.config_file}")

    def _load_environment(self) -> None:
        """Apply TICKBAR_* environment overrides."""
        for key in self._get_default_config():
            value = os.getenv(ENV_PREFIX + key.upper())
            if value is not None:
                self._config[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self._config[key] = value

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._config)

    def save(self) -> None:
        """Save configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2)

    def renderer_options(self) -> Dict[str, Any]:
        """Validated keyword arguments for ProgressRenderer.

        Returns:
            Dictionary with bar_width, min_refresh_interval and prefix

        Raises:
            InvalidConfigValueError: If a value has the wrong type or range
        """
        return {
            "bar_width": _coerce_bar_width(self._config.get("bar_width")),
            "min_refresh_interval": _coerce_interval(self._config.get("min_refresh_interval")),
            "prefix": _coerce_prefix(self._config.get("prefix"))
        }


def _coerce_bar_width(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidConfigValueError(f"'bar_width' should be an integer, got {value!r}")
    try:
        width = int(value)
    except (TypeError, ValueError):
        raise InvalidConfigValueError(f"'bar_width' should be an integer, got {value!r}")
    if isinstance(value, float) and value != width:
        raise InvalidConfigValueError(f"'bar_width' should be an integer, got {value!r}")
    if width < 1:
        raise InvalidConfigValueError(f"'bar_width' should be at least 1, got {width}")
    return width


def _coerce_interval(value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidConfigValueError(f"'min_refresh_interval' should be a number, got {value!r}")
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise InvalidConfigValueError(f"'min_refresh_interval' should be a number, got {value!r}")
    if seconds < 0:
        raise InvalidConfigValueError(f"'min_refresh_interval' should not be negative, got {seconds}")
    return seconds


def _coerce_prefix(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidConfigValueError(f"'prefix' should be a string, got {value!r}")
    return value
