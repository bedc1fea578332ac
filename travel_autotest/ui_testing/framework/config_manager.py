"""
================================================================================
Configuration Manager
================================================================================

YAML-based run configuration with environment variable override support.

Features:
    - Single YAML file read once per manager (config/config.yaml)
    - Environment variable override (BROWSER_NAME overrides browser.name)
    - Typed getters with documented defaults
    - Missing file is fatal, missing keys fall back with a warning

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file path (repository root)
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "config.yaml"

# Environment variable pointing at an alternative configuration file
CONFIG_PATH_ENV = "TRAVEL_AUTOTEST_CONFIG"

# Documented fallbacks used when a key is absent
DEFAULTS: Dict[str, Any] = {
    "browser.name": "chrome",
    "browser.size": "1920x1080",
    "browser.headless": False,
    "browser.remote_grid_url": "",
    "timeouts.page_load": 20000,
    "timeouts.element": 10000,
    "timeouts.default": 5000,
    "urls.base": "http://localhost",
    "urls.agoda": "https://www.agoda.com/",
    "urls.vietjet": "https://www.vietjetair.com/",
}

_MISSING = object()


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


@dataclass(frozen=True)
class Timeouts:
    """
    Timeout budget handed to every session context.

    Attributes:
        element_ms: Element precondition waits (visible, clickable, ...)
        page_load_ms: Navigation and page load-state waits
        default_ms: Short generic waits (page workflows, probes)
        poll_interval_ms: Sleep between two probes of a spin-poll
    """
    element_ms: int = 10000
    page_load_ms: int = 20000
    default_ms: int = 5000
    poll_interval_ms: int = 100


class ConfigManager:
    """
    Read-only configuration loaded from YAML.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (TIMEOUTS_ELEMENT)
        2. YAML configuration file
        3. DEFAULTS

    Usage:
        >>> config = ConfigManager()
        >>> config.element_timeout
        10000
        >>> config.get("urls.agoda")
        'https://www.agoda.com/'
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Load configuration.

        Args:
            config_path: Path to YAML configuration file. Falls back to
                $TRAVEL_AUTOTEST_CONFIG, then DEFAULT_CONFIG_PATH.

        Raises:
            ConfigurationError: If the file is missing or is not valid YAML
        """
        env_path = os.environ.get(CONFIG_PATH_ENV)
        self._config_path = Path(config_path or env_path or DEFAULT_CONFIG_PATH)
        self._config: Dict[str, Any] = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.error(f"Configuration file not found: {self._config_path}")
            raise ConfigurationError(
                f"Configuration file not found: {self._config_path}"
            )

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping: {self._config_path}"
            )

        logger.debug(f"Loaded configuration from: {self._config_path}")
        return data

    @property
    def path(self) -> Path:
        return self._config_path

    def _lookup(self, key: str) -> Any:
        """Return the raw value for ``key`` or the _MISSING sentinel."""
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return _MISSING
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key: Dot-notation path (e.g., "timeouts.element")
            default: Default value if key not found. Uses DEFAULTS when omitted.

        Returns:
            Configuration value or default
        """
        if default is None:
            default = DEFAULTS.get(key)

        value = self._lookup(key)
        if value is _MISSING or value is None:
            logger.warning(f"Config key '{key}' not found, using default: {default!r}")
            return default
        return value

    def get_int(self, key: str, default: Optional[int] = None) -> int:
        """Get an integer value; invalid values log an error and use the default."""
        if default is None:
            default = DEFAULTS.get(key)
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.error(f"Invalid integer for '{key}': {value!r}, using default: {default}")
            return default

    def get_bool(self, key: str, default: Optional[bool] = None) -> bool:
        """Get a boolean value; strings like "true"/"1"/"yes"/"on" are truthy."""
        if default is None:
            default = DEFAULTS.get(key)
        value = self.get(key, default)
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("true", "1", "yes", "on")

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "browser", "urls")

        Returns:
            Section dictionary or empty dict if not found
        """
        value = self._config.get(section, {})
        return dict(value) if isinstance(value, dict) else {}

    # =========================================================================
    # Typed getters
    # =========================================================================

    @property
    def browser(self) -> str:
        return str(self.get("browser.name")).strip().lower()

    @property
    def browser_size(self) -> str:
        return str(self.get("browser.size"))

    @property
    def headless(self) -> bool:
        return self.get_bool("browser.headless")

    @property
    def remote_grid_url(self) -> str:
        return str(self.get("browser.remote_grid_url") or "")

    @property
    def page_load_timeout(self) -> int:
        return self.get_int("timeouts.page_load")

    @property
    def element_timeout(self) -> int:
        return self.get_int("timeouts.element")

    @property
    def timeout(self) -> int:
        return self.get_int("timeouts.default")

    @property
    def base_url(self) -> str:
        return str(self.get("urls.base"))

    @property
    def agoda_url(self) -> str:
        return str(self.get("urls.agoda"))

    @property
    def vietjet_url(self) -> str:
        return str(self.get("urls.vietjet"))

    def timeouts(self) -> Timeouts:
        """Build the Timeouts value used by session contexts."""
        return Timeouts(
            element_ms=self.element_timeout,
            page_load_ms=self.page_load_timeout,
            default_ms=self.timeout,
        )


# Process-wide instance, created on first use
_config: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """
    Return the process-wide configuration, loading it on first call.

    Raises:
        ConfigurationError: If the configuration file is missing
    """
    global _config
    if _config is None:
        _config = ConfigManager()
    return _config


def reset_config() -> None:
    """
    Drop the process-wide instance.

    Useful for testing when configuration needs to be reloaded
    with different settings.
    """
    global _config
    _config = None


__all__ = [
    "ConfigManager",
    "ConfigurationError",
    "Timeouts",
    "DEFAULTS",
    "get_config",
    "reset_config",
]
