"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based (sync API) UI automation framework for travel-booking sites.

Components:
    - session: Browser lifecycle and the explicit SessionContext
    - element / element_types: Named elements with capabilities
    - widgets: Operations of the specialized element kinds
    - wait: Bounded polling and stale-element retry
    - fallback: Best-effort strategy chains with named outcomes
    - locator_repository: JSON element definitions
    - page_base: Base page object
    - config_manager: YAML configuration with environment overrides

Author: Automation Team
License: MIT
================================================================================
"""

from .config_manager import ConfigManager, ConfigurationError, Timeouts, get_config
from .element import Capability, Element
from .errors import (
    CapabilityError,
    ElementError,
    ElementNotFoundError,
    StaleElementError,
    WaitTimeoutError,
)
from .fallback import FallbackChain, FallbackOutcome, Strategy
from .locator_repository import LocatorRepository
from .page_base import BasePage
from .session import BrowserSession, SessionContext

__all__ = [
    "BasePage",
    "BrowserSession",
    "Capability",
    "CapabilityError",
    "ConfigManager",
    "ConfigurationError",
    "Element",
    "ElementError",
    "ElementNotFoundError",
    "FallbackChain",
    "FallbackOutcome",
    "LocatorRepository",
    "SessionContext",
    "StaleElementError",
    "Strategy",
    "Timeouts",
    "WaitTimeoutError",
    "get_config",
]
