"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation and URL handling
    - Page-load waiting through Playwright load states
    - Screenshot capture attached to Allure
    - Frame and tab context switching
    - Element creation from JSON locator files

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urljoin

import allure
from loguru import logger
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .config_manager import get_config
from .element import Element
from .locator_repository import LocatorRepository, PageLocators
from .reporting import attach_png
from .session import SessionContext


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


class BasePage:
    """
    Base class for all page objects.

    A page object holds a SessionContext and the elements of one page. When
    a workflow opens a new tab or enters a frame, the page follows it through
    :meth:`use_context` instead of mutating shared driver state.

    Usage:
        class AgodaHomePage(BasePage):
            LOCATOR_FILE = "agoda/agoda_locators.json"

            def click_search(self):
                self.element("searchButton").click(self.ctx)
    """

    # Override in subclasses using a JSON locator file
    LOCATOR_FILE: str = ""

    def __init__(
        self,
        ctx: SessionContext,
        name: Optional[str] = None,
        base_url: Optional[str] = None,
        repository: Optional[LocatorRepository] = None,
    ):
        """
        Initialize page object.

        Args:
            ctx: Session context the page operates in
            name: Display name (defaults to the class name)
            base_url: Base URL relative paths are opened against
                (defaults to the configured urls.base)
            repository: Locator repository for LOCATOR_FILE lookups
        """
        self.ctx = ctx
        self.name = name or type(self).__name__
        self.base_url = get_config().base_url if base_url is None else base_url
        self.repository = repository or LocatorRepository()
        logger.debug(f"{self} - initializing page object")

    def __str__(self) -> str:
        return f"Page[{self.name}]"

    # =========================================================================
    # Locators
    # =========================================================================

    @property
    def locators(self) -> PageLocators:
        """Element definitions of this page from LOCATOR_FILE."""
        return self.repository.page_locators(self.LOCATOR_FILE, type(self).__name__)

    def element(self, element_name: str) -> Element:
        """Element defined under ``element_name`` in this page's locator section."""
        return self.repository.create_element(self.locators, element_name)

    def locator(self, element_name: str) -> str:
        return self.repository.get_locator(self.locators, element_name)

    # =========================================================================
    # Navigation
    # =========================================================================

    def open_page(self, path_or_url: str = "") -> "BasePage":
        """
        Navigate to an absolute URL, or to a path under ``base_url``.

        Raises:
            ValueError: For a relative path without a base URL
        """
        if re.match(r"^[a-z][a-z0-9+.-]*://", path_or_url, re.IGNORECASE):
            url = path_or_url
        elif self.base_url:
            url = urljoin(self.base_url, path_or_url)
        else:
            raise ValueError(f"{self}: cannot open relative path '{path_or_url}' without a base URL")

        with allure.step(f"Open page: {url}"):
            logger.info(f"{self} - opening page: {url}")
            try:
                self.ctx.page.goto(url, timeout=self.ctx.timeouts.page_load_ms)
            except Exception as e:
                logger.error(f"{self} - failed to open page {url}: {e}")
                raise
        self.ctx = self.ctx.main_frame()
        logger.debug(f"{self} - page opened: {url}")
        return self

    def get_page_title(self) -> str:
        title = self.ctx.page.title()
        logger.debug(f"{self} - page title: {title}")
        return title

    def get_current_url(self) -> str:
        return self.ctx.page.url

    def wait_for_page_to_load(self, state: str = "load") -> bool:
        """
        Wait for the page to reach a Playwright load state.

        Args:
            state: 'load', 'domcontentloaded' or 'networkidle'

        Returns:
            True when loaded; False (with a warning) when the page-load
            timeout passed first
        """
        logger.debug(f"{self} - waiting for page to load completely")
        try:
            self.ctx.page.wait_for_load_state(state, timeout=self.ctx.timeouts.page_load_ms)
        except PlaywrightTimeoutError:
            logger.warning(f"{self} - page load timed out after {self.ctx.timeouts.page_load_ms}ms")
            return False
        logger.debug(f"{self} - page loaded completely")
        return True

    def refresh_page(self) -> "BasePage":
        with allure.step("Refresh page"):
            logger.info(f"{self} - refreshing page")
            self.ctx.page.reload(timeout=self.ctx.timeouts.page_load_ms)
            self.ctx = self.ctx.main_frame()
            self.wait_for_page_to_load()
        return self

    def go_back(self) -> "BasePage":
        with allure.step("Navigate back"):
            logger.info(f"{self} - navigating back")
            self.ctx.page.go_back(timeout=self.ctx.timeouts.page_load_ms)
            self.ctx = self.ctx.main_frame()
            self.wait_for_page_to_load()
        return self

    # =========================================================================
    # Context switching
    # =========================================================================

    def use_context(self, ctx: SessionContext) -> "BasePage":
        """Operate in ``ctx`` from now on (e.g. a tab returned by browser_utils)."""
        logger.debug(f"{self} - switching to {ctx}")
        self.ctx = ctx
        return self

    def switch_to_frame(self, selector: str) -> "BasePage":
        logger.info(f"{self} - switching to frame: {selector}")
        self.ctx = self.ctx.in_frame(selector)
        return self

    def switch_to_default_content(self) -> "BasePage":
        logger.info(f"{self} - switching to default content")
        self.ctx = self.ctx.main_frame()
        return self

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    def execute_javascript(self, script: str, arg: Any = None) -> Any:
        """
        Evaluate ``script`` in the page.

        Args:
            script: JavaScript expression or function source
            arg: Optional argument passed to the function
        """
        logger.debug(f"{self} - executing JavaScript: {script[:80]}")
        return self.ctx.page.evaluate(script, arg)

    def take_screenshot(
        self,
        name: str = "screenshot",
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        self.ctx.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            attach_png(filepath, name=name)

        logger.debug(f"{self} - screenshot saved: {filepath}")
        return filepath


__all__ = ["BasePage", "SCREENSHOT_DIR"]
