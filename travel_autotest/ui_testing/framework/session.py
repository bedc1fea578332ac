"""
================================================================================
Browser Session
================================================================================

Browser lifecycle management and the explicit session context.

A ``SessionContext`` names *where* an operation runs: the Playwright page
(tab) and the chain of iframes inside it. It is an immutable value; switching
tab or frame returns a new context instead of changing hidden driver state.

Usage:
    with BrowserSession(config) as session:
        ctx = session.open("https://www.agoda.com/")
        search_box.set_text(ctx, "Da Nang")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    FrameLocator,
    Locator,
    Page,
    Playwright,
    sync_playwright,
)

from .config_manager import ConfigManager, ConfigurationError, Timeouts


# Configured browser name -> Playwright engine
BROWSER_ENGINES: Dict[str, str] = {
    "chrome": "chromium",
    "chromium": "chromium",
    "edge": "chromium",
    "firefox": "firefox",
    "safari": "webkit",
    "webkit": "webkit",
}

DEFAULT_VIEWPORT: Dict[str, int] = {"width": 1920, "height": 1080}


@dataclass(frozen=True)
class SessionContext:
    """
    Immutable handle to the tab and frame an operation targets.

    Attributes:
        page: Playwright Page (one browser tab)
        timeouts: Timeout budget for waits started from this context
        frames: iframe selectors from the outermost to the innermost frame
    """
    page: Page
    timeouts: Timeouts = field(default_factory=Timeouts)
    frames: Tuple[str, ...] = ()

    def _scope(self):
        scope: Any = self.page
        for selector in self.frames:
            scope = scope.frame_locator(selector)
        return scope

    def locate(self, selector: str) -> Locator:
        """Resolve ``selector`` to a fresh single-element Locator."""
        return self._scope().locator(selector).first

    def locate_all(self, selector: str) -> Locator:
        """Resolve ``selector`` to a fresh multi-element Locator."""
        return self._scope().locator(selector)

    def frame_locator(self) -> Optional[FrameLocator]:
        """Innermost FrameLocator, or None when on the main document."""
        if not self.frames:
            return None
        return self._scope()

    def in_frame(self, selector: str) -> "SessionContext":
        return replace(self, frames=self.frames + (selector,))

    def parent_frame(self) -> "SessionContext":
        return replace(self, frames=self.frames[:-1])

    def main_frame(self) -> "SessionContext":
        return replace(self, frames=())

    def with_page(self, page: Page) -> "SessionContext":
        return replace(self, page=page, frames=())

    def with_timeouts(self, **overrides: int) -> "SessionContext":
        return replace(self, timeouts=replace(self.timeouts, **overrides))

    def __str__(self) -> str:
        frames = " > ".join(self.frames) if self.frames else "main"
        return f"SessionContext[{self.page.url} | {frames}]"


def parse_viewport(size: str) -> Dict[str, int]:
    """Parse ``"1920x1080"`` into a Playwright viewport dict."""
    try:
        width, height = (int(part) for part in size.lower().split("x", 1))
        if width <= 0 or height <= 0:
            raise ValueError(size)
        return {"width": width, "height": height}
    except ValueError:
        logger.warning(f"Invalid browser size '{size}', using {DEFAULT_VIEWPORT}")
        return dict(DEFAULT_VIEWPORT)


def resolve_engine(browser_name: str) -> str:
    """
    Map a configured browser name to a Playwright engine.

    Raises:
        ConfigurationError: For unsupported browser names
    """
    engine = BROWSER_ENGINES.get(browser_name.strip().lower())
    if engine is None:
        raise ConfigurationError(
            f"Unsupported browser '{browser_name}'. "
            f"Expected one of: {', '.join(sorted(BROWSER_ENGINES))}"
        )
    return engine


class BrowserSession:
    """
    Owns Playwright, one browser and one browser context.

    Features:
        - Browser selection and headless mode from configuration
        - Local launch or connection to a remote Playwright server
        - Configured timeouts applied to every page
        - Context manager support

    Usage:
        with BrowserSession(config) as session:
            ctx = session.open(config.agoda_url)
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "args": [
            "--ignore-certificate-errors",
            "--disable-blink-features=AutomationControlled",
        ],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
        "accept_downloads": True,
    }

    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        browser_name: Optional[str] = None,
        headless: Optional[bool] = None,
        timeouts: Optional[Timeouts] = None,
        **context_options: Any,
    ):
        """
        Initialize browser session.

        Args:
            config: Configuration source (browser, size, headless, timeouts)
            browser_name: Override configured browser name
            headless: Override configured headless flag
            timeouts: Override configured timeouts
            **context_options: Extra Playwright context options
        """
        self.config = config
        self.browser_name = browser_name or (config.browser if config else "chrome")
        self.engine = resolve_engine(self.browser_name)
        if headless is None:
            headless = config.headless if config else True
        self.headless = headless
        self.timeouts = timeouts or (config.timeouts() if config else Timeouts())
        self.viewport = parse_viewport(config.browser_size) if config else dict(DEFAULT_VIEWPORT)
        self.remote_url = config.remote_grid_url if config else ""
        self.context_options = context_options

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    def __enter__(self) -> "BrowserSession":
        """Context manager entry - start browser."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close browser."""
        self.close()

    def start(self) -> None:
        """Start Playwright, launch (or connect to) the browser and open a context."""
        self._playwright = sync_playwright().start()
        launcher = getattr(self._playwright, self.engine)

        if self.remote_url:
            logger.info(f"Connecting to remote browser: {self.remote_url}")
            self._browser = launcher.connect(self.remote_url)
        else:
            launch_options = {
                **self.DEFAULT_LAUNCH_OPTIONS,
                "headless": self.headless,
            }
            if self.engine != "chromium":
                launch_options.pop("args", None)
            self._browser = launcher.launch(**launch_options)

        context_options = {
            **self.DEFAULT_CONTEXT_OPTIONS,
            "viewport": self.viewport,
            **self.context_options,
        }
        self._context = self._browser.new_context(**context_options)
        self._context.set_default_timeout(self.timeouts.element_ms)
        self._context.set_default_navigation_timeout(self.timeouts.page_load_ms)

        logger.debug(
            f"Browser started: {self.browser_name} ({self.engine}, "
            f"headless={self.headless}, viewport={self.viewport})"
        )

    def close(self) -> None:
        """Close the context, the browser and Playwright."""
        if self._context:
            self._context.close()
            self._context = None

        if self._browser:
            self._browser.close()
            self._browser = None

        if self._playwright:
            self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    @property
    def context(self) -> BrowserContext:
        if self._context is None:
            raise RuntimeError("Browser not started. Call start() first.")
        return self._context

    @property
    def pages(self) -> List[Page]:
        return list(self.context.pages)

    def new_page(self) -> SessionContext:
        """Open a new tab and return a context targeting it."""
        page = self.context.new_page()
        return SessionContext(page=page, timeouts=self.timeouts)

    def open(self, url: str) -> SessionContext:
        """
        Navigate to ``url`` in the first tab (opened on demand).

        Args:
            url: Absolute URL

        Returns:
            Context targeting that tab
        """
        pages = self.pages
        page = pages[0] if pages else self.context.new_page()
        logger.info(f"Opening: {url}")
        page.goto(url, timeout=self.timeouts.page_load_ms)
        return SessionContext(page=page, timeouts=self.timeouts)


__all__ = [
    "SessionContext",
    "BrowserSession",
    "BROWSER_ENGINES",
    "parse_viewport",
    "resolve_engine",
]
