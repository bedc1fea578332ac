"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures driving a real browser through the sync Playwright API.

Key Features:
- One browser per test session, one fresh tab per test
- Local HTML fixtures injected with ``page.set_content`` (no network)
- Screenshot attached to Allure when a test fails
- Whole suite skipped when no browser can be launched

================================================================================
"""

from typing import Callable, Generator

import pytest
from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from travel_autotest.ui_testing.framework.config_manager import get_config
from travel_autotest.ui_testing.framework.logging_setup import init_logger
from travel_autotest.ui_testing.framework.reporting import attach_html, attach_png, attach_text
from travel_autotest.ui_testing.framework.session import BrowserSession, SessionContext


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def browser_session() -> Generator[BrowserSession, None, None]:
    """
    Session-scoped browser.

    Provides a single browser for all UI tests in the session, reducing
    browser launch overhead.
    """
    config = get_config()
    init_logger(config=config)

    session = BrowserSession(config)
    try:
        session.start()
    except PlaywrightError as e:
        session.close()
        pytest.skip(f"Browser could not be launched ({session.browser_name}): {str(e).splitlines()[0]}")

    yield session
    session.close()


@pytest.fixture
def ctx(browser_session: BrowserSession) -> Generator[SessionContext, None, None]:
    """
    Function-scoped tab.

    Opens a new tab for each test and closes every tab it left open.
    """
    ctx = browser_session.new_page()
    yield ctx
    for page in browser_session.pages:
        page.close()


@pytest.fixture
def html_page(ctx: SessionContext) -> Callable[[str], SessionContext]:
    """
    Load an HTML document into the test's tab.

    Usage:
        ctx = html_page("<select id='dropdown'>...</select>")
    """
    def load(html: str) -> SessionContext:
        ctx.page.set_content(html, timeout=ctx.timeouts.page_load_ms)
        return ctx

    return load


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Hook to capture screenshots on test failure.

    Attaches a full-page screenshot of the test's tab, its URL and its page
    source to the Allure report.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when != "call" or not report.failed:
        return

    ctx = getattr(item, "funcargs", {}).get("ctx")
    if ctx is None:
        return

    try:
        attach_png(ctx.page.screenshot(full_page=True), name="failure_screenshot")
        attach_text(ctx.page.url, name="failure_url")
        attach_html(ctx.page.content(), name="failure_page_source")
    except PlaywrightError as e:
        # Log but don't fail if screenshot capture fails
        logger.warning(f"Failed to capture screenshot on failure: {e}")
