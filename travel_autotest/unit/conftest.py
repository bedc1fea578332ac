"""
================================================================================
Unit Test Configuration
================================================================================

Fixtures running the framework against the in-memory Playwright fake.

Timeouts are cut to a few hundred milliseconds so negative waits stay fast.

================================================================================
"""

import pytest

from fake_browser import FakePage
from travel_autotest.ui_testing.framework import config_manager
from travel_autotest.ui_testing.framework.config_manager import CONFIG_PATH_ENV, DEFAULTS, Timeouts
from travel_autotest.ui_testing.framework.session import SessionContext


FAST_TIMEOUTS = Timeouts(element_ms=300, page_load_ms=300, default_ms=300, poll_interval_ms=10)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """No configuration override leaks in from the shell or the root conftest."""
    for key in DEFAULTS:
        monkeypatch.delenv(key.upper().replace(".", "_"), raising=False)
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    config_manager.reset_config()
    yield
    config_manager.reset_config()


@pytest.fixture
def page() -> FakePage:
    return FakePage(url="https://www.agoda.com/", title="Agoda")


@pytest.fixture
def ctx(page) -> SessionContext:
    return SessionContext(page=page, timeouts=FAST_TIMEOUTS)
