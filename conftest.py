"""
Repository-level pytest configuration.

Provides:
  - Safe defaults for local runs (headless browser, public site URLs)
  - The ``--run-external`` switch for tests against live travel sites

Values set here only apply when the shell/CI has not set them already.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--run-external",
        action="store_true",
        default=False,
        help="Run tests marked 'external' against live third-party sites",
    )


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set demo-safe environment defaults if not already provided by the user/CI.

    Keeps local runs predictable: no browser window pops up unless asked for.
    """
    defaults = {
        "BROWSER_HEADLESS": "true",
        "URLS_AGODA": "https://www.agoda.com/",
        "URLS_VIETJET": "https://www.vietjetair.com/",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
