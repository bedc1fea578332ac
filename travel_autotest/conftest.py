"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the pytest configuration for the entire test suite.
It registers common markers and marks tests by directory.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "unit: Framework tests against the in-memory browser fake"
    )
    config.addinivalue_line(
        "markers", "ui: Tests driving a real browser"
    )
    config.addinivalue_line(
        "markers", "external: Tests against live third-party sites (need --run-external)"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Marks tests by directory and skips external tests unless
    ``--run-external`` was given.
    """
    run_external = config.getoption("--run-external", default=False)
    skip_external = pytest.mark.skip(reason="needs --run-external (live third-party site)")

    for item in items:
        path = str(item.fspath)

        # Auto-add 'unit' marker to tests in unit directory
        if "travel_autotest/unit" in path.replace("\\", "/"):
            item.add_marker(pytest.mark.unit)

        # Auto-add 'ui' marker to tests in ui_testing directory
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)

        if not run_external and "external" in item.keywords:
            item.add_marker(skip_external)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Travel Autotest - Agoda / Vietjet UI Automation",
        "=" * 60,
        "",
    ]
