"""
================================================================================
Browser Utilities
================================================================================

Navigation and tab (window) handling on top of a SessionContext.

Tabs are the pages of the context's BrowserContext, in opening order. Every
switch returns a new SessionContext; the caller decides which one is
"current" by keeping it.

================================================================================
"""

from __future__ import annotations

from typing import Optional

import allure
from loguru import logger

from .session import SessionContext
from .wait import WaitConfig


WINDOW_POLL_INTERVAL_MS = 500


def open_url(ctx: SessionContext, url: str) -> SessionContext:
    """Navigate the context's tab to ``url``."""
    with allure.step(f"Open URL: {url}"):
        logger.info(f"Opening URL: {url}")
        ctx.page.goto(url, timeout=ctx.timeouts.page_load_ms)
    return ctx.main_frame()


def current_url(ctx: SessionContext) -> str:
    return ctx.page.url


def page_title(ctx: SessionContext) -> str:
    return ctx.page.title()


def refresh(ctx: SessionContext) -> SessionContext:
    logger.info("Refreshing page")
    ctx.page.reload(timeout=ctx.timeouts.page_load_ms)
    return ctx.main_frame()


def back(ctx: SessionContext) -> SessionContext:
    logger.info("Navigating back")
    ctx.page.go_back(timeout=ctx.timeouts.page_load_ms)
    return ctx.main_frame()


def forward(ctx: SessionContext) -> SessionContext:
    logger.info("Navigating forward")
    ctx.page.go_forward(timeout=ctx.timeouts.page_load_ms)
    return ctx.main_frame()


def window_count(ctx: SessionContext) -> int:
    """Number of open tabs in the context's browser context."""
    return len(ctx.page.context.pages)


def switch_to_window(ctx: SessionContext, index: int) -> SessionContext:
    """
    Target the tab at ``index`` (0-based, opening order).

    Raises:
        IndexError: If no tab exists at ``index``
    """
    pages = ctx.page.context.pages
    if index < 0 or index >= len(pages):
        raise IndexError(f"Window index {index} out of range (open windows: {len(pages)})")

    page = pages[index]
    page.bring_to_front()
    logger.info(f"Switched to window {index}: {page.url}")
    return ctx.with_page(page)


def switch_to_window_by_title(ctx: SessionContext, partial_title: str) -> Optional[SessionContext]:
    """
    Target the first tab whose title contains ``partial_title``.

    Returns:
        Context on the matching tab, or None when no title matches
    """
    for index, page in enumerate(ctx.page.context.pages):
        title = page.title()
        if partial_title in title:
            page.bring_to_front()
            logger.info(f"Switched to window {index} with title: {title}")
            return ctx.with_page(page)

    logger.warning(f"No window found with title containing: {partial_title}")
    return None


def wait_for_window_count(
    ctx: SessionContext,
    expected: int,
    timeout_seconds: float = 10,
) -> bool:
    """
    Poll every 500ms until ``expected`` tabs are open.

    Returns:
        True when the count was reached, False on timeout
    """
    logger.info(f"Waiting for {expected} windows (timeout {timeout_seconds}s)")
    wait = WaitConfig(int(timeout_seconds * 1000), WINDOW_POLL_INTERVAL_MS)
    reached = wait.until(lambda: window_count(ctx) >= expected, f"{expected} open windows")
    if reached:
        logger.info(f"Window count reached: {window_count(ctx)}")
    return reached


def close_current_window_and_switch_to(ctx: SessionContext, index: int) -> SessionContext:
    """Close the context's tab, then target the tab at ``index`` among the rest."""
    logger.info(f"Closing window: {ctx.page.url}")
    context = ctx.page.context
    ctx.page.close()
    remaining = context.pages
    if index < 0 or index >= len(remaining):
        raise IndexError(f"Window index {index} out of range (open windows: {len(remaining)})")
    page = remaining[index]
    page.bring_to_front()
    return ctx.with_page(page)


def close_all_windows_except_first(ctx: SessionContext) -> SessionContext:
    """Close every tab but the first one and target it."""
    pages = list(ctx.page.context.pages)
    if not pages:
        raise IndexError("No open windows")

    for page in pages[1:]:
        logger.debug(f"Closing window: {page.url}")
        page.close()

    first = pages[0]
    first.bring_to_front()
    logger.info(f"Closed {len(pages) - 1} extra window(s)")
    return ctx.with_page(first)


__all__ = [
    "open_url",
    "current_url",
    "page_title",
    "refresh",
    "back",
    "forward",
    "window_count",
    "switch_to_window",
    "switch_to_window_by_title",
    "wait_for_window_count",
    "close_current_window_and_switch_to",
    "close_all_windows_except_first",
]
