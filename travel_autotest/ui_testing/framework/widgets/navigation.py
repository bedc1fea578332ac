"""
Breadcrumbs (SEGMENTS capability) and pagination controls (PAGES capability).

Breadcrumb segments are matched by the ``segment`` part inside the container.
Pagination ``page_buttons`` is a page-wide locator; ``next``, ``previous`` and
``active`` are looked up inside the pagination container.
"""

from __future__ import annotations

import re
from typing import List, Tuple, Union

from loguru import logger

from ..element import PROBE_TIMEOUT_MS, Capability, Element, require
from ..session import SessionContext


PATH_SEPARATOR = " > "

_NUMBER = re.compile(r"\d+")


# =============================================================================
# Breadcrumbs
# =============================================================================

def _segments(crumbs: Element) -> Element:
    return crumbs.child(crumbs.part("segment"), f"{crumbs.name} segment", kind="Link")


def _entries(crumbs: Element, ctx: SessionContext) -> List[Tuple[int, str]]:
    """(DOM position, text) of every non-empty segment."""
    crumbs.wait_for_visible(ctx)
    texts = ctx.locate_all(_segments(crumbs).locator).all_inner_texts()
    return [(position, text.strip()) for position, text in enumerate(texts) if text.strip()]


def get_segments(crumbs: Element, ctx: SessionContext) -> List[str]:
    """Non-empty segment texts, first (home) to last (current)."""
    require(crumbs, Capability.SEGMENTS, "get_segments")
    return [text for _, text in _entries(crumbs, ctx)]


def get_path(crumbs: Element, ctx: SessionContext) -> str:
    require(crumbs, Capability.SEGMENTS, "get_path")
    return PATH_SEPARATOR.join(get_segments(crumbs, ctx))


def get_segment_count(crumbs: Element, ctx: SessionContext) -> int:
    require(crumbs, Capability.SEGMENTS, "get_segment_count")
    return len(get_segments(crumbs, ctx))


def get_segment(crumbs: Element, ctx: SessionContext, index: int) -> str:
    """
    Text of the segment at ``index`` (0-based).

    Raises:
        IndexError: If there is no such segment
    """
    require(crumbs, Capability.SEGMENTS, "get_segment")
    segments = get_segments(crumbs, ctx)
    if index < 0 or index >= len(segments):
        raise IndexError(f"{crumbs}: segment index {index} out of range ({len(segments)} segments)")
    return segments[index]


def contains_segment(crumbs: Element, ctx: SessionContext, text: str) -> bool:
    require(crumbs, Capability.SEGMENTS, "contains_segment")
    return text in get_segments(crumbs, ctx)


def click_segment(crumbs: Element, ctx: SessionContext, segment: Union[int, str]) -> Element:
    """
    Click a segment by 0-based index or by exact text.

    Raises:
        IndexError: Index out of range
        ValueError: No segment with that text
    """
    require(crumbs, Capability.SEGMENTS, "click_segment")
    entries = _entries(crumbs, ctx)
    segments = [text for _, text in entries]

    if isinstance(segment, int):
        index = segment
        if index < 0 or index >= len(segments):
            raise IndexError(f"{crumbs}: segment index {index} out of range ({len(segments)} segments)")
    else:
        if segment not in segments:
            raise ValueError(f"{crumbs}: no segment '{segment}' in path {segments}")
        index = segments.index(segment)

    # Empty segments are skipped in the path but still occupy a DOM position
    position, text = entries[index]
    logger.info(f"{crumbs} - clicking segment {index} '{text}'")
    _segments(crumbs).nth(position).click(ctx)
    return crumbs


def click_home(crumbs: Element, ctx: SessionContext) -> Element:
    require(crumbs, Capability.SEGMENTS, "click_home")
    return click_segment(crumbs, ctx, 0)


def click_current(crumbs: Element, ctx: SessionContext) -> Element:
    require(crumbs, Capability.SEGMENTS, "click_current")
    return click_segment(crumbs, ctx, get_segment_count(crumbs, ctx) - 1)


# =============================================================================
# Pagination
# =============================================================================

def _control(pager: Element, key: str) -> Element:
    return pager.child(pager.part(key), f"{pager.name} {key}", kind="Button")


def _page_buttons(pager: Element) -> Element:
    return Element(pager.part("page_buttons"), f"{pager.name} page", kind="Button")


def get_total_pages(pager: Element, ctx: SessionContext) -> int:
    """Number of page buttons."""
    require(pager, Capability.PAGES, "get_total_pages")
    total = ctx.locate_all(pager.part("page_buttons")).count()
    logger.debug(f"{pager} - total pages: {total}")
    return total


def _active_index(pager: Element, ctx: SessionContext) -> int:
    buttons = ctx.locate_all(pager.part("page_buttons"))
    for index in range(buttons.count()):
        classes = buttons.nth(index).get_attribute("class", timeout=PROBE_TIMEOUT_MS) or ""
        if "active" in classes.split():
            return index + 1
    return 0


def get_current_page(pager: Element, ctx: SessionContext) -> int:
    """
    Current page number (1-based).

    Read from the ``active`` part text ("3" or "Page 3 of 10"), then from the
    position of the page button carrying the ``active`` class; 1 otherwise.
    """
    require(pager, Capability.PAGES, "get_current_page")
    active = _control(pager, "active")
    if active.exists(ctx):
        match = _NUMBER.search(active.get_text(ctx))
        if match:
            return int(match.group())

    index = _active_index(pager, ctx)
    if index:
        return index

    logger.debug(f"{pager} - no active page marker, assuming page 1")
    return 1


def has_next_page(pager: Element, ctx: SessionContext) -> bool:
    require(pager, Capability.PAGES, "has_next_page")
    button = _control(pager, "next")
    return button.is_visible(ctx) and button.is_usable(ctx)


def has_previous_page(pager: Element, ctx: SessionContext) -> bool:
    require(pager, Capability.PAGES, "has_previous_page")
    button = _control(pager, "previous")
    return button.is_visible(ctx) and button.is_usable(ctx)


def go_to_page(pager: Element, ctx: SessionContext, page_number: int) -> Element:
    """
    Click the button of ``page_number`` (1-based).

    Raises:
        ValueError: If the page number is outside 1..total pages
    """
    require(pager, Capability.PAGES, "go_to_page")
    total = get_total_pages(pager, ctx)
    if page_number < 1 or page_number > total:
        logger.warning(f"{pager} - invalid page number {page_number} (total {total})")
        raise ValueError(f"{pager}: invalid page number {page_number} (total pages: {total})")

    _page_buttons(pager).nth(page_number - 1).click(ctx)
    logger.info(f"{pager} - navigated to page {page_number}")
    return pager


def next_page(pager: Element, ctx: SessionContext) -> Element:
    require(pager, Capability.PAGES, "next_page")
    if not has_next_page(pager, ctx):
        logger.warning(f"{pager} - next button is disabled, already on the last page")
        return pager
    current = get_current_page(pager, ctx)
    _control(pager, "next").click(ctx)
    logger.info(f"{pager} - navigated from page {current} to {current + 1}")
    return pager


def previous_page(pager: Element, ctx: SessionContext) -> Element:
    require(pager, Capability.PAGES, "previous_page")
    if not has_previous_page(pager, ctx):
        logger.warning(f"{pager} - previous button is disabled, already on the first page")
        return pager
    current = get_current_page(pager, ctx)
    _control(pager, "previous").click(ctx)
    logger.info(f"{pager} - navigated from page {current} to {current - 1}")
    return pager


def go_to_first_page(pager: Element, ctx: SessionContext) -> Element:
    require(pager, Capability.PAGES, "go_to_first_page")
    return go_to_page(pager, ctx, 1)


def go_to_last_page(pager: Element, ctx: SessionContext) -> Element:
    require(pager, Capability.PAGES, "go_to_last_page")
    return go_to_page(pager, ctx, get_total_pages(pager, ctx))


__all__ = [
    "PATH_SEPARATOR",
    "get_path",
    "get_segments",
    "get_segment",
    "get_segment_count",
    "contains_segment",
    "click_segment",
    "click_home",
    "click_current",
    "go_to_page",
    "next_page",
    "previous_page",
    "get_current_page",
    "get_total_pages",
    "has_next_page",
    "has_previous_page",
    "go_to_first_page",
    "go_to_last_page",
]
