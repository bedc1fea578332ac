"""
Images (IMAGE), icons (ICON) and hover tooltips (TOOLTIP).
"""

from __future__ import annotations

from typing import Optional

from ..element import PROBE_TIMEOUT_MS, Capability, Element, require
from ..session import SessionContext


IMAGE_LOADED_JS = "el => el.complete && el.naturalWidth > 0"
NATURAL_WIDTH_JS = "el => el.naturalWidth"
NATURAL_HEIGHT_JS = "el => el.naturalHeight"


# =============================================================================
# Image
# =============================================================================

def get_src(img: Element, ctx: SessionContext) -> Optional[str]:
    require(img, Capability.IMAGE, "get_src")
    return img.get_attribute(ctx, "src")


def get_alt_text(img: Element, ctx: SessionContext) -> Optional[str]:
    require(img, Capability.IMAGE, "get_alt_text")
    return img.get_attribute(ctx, "alt")


def _dimension(img: Element, ctx: SessionContext, attribute: str) -> int:
    raw = img.get_attribute(ctx, attribute)
    if raw and raw.strip().isdigit():
        return int(raw)
    # No explicit attribute: fall back to the rendered box
    box = img.perform(ctx, f"Get rendered {attribute}", lambda loc: loc.bounding_box(timeout=PROBE_TIMEOUT_MS), "visible")
    if box is None:
        raise ValueError(f"{img}: no {attribute} attribute and not rendered")
    return round(box[attribute])


def get_width(img: Element, ctx: SessionContext) -> int:
    """``width`` attribute, or the rendered width when absent."""
    require(img, Capability.IMAGE, "get_width")
    return _dimension(img, ctx, "width")


def get_height(img: Element, ctx: SessionContext) -> int:
    """``height`` attribute, or the rendered height when absent."""
    require(img, Capability.IMAGE, "get_height")
    return _dimension(img, ctx, "height")


def is_loaded(img: Element, ctx: SessionContext) -> bool:
    """Whether the browser finished decoding a non-empty image."""
    require(img, Capability.IMAGE, "is_loaded")
    return img.query(ctx, "image loaded", lambda loc: loc.count() > 0 and loc.evaluate(IMAGE_LOADED_JS))


def get_natural_width(img: Element, ctx: SessionContext) -> int:
    require(img, Capability.IMAGE, "get_natural_width")
    return int(img.perform(ctx, "Get natural width", lambda loc: loc.evaluate(NATURAL_WIDTH_JS), "exist"))


def get_natural_height(img: Element, ctx: SessionContext) -> int:
    require(img, Capability.IMAGE, "get_natural_height")
    return int(img.perform(ctx, "Get natural height", lambda loc: loc.evaluate(NATURAL_HEIGHT_JS), "exist"))


# =============================================================================
# Icon
# =============================================================================

def get_icon_type(icon: Element, ctx: SessionContext) -> str:
    """Class list of the icon (``fa-*``, ``icon-*``, ``material-icons`` ...)."""
    require(icon, Capability.ICON, "get_icon_type")
    return icon.get_attribute(ctx, "class") or ""


# =============================================================================
# Tooltip
# =============================================================================

def show_tooltip(tip: Element, ctx: SessionContext) -> Element:
    """Hover the trigger and wait for the tooltip to appear."""
    require(tip, Capability.TOOLTIP, "show_tooltip")
    Element(tip.part("trigger"), f"{tip.name} trigger").hover(ctx)
    return tip.wait_for_visible(ctx)


def get_tooltip_text(tip: Element, ctx: SessionContext) -> str:
    require(tip, Capability.TOOLTIP, "get_tooltip_text")
    show_tooltip(tip, ctx)
    return tip.get_text(ctx)


def is_tooltip_visible(tip: Element, ctx: SessionContext) -> bool:
    require(tip, Capability.TOOLTIP, "is_tooltip_visible")
    return tip.is_visible(ctx)


__all__ = [
    "get_src",
    "get_alt_text",
    "get_width",
    "get_height",
    "is_loaded",
    "get_natural_width",
    "get_natural_height",
    "get_icon_type",
    "show_tooltip",
    "get_tooltip_text",
    "is_tooltip_visible",
]
