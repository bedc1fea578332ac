"""
Element collections (COLLECTION capability): every match of one locator.
"""

from __future__ import annotations

from typing import List

from ..element import Capability, Element, require
from ..session import SessionContext


def size(coll: Element, ctx: SessionContext) -> int:
    require(coll, Capability.COLLECTION, "size")
    return ctx.locate_all(coll.locator).count()


def texts(coll: Element, ctx: SessionContext) -> List[str]:
    """Stripped inner text of every match, in document order."""
    require(coll, Capability.COLLECTION, "texts")
    return [text.strip() for text in ctx.locate_all(coll.locator).all_inner_texts()]


def item(coll: Element, index: int) -> Element:
    """Plain element for the ``index``-th match (0-based)."""
    require(coll, Capability.COLLECTION, "item")
    return Element(
        f"{coll.locator} >> nth={index}",
        f"{coll.name}[{index}]",
        parts=coll.parts,
        settings=coll.settings,
    )


def items(coll: Element, ctx: SessionContext) -> List[Element]:
    """One element per current match."""
    require(coll, Capability.COLLECTION, "items")
    return [item(coll, index) for index in range(size(coll, ctx))]


__all__ = ["size", "texts", "item", "items"]
