"""
================================================================================
In-memory Playwright Fake
================================================================================

Just enough of the sync Playwright Page / Locator / FrameLocator surface for
the framework to run without a browser.

Nodes are registered per selector:

    page = FakePage()
    page.add("#search", FakeNode(tag="input", value="Da Nang"))
    hotel = page.add("[data-selenium='hotel-item']", FakeNode(), FakeNode())[0]
    hotel.add("[data-selenium='hotel-name']", FakeNode(text="Hotel A"))

A selector chain ``"a >> nth=1 >> b"`` resolves "a" in the scope registry,
picks the second match, then looks "b" up in that node's children.

``evaluate`` dispatches on the framework's JavaScript constants, so every
script the framework sends has a Python counterpart here.

================================================================================
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from travel_autotest.ui_testing.framework.element import CSS_VALUE_JS, SCROLL_INTO_VIEW_JS, TEXT_OF_JS
from travel_autotest.ui_testing.framework.widgets.buttons import FOCUS_JS, SUBMIT_JS
from travel_autotest.ui_testing.framework.widgets.checked import IS_CHECKED_JS
from travel_autotest.ui_testing.framework.widgets.media import (
    IMAGE_LOADED_JS,
    NATURAL_HEIGHT_JS,
    NATURAL_WIDTH_JS,
)
from travel_autotest.ui_testing.framework.widgets.options import (
    OPTION_TEXTS_JS,
    OPTION_VALUES_JS,
    SELECTED_TEXTS_JS,
    SELECTED_VALUES_JS,
)
from travel_autotest.ui_testing.framework.widgets.rich_text import APPLY_FORMAT_JS, NODE_SCRIPTS
from travel_autotest.ui_testing.framework.widgets.slider import SET_RANGE_VALUE_JS
from travel_autotest.ui_testing.pages.vietjet_home_page import SET_DATE_VALUE_JS


STALE_MESSAGE = "Element is not attached to the DOM"


@dataclass
class FakeNode:
    """One DOM node. Mutate the fields to change what the framework sees."""
    text: str = ""
    tag: str = "div"
    value: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    visible: bool = True
    enabled: bool = True
    role: Optional[str] = None  # "checkbox" | "radio"
    checked: bool = False
    multiple: bool = False
    options: List[Tuple[str, str]] = field(default_factory=list)
    selected: List[int] = field(default_factory=list)
    box: Optional[Dict[str, float]] = None
    styles: Dict[str, str] = field(default_factory=dict)
    natural_size: Tuple[int, int] = (0, 0)
    complete: bool = True
    files: List[str] = field(default_factory=list)
    formats: List[str] = field(default_factory=list)
    children: Dict[str, List["FakeNode"]] = field(default_factory=dict)
    on_click: Optional[Callable[["FakeNode"], None]] = None
    on_hover: Optional[Callable[["FakeNode"], None]] = None
    click_error: Optional[BaseException] = None
    stale_clicks: int = 0
    events: List[str] = field(default_factory=list)

    def add(self, selector: str, *nodes: "FakeNode") -> List["FakeNode"]:
        self.children.setdefault(selector, []).extend(nodes)
        return list(nodes)

    @property
    def clicks(self) -> int:
        return self.events.count("click")

    def click(self, button: str = "left") -> None:
        if self.stale_clicks > 0:
            self.stale_clicks -= 1
            raise PlaywrightError(STALE_MESSAGE)
        if self.click_error is not None:
            raise self.click_error
        self.events.append("click" if button == "left" else f"click:{button}")
        if self.role == "checkbox":
            self.checked = not self.checked
        elif self.role == "radio":
            self.checked = True
        if self.on_click is not None:
            self.on_click(self)


class FakeScope:
    """Selector registry of a document (page or iframe)."""

    def __init__(self) -> None:
        self.registry: Dict[str, List[FakeNode]] = {}
        self.frames: Dict[str, "FakeScope"] = {}

    def add(self, selector: str, *nodes: FakeNode) -> List[FakeNode]:
        self.registry.setdefault(selector, []).extend(nodes)
        return list(nodes)

    def frame(self, selector: str) -> "FakeScope":
        """Document of the iframe matched by ``selector`` (created on demand)."""
        return self.frames.setdefault(selector, FakeScope())

    def resolve(self, selector: str) -> List[FakeNode]:
        head, *rest = selector.split(" >> ")
        nodes = list(self.registry.get(head, []))
        for part in rest:
            if part.startswith("nth="):
                index = int(part[4:])
                nodes = nodes[index:index + 1] if 0 <= index < len(nodes) else []
            else:
                nodes = [child for node in nodes for child in node.children.get(part, [])]
        return nodes

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self, selector)

    def frame_locator(self, selector: str) -> "FakeScope":
        return self.frame(selector)


class FakeLocator:
    """Lazy view of the nodes matching a selector; re-resolved on every call."""

    def __init__(self, scope: FakeScope, selector: str, index: Optional[int] = None):
        self._scope = scope
        self._selector = selector
        self._index = index

    def __repr__(self) -> str:
        return f"FakeLocator({self._selector!r}, index={self._index})"

    def _nodes(self) -> List[FakeNode]:
        nodes = self._scope.resolve(self._selector)
        if self._index is None:
            return nodes
        return nodes[self._index:self._index + 1] if self._index < len(nodes) else []

    def _node(self, timeout: Optional[float] = None) -> FakeNode:
        nodes = self._nodes()
        if not nodes:
            raise PlaywrightTimeoutError(
                f"Timeout {timeout}ms exceeded waiting for locator('{self._selector}')"
            )
        return nodes[0]

    # Locator navigation

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self._scope, self._selector, 0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self._scope, self._selector, index)

    # State

    def count(self) -> int:
        return len(self._nodes())

    def is_visible(self, timeout: Optional[float] = None) -> bool:
        nodes = self._nodes()
        return bool(nodes) and nodes[0].visible

    def is_enabled(self, timeout: Optional[float] = None) -> bool:
        return self._node(timeout).enabled

    def get_attribute(self, name: str, timeout: Optional[float] = None) -> Optional[str]:
        return self._node(timeout).attributes.get(name)

    def input_value(self, timeout: Optional[float] = None) -> str:
        return self._node(timeout).value

    def bounding_box(self, timeout: Optional[float] = None) -> Optional[Dict[str, float]]:
        node = self._node(timeout)
        return node.box if node.visible else None

    def all_inner_texts(self) -> List[str]:
        return [node.text for node in self._nodes()]

    # Actions

    def click(self, timeout: Optional[float] = None, button: str = "left", **kwargs: Any) -> None:
        self._node(timeout).click(button)

    def dblclick(self, timeout: Optional[float] = None, **kwargs: Any) -> None:
        self._node(timeout).events.append("dblclick")

    def hover(self, timeout: Optional[float] = None, **kwargs: Any) -> None:
        node = self._node(timeout)
        node.events.append("hover")
        if node.on_hover is not None:
            node.on_hover(node)

    def fill(self, value: str, timeout: Optional[float] = None, **kwargs: Any) -> None:
        node = self._node(timeout)
        node.value = value
        node.events.append(f"fill:{value}")

    def press(self, key: str, timeout: Optional[float] = None, **kwargs: Any) -> None:
        self._node(timeout).events.append(f"press:{key}")

    def press_sequentially(self, text: str, delay: Optional[float] = None, **kwargs: Any) -> None:
        node = self._node()
        node.value += text
        node.events.append(f"type:{text}")

    def scroll_into_view_if_needed(self, timeout: Optional[float] = None) -> None:
        self._node(timeout).events.append("scroll_if_needed")

    def set_input_files(self, files: Any, timeout: Optional[float] = None, **kwargs: Any) -> None:
        node = self._node(timeout)
        node.files = [files] if isinstance(files, str) else list(files)
        node.value = "C:\\fakepath\\" + os.path.basename(node.files[0]) if node.files else ""

    def select_option(
        self,
        value: Any = None,
        *,
        index: Any = None,
        label: Any = None,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> List[str]:
        node = self._node(timeout)
        if label is not None:
            wanted, column = label, 0
        elif index is not None:
            wanted, column = index, None
        else:
            wanted, column = value, 1
        wanted = list(wanted) if isinstance(wanted, (list, tuple)) else [wanted]

        if column is None:
            indexes = [i for i in wanted if 0 <= i < len(node.options)]
        else:
            indexes = [i for i, option in enumerate(node.options) if option[column] in wanted]
        if len(indexes) != len(wanted):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded: options {wanted} not found")
        if len(indexes) > 1 and not node.multiple:
            raise PlaywrightError("Error: Non-multiple select element")
        node.selected = indexes
        return [node.options[i][1] for i in indexes]

    def evaluate(self, script: str, arg: Any = None) -> Any:
        node = self._node()
        handler = _NODE_HANDLERS.get(script)
        if handler is None:
            raise AssertionError(f"FakeLocator cannot evaluate script: {script[:80]}")
        return handler(node, arg)


# =============================================================================
# Script handlers
# =============================================================================

def _text_of(node: FakeNode, _: Any) -> str:
    if node.tag in ("input", "textarea"):
        return node.value
    if node.tag == "select":
        return node.options[node.selected[0]][0] if node.selected else ""
    return node.text


def _record(event: str) -> Callable[[FakeNode, Any], None]:
    def handler(node: FakeNode, _: Any) -> None:
        node.events.append(event)
    return handler


def _set_value(node: FakeNode, value: Any) -> str:
    node.value = str(value)
    node.events.append(f"value:{value}")
    return node.value


def _set_content(node: FakeNode, text: Any) -> None:
    node.text = str(text)


def _insert_content(node: FakeNode, text: Any) -> None:
    node.text += str(text)


def _clear_content(node: FakeNode, _: Any) -> None:
    node.text = ""


def _apply_format(node: FakeNode, command: Any) -> bool:
    node.formats.append(command)
    return True


_NODE_HANDLERS: Dict[str, Callable[[FakeNode, Any], Any]] = {
    TEXT_OF_JS: _text_of,
    CSS_VALUE_JS: lambda node, prop: node.styles.get(prop, ""),
    SCROLL_INTO_VIEW_JS: _record("scroll_into_view"),
    OPTION_TEXTS_JS: lambda node, _: [text for text, _value in node.options],
    OPTION_VALUES_JS: lambda node, _: [value for _text, value in node.options],
    SELECTED_TEXTS_JS: lambda node, _: [node.options[i][0] for i in node.selected],
    SELECTED_VALUES_JS: lambda node, _: [node.options[i][1] for i in node.selected],
    IS_CHECKED_JS: lambda node, _: node.checked,
    SUBMIT_JS: _record("submit"),
    FOCUS_JS: _record("focus"),
    SET_RANGE_VALUE_JS: _set_value,
    SET_DATE_VALUE_JS: _set_value,
    IMAGE_LOADED_JS: lambda node, _: node.complete and node.natural_size[0] > 0,
    NATURAL_WIDTH_JS: lambda node, _: node.natural_size[0],
    NATURAL_HEIGHT_JS: lambda node, _: node.natural_size[1],
    NODE_SCRIPTS["set"]: _set_content,
    NODE_SCRIPTS["insert"]: _insert_content,
    NODE_SCRIPTS["get"]: lambda node, _: node.text,
    NODE_SCRIPTS["clear"]: _clear_content,
    APPLY_FORMAT_JS: _apply_format,
}


# =============================================================================
# Page, context and input devices
# =============================================================================

class FakeMouse:
    def __init__(self) -> None:
        self.events: List[Tuple[Any, ...]] = []

    def move(self, x: float, y: float, steps: int = 1) -> None:
        self.events.append(("move", round(x), round(y)))

    def down(self, **kwargs: Any) -> None:
        self.events.append(("down",))

    def up(self, **kwargs: Any) -> None:
        self.events.append(("up",))


class FakeDownload:
    def __init__(self, suggested_filename: str, content: bytes = b"data"):
        self.suggested_filename = suggested_filename
        self.content = content

    def save_as(self, path: str) -> None:
        Path(path).write_bytes(self.content)


class _EventInfo:
    value: Any = None


class FakeBrowserContext:
    def __init__(self) -> None:
        self.pages: List["FakePage"] = []

    def new_page(self, url: str = "about:blank", title: str = "") -> "FakePage":
        return FakePage(url=url, title=title, context=self)


class FakePage(FakeScope):
    """
    One browser tab.

    Page-level ``evaluate`` scripts are answered from ``scripts``
    (script -> value, or callable taking the argument).
    """

    def __init__(
        self,
        url: str = "about:blank",
        title: str = "",
        context: Optional[FakeBrowserContext] = None,
    ):
        super().__init__()
        self.url = url
        self._title = title
        self.context = context or FakeBrowserContext()
        self.context.pages.append(self)
        self.history: List[str] = [url]
        self.position = 0
        self.loaded = True
        self.load_state_waits: List[Tuple[str, Optional[float]]] = []
        self.scripts: Dict[str, Any] = {}
        self.mouse = FakeMouse()
        self.pending_download: Optional[FakeDownload] = None
        self.events: List[str] = []
        self.closed = False

    def title(self) -> str:
        return self._title

    def set_title(self, title: str) -> None:
        self._title = title

    def goto(self, url: str, timeout: Optional[float] = None, **kwargs: Any) -> None:
        self.history = self.history[:self.position + 1] + [url]
        self.position = len(self.history) - 1
        self.url = url
        self.events.append(f"goto:{url}")

    def reload(self, timeout: Optional[float] = None, **kwargs: Any) -> None:
        self.events.append("reload")

    def go_back(self, timeout: Optional[float] = None, **kwargs: Any) -> None:
        self.position = max(self.position - 1, 0)
        self.url = self.history[self.position]
        self.events.append("back")

    def go_forward(self, timeout: Optional[float] = None, **kwargs: Any) -> None:
        self.position = min(self.position + 1, len(self.history) - 1)
        self.url = self.history[self.position]
        self.events.append("forward")

    def bring_to_front(self) -> None:
        self.events.append("bring_to_front")

    def close(self) -> None:
        self.closed = True
        self.context.pages.remove(self)

    def wait_for_load_state(self, state: str = "load", timeout: Optional[float] = None) -> None:
        self.load_state_waits.append((state, timeout))
        if not self.loaded:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")

    def evaluate(self, script: str, arg: Any = None) -> Any:
        if script not in self.scripts:
            raise AssertionError(f"FakePage cannot evaluate script: {script[:80]}")
        handler = self.scripts[script]
        return handler(arg) if callable(handler) else handler

    def screenshot(self, path: Optional[str] = None, full_page: bool = False, **kwargs: Any) -> bytes:
        data = b"\x89PNG\r\n\x1a\nfake"
        if path:
            Path(path).write_bytes(data)
        self.events.append(f"screenshot:full={full_page}")
        return data

    @contextmanager
    def expect_download(self, timeout: Optional[float] = None, **kwargs: Any):
        info = _EventInfo()
        yield info
        if self.pending_download is None:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded while waiting for event \"download\"")
        info.value = self.pending_download


__all__ = [
    "FakeNode",
    "FakeScope",
    "FakeLocator",
    "FakePage",
    "FakeBrowserContext",
    "FakeDownload",
    "FakeMouse",
    "STALE_MESSAGE",
]
