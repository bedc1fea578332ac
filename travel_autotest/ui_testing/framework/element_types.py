"""
================================================================================
Element Types
================================================================================

Factory functions building ``Element`` values with the capability set,
sub-locators and settings each kind of widget needs.

    search = text_box("#search", "Search Box")
    rooms = counter("#rooms", "Rooms", plus="#rooms-plus", minus="#rooms-minus",
                    value="#rooms-value")

``ELEMENT_TYPES`` maps the type tags used in locator files to factories.

================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from .element import Capability, Element


C = Capability

DEFAULT_DATE_FORMAT = "%m/%d/%Y"
DEFAULT_DOWNLOAD_DIR = Path.home() / "Downloads"
DEFAULT_DOWNLOAD_TIMEOUT_SECONDS = 30


def element(locator: str, name: str, **extra: Any) -> Element:
    return Element(locator, name, kind=extra.pop("kind", "Element"), **extra)


def label(locator: str, name: str) -> Element:
    return Element(locator, name, kind="Label")


def button(locator: str, name: str) -> Element:
    return Element(locator, name, kind="Button", capabilities=frozenset({C.PRESSABLE}))


def text_box(locator: str, name: str) -> Element:
    return Element(locator, name, kind="TextBox", capabilities=frozenset({C.TEXT}))


def dropdown(locator: str, name: str) -> Element:
    return Element(locator, name, kind="Dropdown", capabilities=frozenset({C.OPTIONS}))


def list_box(locator: str, name: str) -> Element:
    return Element(
        locator, name, kind="ListBox",
        capabilities=frozenset({C.OPTIONS, C.MULTI_OPTIONS}),
    )


def checkbox(locator: str, name: str) -> Element:
    return Element(locator, name, kind="CheckBox", capabilities=frozenset({C.CHECKED}))


def radio_button(locator: str, name: str) -> Element:
    return Element(locator, name, kind="RadioButton", capabilities=frozenset({C.CHECKED}))


def toggle_switch(locator: str, name: str) -> Element:
    return Element(locator, name, kind="ToggleSwitch", capabilities=frozenset({C.CHECKED}))


def slider(locator: str, name: str) -> Element:
    return Element(locator, name, kind="Slider", capabilities=frozenset({C.RANGE}))


def counter(
    locator: str,
    name: str,
    plus: str,
    minus: str,
    value: str,
    value_attribute: Optional[str] = None,
) -> Element:
    """
    Counter made of a plus button, a minus button and a value display.

    Args:
        value_attribute: Read the value from this attribute instead of the text
    """
    return Element(
        locator, name, kind="Counter",
        capabilities=frozenset({C.COUNTER}),
        parts={"plus": plus, "minus": minus, "value": value},
        settings={"value_attribute": value_attribute},
    )


def date_picker(
    locator: str,
    name: str,
    day_locator_format: str = "[data-date='{year}-{month:02d}-{day:02d}']",
    date_format: str = DEFAULT_DATE_FORMAT,
    next_month: str = "[data-action='next']",
    previous_month: str = "[data-action='previous']",
) -> Element:
    """
    Date input opening a calendar.

    Args:
        day_locator_format: Locator of one calendar day, formatted with
            ``day``, ``month`` and ``year`` keyword arguments
        date_format: strftime format of the input value
    """
    return Element(
        locator, name, kind="DatePicker",
        capabilities=frozenset({C.DATE}),
        parts={"next": next_month, "previous": previous_month},
        settings={"day_locator_format": day_locator_format, "date_format": date_format},
    )


def file_upload(locator: str, name: str) -> Element:
    return Element(locator, name, kind="FileUpload", capabilities=frozenset({C.FILE_INPUT}))


def file_download_button(
    locator: str,
    name: str,
    download_dir: Union[str, Path, None] = None,
    timeout_seconds: int = DEFAULT_DOWNLOAD_TIMEOUT_SECONDS,
) -> Element:
    return Element(
        locator, name, kind="FileDownloadButton",
        capabilities=frozenset({C.DOWNLOAD, C.PRESSABLE}),
        settings={
            "download_dir": str(download_dir or DEFAULT_DOWNLOAD_DIR),
            "timeout_seconds": timeout_seconds,
        },
    )


def rich_text_editor(
    locator: str,
    name: str,
    editor_type: str = "generic",
    iframe: Optional[str] = None,
) -> Element:
    """
    WYSIWYG editor.

    Args:
        editor_type: "tinymce", "ckeditor", "quill" or "generic"
        iframe: Locator of the iframe hosting the editable body, if any
    """
    parts = {"iframe": iframe} if iframe else {}
    return Element(
        locator, name, kind="RichTextEditor",
        capabilities=frozenset({C.RICH_TEXT}),
        parts=parts,
        settings={"editor_type": editor_type.lower()},
    )


def breadcrumbs(locator: str, name: str, segment: str = "a, span") -> Element:
    return Element(
        locator, name, kind="Breadcrumbs",
        capabilities=frozenset({C.SEGMENTS}),
        parts={"segment": segment},
    )


def pagination_controls(
    locator: str,
    name: str,
    page_buttons: str,
    next_button: str,
    previous_button: str,
    active_page: str,
) -> Element:
    return Element(
        locator, name, kind="PaginationControls",
        capabilities=frozenset({C.PAGES}),
        parts={
            "page_buttons": page_buttons,
            "next": next_button,
            "previous": previous_button,
            "active": active_page,
        },
    )


def panel(locator: str, name: str, expand: str, collapse: str, content: str) -> Element:
    return Element(
        locator, name, kind="Panel",
        capabilities=frozenset({C.EXPANDABLE}),
        parts={"expand": expand, "collapse": collapse, "content": content},
    )


def frame(locator: str, name: str) -> Element:
    return Element(locator, name, kind="Frame", capabilities=frozenset({C.FRAME}))


def image(locator: str, name: str) -> Element:
    return Element(locator, name, kind="Image", capabilities=frozenset({C.IMAGE}))


def icon(locator: str, name: str) -> Element:
    return Element(locator, name, kind="Icon", capabilities=frozenset({C.ICON}))


def tooltip(locator: str, name: str, trigger: str) -> Element:
    return Element(
        locator, name, kind="Tooltip",
        capabilities=frozenset({C.TOOLTIP}),
        parts={"trigger": trigger},
    )


def element_collection(locator: str, name: str) -> Element:
    return Element(locator, name, kind="ElementCollection", capabilities=frozenset({C.COLLECTION}))


# Type tag (as written in locator files) -> factory taking (locator, name)
ELEMENT_TYPES: Dict[str, Callable[..., Element]] = {
    "Element": element,
    "Label": label,
    "Button": button,
    "TextBox": text_box,
    "Dropdown": dropdown,
    "ListBox": list_box,
    "CheckBox": checkbox,
    "RadioButton": radio_button,
    "ToggleSwitch": toggle_switch,
    "Slider": slider,
    "Counter": counter,
    "DatePicker": date_picker,
    "FileUpload": file_upload,
    "FileDownloadButton": file_download_button,
    "RichTextEditor": rich_text_editor,
    "Breadcrumbs": breadcrumbs,
    "PaginationControls": pagination_controls,
    "Panel": panel,
    "Frame": frame,
    "Image": image,
    "Icon": icon,
    "Tooltip": tooltip,
    "ElementCollection": element_collection,
}


__all__ = [
    "element",
    "label",
    "button",
    "text_box",
    "dropdown",
    "list_box",
    "checkbox",
    "radio_button",
    "toggle_switch",
    "slider",
    "counter",
    "date_picker",
    "file_upload",
    "file_download_button",
    "rich_text_editor",
    "breadcrumbs",
    "pagination_controls",
    "panel",
    "frame",
    "image",
    "icon",
    "tooltip",
    "element_collection",
    "ELEMENT_TYPES",
    "DEFAULT_DATE_FORMAT",
    "DEFAULT_DOWNLOAD_DIR",
    "DEFAULT_DOWNLOAD_TIMEOUT_SECONDS",
]
