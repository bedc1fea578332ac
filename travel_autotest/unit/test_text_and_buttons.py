import pytest

from fake_browser import FakeNode
from travel_autotest.ui_testing.framework.element_types import button, label, text_box
from travel_autotest.ui_testing.framework.errors import CapabilityError
from travel_autotest.ui_testing.framework.widgets import buttons, text


@pytest.fixture
def search_box(page):
    page.add("#search", FakeNode(tag="input", value="old", attributes={"placeholder": "Where to?"}))
    return text_box("#search", "Search Box")


def test_set_text_replaces_content(page, ctx, search_box):
    assert text.set_text(search_box, ctx, "Da Nang") is search_box
    assert page.resolve("#search")[0].value == "Da Nang"
    assert not text.is_empty(search_box, ctx)


def test_clear_and_type_fires_key_events(page, ctx, search_box):
    text.clear_and_type(search_box, ctx, "Hoi An")

    node = page.resolve("#search")[0]
    assert node.value == "Hoi An"
    assert node.events == ["fill:", "type:Hoi An"]


def test_append_and_keys(page, ctx, search_box):
    text.append_text(search_box, ctx, " city")
    text.press_enter(search_box, ctx)
    text.press_tab(search_box, ctx)

    node = page.resolve("#search")[0]
    assert node.value == "old city"
    assert node.events == ["press:End", "type: city", "press:Enter", "press:Tab"]


def test_clear_and_placeholder(ctx, search_box):
    text.clear(search_box, ctx)
    assert text.is_empty(search_box, ctx)
    assert text.get_placeholder(search_box, ctx) == "Where to?"


def test_text_operations_require_text_capability(page, ctx):
    page.add("#title", FakeNode(text="Agoda"))

    with pytest.raises(CapabilityError):
        text.set_text(label("#title", "Title"), ctx, "x")
    assert page.resolve("#title")[0].events == []


def test_button_operations(page, ctx):
    node = page.add("#search-button", FakeNode(tag="button"))[0]
    search = button("#search-button", "Search")

    buttons.focus(search, ctx)
    buttons.submit(search, ctx)
    buttons.press_enter(search, ctx)
    buttons.press_space(search, ctx)

    assert node.events == ["focus", "submit", "press:Enter", "press:Space"]


def test_press_and_hold_then_release(page, ctx):
    node = page.add("#hold", FakeNode(tag="button"))[0]
    hold = button("#hold", "Hold")

    buttons.press_and_hold(hold, ctx)
    buttons.release(hold, ctx)

    assert node.events == ["hover"]
    assert page.mouse.events == [("down",), ("up",)]


def test_button_operations_on_text_box_rejected(ctx, search_box):
    with pytest.raises(CapabilityError, match="press_space"):
        buttons.press_space(search_box, ctx)
