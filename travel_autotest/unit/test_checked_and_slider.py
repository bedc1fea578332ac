import pytest

from fake_browser import FakeNode
from travel_autotest.ui_testing.framework.element_types import checkbox, radio_button, slider, toggle_switch
from travel_autotest.ui_testing.framework.widgets import checked
from travel_autotest.ui_testing.framework.widgets import slider as sliders


def test_check_and_uncheck_are_idempotent(page, ctx):
    node = page.add("#terms", FakeNode(tag="input", role="checkbox"))[0]
    terms = checkbox("#terms", "Terms")

    checked.check(terms, ctx)
    checked.check(terms, ctx)
    assert checked.is_checked(terms, ctx)
    assert node.clicks == 1

    checked.uncheck(terms, ctx)
    checked.uncheck(terms, ctx)
    assert not checked.is_checked(terms, ctx)
    assert node.clicks == 2


def test_toggle_always_clicks(page, ctx):
    page.add("#newsletter", FakeNode(tag="input", role="checkbox"))
    newsletter = checkbox("#newsletter", "Newsletter")

    checked.toggle(newsletter, ctx)
    assert checked.is_checked(newsletter, ctx)
    checked.toggle(newsletter, ctx)
    assert not checked.is_checked(newsletter, ctx)


def test_is_checked_is_false_for_missing_control(ctx):
    assert checked.is_checked(checkbox("#missing", "Missing"), ctx) is False


def test_radio_and_switch(page, ctx):
    page.add("#round-trip", FakeNode(tag="input", role="radio"))
    page.add("#dark-mode", FakeNode(role="checkbox"))
    round_trip = radio_button("#round-trip", "Round Trip")
    dark_mode = toggle_switch("#dark-mode", "Dark Mode")

    checked.select(round_trip, ctx)
    checked.select(round_trip, ctx)
    assert checked.is_selected(round_trip, ctx)

    checked.turn_on(dark_mode, ctx)
    assert checked.is_on(dark_mode, ctx)
    checked.turn_off(dark_mode, ctx)
    assert not checked.is_on(dark_mode, ctx)


@pytest.mark.parametrize(
    "value, expected",
    [(4.0, "4"), (2.5, "2.5"), (0, "0"), (100.0, "100")],
)
def test_format_number(value, expected):
    assert sliders.format_number(value) == expected


@pytest.mark.parametrize(
    "percent, minimum, maximum, step, expected",
    [
        (50, 0, 5, 0.5, 2.5),
        (33, 0, 5, 0.5, 1.5),
        (100, 0, 5, 0.5, 5),
        (0, 10, 20, None, 10),
        (25, 0, 100, 0, 25),
    ],
)
def test_value_for_percent(percent, minimum, maximum, step, expected):
    assert sliders.value_for_percent(percent, minimum, maximum, step) == pytest.approx(expected)


@pytest.fixture
def volume(page):
    page.add(
        "#range-input",
        FakeNode(
            tag="input",
            value="2.5",
            attributes={"min": "0", "max": "5", "step": "0.5"},
            box={"x": 100, "y": 40, "width": 200, "height": 20},
        ),
    )
    return slider("#range-input", "Range")


def test_slider_bounds_and_value(ctx, volume):
    assert sliders.get_min(volume, ctx) == "0"
    assert sliders.get_max(volume, ctx) == "5"
    assert sliders.get_value(volume, ctx) == "2.5"


def test_slide_to_snaps_to_step(page, ctx, volume):
    sliders.slide_to(volume, ctx, 80)
    assert sliders.get_value(volume, ctx) == "4"

    sliders.slide_to(volume, ctx, 100)
    assert sliders.get_value(volume, ctx) == "5"


def test_slide_to_rejects_out_of_range_percent(page, ctx, volume):
    with pytest.raises(ValueError):
        sliders.slide_to(volume, ctx, 101)
    assert page.resolve("#range-input")[0].value == "2.5"


def test_move_by_offset_drags_thumb(page, ctx, volume):
    sliders.move_by_offset(volume, ctx, 30)

    # Thumb of 2.5 on 0..5 sits at the middle of a 200px track starting at x=100
    assert page.mouse.events == [("move", 200, 50), ("down",), ("move", 230, 50), ("up",)]


def test_slider_defaults_without_bounds(page, ctx):
    page.add("#plain", FakeNode(tag="input", value="10"))
    plain = slider("#plain", "Plain")

    assert sliders.get_min(plain, ctx) == "0"
    assert sliders.get_max(plain, ctx) == "100"
