from datetime import date

import pytest

from fake_browser import FakeNode
from travel_autotest.ui_testing.framework.element_types import counter, date_picker, label
from travel_autotest.ui_testing.framework.errors import CapabilityError, ElementError
from travel_autotest.ui_testing.framework.widgets import counter as counters
from travel_autotest.ui_testing.framework.widgets import date_picker as pickers


def make_counter(page, start, minimum=0, maximum=9, selector="#adults"):
    """Register plus/minus/value nodes that behave like a bounded counter."""
    value = page.add(f"{selector}-value", FakeNode(text=str(start)))[0]
    plus = page.add(f"{selector}-plus", FakeNode(tag="button"))[0]
    minus = page.add(f"{selector}-minus", FakeNode(tag="button"))[0]

    def refresh():
        current = int(value.text)
        plus.attributes["class"] = "btn disabled" if current >= maximum else "btn"
        minus.attributes["class"] = "btn disabled" if current <= minimum else "btn"

    def step(delta):
        def on_click(_node):
            value.text = str(int(value.text) + delta)
            refresh()
        return on_click

    plus.on_click = step(1)
    minus.on_click = step(-1)
    refresh()
    element = counter(
        selector, "Adults",
        plus=f"{selector}-plus", minus=f"{selector}-minus", value=f"{selector}-value",
    )
    return element, plus, minus


def test_counter_reads_and_steps(page, ctx):
    adults, plus, minus = make_counter(page, 2)

    assert counters.get_value(adults, ctx) == 2
    assert counters.can_increment(adults, ctx)
    assert counters.can_decrement(adults, ctx)

    counters.increment(adults, ctx)
    counters.decrement(adults, ctx)
    counters.decrement(adults, ctx)
    assert counters.get_value(adults, ctx) == 1
    assert (plus.clicks, minus.clicks) == (1, 2)


def test_set_value_walks_to_target(page, ctx):
    adults, plus, minus = make_counter(page, 2)

    counters.set_value(adults, ctx, 5)
    assert counters.get_value(adults, ctx) == 5
    assert plus.clicks == 3

    counters.set_value(adults, ctx, 5)
    assert plus.clicks == 3 and minus.clicks == 0


def test_set_value_stops_at_disabled_bound(page, ctx):
    adults, plus, _ = make_counter(page, 8, maximum=9)

    with pytest.raises(ElementError, match="cannot increase past 9"):
        counters.set_value(adults, ctx, 12)
    assert plus.clicks == 1


def test_set_value_detects_stuck_counter(page, ctx):
    adults, plus, _ = make_counter(page, 1)
    plus.on_click = None

    with pytest.raises(ElementError, match="stuck at 1"):
        counters.set_value(adults, ctx, 3)


def test_counter_value_from_attribute(page, ctx):
    page.add("#rooms-value", FakeNode(text="", attributes={"data-value": "3 rooms"}))
    rooms = counter("#rooms", "Rooms", plus="#p", minus="#m", value="#rooms-value", value_attribute="data-value")
    assert counters.get_value(rooms, ctx) == 3


def test_counter_without_number_raises(page, ctx):
    page.add("#kids-value", FakeNode(text="none"))
    kids = counter("#kids", "Kids", plus="#p", minus="#m", value="#kids-value")
    with pytest.raises(ValueError):
        counters.get_value(kids, ctx)


def test_counter_ops_rejected_on_label(ctx):
    with pytest.raises(CapabilityError):
        counters.increment(label("#x", "X"), ctx)


@pytest.fixture
def check_in(page):
    page.add("#check-in", FakeNode(tag="input", value="06/15/2026"))
    page.add("[data-action='next']", FakeNode(tag="button"))
    page.add("[data-action='previous']", FakeNode(tag="button"))
    page.add("[data-date='2026-06-20']", FakeNode(tag="td"))
    page.add("[data-date='2026-06-21']", FakeNode(tag="td", attributes={"class": "day disabled"}))
    return date_picker("#check-in", "Check-in")


def test_day_element_locator(check_in):
    cell = pickers.day_element(check_in, date(2026, 6, 20))
    assert cell.locator == "[data-date='2026-06-20']"
    assert cell.name == "Check-in day 2026-06-20"


def test_set_and_select_date_click_the_cell(page, ctx, check_in):
    pickers.set_date(check_in, ctx, date(2026, 6, 20))
    pickers.select_date(check_in, ctx, "06/20/2026")

    assert page.resolve("#check-in")[0].clicks == 2
    assert page.resolve("[data-date='2026-06-20']")[0].clicks == 2


def test_select_date_rejects_wrong_format(ctx, check_in):
    with pytest.raises(ValueError):
        pickers.select_date(check_in, ctx, "2026-06-20")


def test_read_selected_date(page, ctx, check_in):
    assert pickers.get_selected_date(check_in, ctx) == "06/15/2026"
    assert pickers.get_selected_local_date(check_in, ctx) == date(2026, 6, 15)

    page.resolve("#check-in")[0].value = "15.06.2026"
    assert pickers.get_selected_local_date(check_in, ctx) is None

    pickers.clear_date(check_in, ctx)
    assert pickers.get_selected_local_date(check_in, ctx) is None


def test_custom_date_format(page, ctx):
    page.add("#depart", FakeNode(tag="input", value="2026-07-01"))
    depart = date_picker("#depart", "Depart", date_format="%Y-%m-%d")
    assert pickers.get_selected_local_date(depart, ctx) == date(2026, 7, 1)


def test_is_date_enabled(ctx, check_in):
    assert pickers.is_date_enabled(check_in, ctx, date(2026, 6, 20))
    assert not pickers.is_date_enabled(check_in, ctx, date(2026, 6, 21))
    assert not pickers.is_date_enabled(check_in, ctx, date(2026, 6, 22))


def test_month_navigation(page, ctx, check_in):
    pickers.next_month(check_in, ctx)
    pickers.next_month(check_in, ctx)
    pickers.previous_month(check_in, ctx)

    assert page.resolve("[data-action='next']")[0].clicks == 2
    assert page.resolve("[data-action='previous']")[0].clicks == 1
