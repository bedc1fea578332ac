import pytest

from fake_browser import FakeNode
from travel_autotest.ui_testing.framework.element_types import element_collection
from travel_autotest.ui_testing.framework import fallback
from travel_autotest.ui_testing.framework.errors import ElementNotFoundError
from travel_autotest.ui_testing.framework.fallback import FallbackChain, Strategy
from travel_autotest.ui_testing.framework.widgets import collection


def test_collection_size_texts_and_items(page, ctx):
    page.add(".amenity", FakeNode(text=" Pool "), FakeNode(text="Spa"), FakeNode(text="Gym\n"))
    amenities = element_collection(".amenity", "Amenities")

    assert collection.size(amenities, ctx) == 3
    assert collection.texts(amenities, ctx) == ["Pool", "Spa", "Gym"]

    spa = collection.item(amenities, 1)
    assert spa.locator == ".amenity >> nth=1"
    assert spa.name == "Amenities[1]"
    assert spa.get_text(ctx) == "Spa"

    assert [item.get_text(ctx) for item in collection.items(amenities, ctx)] == ["Pool", "Spa", "Gym"]


def test_empty_collection(ctx):
    nothing = element_collection(".none", "None")
    assert collection.size(nothing, ctx) == 0
    assert collection.texts(nothing, ctx) == []
    assert collection.items(nothing, ctx) == []


def test_first_strategy_wins():
    calls = []
    outcome = FallbackChain("Sort by price", [
        Strategy("dropdown", lambda: calls.append("dropdown")),
        Strategy("tab", lambda: calls.append("tab")),
    ]).run()

    assert outcome.succeeded
    assert outcome.succeeded_with == "dropdown"
    assert not outcome.used_fallback
    assert calls == ["dropdown"]
    assert outcome.raise_if_failed() is outcome


def test_failed_strategies_fall_through():
    def broken():
        raise RuntimeError("dropdown hidden")

    outcome = FallbackChain("Sort by price", [
        Strategy("dropdown", broken),
        Strategy("tab", lambda: False),
        Strategy("link", lambda: True),
    ]).run()

    assert outcome.succeeded_with == "link"
    assert outcome.used_fallback
    assert [(a.strategy, a.succeeded) for a in outcome.attempts] == [
        ("dropdown", False), ("tab", False), ("link", True),
    ]
    assert "RuntimeError: dropdown hidden" in outcome.attempts[0].error
    assert outcome.attempts[1].error == "returned False"
    assert str(outcome) == "Sort by price: succeeded with 'link'"


def test_all_failed_is_reported_not_raised():
    outcome = FallbackChain("Open filters", [
        Strategy("button", lambda: False),
        Strategy("menu", lambda: 1 / 0),
    ]).run()

    assert outcome.all_failed
    assert not outcome.succeeded
    assert not outcome.used_fallback
    assert "all 2 strategies failed" in str(outcome)
    with pytest.raises(ElementNotFoundError, match="Open filters"):
        outcome.raise_if_failed()


def test_outcome_is_attached_to_report(monkeypatch):
    attached = []
    monkeypatch.setattr(fallback, "attach_json", lambda data, name: attached.append((name, data)))

    FallbackChain("Sort by price", [
        Strategy("dropdown", lambda: False),
        Strategy("tab", lambda: True),
    ]).run()
    FallbackChain("Open filters", [Strategy("button", lambda: False)]).run()

    assert [name for name, _ in attached] == ["Sort by price - outcome", "Open filters - outcome"]
    won, lost = attached[0][1], attached[1][1]
    assert won["succeeded_with"] == "tab"
    assert won["used_fallback"] is True
    assert won["attempts"] == [
        {"strategy": "dropdown", "succeeded": False, "error": "returned False"},
        {"strategy": "tab", "succeeded": True, "error": None},
    ]
    assert lost["succeeded_with"] is None
    assert len(lost["attempts"]) == 1


def test_chain_needs_a_strategy():
    with pytest.raises(ValueError):
        FallbackChain("Nothing", [])
