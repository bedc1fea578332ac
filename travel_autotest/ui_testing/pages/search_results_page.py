"""
================================================================================
Agoda Search Results Page Object
================================================================================

Hotel result list: names, locations and prices of the listed hotels, and
sorting of the list.

Sorting is best effort. The sort control has moved between a tab bar, a
dropdown and a plain link across site versions, so ``sort_results_by`` tries
each in turn and reports which one worked.

================================================================================
"""

from __future__ import annotations

import re
from typing import List, Optional

import allure
from loguru import logger

from travel_autotest.ui_testing.framework import browser_utils
from travel_autotest.ui_testing.framework.element import Element
from travel_autotest.ui_testing.framework.fallback import FallbackChain, FallbackOutcome, Strategy
from travel_autotest.ui_testing.framework.page_base import BasePage
from travel_autotest.ui_testing.framework.session import SessionContext
from travel_autotest.ui_testing.framework.wait import WaitConfig
from travel_autotest.ui_testing.framework.widgets import collection, options


# One number token: digit groups of three joined by "." "," or a space,
# with an optional decimal part, or a plain number
_PRICE = re.compile(r"\d{1,3}(?:[.,\s]\d{3})+(?:[.,]\d+)?|\d+(?:[.,]\d+)?")

# Result list is considered settled once two reads this far apart agree
SETTLE_INTERVAL_MS = 500


def parse_price(raw: str) -> float:
    """
    Numeric value of a displayed price.

    Handles comma, dot and space grouping ("VND 1,234,567", "1.250.000 ₫",
    "2 450 000 ₫") and decimal parts ("$ 89.50", "1.234,50 €"). A lone
    separator followed by exactly three digits is read as grouping.

    Raises:
        ValueError: If ``raw`` holds no number
    """
    match = _PRICE.search(raw or "")
    if match is None:
        raise ValueError(f"No price in {raw!r}")

    token = re.sub(r"\s", "", match.group())
    separators = [c for c in token if c in ".,"]
    if not separators:
        return float(token)

    last = separators[-1]
    head, _, tail = token.rpartition(last)
    if len(set(separators)) == 1 and (len(separators) > 1 or len(tail) == 3):
        return float(token.replace(last, ""))
    return float(re.sub(r"[.,]", "", head) + "." + tail)


class SearchResultsPage(BasePage):
    """Agoda hotel search results."""

    LOCATOR_FILE = "agoda/agoda_locators.json"

    def __init__(self, ctx: SessionContext, name: str = "Agoda Search Results Page", **kwargs):
        super().__init__(ctx, name, **kwargs)
        self.hotel_items = self.element("hotelItems")
        self.sort_bar = self.element("sortBar")
        self.sort_dropdown = self.element("sortDropdown")
        self.price_ascending_option = self.element("priceAscendingOption")

    # =========================================================================
    # Result list
    # =========================================================================

    def _field(self, index: int, field_name: str) -> Element:
        hotel = collection.item(self.hotel_items, index)
        return hotel.child(self.locator(field_name), f"Hotel {index} {field_name}")

    def get_number_of_results(self) -> int:
        """Wait for the first hotel card, then count the listed hotels."""
        collection.item(self.hotel_items, 0).wait_for_visible(self.ctx)
        count = collection.size(self.hotel_items, self.ctx)
        logger.info(f"{self} - {count} hotels listed")
        return count

    def get_hotel_name(self, index: int) -> str:
        return self._field(index, "hotelName").get_text(self.ctx)

    def get_hotel_location(self, index: int) -> str:
        return self._field(index, "hotelLocation").get_text(self.ctx)

    def get_hotel_price(self, index: int) -> float:
        """
        Displayed price of the hotel at ``index`` as a number.

        Raises:
            ValueError: If the price text holds no number
        """
        price = parse_price(self._field(index, "hotelPrice").get_text(self.ctx))
        logger.debug(f"{self} - hotel {index} price: {price}")
        return price

    def get_hotel_prices(self, count: int) -> List[float]:
        """Prices of the first ``count`` hotels (fewer if fewer are listed)."""
        listed = collection.size(self.hotel_items, self.ctx)
        return [self.get_hotel_price(i) for i in range(min(count, listed))]

    @allure.step("Open hotel #{index}")
    def open_hotel(self, index: int) -> SessionContext:
        """
        Click the name of the hotel at ``index``.

        Returns:
            Context of the tab the details page opened in (a new tab when the
            site opens one, otherwise this page's tab)
        """
        before = browser_utils.window_count(self.ctx)
        self._field(index, "hotelName").click(self.ctx)
        opened = browser_utils.wait_for_window_count(
            self.ctx, before + 1, timeout_seconds=self.ctx.timeouts.default_ms / 1000
        )
        return browser_utils.switch_to_window(self.ctx, before) if opened else self.ctx

    def _hotel_names(self) -> List[str]:
        names = self.hotel_items.child(self.locator("hotelName"))
        return [name.strip() for name in self.ctx.locate_all(names.locator).all_inner_texts()]

    def wait_for_results_to_settle(self, timeout_ms: Optional[int] = None) -> bool:
        """
        Poll the hotel names until two consecutive reads match.

        Returns:
            False (with a warning) if the list kept changing until the timeout
        """
        previous: List[Optional[List[str]]] = [None]

        def settled() -> bool:
            current = self._hotel_names()
            stable = bool(current) and current == previous[0]
            previous[0] = current
            return stable

        wait = WaitConfig(timeout_ms or self.ctx.timeouts.default_ms, SETTLE_INTERVAL_MS)
        return wait.until(settled, "search results to settle")

    # =========================================================================
    # Sorting
    # =========================================================================

    def _sort_by_tab(self, option: str) -> bool:
        tab = self.sort_bar.child(f'button:has-text("{option}")', f"Sort tab '{option}'", kind="Button")
        if not tab.is_visible(self.ctx):
            return False
        tab.click(self.ctx)
        return True

    def _sort_by_dropdown(self, option: str) -> bool:
        if not self.sort_dropdown.exists(self.ctx):
            return False
        if not options.has_option(self.sort_dropdown, self.ctx, option):
            return False
        options.select_by_visible_text(self.sort_dropdown, self.ctx, option)
        return True

    def _sort_by_price_shortcut(self, option: str) -> bool:
        # "low to high" and "lowest price", not "high to low"
        ascending = option.lower().split(" to ")[0]
        if "price" not in option.lower() or "low" not in ascending:
            return False
        if not self.price_ascending_option.is_visible(self.ctx):
            return False
        self.price_ascending_option.click(self.ctx)
        return True

    def _sort_by_link_text(self, option: str) -> bool:
        link = Element(f'text="{option}"', f"Sort link '{option}'", kind="Link")
        if not link.is_visible(self.ctx):
            return False
        link.click(self.ctx)
        return True

    @allure.step("Sort results by: {option}")
    def sort_results_by(self, option: str) -> FallbackOutcome:
        """
        Sort the list by ``option`` (e.g. "Price (low to high)").

        Tries the sort tab bar, the sort dropdown, the lowest-price shortcut
        and finally any link with that text. When one works, waits for the
        list to settle.

        Returns:
            Outcome naming the strategy that worked; all-failed outcomes are
            logged and returned, not raised
        """
        outcome = FallbackChain(
            f"Sort results by '{option}'",
            [
                Strategy("sort tab", lambda: self._sort_by_tab(option)),
                Strategy("sort dropdown", lambda: self._sort_by_dropdown(option)),
                Strategy("lowest price shortcut", lambda: self._sort_by_price_shortcut(option)),
                Strategy("link text", lambda: self._sort_by_link_text(option)),
            ],
        ).run()

        if outcome.succeeded:
            self.wait_for_results_to_settle()
        else:
            logger.warning(f"{self} - results left unsorted, continuing")
        return outcome


__all__ = ["SearchResultsPage", "parse_price"]
