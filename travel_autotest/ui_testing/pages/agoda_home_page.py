"""
================================================================================
Agoda Home Page Object
================================================================================

Hotel search form of agoda.com: destination, stay dates and occupancy.

Element definitions live in ``locators/agoda/agoda_locators.json``.

================================================================================
"""

from __future__ import annotations

from datetime import date
from typing import Optional

import allure
from loguru import logger

from travel_autotest.ui_testing.framework.date_helper import future_date
from travel_autotest.ui_testing.framework.page_base import BasePage
from travel_autotest.ui_testing.framework.session import SessionContext
from travel_autotest.ui_testing.framework.widgets import collection, counter, date_picker, text


# Calendar months to page forward through when looking for a day
MAX_MONTHS_AHEAD = 12


class AgodaHomePage(BasePage):
    """Agoda landing page with the hotel search box."""

    LOCATOR_FILE = "agoda/agoda_locators.json"

    def __init__(self, ctx: SessionContext, name: str = "Agoda Home Page", **kwargs):
        super().__init__(ctx, name, **kwargs)
        self.search_box = self.element("searchBox")
        self.suggestions = self.element("suggestions")
        self.calendar = self.element("calendar")
        self.occupancy_button = self.element("occupancyButton")
        self.rooms = self.element("roomsCounter")
        self.adults = self.element("adultsCounter")
        self.children = self.element("childrenCounter")
        self.search_button = self.element("searchButton")

    @allure.step("Search destination: {destination}")
    def search_destination(self, destination: str) -> "AgodaHomePage":
        """Type the destination and pick the first suggestion."""
        text.clear_and_type(self.search_box, self.ctx, destination)

        first = collection.item(self.suggestions, 0)
        first.wait_for_visible(self.ctx)
        logger.info(f"{self} - picking suggestion: {first.get_text(self.ctx)}")
        first.click(self.ctx)
        return self

    def _pick_day(self, day: date) -> None:
        cell = date_picker.day_element(self.calendar, day)
        for _ in range(MAX_MONTHS_AHEAD):
            if cell.is_visible(self.ctx):
                break
            date_picker.next_month(self.calendar, self.ctx)
        cell.click(self.ctx)

    @allure.step("Set dates: check-in +{check_in_offset}d, check-out +{check_out_offset}d")
    def set_dates(
        self,
        check_in_offset: int,
        check_out_offset: int,
        today: Optional[date] = None,
    ) -> "AgodaHomePage":
        """
        Pick check-in and check-out in the calendar.

        Args:
            check_in_offset: Days from today to check-in
            check_out_offset: Days from today to check-out

        Raises:
            ValueError: If check-out is not after check-in
        """
        if check_out_offset <= check_in_offset:
            raise ValueError(
                f"Check-out offset ({check_out_offset}) must be after check-in offset ({check_in_offset})"
            )
        check_in = future_date(check_in_offset, today)
        check_out = future_date(check_out_offset, today)
        logger.info(f"{self} - stay {check_in.isoformat()} -> {check_out.isoformat()}")

        # The calendar opens with the search box focus; click it only if closed
        if not date_picker.day_element(self.calendar, check_in).is_visible(self.ctx):
            self.calendar.click(self.ctx)
        self._pick_day(check_in)
        self._pick_day(check_out)
        return self

    @allure.step("Set occupancy: {adults} adults, {children} children, {rooms} rooms")
    def set_occupancy(self, adults: int, children: int = 0, rooms: int = 1) -> "AgodaHomePage":
        """
        Set the room and guest counters.

        Rooms are set first: the site raises the adult count to match.
        """
        if not self.rooms.is_visible(self.ctx):
            self.occupancy_button.click(self.ctx)
        counter.set_value(self.rooms, self.ctx, rooms)
        counter.set_value(self.adults, self.ctx, adults)
        counter.set_value(self.children, self.ctx, children)
        return self

    @allure.step("Click search")
    def click_search(self) -> "AgodaHomePage":
        self.search_button.click(self.ctx)
        return self

    @allure.step("Search hotels in {destination}")
    def search_hotels(
        self,
        destination: str,
        check_in_offset: int,
        nights: int,
        adults: int = 2,
        children: int = 0,
        rooms: int = 1,
        today: Optional[date] = None,
    ) -> "AgodaHomePage":
        """Fill the whole search form and submit it."""
        self.search_destination(destination)
        self.set_dates(check_in_offset, check_in_offset + nights, today)
        self.set_occupancy(adults, children, rooms)
        return self.click_search()


__all__ = ["AgodaHomePage"]
