"""
================================================================================
Vietjet Home Page Object
================================================================================

Flight search form of vietjetair.com: trip type, route and travel dates.

Element definitions live in ``locators/vietjet/vietjet_locators.json``.

================================================================================
"""

from __future__ import annotations

from datetime import date
from typing import Union

import allure
from loguru import logger

from travel_autotest.ui_testing.framework.date_helper import format_date
from travel_autotest.ui_testing.framework.element import Element
from travel_autotest.ui_testing.framework.page_base import BasePage
from travel_autotest.ui_testing.framework.session import SessionContext
from travel_autotest.ui_testing.framework.widgets import checked, text


SET_DATE_VALUE_JS = """(el, value) => {
    el.value = value;
    el.dispatchEvent(new Event('input', { bubbles: true }));
    el.dispatchEvent(new Event('change', { bubbles: true }));
}"""


class VietjetHomePage(BasePage):
    """Vietjet landing page with the flight search box."""

    LOCATOR_FILE = "vietjet/vietjet_locators.json"

    # Format of the date inputs
    DATE_FORMAT = "%d/%m/%Y"

    def __init__(self, ctx: SessionContext, name: str = "Vietjet Home Page", **kwargs):
        super().__init__(ctx, name, **kwargs)
        self.one_way_radio = self.element("oneWayRadio")
        self.round_trip_radio = self.element("roundTripRadio")
        self.origin_input = self.element("originInput")
        self.destination_input = self.element("destinationInput")
        self.depart_date_picker = self.element("departDatePicker")
        self.depart_date_input = self.element("departDateInput")
        self.return_date_picker = self.element("returnDatePicker")
        self.return_date_input = self.element("returnDateInput")
        self.search_button = self.element("searchButton")

    def _date_text(self, value: Union[date, str]) -> str:
        return value if isinstance(value, str) else format_date(value, self.DATE_FORMAT)

    def _fill_date(self, picker: Element, field: Element, value: Union[date, str]) -> None:
        date_text = self._date_text(value)
        picker.click(self.ctx)
        field.perform(
            self.ctx, f"Set date '{date_text}'",
            lambda loc: loc.evaluate(SET_DATE_VALUE_JS, date_text),
            "exist",
        )

    @allure.step("Select flight type (round trip={round_trip})")
    def select_flight_type(self, round_trip: bool) -> "VietjetHomePage":
        checked.select(self.round_trip_radio if round_trip else self.one_way_radio, self.ctx)
        logger.info(f"{self} - flight type: {'Round Trip' if round_trip else 'One Way'}")
        return self

    @allure.step("Set route: {origin} -> {destination}")
    def set_route(self, origin: str, destination: str) -> "VietjetHomePage":
        text.set_text(self.origin_input, self.ctx, origin)
        text.set_text(self.destination_input, self.ctx, destination)
        return self

    @allure.step("Set departure date: {departure}")
    def set_departure_date(self, departure: Union[date, str]) -> "VietjetHomePage":
        self._fill_date(self.depart_date_picker, self.depart_date_input, departure)
        return self

    @allure.step("Set return date: {return_date}")
    def set_return_date(self, return_date: Union[date, str]) -> "VietjetHomePage":
        self._fill_date(self.return_date_picker, self.return_date_input, return_date)
        return self

    @allure.step("Search flights")
    def search(self) -> "VietjetHomePage":
        self.search_button.click(self.ctx)
        return self

    def search_one_way(
        self,
        origin: str,
        destination: str,
        departure: Union[date, str],
    ) -> "VietjetHomePage":
        self.select_flight_type(round_trip=False)
        self.set_route(origin, destination)
        self.set_departure_date(departure)
        return self.search()

    def search_round_trip(
        self,
        origin: str,
        destination: str,
        departure: Union[date, str],
        return_date: Union[date, str],
    ) -> "VietjetHomePage":
        self.select_flight_type(round_trip=True)
        self.set_route(origin, destination)
        self.set_departure_date(departure)
        self.set_return_date(return_date)
        return self.search()


__all__ = ["VietjetHomePage", "SET_DATE_VALUE_JS"]
