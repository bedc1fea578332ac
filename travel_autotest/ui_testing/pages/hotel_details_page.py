"""
================================================================================
Agoda Hotel Details Page Object
================================================================================

Property page opened from a search result: hotel facts, room offers and
amenities.

================================================================================
"""

from __future__ import annotations

from typing import List

import allure
from loguru import logger

from travel_autotest.ui_testing.framework.element_types import button, element_collection, label
from travel_autotest.ui_testing.framework.page_base import BasePage
from travel_autotest.ui_testing.framework.session import SessionContext
from travel_autotest.ui_testing.framework.widgets import collection


class HotelDetailsPage(BasePage):
    """Agoda hotel details page."""

    # Hotel information
    hotel_name = label("[data-selenium='hotel-header-name']", "Hotel Name")
    hotel_address = label("[data-selenium='hotel-address-map']", "Hotel Address")
    hotel_rating = label("[data-selenium='hotel-header-review-score']", "Hotel Rating")

    # Room selection
    room_types = element_collection("[data-selenium='masterroom-title-name']", "Room Types")
    room_prices = element_collection("[data-selenium='display-price']", "Room Prices")
    book_buttons = element_collection("[data-selenium='ChildRoomsList-bookButtonInput']", "Book Buttons")

    # Amenities and facilities
    amenities = element_collection("[data-selenium='facility-item']", "Amenities")
    show_all_amenities_button = button("[data-selenium='facilities-show-all']", "Show All Amenities")

    def __init__(self, ctx: SessionContext, name: str = "Agoda Hotel Details Page", **kwargs):
        super().__init__(ctx, name, **kwargs)

    def get_hotel_name(self) -> str:
        self.hotel_name.wait_for_visible(self.ctx)
        return self.hotel_name.get_text(self.ctx)

    def get_hotel_address(self) -> str:
        return self.hotel_address.get_text(self.ctx)

    def get_hotel_rating(self) -> str:
        return self.hotel_rating.get_text(self.ctx)

    def get_room_types(self) -> List[str]:
        return collection.texts(self.room_types, self.ctx)

    def get_room_price(self, index: int) -> str:
        return collection.item(self.room_prices, index).get_text(self.ctx)

    @allure.step("Book room #{index}")
    def book_room(self, index: int) -> "HotelDetailsPage":
        book = collection.item(self.book_buttons, index)
        book.scroll_into_view(self.ctx)
        book.click(self.ctx)
        return self

    @allure.step("Show all amenities")
    def show_all_amenities(self) -> "HotelDetailsPage":
        """Expand the amenity list when the site offers a "show all" button."""
        if self.show_all_amenities_button.is_visible(self.ctx):
            self.show_all_amenities_button.click(self.ctx)
        else:
            logger.debug(f"{self} - amenity list already complete")
        return self

    def get_amenities(self) -> List[str]:
        return collection.texts(self.amenities, self.ctx)


__all__ = ["HotelDetailsPage"]
