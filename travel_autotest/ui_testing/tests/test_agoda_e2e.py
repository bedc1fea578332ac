"""
================================================================================
Agoda End-to-End Test Cases
================================================================================

Hotel search scenarios against the live agoda.com site.

These tests depend on a third-party site and only run with
``--run-external``. Site changes can break them without any change here.

================================================================================
"""

import calendar

import allure
import pytest
from loguru import logger

from travel_autotest.ui_testing.framework import browser_utils
from travel_autotest.ui_testing.framework.config_manager import get_config
from travel_autotest.ui_testing.framework.date_helper import days_until_next_day_of_week
from travel_autotest.ui_testing.pages import AgodaHomePage, HotelDetailsPage, SearchResultsPage


pytestmark = [pytest.mark.external, pytest.mark.e2e]

DESTINATION = "Da Nang"


@pytest.fixture
def agoda_home(ctx) -> AgodaHomePage:
    """AgodaHomePage opened on the configured Agoda URL."""
    home = AgodaHomePage(ctx)
    home.open_page(get_config().agoda_url)
    home.wait_for_page_to_load()
    return home


@pytest.fixture
def search_results(agoda_home: AgodaHomePage) -> SearchResultsPage:
    """Results of a 3-night stay for 2 adults starting next Friday."""
    check_in_offset = days_until_next_day_of_week(calendar.FRIDAY)
    agoda_home.search_hotels(DESTINATION, check_in_offset, nights=3, adults=2)

    # The results open in a new tab on some site versions
    ctx = agoda_home.ctx
    if browser_utils.wait_for_window_count(ctx, 2, timeout_seconds=5):
        ctx = browser_utils.switch_to_window(ctx, browser_utils.window_count(ctx) - 1)

    results = SearchResultsPage(ctx)
    results.wait_for_page_to_load()
    return results


@allure.epic("Agoda")
@allure.feature("Hotel Search")
class TestAgodaHotelSearch:
    """Hotel search on agoda.com."""

    @allure.story("Search")
    @allure.title("Search hotels in Da Nang lists results in Da Nang")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.smoke
    def test_search_lists_hotels_in_destination(self, search_results: SearchResultsPage):
        count = search_results.get_number_of_results()
        assert count > 0

        for index in range(min(count, 5)):
            name = search_results.get_hotel_name(index)
            location = search_results.get_hotel_location(index)
            logger.info(f"Hotel {index}: {name} ({location})")
            assert name
            assert DESTINATION.lower() in location.lower()

    @allure.story("Sort")
    @allure.title("Sort by lowest price orders the first hotels by price")
    @pytest.mark.P1
    @pytest.mark.regression
    def test_sort_by_lowest_price(self, search_results: SearchResultsPage):
        outcome = search_results.sort_results_by("Price (low to high)")
        allure.attach(str(outcome), name="Sort outcome", attachment_type=allure.attachment_type.TEXT)
        if not outcome.succeeded:
            pytest.skip(f"No sort control found on the current site version: {outcome}")

        prices = search_results.get_hotel_prices(5)
        assert prices == sorted(prices)

    @allure.story("Hotel Details")
    @allure.title("Hotel details page shows the selected hotel")
    @pytest.mark.P2
    def test_open_hotel_details(self, search_results: SearchResultsPage):
        name = search_results.get_hotel_name(0)

        details = HotelDetailsPage(search_results.open_hotel(0))
        details.wait_for_page_to_load()
        assert details.get_hotel_name() == name
        assert details.get_room_types()
