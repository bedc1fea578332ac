"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the travel sites under test.

Each page class encapsulates:
    - Named elements (from JSON locator files or declared in the class)
    - Page-specific workflows
    - The SessionContext it currently operates in

Author: Automation Team
License: MIT
================================================================================
"""

from .agoda_home_page import AgodaHomePage
from .hotel_details_page import HotelDetailsPage
from .search_results_page import SearchResultsPage
from .vietjet_home_page import VietjetHomePage

__all__ = [
    "AgodaHomePage",
    "SearchResultsPage",
    "HotelDetailsPage",
    "VietjetHomePage",
]
