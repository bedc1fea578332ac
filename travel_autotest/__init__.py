"""
Travel autotest package.

This repository keeps `travel_autotest` importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - page objects reused outside of pytest

Target sites are public travel-booking pages; no credentials are stored here.
"""
