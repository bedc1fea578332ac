"""
================================================================================
Locator Repository
================================================================================

Element definitions kept in JSON files instead of page classes.

File layout (one object per page):

    {
        "AgodaHomePage": {
            "searchBox": {"locator": "#textInput", "name": "Search Box", "type": "TextBox"},
            "rooms": {
                "locator": "[data-selenium='occupancyRooms']",
                "type": "Counter",
                "parts": {"plus": "...", "minus": "...", "value": "..."}
            }
        }
    }

``type`` is a tag from ``ELEMENT_TYPES`` (plain ``Element`` when absent or
unknown). ``parts`` and ``settings`` are passed to the factory as keyword
arguments.

Usage:
    repository = LocatorRepository()
    page = repository.page_locators("agoda/agoda_locators.json", "AgodaHomePage")
    search_box = repository.create_element(page, "searchBox")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from .config_manager import ConfigurationError
from .element import Element
from .element_types import ELEMENT_TYPES, element
from .errors import ElementNotFoundError


DEFAULT_LOCATORS_ROOT = Path(__file__).resolve().parents[1] / "locators"

PageLocators = Dict[str, Dict[str, Any]]


class LocatorRepository:
    """
    Loads and caches page sections of JSON locator files.

    Cache keys are ``"<file>#<page>"``; each file is re-read per page
    section on first access only.
    """

    def __init__(self, root: Union[str, Path, None] = None):
        """
        Args:
            root: Directory relative file names are resolved against
        """
        self.root = Path(root) if root else DEFAULT_LOCATORS_ROOT
        self._cache: Dict[str, PageLocators] = {}

    def _path(self, file: Union[str, Path]) -> Path:
        path = Path(file)
        return path if path.is_absolute() else self.root / path

    def page_locators(self, file: Union[str, Path], page: str) -> PageLocators:
        """
        Element definitions of ``page`` in ``file``.

        Returns:
            Mapping of element name -> definition, empty when the file or the
            page section is missing

        Raises:
            ConfigurationError: If the file is not valid JSON
        """
        cache_key = f"{file}#{page}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        path = self._path(file)
        if not path.is_file():
            logger.error(f"Locator file not found: {path}")
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in locator file {path}: {e}")
            raise ConfigurationError(f"Invalid JSON in locator file {path}: {e}") from e

        section = document.get(page) if isinstance(document, dict) else None
        if not isinstance(section, dict):
            logger.error(f"Page '{page}' not found in {path}")
            return {}

        self._cache[cache_key] = section
        logger.debug(f"Loaded {len(section)} locators for {page} from {path}")
        return section

    def _definition(self, page_locators: PageLocators, element_name: str) -> Dict[str, Any]:
        definition = page_locators.get(element_name)
        if not isinstance(definition, dict) or "locator" not in definition:
            logger.error(f"Element '{element_name}' not found in page definition")
            raise ElementNotFoundError(
                f"Element '{element_name}' not found in page definition", element_name
            )
        return definition

    def create_element(self, page_locators: PageLocators, element_name: str) -> Element:
        """
        Build the element described under ``element_name``.

        Raises:
            ElementNotFoundError: If there is no such definition
            ConfigurationError: If parts/settings do not fit the element type
        """
        definition = self._definition(page_locators, element_name)
        locator = definition["locator"]
        name = definition.get("name", element_name)
        type_tag = definition.get("type", "Element")

        factory = ELEMENT_TYPES.get(type_tag)
        if factory is None:
            logger.warning(f"Unknown element type '{type_tag}' for '{element_name}', using Element")
            factory = element

        options = {**definition.get("parts", {}), **definition.get("settings", {})}
        try:
            return factory(locator, name, **options)
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid definition for {type_tag} '{element_name}': {e}"
            ) from e

    def get_locator(self, page_locators: PageLocators, element_name: str) -> str:
        """
        Raises:
            ElementNotFoundError: If there is no such definition
        """
        return self._definition(page_locators, element_name)["locator"]

    def clear_cache(self, file: Optional[Union[str, Path]] = None) -> None:
        """Forget cached sections, of one file or of all files."""
        if file is None:
            self._cache.clear()
        else:
            prefix = f"{file}#"
            for key in [k for k in self._cache if k.startswith(prefix)]:
                del self._cache[key]
        logger.debug("Locator cache cleared")

    def __str__(self) -> str:
        return f"LocatorRepository[{self.root}]"


__all__ = ["LocatorRepository", "DEFAULT_LOCATORS_ROOT", "PageLocators"]
