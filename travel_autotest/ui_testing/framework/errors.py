"""
================================================================================
Framework Errors
================================================================================

Exception hierarchy shared by elements, waits, pages and the locator
repository.

    ElementError
      +-- ElementNotFoundError
      +-- WaitTimeoutError      (also a builtin TimeoutError)
      +-- StaleElementError
      +-- CapabilityError       (also a builtin TypeError)

================================================================================
"""

from __future__ import annotations

from typing import Optional


class ElementError(Exception):
    """Base class for failures tied to a named element."""

    def __init__(self, message: str, element: str = ""):
        super().__init__(message)
        self.element = element


class ElementNotFoundError(ElementError):
    """Raised when a required element or element definition cannot be found."""
    pass


class WaitTimeoutError(ElementError, TimeoutError):
    """Raised when a bounded wait does not reach its condition in time."""

    def __init__(
        self,
        element: str,
        condition: str,
        timeout_ms: int,
        last_error: Optional[BaseException] = None,
    ):
        message = f"{element}: timed out after {timeout_ms}ms waiting for {condition}"
        if last_error is not None:
            message += f" (last error: {str(last_error)[:200]})"
        super().__init__(message, element)
        self.condition = condition
        self.timeout_ms = timeout_ms
        self.last_error = last_error


class StaleElementError(ElementError):
    """Raised when an element stays detached after every retry attempt."""
    pass


class CapabilityError(ElementError, TypeError):
    """Raised when a widget operation is used on an element lacking the capability."""

    def __init__(self, element: str, capability: str, operation: str):
        super().__init__(
            f"{element} does not support '{operation}' (missing capability: {capability})",
            element,
        )
        self.capability = capability
        self.operation = operation


__all__ = [
    "ElementError",
    "ElementNotFoundError",
    "WaitTimeoutError",
    "StaleElementError",
    "CapabilityError",
]
