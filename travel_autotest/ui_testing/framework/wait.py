# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Bounded polling and stale-element retry used by every element operation.
#
# Key Features:
#   - Synchronous spin-poll with a fixed interval and a hard deadline
#   - Probe errors are treated as "condition not met yet"
#   - Retry limited to the "element went stale" race, nothing else
#
# Usage:
#   poll_until(lambda: locator.is_visible(), 5000, description="visible")
#   ok = wait_until(lambda: len(context.pages) == 2, 10000, interval_ms=500)
#
# ================================================================================

import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional

from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from .errors import StaleElementError, WaitTimeoutError


DEFAULT_POLL_INTERVAL_MS = 100

# Playwright messages reported when a resolved node is gone mid-operation
STALE_ERROR_MARKERS = (
    "not attached to the dom",
    "element is detached",
    "node is detached",
    "execution context was destroyed",
)


@dataclass
class WaitConfig:
    """
    Configuration for a single bounded wait.

    Attributes:
        timeout_ms: Total budget in milliseconds
        interval_ms: Sleep between two probes in milliseconds
    """
    timeout_ms: int = 10000
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS

    def until(self, predicate: Callable[[], bool], description: str = "condition") -> bool:
        """Run :func:`wait_until` with this budget."""
        return wait_until(predicate, self.timeout_ms, self.interval_ms, description)


def _poll(
    predicate: Callable[[], bool],
    timeout_ms: int,
    interval_ms: int,
) -> tuple:
    """Run the polling loop. Returns (success, last_error)."""
    deadline = time.monotonic() + timeout_ms / 1000.0
    interval = max(interval_ms, 1) / 1000.0
    last_error: Optional[BaseException] = None

    while True:
        try:
            if predicate():
                return True, last_error
        except Exception as e:
            last_error = e

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            return False, last_error
        time.sleep(min(interval, remaining))


def poll_until(
    predicate: Callable[[], bool],
    timeout_ms: int,
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    description: str = "condition",
    target: str = "wait",
) -> None:
    """
    Block until ``predicate`` returns a truthy value.

    Args:
        predicate: Zero-argument probe; exceptions count as not satisfied
        timeout_ms: Total budget in milliseconds
        interval_ms: Sleep between probes in milliseconds
        description: Expected condition, used in the error message
        target: Element (or other subject) being waited on

    Raises:
        WaitTimeoutError: If the deadline passes without success
    """
    success, last_error = _poll(predicate, timeout_ms, interval_ms)
    if success:
        return

    error = WaitTimeoutError(target, description, timeout_ms, last_error)
    logger.error(str(error))
    raise error


def wait_until(
    predicate: Callable[[], bool],
    timeout_ms: int,
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    description: str = "condition",
) -> bool:
    """
    Same loop as :func:`poll_until` but reports the outcome instead of raising.

    Returns:
        True if the predicate held before the deadline, False otherwise
    """
    success, last_error = _poll(predicate, timeout_ms, interval_ms)
    if not success:
        logger.warning(
            f"Gave up waiting for {description} after {timeout_ms}ms"
            + (f" (last error: {last_error})" if last_error else "")
        )
    return success


class RetryConfig:
    """Configuration for the stale-element retry."""

    def __init__(self, max_attempts: int = 3, delay_seconds: float = 0.5):
        """
        Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts, first one included
            delay_seconds: Fixed delay between attempts
        """
        self.max_attempts = max_attempts
        self.delay_seconds = delay_seconds


def is_stale_error(error: BaseException) -> bool:
    """Check whether ``error`` is Playwright reporting a detached node."""
    if not isinstance(error, PlaywrightError):
        return False
    message = str(error).lower()
    return any(marker in message for marker in STALE_ERROR_MARKERS)


def with_stale_retry(config: RetryConfig = None, target: str = ""):
    """
    Decorator retrying a call when the element went stale between lookup and use.

    Any other exception is raised on the first attempt.

    Args:
        config: RetryConfig controlling attempts and delay
        target: Element description carried by the final StaleElementError
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            last_exception = None

            for attempt in range(config.max_attempts):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not is_stale_error(e):
                        raise
                    last_exception = e
                    if attempt < config.max_attempts - 1:
                        logger.warning(
                            f"Attempt {attempt + 1}/{config.max_attempts} hit a stale element in "
                            f"{func.__name__}: {str(e)[:100]}. Retrying in {config.delay_seconds}s..."
                        )
                        time.sleep(config.delay_seconds)

            logger.error(
                f"All {config.max_attempts} attempts failed for {func.__name__}: "
                f"{str(last_exception)}"
            )
            raise StaleElementError(
                f"{target or func.__name__}: failed after {config.max_attempts} retries: {last_exception}",
                target,
            ) from last_exception

        return wrapper
    return decorator


def retry_on_stale(func: Callable, config: RetryConfig = None, target: str = ""):
    """Call ``func`` once under :func:`with_stale_retry`."""
    return with_stale_retry(config, target)(func)()


__all__ = [
    "DEFAULT_POLL_INTERVAL_MS",
    "WaitConfig",
    "poll_until",
    "wait_until",
    "RetryConfig",
    "is_stale_error",
    "with_stale_retry",
    "retry_on_stale",
]
