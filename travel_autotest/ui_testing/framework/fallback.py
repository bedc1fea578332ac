"""
================================================================================
Fallback Chains
================================================================================

Best-effort workflows that try several strategies in order, such as sorting
search results by a dropdown, then by a tab, then by a link.

Every run returns a ``FallbackOutcome`` naming the strategy that worked and
what went wrong with the others. Whether "nothing worked" is fatal is up to
the caller:

    outcome = FallbackChain("Sort by price", [
        Strategy("dropdown", lambda: select_sort(ctx)),
        Strategy("tab", lambda: click_sort_tab(ctx)),
    ]).run()
    outcome.raise_if_failed()

A strategy fails when it raises or returns ``False``. The outcome of every
run is attached to the Allure report as JSON.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, List, Optional, Sequence

import allure
from loguru import logger

from .errors import ElementNotFoundError
from .reporting import attach_json


@dataclass(frozen=True)
class Strategy:
    """
    One way of getting something done.

    Attributes:
        name: Short label used in logs and outcomes
        action: Zero-argument callable; ``False`` or an exception means failure
    """
    name: str
    action: Callable[[], Any]


@dataclass(frozen=True)
class Attempt:
    """Result of running one strategy."""
    strategy: str
    succeeded: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class FallbackOutcome:
    """
    Result of a fallback chain run.

    Attributes:
        description: What the chain was trying to do
        succeeded_with: Name of the winning strategy, or None if all failed
        attempts: Every strategy tried, in order
    """
    description: str
    succeeded_with: Optional[str]
    attempts: List[Attempt] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.succeeded_with is not None

    @property
    def all_failed(self) -> bool:
        return self.succeeded_with is None

    @property
    def used_fallback(self) -> bool:
        """True when a strategy other than the first one won."""
        return self.succeeded and bool(self.attempts) and self.attempts[0].strategy != self.succeeded_with

    def raise_if_failed(self) -> "FallbackOutcome":
        """
        Raises:
            ElementNotFoundError: If every strategy failed
        """
        if self.all_failed:
            raise ElementNotFoundError(str(self), self.description)
        return self

    def __str__(self) -> str:
        if self.succeeded:
            return f"{self.description}: succeeded with '{self.succeeded_with}'"
        errors = "; ".join(f"{a.strategy} -> {a.error}" for a in self.attempts)
        return f"{self.description}: all {len(self.attempts)} strategies failed ({errors})"


class FallbackChain:
    """
    Ordered list of strategies tried until one succeeds.

    Usage:
        >>> chain = FallbackChain("Open filters", [Strategy("button", open_by_button)])
        >>> chain.run().succeeded
        True
    """

    def __init__(self, description: str, strategies: Sequence[Strategy]):
        """
        Args:
            description: What the chain does, for logs and reports
            strategies: Strategies in priority order
        """
        if not strategies:
            raise ValueError(f"Fallback chain '{description}' needs at least one strategy")
        self.description = description
        self.strategies = list(strategies)

    def run(self) -> FallbackOutcome:
        """
        Try each strategy in order, stopping at the first success.

        Returns:
            FallbackOutcome describing the winner (if any) and every attempt
        """
        attempts: List[Attempt] = []

        with allure.step(self.description):
            for strategy in self.strategies:
                try:
                    result = strategy.action()
                except Exception as e:
                    attempts.append(Attempt(strategy.name, False, f"{type(e).__name__}: {str(e)[:100]}"))
                    logger.debug(f"{self.description} - strategy '{strategy.name}' raised: {str(e)[:100]}")
                    continue

                if result is False:
                    attempts.append(Attempt(strategy.name, False, "returned False"))
                    logger.debug(f"{self.description} - strategy '{strategy.name}' returned False")
                    continue

                attempts.append(Attempt(strategy.name, True))
                outcome = FallbackOutcome(self.description, strategy.name, attempts)
                self._attach(outcome)
                if outcome.used_fallback:
                    logger.warning(f"⚠️ {outcome}")
                else:
                    logger.info(f"✅ {outcome}")
                return outcome

            outcome = FallbackOutcome(self.description, None, attempts)
            self._attach(outcome)

        logger.warning(f"❌ {outcome}")
        return outcome

    def _attach(self, outcome: FallbackOutcome) -> None:
        attach_json(
            {
                "description": outcome.description,
                "succeeded_with": outcome.succeeded_with,
                "used_fallback": outcome.used_fallback,
                "attempts": [asdict(a) for a in outcome.attempts],
            },
            name=f"{self.description} - outcome",
        )


__all__ = ["Strategy", "Attempt", "FallbackOutcome", "FallbackChain"]
