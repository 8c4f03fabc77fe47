"""Site-specific extraction strategies keyed by hostname."""

from __future__ import annotations

from .base import GenericStrategy, SourceStrategy
from .dailyforex import DailyForexStrategy
from .investing import InvestingStrategy

__all__ = [
    "DEFAULT_STRATEGY",
    "DailyForexStrategy",
    "GenericStrategy",
    "InvestingStrategy",
    "STRATEGIES",
    "SourceStrategy",
    "strategy_for",
]

STRATEGIES: tuple[SourceStrategy, ...] = (InvestingStrategy(), DailyForexStrategy())
DEFAULT_STRATEGY: SourceStrategy = GenericStrategy()


def strategy_for(hostname: str) -> SourceStrategy:
    """Return the strategy registered for ``hostname``, or the generic one."""

    return next((strategy for strategy in STRATEGIES if strategy.matches(hostname)), DEFAULT_STRATEGY)
