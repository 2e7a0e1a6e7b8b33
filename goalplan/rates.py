"""
Economic assumptions and per-goal rate resolution.

Purpose
-------
Holds the household-wide economic assumptions (all annual percentages) and
resolves, once per goal, the effective lump-sum and periodic return rates
as fractions. Goals may override either rate; an unset override falls back
to the global expected return rate.

Example
-------
>>> from goalplan.rates import EconomicAssumptions, resolve_rates
>>> from goalplan.goals import Goal
>>> assumptions = EconomicAssumptions(expected_return_rate=4.0)
>>> resolve_rates(Goal(id=1, periodic_return_rate=6.0), assumptions)
ResolvedRates(lump_sum=0.04, periodic=0.06)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .constants import (
    DEFAULT_INFLATION_RATE,
    DEFAULT_EDUCATION_INFLATION_RATE,
    DEFAULT_LOAN_INTEREST_RATE,
    DEFAULT_EXPECTED_RETURN_RATE,
    DEFAULT_POST_RETIREMENT_INFLATION_RATE,
    DEFAULT_POST_RETIREMENT_EXPECTED_RETURN_RATE,
)
from .goals import Goal
from .utils import pct_to_fraction

__all__ = [
    "EconomicAssumptions",
    "ResolvedRates",
    "resolve_rates",
]


@dataclass(frozen=True)
class EconomicAssumptions:
    """
    Household-wide economic assumptions, as annual percentages.

    Parameters
    ----------
    inflation_rate : float, default 2.5
        General inflation, applied to generic goals and the first-year
        retirement income need.
    education_inflation_rate : float, default 6.0
        Inflation applied to education goals.
    loan_interest_rate : float, default 3.8
        Interest rate used to amortize loan-repayment goals.
    expected_return_rate : float, default 2.5
        Fallback return for goals without their own rate overrides.
    post_retirement_inflation_rate : float, default 2.0
        Growth of retirement-era spending (``g``).
    post_retirement_expected_return_rate : float, default 3.0
        Return on the retirement pot during payout (``r``).
    """
    inflation_rate: float = DEFAULT_INFLATION_RATE
    education_inflation_rate: float = DEFAULT_EDUCATION_INFLATION_RATE
    loan_interest_rate: float = DEFAULT_LOAN_INTEREST_RATE
    expected_return_rate: float = DEFAULT_EXPECTED_RETURN_RATE
    post_retirement_inflation_rate: float = DEFAULT_POST_RETIREMENT_INFLATION_RATE
    post_retirement_expected_return_rate: float = DEFAULT_POST_RETIREMENT_EXPECTED_RETURN_RATE


@dataclass(frozen=True)
class ResolvedRates:
    """Effective annual return rates of one goal, as fractions."""
    lump_sum: float
    periodic: float


def _resolve(override: Optional[float], default_pct: float) -> float:
    return pct_to_fraction(default_pct if override is None else override)


def resolve_rates(goal: Goal, assumptions: EconomicAssumptions) -> ResolvedRates:
    """
    Resolve a goal's effective lump-sum and periodic return rates.

    Parameters
    ----------
    goal : Goal
        Goal whose optional overrides are consulted.
    assumptions : EconomicAssumptions
        Supplies the fallback ``expected_return_rate``.

    Returns
    -------
    ResolvedRates
        ``lump_sum`` compounds current savings and discounts over the holding
        period; ``periodic`` is the return on monthly contributions.

    Notes
    -----
    An explicit override of 0 is honored; only ``None`` falls back.
    """
    return ResolvedRates(
        lump_sum=_resolve(goal.lump_sum_return_rate, assumptions.expected_return_rate),
        periodic=_resolve(goal.periodic_return_rate, assumptions.expected_return_rate),
    )
