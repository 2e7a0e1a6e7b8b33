"""
Future-value projection of goal targets and earmarked savings.

Purpose
-------
Turns a goal's present-value inputs into values at its target year:

- required_future_value: what the goal will cost at ``timing`` years from
  now, by category (retirement growing annuity, loan principal, or
  inflated generic cost).
- savings_future_value: what the savings already set aside will be worth
  at the target year, compounded at the lump-sum rate.
- shortfall: the residual gap, never negative.

Mathematical Framework
----------------------
Generic goal (inflation i, education or general)::

    FV_req = F · (1 + i)^timing

Retirement goal (monthly need F, payout horizon n, post-retirement
return r and inflation g)::

    C      = 12 · F · (1 + inflation)^timing
    FV_req = C · n                                  if r <= g
    FV_req = C · (1 - ((1 + g)/(1 + r))^n) / (r - g) otherwise

Savings::

    FV_cur = S · (1 + lump_sum)^timing

All functions are pure; invalid inputs were already coerced upstream.
"""

from __future__ import annotations

import logging
from typing import Literal

from .constants import MONTHS_PER_YEAR
from .goals import Goal, GoalCategory
from .income import PersonalInfo
from .rates import EconomicAssumptions
from .utils import compound, pct_to_fraction, power, safe_divide

__all__ = [
    "growing_annuity_value",
    "retirement_first_year_income",
    "required_future_value",
    "savings_future_value",
    "shortfall",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Growing annuity
# ---------------------------------------------------------------------------

def growing_annuity_value(
    first_payment: float,
    rate: float,
    growth: float,
    periods: float,
    *,
    timing: Literal["end", "begin"] = "end",
) -> float:
    """
    Present value of a growing annuity.

    Parameters
    ----------
    first_payment : float
        Payment of the first period (C).
    rate : float
        Discount rate per period as a fraction (r).
    growth : float
        Payment growth per period as a fraction (g).
    periods : float
        Number of payments (n). Non-positive yields 0.
    timing : {"end", "begin"}, default "end"
        "end" discounts payments made at the end of each period; "begin"
        (annuity-due) multiplies the result by (1 + r). With "begin", the
        ``r <= g`` branch is the limit of the closed form as r → g.

    Returns
    -------
    float
        ``C · n`` when ``r <= g``; otherwise
        ``C · (1 - ((1 + g)/(1 + r))^n) / (r - g)``, times ``(1 + r)`` for
        annuity-due.

    Examples
    --------
    >>> growing_annuity_value(100.0, 0.03, 0.03, 10)
    1000.0
    >>> round(growing_annuity_value(100.0, 0.05, 0.0, 2), 6)
    185.941043
    """
    if timing not in ("end", "begin"):
        raise ValueError(f"timing must be 'end' or 'begin', got: {timing}")
    if periods <= 0:
        return 0.0
    if rate <= growth:
        logger.debug("growing annuity: r=%s <= g=%s, using C*n", rate, growth)
        return float(first_payment * periods)
    ratio = safe_divide(1.0 + growth, 1.0 + rate)
    value = first_payment * (1.0 - power(ratio, periods)) / (rate - growth)
    if timing == "begin":
        value *= 1.0 + rate
    return float(value)


def retirement_first_year_income(goal: Goal, assumptions: EconomicAssumptions) -> float:
    """Annualized monthly need inflated to the retirement date."""
    annual_need = goal.required_funds * MONTHS_PER_YEAR
    return compound(annual_need, pct_to_fraction(assumptions.inflation_rate), goal.timing)


# ---------------------------------------------------------------------------
# Required funds
# ---------------------------------------------------------------------------

def required_future_value(
    goal: Goal,
    assumptions: EconomicAssumptions,
    personal_info: PersonalInfo,
) -> float:
    """
    Future value of the funds a goal needs at its target year.

    Parameters
    ----------
    goal : Goal
    assumptions : EconomicAssumptions
    personal_info : PersonalInfo
        Only the client's retirement age and life expectancy are used
        (retirement payout horizon).

    Returns
    -------
    float
        RETIREMENT: growing-annuity value of the payout at the retirement date.
        LOAN_REPAYMENT: the principal, not inflated.
        GENERIC: ``required_funds`` inflated over ``timing`` years.
    """
    if goal.category is GoalCategory.RETIREMENT:
        first_year = retirement_first_year_income(goal, assumptions)
        horizon = personal_info.client.retirement_years
        r = pct_to_fraction(assumptions.post_retirement_expected_return_rate)
        g = pct_to_fraction(assumptions.post_retirement_inflation_rate)
        return growing_annuity_value(first_year, r, g, horizon)

    if goal.category is GoalCategory.LOAN_REPAYMENT:
        return float(goal.required_funds)

    inflation = (
        assumptions.education_inflation_rate if goal.education
        else assumptions.inflation_rate
    )
    return compound(goal.required_funds, pct_to_fraction(inflation), goal.timing)


# ---------------------------------------------------------------------------
# Savings growth / shortfall
# ---------------------------------------------------------------------------

def savings_future_value(goal: Goal, lump_sum_rate: float) -> float:
    """Current savings compounded to the target year at *lump_sum_rate* (fraction)."""
    return compound(goal.current_savings, lump_sum_rate, goal.timing)


def shortfall(future_value_required: float, future_value_current: float) -> float:
    """Residual funding gap; over-funded goals report 0, not a surplus."""
    return max(0.0, float(future_value_required) - float(future_value_current))
