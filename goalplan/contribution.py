"""
Required monthly contribution per goal.

Purpose
-------
Solves for the level monthly payment that closes a goal's funding gap:

- Loan-repayment goals: standard fixed-payment amortization of the principal
  over the saving window at the loan interest rate (PMT).
- All other goals: the shortfall is discounted from the target year back to
  the end of the saving window at the lump-sum rate, then annuitized over the
  window as the future value of an ordinary annuity.

Mathematical Framework
----------------------
Amortization (principal P, n months, monthly rate i)::

    PMT = P · i(1 + i)^n / ((1 + i)^n - 1)     n > 0, i > 0
    PMT = P / n                                n > 0, i <= 0
    PMT = 0                                    n <= 0

Savings annuity (target at window end T, n months, monthly rate i)::

    T   = shortfall / (1 + lump_sum)^holding_period
    PMT = T · i / ((1 + i)^n - 1)              i > 0
    PMT = T / n                                n > 0
    PMT = 0                                    n <= 0

A negative holding period (window overruns the target year) makes the
discount factor amplify the target. It is intentionally left unclamped.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from .constants import MONTHS_PER_YEAR
from .goals import Goal, GoalCategory
from .rates import EconomicAssumptions, ResolvedRates
from .utils import pct_to_fraction, power, safe_divide

__all__ = [
    "loan_payment",
    "savings_payment",
    "discount_to_window_end",
    "required_monthly_payment",
    "amortization_schedule",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Closed-form payments
# ---------------------------------------------------------------------------

def loan_payment(principal: float, monthly_rate: float, months: float) -> float:
    """
    Level monthly payment that amortizes *principal* over *months*.

    Parameters
    ----------
    principal : float
    monthly_rate : float
        Interest per month as a fraction.
    months : float
        Number of payments. Non-positive yields 0.

    Examples
    --------
    >>> loan_payment(1200.0, 0.0, 12)
    100.0
    >>> loan_payment(1000.0, 0.01, 0)
    0.0
    """
    if months <= 0:
        return 0.0
    if monthly_rate > 0:
        factor = power(1.0 + monthly_rate, months)
        return safe_divide(principal * monthly_rate * factor, factor - 1.0)
    return safe_divide(principal, months)


def savings_payment(target: float, monthly_rate: float, months: float) -> float:
    """
    Level monthly deposit whose future value after *months* equals *target*.

    Deposits are made at the end of each month (ordinary annuity).

    Examples
    --------
    >>> savings_payment(3600.0, 0.0, 36)
    100.0
    >>> savings_payment(3600.0, 0.01, 0)
    0.0
    """
    if months <= 0:
        return 0.0
    if monthly_rate > 0:
        growth = power(1.0 + monthly_rate, months) - 1.0
        return safe_divide(target * monthly_rate, growth)
    return safe_divide(target, months)


def discount_to_window_end(amount: float, lump_sum_rate: float, holding_period: float) -> float:
    """Discount *amount* from the target year back to the end of the saving window."""
    return safe_divide(amount, power(1.0 + lump_sum_rate, holding_period))


# ---------------------------------------------------------------------------
# Goal-level solver
# ---------------------------------------------------------------------------

def required_monthly_payment(
    goal: Goal,
    shortfall: float,
    assumptions: EconomicAssumptions,
    rates: ResolvedRates,
) -> float:
    """
    Monthly contribution required for *goal*.

    Parameters
    ----------
    goal : Goal
    shortfall : float
        Funding gap at the target year (ignored for loan-repayment goals,
        which amortize ``goal.required_funds``).
    assumptions : EconomicAssumptions
        Supplies the loan interest rate.
    rates : ResolvedRates
        Effective lump-sum and periodic rates of the goal.

    Returns
    -------
    float
        Level monthly payment over ``saving_period * 12`` months; 0 for an
        empty saving window.
    """
    months = goal.saving_period * MONTHS_PER_YEAR

    if goal.category is GoalCategory.LOAN_REPAYMENT:
        monthly_rate = pct_to_fraction(assumptions.loan_interest_rate) / MONTHS_PER_YEAR
        return loan_payment(goal.required_funds, monthly_rate, months)

    if goal.holding_period < 0:
        logger.debug(
            "goal %s: saving window ends %s year(s) after target; target is amplified",
            goal.id, -goal.holding_period,
        )
    target = discount_to_window_end(shortfall, rates.lump_sum, goal.holding_period)
    return savings_payment(target, rates.periodic / MONTHS_PER_YEAR, months)


# ---------------------------------------------------------------------------
# Amortization schedule
# ---------------------------------------------------------------------------

def amortization_schedule(principal: float, annual_rate_pct: float, years: float) -> pd.DataFrame:
    """
    Month-by-month amortization table for a loan-repayment goal.

    Parameters
    ----------
    principal : float
        Loan principal.
    annual_rate_pct : float
        Annual interest rate in percent (e.g., 3.8).
    years : float
        Repayment period in years.

    Returns
    -------
    pd.DataFrame
        Columns ``[payment, interest, principal, balance]`` indexed by month
        (1-based). Empty when the repayment window is empty. The level
        payment is ``loan_payment`` over the same fractional month count
        ``years * 12`` a loan goal's ``monthly_payment`` uses, so both agree.
        A fractional month count adds one final row that settles the
        residual balance; the final balance is zero up to floating-point
        error.

    Examples
    --------
    >>> df = amortization_schedule(20_000, 3.8, 20)
    >>> len(df)
    240
    >>> abs(df["balance"].iloc[-1]) < 1e-6
    True
    >>> len(amortization_schedule(1_000, 0.0, 0.875))
    11
    """
    months = years * MONTHS_PER_YEAR
    columns = ["payment", "interest", "principal", "balance"]
    if months <= 0:
        return pd.DataFrame(columns=columns, index=pd.RangeIndex(1, 1, name="month"), dtype=float)
    rows = int(np.ceil(round(months, 9)))

    monthly_rate = pct_to_fraction(annual_rate_pct) / MONTHS_PER_YEAR
    level = loan_payment(principal, monthly_rate, months)

    payment = np.full(rows, level, dtype=float)
    interest = np.zeros(rows, dtype=float)
    repaid = np.zeros(rows, dtype=float)
    balance = np.zeros(rows, dtype=float)
    outstanding = float(principal)
    with np.errstate(all="ignore"):
        for t in range(rows):
            interest[t] = outstanding * max(monthly_rate, 0.0)
            if t == rows - 1:
                payment[t] = interest[t] + outstanding
            repaid[t] = payment[t] - interest[t]
            outstanding -= repaid[t]
            balance[t] = outstanding

    return pd.DataFrame(
        {
            "payment": payment,
            "interest": interest,
            "principal": repaid,
            "balance": balance,
        },
        index=pd.RangeIndex(1, rows + 1, name="month"),
    )
