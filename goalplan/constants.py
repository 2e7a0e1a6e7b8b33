"""
Global constants for GoalPlan.

Purpose
-------
Centralizes default values and magic numbers used throughout the GoalPlan
codebase: the default economic assumptions and household profile, the
category markers recognized in goal names, and the display palette used by
the cash-flow schedule.

Usage
-----
>>> from goalplan.constants import MONTHS_PER_YEAR, GOAL_COLORS
>>>
>>> n_months = saving_period * MONTHS_PER_YEAR
>>> color = GOAL_COLORS[index % len(GOAL_COLORS)]

Categories
----------
- Time: unit conversions
- Economic assumptions: annual percentages used when nothing is specified
- Household: default client / spouse profile
- Goal categories: name markers for migrating free-text names
- Display: palette and fallback labels
"""

from typing import Tuple

__all__ = [
    # Time
    "MONTHS_PER_YEAR",
    "PERCENT",
    # Economic assumptions
    "DEFAULT_INFLATION_RATE",
    "DEFAULT_EDUCATION_INFLATION_RATE",
    "DEFAULT_LOAN_INTEREST_RATE",
    "DEFAULT_EXPECTED_RETURN_RATE",
    "DEFAULT_POST_RETIREMENT_INFLATION_RATE",
    "DEFAULT_POST_RETIREMENT_EXPECTED_RETURN_RATE",
    # Household
    "DEFAULT_RETIREMENT_AGE",
    "DEFAULT_LIFE_EXPECTANCY",
    "DEFAULT_SALARY_INCREASE_RATE",
    # Goal categories
    "RETIREMENT_MARKERS",
    "LOAN_REPAYMENT_MARKERS",
    "EDUCATION_MARKERS",
    # Display
    "GOAL_COLORS",
    "DEFAULT_GOAL_LABEL",
    "DEFAULT_CURRENCY_SYMBOL",
]


# =============================================================================
# Time
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Number of months in a year (used for annualizing and month counts)."""

PERCENT: float = 100.0
"""Divisor converting user-facing percentages to fractions."""


# =============================================================================
# Economic Assumptions (annual percentages)
# =============================================================================

DEFAULT_INFLATION_RATE: float = 2.5
"""General consumer inflation."""

DEFAULT_EDUCATION_INFLATION_RATE: float = 6.0
"""Tuition inflation, applied to education goals instead of general inflation."""

DEFAULT_LOAN_INTEREST_RATE: float = 3.8
"""Interest rate used to amortize loan-repayment goals."""

DEFAULT_EXPECTED_RETURN_RATE: float = 2.5
"""Fallback return for goals without their own lump-sum / periodic rate."""

DEFAULT_POST_RETIREMENT_INFLATION_RATE: float = 2.0
"""Growth rate of retirement-era spending (growing annuity ``g``)."""

DEFAULT_POST_RETIREMENT_EXPECTED_RETURN_RATE: float = 3.0
"""Return earned on the retirement pot while it pays out (growing annuity ``r``)."""


# =============================================================================
# Household Defaults
# =============================================================================

DEFAULT_RETIREMENT_AGE: int = 60
"""Client retirement age when none is given."""

DEFAULT_LIFE_EXPECTANCY: int = 90
"""Life expectancy bounding the retirement payout horizon."""

DEFAULT_SALARY_INCREASE_RATE: float = 3.0
"""Annual % salary growth applied to projected earnings."""


# =============================================================================
# Goal Category Markers
# =============================================================================

RETIREMENT_MARKERS: Tuple[str, ...] = ("은퇴", "retire")
"""Substrings identifying a retirement goal (checked first)."""

LOAN_REPAYMENT_MARKERS: Tuple[str, ...] = (
    "대출상환",
    "loan repayment",
    "loan payoff",
    "mortgage payoff",
)
"""Substrings identifying a loan-repayment goal (checked after retirement)."""

EDUCATION_MARKERS: Tuple[str, ...] = ("대학", "education", "college", "university", "tuition")
"""Substrings selecting the education inflation rate for generic goals."""


# =============================================================================
# Display
# =============================================================================

GOAL_COLORS: Tuple[str, ...] = (
    "#ffadad",  # pastel red
    "#ffd6a5",  # pastel orange
    "#fdffb6",  # pastel yellow
    "#caffbf",  # pastel green
    "#9bf6ff",  # pastel cyan
    "#a0c4ff",  # pastel blue
    "#bdb2ff",  # pastel purple
    "#ffc6ff",  # pastel magenta
    "#f0e68c",  # khaki
    "#ffdab9",  # peach
    "#e6e6fa",  # lavender
    "#b0e0e6",  # powder blue
    "#d8bfd8",  # thistle
    "#c1e1c1",  # mint
    "#f5e3e6",  # soft pink
    "#e2d2f2",  # light lavender
)
"""Palette cycled by goal position when stacking schedule segments."""

DEFAULT_GOAL_LABEL: str = "Goal {n}"
"""Label for goals with a blank name (``n`` is the 1-based position)."""

DEFAULT_CURRENCY_SYMBOL: str = ""
"""Currency prefix used by display formatting (amounts are unit-less by default)."""
