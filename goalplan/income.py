"""
Income modeling module for GoalPlan.

Purpose
-------
Describes the household (client, spouse, dependents) and projects each
earner's salary year by year until retirement. Produces the two outputs the
rest of the package consumes:

- the expected total income per earner until retirement, and
- the household's monthly income in each projection year, which shares the
  year axis with the cash-flow schedule.

Key components
--------------
- Earner:
    One wage earner: age, monthly income, pension estimate, retirement age,
    life expectancy and annual salary-increase rate (percent).

- AnnualIncomeStream:
    Finite, restartable iterable of the annual incomes of one earner,
    ``monthly_income * 12 * (1 + s)^k`` for k = 0..N-1 with
    ``N = max(0, retirement_age - age)``.

- PersonalInfo:
    Household record holding both earners and the dependents list.

Design principles
-----------------
- Deterministic and side-effect free; every call recomputes from the record.
- Working years never go negative: retiring at or before the current age
  yields an empty stream and a zero total.

Example
-------
>>> from goalplan.income import Earner
>>> client = Earner(age=58, monthly_income=300, retirement_age=60,
...                 salary_increase_rate=50.0)
>>> list(client.income_stream())
[3600.0, 5400.0]
>>> client.income_stream().total()
9000.0
>>> client.monthly_income_in_year(2), client.monthly_income_in_year(3)
(450.0, 0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

import numpy as np
import pandas as pd

from .constants import (
    MONTHS_PER_YEAR,
    DEFAULT_RETIREMENT_AGE,
    DEFAULT_LIFE_EXPECTANCY,
    DEFAULT_SALARY_INCREASE_RATE,
)
from .utils import compound, pct_to_fraction

__all__ = [
    "Earner",
    "Dependent",
    "PersonalInfo",
    "AnnualIncomeStream",
    "expected_total_income",
]


# ---------------------------------------------------------------------------
# Household records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Earner:
    """
    A wage earner in the household.

    Parameters
    ----------
    age : float
        Current age in years.
    monthly_income : float
        Current monthly income.
    pension : float, default 0.0
        Estimated monthly pension. Carried for the record; not used by the
        projection formulas.
    retirement_age : float, default 60
    life_expectancy : float, default 90
    salary_increase_rate : float, default 3.0
        Annual salary growth in percent.
    """
    age: float = 0.0
    monthly_income: float = 0.0
    pension: float = 0.0
    retirement_age: float = DEFAULT_RETIREMENT_AGE
    life_expectancy: float = DEFAULT_LIFE_EXPECTANCY
    salary_increase_rate: float = DEFAULT_SALARY_INCREASE_RATE

    @property
    def working_years(self) -> int:
        """Years of salary left, clamped at zero (partial years count as one)."""
        return int(math.ceil(max(0.0, self.retirement_age - self.age)))

    @property
    def retirement_years(self) -> float:
        """Payout horizon after retirement, clamped at zero."""
        return max(0.0, self.life_expectancy - self.retirement_age)

    def income_stream(self) -> "AnnualIncomeStream":
        """Annual incomes from now until retirement."""
        return AnnualIncomeStream(
            monthly_income=self.monthly_income,
            growth=pct_to_fraction(self.salary_increase_rate),
            years=self.working_years,
        )

    def monthly_income_in_year(self, year: int) -> float:
        """
        Monthly income during projection year *year* (1 = one year from now).

        Zero once ``age + year`` exceeds the retirement age.
        """
        if self.age + year > self.retirement_age:
            return 0.0
        growth = pct_to_fraction(self.salary_increase_rate)
        return compound(self.monthly_income, growth, year - 1)


@dataclass(frozen=True)
class Dependent:
    """A dependent (child). ``age`` is an offset; negative means not yet born."""
    age: float = 0.0


@dataclass(frozen=True)
class PersonalInfo:
    """
    Household profile.

    Parameters
    ----------
    client : Earner
        Primary earner; also defines the retirement payout horizon.
    spouse : Earner
    dependents : tuple of Dependent
        Ordered list of dependents. Not consumed numerically.
    """
    client: Earner = field(default_factory=lambda: Earner(
        age=25, monthly_income=300, pension=80, retirement_age=60,
        life_expectancy=90, salary_increase_rate=3.0,
    ))
    spouse: Earner = field(default_factory=lambda: Earner(
        age=22, monthly_income=250, pension=70, retirement_age=57,
        life_expectancy=90, salary_increase_rate=2.5,
    ))
    dependents: Tuple[Dependent, ...] = (Dependent(age=-4),)

    @property
    def earners(self) -> Dict[str, Earner]:
        return {"client": self.client, "spouse": self.spouse}

    def household_monthly_income(self, year: int) -> float:
        """Combined monthly income of both earners in projection year *year*."""
        return sum(e.monthly_income_in_year(year) for e in self.earners.values())


# ---------------------------------------------------------------------------
# Income projection
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnnualIncomeStream:
    """
    Deterministic annual income projection of one earner.

    Iterating yields ``monthly_income * 12 * (1 + growth)^k`` for
    ``k = 0..years-1``. The stream is restartable: every ``iter()`` starts
    from year zero.

    Parameters
    ----------
    monthly_income : float
        Monthly income at k = 0.
    growth : float
        Annual growth as a fraction (0.03 for 3%).
    years : int
        Number of annual values. Zero yields an empty stream.

    Example
    -------
    >>> stream = AnnualIncomeStream(monthly_income=100, growth=0.0, years=3)
    >>> list(stream), len(stream), stream.total()
    ([1200.0, 1200.0, 1200.0], 3, 3600.0)
    """
    monthly_income: float
    growth: float
    years: int

    def __iter__(self) -> Iterator[float]:
        annual = self.monthly_income * MONTHS_PER_YEAR
        for k in range(max(self.years, 0)):
            yield compound(annual, self.growth, k)

    def __len__(self) -> int:
        return max(self.years, 0)

    def total(self) -> float:
        """Sum of the stream (expected total income until retirement)."""
        return float(sum(self))

    def to_array(self) -> np.ndarray:
        if len(self) == 0:
            return np.zeros(0, dtype=float)
        k = np.arange(len(self), dtype=float)
        with np.errstate(all="ignore"):
            return self.monthly_income * MONTHS_PER_YEAR * np.power(1.0 + self.growth, k)

    def to_series(self, name: str = "income") -> pd.Series:
        """Annual incomes indexed by projection year (1-based)."""
        idx = pd.RangeIndex(1, len(self) + 1, name="year")
        return pd.Series(self.to_array(), index=idx, name=name)


def expected_total_income(personal_info: PersonalInfo) -> Dict[str, float]:
    """
    Expected total income until retirement for each earner.

    Returns
    -------
    dict
        ``{"client": float, "spouse": float}``
    """
    return {
        name: earner.income_stream().total()
        for name, earner in personal_info.earners.items()
    }
