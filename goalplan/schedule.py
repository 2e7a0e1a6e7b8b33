"""
Year-indexed cash-flow schedule.

Purpose
-------
Walks every goal's saving window and the household income projection on a
shared year axis (year 1 = one year from now) and produces one
``YearlyCashFlow`` per year up to the plan horizon:

- the monthly payment each goal requires that year (with its display color),
- the stacked total of those payments,
- the household's combined monthly income that year.

The horizon is the latest of every goal's target year and saving-window end.
Goal windows are half-open, ``[saving_start, saving_start + saving_period)``
in 0-based year indices, so a zero-length window contributes nothing.

The schedule also reports the maxima of both series, so that a renderer can
draw payments and income against one shared axis. Values are not rounded.

Example
-------
>>> from goalplan.plan import Plan
>>> schedule = Plan(goals=goals).schedule()
>>> schedule.horizon
36
>>> schedule.to_dataframe().head()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd

from .constants import GOAL_COLORS, DEFAULT_GOAL_LABEL
from .income import PersonalInfo
from .types import GoalContributionDict, YearlyCashFlowDict

if TYPE_CHECKING:
    from .plan import DerivedGoal

__all__ = [
    "GoalContribution",
    "YearlyCashFlow",
    "CashFlowSchedule",
    "max_horizon",
    "goal_color",
    "goal_label",
    "aggregate_schedule",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GoalContribution:
    """One goal's stacked segment in a given year."""
    name: str
    payment: float
    color: str


@dataclass(frozen=True)
class YearlyCashFlow:
    """
    Cash flows of one projection year.

    Attributes
    ----------
    year : int
        1-based year offset from now.
    total_payment : float
        Sum of all goals' monthly payments due that year.
    contributions : Mapping[int, GoalContribution]
        Goal id → segment, only for goals saving that year, in goal order.
    household_income : float
        Combined monthly income of the client and spouse that year.
    """
    year: int
    total_payment: float
    contributions: Mapping[int, GoalContribution]
    household_income: float

    def to_dict(self) -> YearlyCashFlowDict:
        segments: Dict[str, GoalContributionDict] = {
            str(goal_id): {"name": c.name, "payment": c.payment, "color": c.color}
            for goal_id, c in self.contributions.items()
        }
        return {
            "year": self.year,
            "total": self.total_payment,
            "goals": segments,
            "income": self.household_income,
        }


@dataclass(frozen=True)
class CashFlowSchedule:
    """
    Ordered yearly cash flows for a plan.

    Attributes
    ----------
    years : tuple of YearlyCashFlow
        One entry per year ``1..horizon``.
    labels : Mapping[int, str]
        Goal id → display label, in goal order (legend entries).
    colors : Mapping[int, str]
        Goal id → display color, in goal order.
    """
    years: Tuple[YearlyCashFlow, ...] = ()
    labels: Mapping[int, str] = field(default_factory=dict)
    colors: Mapping[int, str] = field(default_factory=dict)

    @property
    def horizon(self) -> int:
        return len(self.years)

    @property
    def totals(self) -> np.ndarray:
        return np.array([y.total_payment for y in self.years], dtype=float)

    @property
    def incomes(self) -> np.ndarray:
        return np.array([y.household_income for y in self.years], dtype=float)

    @property
    def max_payment(self) -> float:
        return float(max(self.totals.max(initial=0.0), 0.0))

    @property
    def max_income(self) -> float:
        return float(max(self.incomes.max(initial=0.0), 0.0))

    @property
    def max_value(self) -> float:
        """Shared-axis maximum across stacked payments and income."""
        return max(self.max_payment, self.max_income)

    def __len__(self) -> int:
        return len(self.years)

    def __iter__(self):
        return iter(self.years)

    def __getitem__(self, index: int) -> YearlyCashFlow:
        return self.years[index]

    def to_dataframe(self) -> pd.DataFrame:
        """
        Wide table indexed by year.

        Columns: one per goal (labelled by goal label, zero outside the
        goal's window), then ``total`` and ``income``.
        """
        idx = pd.RangeIndex(1, self.horizon + 1, name="year")
        data: Dict[str, np.ndarray] = {}
        for goal_id, label in self.labels.items():
            column = label if label not in data else f"{label} ({goal_id})"
            data[column] = np.array(
                [y.contributions[goal_id].payment if goal_id in y.contributions else 0.0
                 for y in self.years],
                dtype=float,
            )
        data["total"] = self.totals
        data["income"] = self.incomes
        return pd.DataFrame(data, index=idx)

    def to_records(self) -> List[YearlyCashFlowDict]:
        return [y.to_dict() for y in self.years]


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def max_horizon(derived_goals: Sequence["DerivedGoal"]) -> int:
    """
    Number of schedule years: the latest target year or saving-window end.

    Fractional values are truncated; an empty plan has horizon 0.
    """
    ends = [0.0]
    for d in derived_goals:
        ends.append(d.goal.timing)
        ends.append(d.goal.saving_end)
    return int(max(ends))


def goal_color(index: int) -> str:
    """Palette color for the goal at position *index* (cycles)."""
    return GOAL_COLORS[index % len(GOAL_COLORS)]


def goal_label(name: str, index: int) -> str:
    """Goal name, or a positional fallback when blank."""
    return name if name else DEFAULT_GOAL_LABEL.format(n=index + 1)


def aggregate_schedule(
    derived_goals: Sequence["DerivedGoal"],
    personal_info: PersonalInfo,
) -> CashFlowSchedule:
    """
    Build the yearly cash-flow schedule.

    Parameters
    ----------
    derived_goals : sequence of DerivedGoal
        Output of one projection pass, in display order.
    personal_info : PersonalInfo
        Earners whose monthly income forms the income series.

    Returns
    -------
    CashFlowSchedule
        ``horizon = max_horizon(derived_goals)`` entries. Goal ``g`` adds its
        monthly payment to every 0-based year index ``k`` with
        ``saving_start <= k < saving_start + saving_period``.
    """
    horizon = max_horizon(derived_goals)
    labels = {d.id: goal_label(d.name, i) for i, d in enumerate(derived_goals)}
    colors = {d.id: goal_color(i) for i, d in enumerate(derived_goals)}
    if horizon == 0:
        return CashFlowSchedule(years=(), labels=labels, colors=colors)

    k = np.arange(horizon, dtype=float)
    # active[g, k]: goal g is saving during year index k
    active = np.array(
        [(k >= d.goal.saving_start) & (k < d.goal.saving_end) for d in derived_goals],
        dtype=bool,
    ).reshape(len(derived_goals), horizon)
    payments = np.array([d.monthly_payment for d in derived_goals], dtype=float)
    totals = (active * payments[:, None]).sum(axis=0)

    years: List[YearlyCashFlow] = []
    for t in range(horizon):
        segments = {
            d.id: GoalContribution(name=labels[d.id], payment=float(d.monthly_payment), color=colors[d.id])
            for g, d in enumerate(derived_goals)
            if active[g, t]
        }
        years.append(
            YearlyCashFlow(
                year=t + 1,
                total_payment=float(totals[t]),
                contributions=segments,
                household_income=personal_info.household_monthly_income(t + 1),
            )
        )

    logger.debug("schedule: %d goal(s) over %d year(s)", len(derived_goals), horizon)
    return CashFlowSchedule(years=tuple(years), labels=labels, colors=colors)
