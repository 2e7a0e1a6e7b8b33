"""
Plan facade: one projection pass over a household's goals.

Purpose
-------
Combines the engine stages for every goal, in order:

    resolve_rates → required_future_value & savings_future_value
                  → shortfall → required_monthly_payment → DerivedGoal

and exposes the household-level outputs built from them: the yearly
cash-flow schedule, the expected income per earner, the summary totals and
the total savings principal stored alongside persisted snapshots.

A Plan holds an immutable snapshot of its inputs. Nothing is cached between
calls: every method recomputes from the snapshot, so results are
deterministic and independent plans can be evaluated concurrently.

Example
-------
>>> from goalplan.plan import Plan
>>> from goalplan.goals import Goal
>>> plan = Plan(goals=[Goal(id=1, name="Wedding fund", timing=3,
...                         required_funds=5000, current_savings=2000,
...                         saving_period=3)])
>>> derived = plan.derive()[0]
>>> round(derived.future_value_required, 2), round(derived.shortfall, 2)
(5384.45, 3230.67)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

from .constants import MONTHS_PER_YEAR
from .contribution import required_monthly_payment
from .goals import Goal
from .income import PersonalInfo, expected_total_income
from .projection import required_future_value, savings_future_value, shortfall
from .rates import EconomicAssumptions, resolve_rates
from .schedule import CashFlowSchedule, aggregate_schedule
from .exceptions import ValidationError

__all__ = [
    "DerivedGoal",
    "PlanTotals",
    "Plan",
    "derive_goal",
    "total_savings_principal",
    "default_goals",
    "default_plan",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DerivedGoal:
    """
    A goal together with its projected values.

    Attributes
    ----------
    goal : Goal
        The input record.
    future_value_required : float
        Cost of the goal at its target year.
    future_value_current : float
        Earmarked savings compounded to the target year.
    shortfall : float
        ``max(0, future_value_required - future_value_current)``.
    monthly_payment : float
        Required level monthly contribution over the saving window.
    """
    goal: Goal
    future_value_required: float
    future_value_current: float
    shortfall: float
    monthly_payment: float

    @property
    def id(self) -> int:
        return self.goal.id

    @property
    def name(self) -> str:
        return self.goal.name

    @property
    def holding_period(self) -> float:
        return self.goal.holding_period

    @property
    def saving_period(self) -> float:
        return self.goal.saving_period

    @property
    def savings_principal(self) -> float:
        """Total deposited over the window: ``saving_period * monthly_payment * 12``."""
        return self.goal.saving_period * self.monthly_payment * MONTHS_PER_YEAR


@dataclass(frozen=True)
class PlanTotals:
    """
    Summary row of the goal table.

    ``monthly_payment`` only sums goals whose saving window starts now
    (``saving_start == 0``): it is what the household must set aside today.
    """
    current_savings: float
    monthly_payment: float


def derive_goal(
    goal: Goal,
    assumptions: EconomicAssumptions,
    personal_info: PersonalInfo,
) -> DerivedGoal:
    """Run every projection stage for one goal."""
    rates = resolve_rates(goal, assumptions)
    fv_required = required_future_value(goal, assumptions, personal_info)
    fv_current = savings_future_value(goal, rates.lump_sum)
    gap = shortfall(fv_required, fv_current)
    payment = required_monthly_payment(goal, gap, assumptions, rates)
    return DerivedGoal(
        goal=goal,
        future_value_required=fv_required,
        future_value_current=fv_current,
        shortfall=gap,
        monthly_payment=payment,
    )


def total_savings_principal(derived_goals: Iterable[DerivedGoal]) -> float:
    """Sum of ``saving_period * monthly_payment * 12`` over all goals."""
    return float(sum(d.savings_principal for d in derived_goals))


@dataclass(frozen=True)
class Plan:
    """
    Immutable snapshot of a household plan.

    Parameters
    ----------
    assumptions : EconomicAssumptions
    personal_info : PersonalInfo
    goals : tuple of Goal
        Ordered goals; order drives display colors and stacking only.

    Raises
    ------
    ValidationError
        If two goals share an id.
    """
    assumptions: EconomicAssumptions = field(default_factory=EconomicAssumptions)
    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    goals: Tuple[Goal, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "goals", tuple(self.goals))
        ids = [g.id for g in self.goals]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValidationError(f"Duplicate goal id(s) {duplicates} in plan")

    def derive(self) -> List[DerivedGoal]:
        """Derived record for every goal, in input order."""
        logger.debug("projecting %d goal(s)", len(self.goals))
        return [derive_goal(g, self.assumptions, self.personal_info) for g in self.goals]

    def schedule(self) -> CashFlowSchedule:
        """Year-by-year contributions and household income."""
        return aggregate_schedule(self.derive(), self.personal_info)

    def expected_income(self) -> Dict[str, float]:
        """Expected total income until retirement per earner."""
        return expected_total_income(self.personal_info)

    def totals(self) -> PlanTotals:
        derived = self.derive()
        return PlanTotals(
            current_savings=float(sum(d.goal.current_savings for d in derived)),
            monthly_payment=float(sum(d.monthly_payment for d in derived if d.goal.saving_start == 0)),
        )

    def total_savings_principal(self) -> float:
        return total_savings_principal(self.derive())

    def __repr__(self) -> str:
        return f"Plan(n_goals={len(self.goals)}, assumptions={self.assumptions!r})"


# ---------------------------------------------------------------------------
# Default household
# ---------------------------------------------------------------------------

# (name, timing, required_funds, current_savings, saving_start, saving_period)
_DEFAULT_GOAL_ROWS = (
    ("결혼자금", 3, 5000, 2000, 0, 3),
    ("전세자금", 3, 5000, 0, 0, 3),
    ("주택마련", 11, 20000, 0, 3, 8),
    ("대출상환", 11, 20000, 0, 11, 20),
    ("첫째대학", 24, 5000, 0, 11, 13),
    ("둘째대학", 26, 5000, 0, 11, 15),
    ("첫째결혼", 34, 10000, 0, 24, 10),
    ("둘째결혼", 36, 10000, 0, 26, 10),
    ("은퇴자금", 35, 100, 0, 24, 11),
    ("은퇴자금2", 35, 100, 0, 24, 11),
)


def default_goals() -> Tuple[Goal, ...]:
    """Starter goal list of a young two-earner household (ids 1..10)."""
    return tuple(
        Goal.from_name(
            i, name,
            timing=float(timing),
            required_funds=float(funds),
            current_savings=float(savings),
            saving_start=float(start),
            saving_period=float(period),
        )
        for i, (name, timing, funds, savings, start, period) in enumerate(_DEFAULT_GOAL_ROWS, start=1)
    )


def default_plan() -> Plan:
    """Default assumptions, default household and the starter goals."""
    return Plan(goals=default_goals())
