# goalplan/goals.py
"""
Goal records module with explicit goal categories.

Purpose
-------
Domain-level abstractions for household financial goals. Each goal is a
target amount at a year offset ("timing"), funded by savings already set
aside plus level monthly contributions over a saving window.

Goal categories
---------------
The projection formula depends on the kind of goal:

- GENERIC: the present-value cost is inflated to the target year
  (education goals use the education inflation rate).
- RETIREMENT: ``required_funds`` is a monthly income need, valued as a
  growing annuity over the client's payout horizon.
- LOAN_REPAYMENT: ``required_funds`` is a loan principal, repaid by level
  amortization over the saving window.

The category is an explicit field. Free-text names only matter when
importing records without one: ``infer_category`` applies the marker rules
(retirement first, then loan repayment, else generic).

Design Principles
-----------------
- Immutable records: goals are frozen dataclasses
- Identity-based collection: GoalBook adds, updates, removes and reorders
  goals by their stable id; order only matters for display and stacking

Example
-------
>>> from goalplan.goals import Goal, GoalCategory, GoalBook
>>> book = GoalBook()
>>> wedding = book.add(name="Wedding fund", timing=3, required_funds=5_000,
...                    current_savings=2_000, saving_start=0, saving_period=3)
>>> loan = book.add(name="Loan repayment", timing=11, required_funds=20_000,
...                 saving_start=11, saving_period=20)
>>> loan.category
<GoalCategory.LOAN_REPAYMENT: 'loan_repayment'>
>>> book.move(loan.id, before=wedding.id)
>>> [g.id for g in book]
[2, 1]
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from .constants import (
    RETIREMENT_MARKERS,
    LOAN_REPAYMENT_MARKERS,
    EDUCATION_MARKERS,
)
from .exceptions import GoalNotFoundError, ValidationError

__all__ = [
    "GoalCategory",
    "Goal",
    "GoalBook",
    "infer_category",
]


class GoalCategory(str, Enum):
    """Closed set of goal kinds, each with its own projection formula."""

    GENERIC = "generic"
    RETIREMENT = "retirement"
    LOAN_REPAYMENT = "loan_repayment"


def _contains_marker(name: str, markers: Iterable[str]) -> bool:
    lowered = name.casefold()
    return any(marker.casefold() in lowered for marker in markers)


def infer_category(name: str) -> Tuple[GoalCategory, bool]:
    """
    Infer goal category and education flag from a free-text goal name.

    Retirement markers are checked before loan-repayment markers, so a name
    carrying both is a retirement goal. The education flag is independent of
    the category but only affects generic goals.

    Parameters
    ----------
    name : str
        Goal display name, e.g. "은퇴자금" or "Kids college fund".

    Returns
    -------
    (GoalCategory, bool)
        Category and whether an education marker is present.

    Examples
    --------
    >>> infer_category("Retirement fund")
    (<GoalCategory.RETIREMENT: 'retirement'>, False)
    >>> infer_category("첫째대학")
    (<GoalCategory.GENERIC: 'generic'>, True)
    """
    name = name or ""
    education = _contains_marker(name, EDUCATION_MARKERS)
    if _contains_marker(name, RETIREMENT_MARKERS):
        return GoalCategory.RETIREMENT, education
    if _contains_marker(name, LOAN_REPAYMENT_MARKERS):
        return GoalCategory.LOAN_REPAYMENT, education
    return GoalCategory.GENERIC, education


# ---------------------------------------------------------------------------
# Goal Record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Goal:
    """
    A single household financial goal.

    Parameters
    ----------
    id : int
        Stable identity used for updates, removal, reordering and as the key
        of per-goal schedule contributions.
    name : str
        Display name (free text).
    timing : float
        Target year offset from now.
    required_funds : float
        Funds needed at today's value. For RETIREMENT goals this is a monthly
        income need; for LOAN_REPAYMENT goals the loan principal.
    current_savings : float
        Savings already earmarked for the goal.
    saving_start : float
        Years from now until contributions begin.
    saving_period : float
        Length of the saving window in years.
    lump_sum_return_rate : float, optional
        Annual % return on savings held as a lump sum. None falls back to the
        global expected return rate.
    periodic_return_rate : float, optional
        Annual % return on periodic contributions. None falls back to the
        global expected return rate.
    category : GoalCategory, default GENERIC
    education : bool, default False
        Use the education inflation rate (GENERIC goals only).

    Notes
    -----
    ``holding_period`` may be negative when the saving window runs past the
    target year. It is reported as-is.
    """
    id: int
    name: str = ""
    timing: float = 0.0
    required_funds: float = 0.0
    current_savings: float = 0.0
    saving_start: float = 0.0
    saving_period: float = 0.0
    lump_sum_return_rate: Optional[float] = None
    periodic_return_rate: Optional[float] = None
    category: GoalCategory = GoalCategory.GENERIC
    education: bool = False

    @classmethod
    def from_name(cls, id: int, name: str, **fields) -> "Goal":
        """Build a goal whose category and education flag follow its name."""
        category, education = infer_category(name)
        fields.setdefault("category", category)
        fields.setdefault("education", education)
        return cls(id=id, name=name, **fields)

    @property
    def holding_period(self) -> float:
        """Years between the end of the saving window and the target year."""
        return self.timing - self.saving_start - self.saving_period

    @property
    def saving_end(self) -> float:
        """Year offset at which contributions stop (exclusive)."""
        return self.saving_start + self.saving_period

    def __repr__(self) -> str:
        return (
            f"Goal(id={self.id}, name={self.name!r}, category={self.category.value}, "
            f"timing={self.timing:g}, required_funds={self.required_funds:,.0f}, "
            f"window=[{self.saving_start:g}, {self.saving_end:g}))"
        )


# ---------------------------------------------------------------------------
# Goal Collection
# ---------------------------------------------------------------------------

class GoalBook:
    """
    Ordered, identity-keyed collection of goals.

    Goals are immutable; editing a field replaces the stored record.
    Order is preserved and only matters for display (colors, stacking).

    Parameters
    ----------
    goals : Iterable[Goal], optional
        Initial goals. Identities must be unique.

    Raises
    ------
    ValidationError
        If two goals share an id.
    """

    def __init__(self, goals: Optional[Iterable[Goal]] = None):
        self._goals: List[Goal] = []
        for goal in goals or ():
            if any(g.id == goal.id for g in self._goals):
                raise ValidationError(f"Duplicate goal id {goal.id} in goal collection")
            self._goals.append(goal)

    def _index(self, goal_id: int) -> int:
        for i, goal in enumerate(self._goals):
            if goal.id == goal_id:
                return i
        raise GoalNotFoundError(
            f"Goal id {goal_id} not found. Known ids: {[g.id for g in self._goals]}"
        )

    def next_id(self) -> int:
        """Return a fresh identity (one past the largest id in use)."""
        return max((g.id for g in self._goals), default=0) + 1

    def add(self, name: str = "", **fields) -> Goal:
        """
        Append a new goal with a generated identity.

        Category and education flag are inferred from *name* unless given.
        """
        goal = Goal.from_name(self.next_id(), name, **fields)
        self._goals.append(goal)
        return goal

    def get(self, goal_id: int) -> Goal:
        return self._goals[self._index(goal_id)]

    def update(self, goal_id: int, **changes) -> Goal:
        """
        Replace fields of one goal, returning the new record.

        Renaming re-infers category and education flag from the new name
        unless either is passed explicitly.
        """
        i = self._index(goal_id)
        if "name" in changes and "category" not in changes and "education" not in changes:
            category, education = infer_category(changes["name"])
            changes.update(category=category, education=education)
        updated = replace(self._goals[i], **changes)
        self._goals[i] = updated
        return updated

    def remove(self, goal_id: int) -> Goal:
        return self._goals.pop(self._index(goal_id))

    def move(self, goal_id: int, *, before: int) -> None:
        """
        Move a goal to the position currently held by goal *before*.

        Mirrors dropping a dragged row onto another row: the dragged goal
        takes the target's index and the rest shift.
        """
        if goal_id == before:
            return
        source = self._index(goal_id)
        target = self._index(before)
        goal = self._goals.pop(source)
        self._goals.insert(target, goal)

    def __iter__(self) -> Iterator[Goal]:
        return iter(list(self._goals))

    def __len__(self) -> int:
        return len(self._goals)

    def __getitem__(self, index: int) -> Goal:
        return self._goals[index]

    def __repr__(self) -> str:
        return f"GoalBook(n_goals={len(self._goals)}, ids={[g.id for g in self._goals]})"
