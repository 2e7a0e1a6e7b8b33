"""
Type definitions for GoalPlan.

Purpose
-------
TypedDict definitions for the dictionaries that cross the package boundary:
persisted plan snapshots and the records emitted by the cash-flow schedule.
Snapshot keys are camelCase, matching the JSON documents written by
``goalplan.serialization``.

Type Definitions
----------------
GoalDict
    One persisted goal: {"id", "name", "timing", "requiredFunds", ...}

PlanSnapshotDict
    Full persisted plan: {"schema_version", "personalInfo", ...}

GoalContributionDict
    One goal's segment of a schedule year: {"name", "payment", "color"}

YearlyCashFlowDict
    One schedule year: {"year", "total", "goals", "income"}

ExpectedIncomeDict
    Expected total income until retirement: {"client", "spouse"}
"""

from typing import Any, Dict, List, Optional
from typing_extensions import TypedDict, NotRequired

__all__ = [
    "GoalDict",
    "EarnerDict",
    "PersonalInfoDict",
    "EconomicAssumptionsDict",
    "PlanSnapshotDict",
    "GoalContributionDict",
    "YearlyCashFlowDict",
    "ExpectedIncomeDict",
]


class GoalDict(TypedDict):
    """
    Persisted goal record.

    ``lumpSumReturnRate`` / ``periodicReturnRate`` are ``None`` when the goal
    falls back to the plan's expected return rate. ``category`` and
    ``education`` may be absent in older snapshots, in which case they are
    inferred from the name on load.
    """

    id: int
    name: str
    timing: float
    requiredFunds: float
    currentSavings: float
    savingStart: float
    savingPeriod: float
    lumpSumReturnRate: Optional[float]
    periodicReturnRate: Optional[float]
    category: NotRequired[str]
    education: NotRequired[bool]


class EarnerDict(TypedDict):
    age: float
    monthlyIncome: float
    pension: float
    retirementAge: float
    lifeExpectancy: float
    salaryIncreaseRate: float


class PersonalInfoDict(TypedDict):
    client: EarnerDict
    spouse: EarnerDict
    dependents: List[Dict[str, float]]


class EconomicAssumptionsDict(TypedDict):
    inflationRate: float
    educationInflationRate: float
    loanInterestRate: float
    expectedReturnRate: float
    postRetirementInflationRate: float
    postRetirementExpectedReturnRate: float


class PlanSnapshotDict(TypedDict):
    """
    Persisted plan snapshot.

    Attributes
    ----------
    schema_version : str
        Snapshot format version; absent in snapshots written before
        versioning (treated as "0.0.0").
    personalInfo : PersonalInfoDict
        Nested form; the flat legacy form (``clientAge``, ``spouseIncome``,
        ``children``, ...) is also accepted on load.
    economicAssumptions : EconomicAssumptionsDict
    goals : list of GoalDict
    totalSavingsPrincipal : float, optional
        Σ saving_period × monthly_payment × 12 at save time.
    """

    schema_version: NotRequired[str]
    personalInfo: Dict[str, Any]
    economicAssumptions: EconomicAssumptionsDict
    goals: List[GoalDict]
    totalSavingsPrincipal: NotRequired[float]


class GoalContributionDict(TypedDict):
    name: str
    payment: float
    color: str


class YearlyCashFlowDict(TypedDict):
    """
    One year of the cash-flow schedule.

    ``goals`` is keyed by the goal id rendered as a string (JSON object
    keys) and only holds goals saving during that year. ``income`` is the
    household's combined monthly income.
    """

    year: int
    total: float
    goals: Dict[str, GoalContributionDict]
    income: float


class ExpectedIncomeDict(TypedDict):
    client: float
    spouse: float
