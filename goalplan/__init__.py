"""
GoalPlan: Household Financial Goal Planner

A deterministic planning engine that projects, for each household goal, the
future cost, the future value of savings already set aside, the shortfall,
and the level monthly contribution that closes it.

Modules
-------
- goals         : Goal records, categories and the editable goal collection
- rates         : Economic assumptions and per-goal rate resolution
- projection    : Required funds, savings growth and shortfall
- contribution  : Monthly payment solver and loan amortization
- income        : Household profile and salary projection
- plan          : One projection pass over a plan (derived goals, totals)
- schedule      : Year-by-year contributions against household income
- serialization : JSON plan snapshots
- utils         : Shared utilities (coercion, rates, formatting)

"""

from .goals import Goal, GoalBook, GoalCategory, infer_category
from .income import Dependent, Earner, PersonalInfo
from .plan import DerivedGoal, Plan, PlanTotals, default_plan
from .rates import EconomicAssumptions
from .schedule import CashFlowSchedule, YearlyCashFlow
from . import utils
