"""
Pytest configuration and fixtures for GoalPlan test suite.

This module provides reusable fixtures for testing all GoalPlan components.
Fixtures follow the principle of "arrange-act-assert" with clear separation.
"""

import json
from pathlib import Path

import pytest

from goalplan.goals import Goal, GoalCategory
from goalplan.income import Earner, PersonalInfo
from goalplan.plan import Plan, default_plan
from goalplan.rates import EconomicAssumptions
from goalplan.serialization import save_plan


# ---------------------------------------------------------------------------
# Assumption / Household Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def assumptions() -> EconomicAssumptions:
    """Default economic assumptions (2.5% inflation, 2.5% expected return, ...)."""
    return EconomicAssumptions()


@pytest.fixture
def personal_info() -> PersonalInfo:
    """
    Default household.

    Client: 25 y/o, 300/month, retires at 60, lives to 90, +3.0%/yr
    Spouse: 22 y/o, 250/month, retires at 57, lives to 90, +2.5%/yr
    """
    return PersonalInfo()


@pytest.fixture
def short_career_client() -> Earner:
    """Client two years from retirement with 50% raises (exact float arithmetic)."""
    return Earner(age=58, monthly_income=300, retirement_age=60, salary_increase_rate=50.0)


# ---------------------------------------------------------------------------
# Goal Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def wedding_goal() -> Goal:
    """
    Generic goal funded from now.

    Target: 5,000 in 3 years, 2,000 already saved, 3-year window from now.
    """
    return Goal(
        id=1, name="Wedding fund", timing=3, required_funds=5000,
        current_savings=2000, saving_start=0, saving_period=3,
    )


@pytest.fixture
def loan_goal() -> Goal:
    """Loan repayment: 20,000 principal repaid over 20 years from year 11."""
    return Goal(
        id=4, name="대출상환", timing=11, required_funds=20000,
        saving_start=11, saving_period=20, category=GoalCategory.LOAN_REPAYMENT,
    )


@pytest.fixture
def retirement_goal() -> Goal:
    """Retirement: 100/month of today's money needed from year 35."""
    return Goal(
        id=9, name="은퇴자금", timing=35, required_funds=100,
        saving_start=24, saving_period=11, category=GoalCategory.RETIREMENT,
    )


@pytest.fixture
def college_goal() -> Goal:
    """Education goal: 5,000 in 24 years, saved over 13 years from year 11."""
    return Goal(
        id=5, name="첫째대학", timing=24, required_funds=5000,
        saving_start=11, saving_period=13, education=True,
    )


@pytest.fixture
def degenerate_goals() -> dict:
    """
    Implausible but accepted inputs whose arithmetic leaves the finite range.

    Keyed by what goes wrong: a total loss discounted over an overrun window
    (0^-2), a worse-than-total loss over a fractional horizon (negative base,
    fractional exponent), a target so far out that compounding overflows, and
    a periodic rate too small to register in ``1 + i``.
    """
    return {
        "total_loss": Goal(
            id=1, name="Total loss", timing=3, required_funds=5000,
            current_savings=1000, saving_period=5, lump_sum_return_rate=-100.0,
        ),
        "negative_base": Goal(
            id=2, name="Negative base", timing=2.5, required_funds=5000,
            current_savings=1000, saving_period=2.5, lump_sum_return_rate=-150.0,
        ),
        "overflow": Goal(
            id=3, name="Far future", timing=100_000, required_funds=5000,
            saving_period=3,
        ),
        "tiny_rate": Goal(
            id=4, name="Tiny rate", timing=3, required_funds=5000,
            saving_period=3, periodic_return_rate=1e-15,
        ),
    }


# ---------------------------------------------------------------------------
# Plan Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def plan() -> Plan:
    """Default household with the ten starter goals."""
    return default_plan()


@pytest.fixture
def plan_file(tmp_path, plan) -> Path:
    """Default plan saved as a current-version snapshot."""
    path = tmp_path / "plan.json"
    save_plan(plan, path)
    return path


@pytest.fixture
def legacy_snapshot() -> dict:
    """
    Unversioned snapshot with flat personal info and string inputs,
    as stored by earlier releases.
    """
    return {
        "personalInfo": {
            "clientAge": 25, "spouseAge": 22,
            "clientIncome": 300, "spouseIncome": 250,
            "clientPension": 80, "spousePension": 70,
            "clientRetirementAge": 60, "spouseRetirementAge": 57,
            "clientLifeExpectancy": 90, "spouseLifeExpectancy": 90,
            "clientSalaryIncreaseRate": 3.0, "spouseSalaryIncreaseRate": 2.5,
            "children": [{"age": -4}],
        },
        "economicAssumptions": {
            "inflationRate": 2.5, "educationInflationRate": 6.0,
            "loanInterestRate": 3.8, "expectedReturnRate": 2.5,
            "postRetirementInflationRate": 2.0, "postRetirementExpectedReturnRate": 3.0,
        },
        "goals": [
            {"id": 1, "name": "결혼자금", "timing": "3", "requiredFunds": "5,000",
             "currentSavings": 2000, "savingStart": 0, "savingPeriod": 3},
            {"id": 4, "name": "대출상환", "timing": 11, "requiredFunds": 20000,
             "currentSavings": "", "savingStart": 11, "savingPeriod": 20},
            {"id": 9, "name": "은퇴자금", "timing": 35, "requiredFunds": 100,
             "currentSavings": 0, "savingStart": 24, "savingPeriod": 11,
             "lumpSumReturnRate": "", "periodicReturnRate": 4.0},
        ],
        "totalSavingsPrincipal": 12345.5,
    }


@pytest.fixture
def legacy_file(tmp_path, legacy_snapshot) -> Path:
    path = tmp_path / "legacy.json"
    path.write_text(json.dumps(legacy_snapshot, ensure_ascii=False), encoding="utf-8")
    return path
