"""
Unit tests for projection.py module.

Tests required future value per category, savings growth, shortfall and the
growing annuity helper.
"""

import math

import pytest

from goalplan.goals import Goal, GoalCategory
from goalplan.income import Earner, PersonalInfo
from goalplan.projection import (
    growing_annuity_value,
    retirement_first_year_income,
    required_future_value,
    savings_future_value,
    shortfall,
)
from goalplan.rates import EconomicAssumptions


# ============================================================================
# GROWING ANNUITY TESTS
# ============================================================================

class TestGrowingAnnuity:
    """Test growing annuity closed form and degenerate branches."""

    def test_closed_form(self):
        value = growing_annuity_value(100.0, 0.05, 0.0, 2)
        assert value == pytest.approx(100 / 1.05 + 100 / 1.05 ** 2)

    def test_growth_equal_rate_gives_c_times_n(self):
        assert growing_annuity_value(100.0, 0.03, 0.03, 10) == pytest.approx(1000.0)

    def test_growth_above_rate_gives_c_times_n(self):
        assert growing_annuity_value(100.0, 0.02, 0.05, 10) == pytest.approx(1000.0)

    @pytest.mark.parametrize("periods", [0, -5])
    def test_empty_horizon(self, periods):
        assert growing_annuity_value(100.0, 0.05, 0.02, periods) == 0.0

    def test_annuity_due_is_continuous_at_r_equals_g(self):
        """With payments at period start, r → g converges to C·n."""
        c, g, n = 1200.0, 0.02, 30
        near = growing_annuity_value(c, g + 1e-9, g, n, timing="begin")
        assert near == pytest.approx(c * n, rel=1e-5)

    def test_ordinary_annuity_limit(self):
        """End-of-period form tends to C·n/(1+g) as r → g."""
        c, g, n = 1200.0, 0.02, 30
        near = growing_annuity_value(c, g + 1e-9, g, n)
        assert near == pytest.approx(c * n / (1 + g), rel=1e-5)

    def test_begin_is_end_times_one_plus_r(self):
        end = growing_annuity_value(100.0, 0.05, 0.01, 12)
        begin = growing_annuity_value(100.0, 0.05, 0.01, 12, timing="begin")
        assert begin == pytest.approx(end * 1.05)

    def test_invalid_timing(self):
        with pytest.raises(ValueError, match="timing"):
            growing_annuity_value(100.0, 0.05, 0.01, 12, timing="middle")

    def test_total_loss_rate_is_infinite(self):
        """r = -100 % divides by zero inside the ratio; the value is inf, not an error."""
        assert math.isinf(growing_annuity_value(100.0, -1.0, -1.5, 10))

    def test_negative_ratio_with_fractional_horizon_is_nan(self):
        assert math.isnan(growing_annuity_value(100.0, 0.5, -2.0, 2.5))


# ============================================================================
# REQUIRED FUNDS TESTS
# ============================================================================

class TestRequiredFutureValue:
    """Test category dispatch of the required future value."""

    def test_generic_goal_inflated(self, wedding_goal, assumptions, personal_info):
        fv = required_future_value(wedding_goal, assumptions, personal_info)
        assert fv == pytest.approx(5384.453125)
        assert round(fv, 2) == 5384.45

    def test_education_goal_uses_education_inflation(self, college_goal, assumptions, personal_info):
        fv = required_future_value(college_goal, assumptions, personal_info)
        assert fv == pytest.approx(5000 * 1.06 ** 24)

    def test_education_flag_ignored_for_loans(self, assumptions, personal_info):
        goal = Goal(id=1, timing=5, required_funds=1000,
                    category=GoalCategory.LOAN_REPAYMENT, education=True)
        assert required_future_value(goal, assumptions, personal_info) == 1000.0

    def test_loan_goal_not_inflated(self, loan_goal, assumptions, personal_info):
        assert required_future_value(loan_goal, assumptions, personal_info) == 20000.0

    def test_retirement_goal_growing_annuity(self, retirement_goal, assumptions, personal_info):
        first = 100 * 12 * 1.025 ** 35
        expected = first * (1 - (1.02 / 1.03) ** 30) / (0.03 - 0.02)
        fv = required_future_value(retirement_goal, assumptions, personal_info)
        assert fv == pytest.approx(expected)

    def test_retirement_first_year_income(self, retirement_goal, assumptions):
        assert retirement_first_year_income(retirement_goal, assumptions) == pytest.approx(
            1200 * 1.025 ** 35
        )

    def test_retirement_degenerate_when_return_not_above_inflation(self, retirement_goal, personal_info):
        assumptions = EconomicAssumptions(
            post_retirement_inflation_rate=3.0,
            post_retirement_expected_return_rate=3.0,
        )
        first = 1200 * 1.025 ** 35
        fv = required_future_value(retirement_goal, assumptions, personal_info)
        assert fv == pytest.approx(first * 30)

    def test_retirement_horizon_uses_client_only(self, retirement_goal, assumptions):
        base = PersonalInfo()
        changed_spouse = PersonalInfo(spouse=Earner(age=30, retirement_age=50, life_expectancy=100))
        assert required_future_value(retirement_goal, assumptions, base) == pytest.approx(
            required_future_value(retirement_goal, assumptions, changed_spouse)
        )

    def test_retirement_no_payout_horizon(self, retirement_goal, assumptions):
        info = PersonalInfo(client=Earner(age=25, retirement_age=90, life_expectancy=85))
        assert required_future_value(retirement_goal, assumptions, info) == 0.0

    def test_zero_goal(self, assumptions, personal_info):
        assert required_future_value(Goal(id=1), assumptions, personal_info) == 0.0


# ============================================================================
# SAVINGS / SHORTFALL TESTS
# ============================================================================

class TestSavingsAndShortfall:
    """Test savings growth and the non-negative shortfall."""

    def test_savings_future_value(self, wedding_goal):
        assert savings_future_value(wedding_goal, 0.025) == pytest.approx(2153.78125)

    def test_savings_zero_rate(self, wedding_goal):
        assert savings_future_value(wedding_goal, 0.0) == 2000.0

    def test_shortfall(self):
        assert shortfall(5384.453125, 2153.78125) == pytest.approx(3230.671875)

    @pytest.mark.parametrize("required, current", [
        (100.0, 150.0),
        (0.0, 0.0),
        (0.0, 10.0),
        (99.99, 100.0),
    ])
    def test_shortfall_never_negative(self, required, current):
        assert shortfall(required, current) >= 0.0

    def test_overfunded_reports_zero(self):
        assert shortfall(100.0, 150.0) == 0.0
