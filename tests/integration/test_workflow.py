"""
Integration test for full GoalPlan workflow.

Tests the complete pipeline from editing goals through projection, cash-flow
scheduling and persistence to verify all components work together correctly.
"""

import numpy as np
import pytest

from goalplan.goals import GoalBook, GoalCategory
from goalplan.income import Earner, PersonalInfo
from goalplan.plan import Plan, default_plan
from goalplan.rates import EconomicAssumptions
from goalplan.serialization import load_plan, read_saved_total, save_plan


@pytest.mark.integration
class TestFullWorkflow:
    """Integration tests for the complete planning workflow."""

    def test_edit_project_save_restore(self, tmp_path):
        """
        Build a plan interactively, project it, save it, restore it.

        Mirrors a user editing the goal table, saving the plan into a slot
        and restoring it later.
        """
        # 1. Edit goals
        book = GoalBook()
        wedding = book.add(name="Wedding fund", timing=3, required_funds=5000,
                           current_savings=2000, saving_start=0, saving_period=3)
        loan = book.add(name="Loan repayment", timing=11, required_funds=20000,
                        saving_start=11, saving_period=20)
        pension = book.add(name="Retirement", timing=35, required_funds=100,
                           saving_start=24, saving_period=11)
        book.update(wedding.id, current_savings=2500)
        book.move(pension.id, before=wedding.id)

        assert [g.id for g in book] == [pension.id, wedding.id, loan.id]
        assert book.get(loan.id).category is GoalCategory.LOAN_REPAYMENT

        # 2. Project
        plan = Plan(goals=list(book))
        derived = {d.id: d for d in plan.derive()}
        assert derived[wedding.id].future_value_current == pytest.approx(2500 * 1.025 ** 3)
        assert derived[loan.id].holding_period == -20
        assert all(d.shortfall >= 0 for d in derived.values())

        # 3. Schedule follows goal order for colors
        schedule = plan.schedule()
        assert list(schedule.labels) == [pension.id, wedding.id, loan.id]
        assert len(schedule) == 35

        # 4. Save into slots and read back the saved totals
        slots = [tmp_path / f"financialPlan_{i}.json" for i in (1, 2, 3)]
        save_plan(plan, slots[0])
        totals = [read_saved_total(p) for p in slots]
        assert totals[0] == pytest.approx(plan.total_savings_principal())
        assert totals[1:] == [None, None]

        # 5. Restore
        restored = load_plan(slots[0])
        assert restored == plan
        assert [d.monthly_payment for d in restored.derive()] == pytest.approx(
            [d.monthly_payment for d in plan.derive()]
        )

    def test_assumption_changes_propagate(self):
        """Raising inflation raises every generic goal's payment."""
        base = default_plan()
        inflated = Plan(
            assumptions=EconomicAssumptions(inflation_rate=4.0),
            personal_info=base.personal_info,
            goals=base.goals,
        )
        for before, after in zip(base.derive(), inflated.derive()):
            if before.goal.category is GoalCategory.LOAN_REPAYMENT or before.goal.education:
                assert after.monthly_payment == pytest.approx(before.monthly_payment)
            else:
                assert after.monthly_payment >= before.monthly_payment

    def test_household_changes_only_affect_income_and_retirement(self):
        base = default_plan()
        older = Plan(
            assumptions=base.assumptions,
            personal_info=PersonalInfo(
                client=Earner(age=40, monthly_income=500, retirement_age=65, life_expectancy=85),
                spouse=base.personal_info.spouse,
            ),
            goals=base.goals,
        )
        for before, after in zip(base.derive(), older.derive()):
            if before.goal.category is GoalCategory.RETIREMENT:
                # Payout horizon shrinks from 30 to 20 years
                assert after.future_value_required < before.future_value_required
            else:
                assert after.future_value_required == pytest.approx(before.future_value_required)

        incomes = older.schedule().incomes
        assert incomes[0] == pytest.approx(500 + 250)
        assert np.all(incomes >= 0)

    def test_stacked_totals_share_axis_with_income(self):
        schedule = default_plan().schedule()
        df = schedule.to_dataframe()
        goal_columns = [c for c in df.columns if c not in ("total", "income")]
        np.testing.assert_allclose(df[goal_columns].sum(axis=1), df["total"])
        assert schedule.max_value >= df["total"].max()
        assert schedule.max_value >= df["income"].max()
