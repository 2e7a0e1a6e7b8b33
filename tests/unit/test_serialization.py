"""
Unit tests for serialization.py module.

Tests plan snapshot dictionaries, JSON files, legacy snapshots, and the
saved-total lookup.
"""

import json
import warnings

import pytest

from goalplan.exceptions import ConfigurationError, SnapshotError
from goalplan.goals import GoalCategory
from goalplan.income import PersonalInfo
from goalplan.plan import Plan
from goalplan.serialization import (
    SCHEMA_VERSION,
    load_plan,
    plan_from_dict,
    plan_template,
    plan_to_dict,
    read_saved_total,
    save_plan,
)


# ============================================================================
# DICT SERIALIZATION TESTS
# ============================================================================

class TestPlanToDict:
    """Test snapshot structure."""

    def test_top_level_keys(self, plan):
        data = plan_to_dict(plan)
        assert set(data) == {
            "schema_version", "personalInfo", "economicAssumptions",
            "goals", "totalSavingsPrincipal",
        }
        assert data["schema_version"] == SCHEMA_VERSION

    def test_records_use_camel_case(self, plan):
        data = plan_to_dict(plan)
        assert data["personalInfo"]["client"]["monthlyIncome"] == 300
        assert data["economicAssumptions"]["postRetirementExpectedReturnRate"] == 3.0
        goal = data["goals"][0]
        assert goal["requiredFunds"] == 5000
        assert goal["savingPeriod"] == 3
        assert goal["lumpSumReturnRate"] is None

    def test_categories_recorded(self, plan):
        categories = [g["category"] for g in plan_to_dict(plan)["goals"]]
        assert categories[3] == "loan_repayment"
        assert categories[8] == "retirement"
        assert categories[0] == "generic"

    def test_total_savings_principal(self, plan):
        data = plan_to_dict(plan)
        assert data["totalSavingsPrincipal"] == pytest.approx(plan.total_savings_principal())

    def test_json_serializable(self, plan):
        json.dumps(plan_to_dict(plan))


class TestPlanFromDict:
    """Test snapshot loading."""

    def test_roundtrip(self, plan):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            restored = plan_from_dict(plan_to_dict(plan))
        assert restored == plan

    def test_legacy_snapshot(self, legacy_snapshot):
        with pytest.warns(UserWarning, match="schema version"):
            plan = plan_from_dict(legacy_snapshot)
        assert plan.personal_info == PersonalInfo()
        goals = {g.id: g for g in plan.goals}
        assert goals[1].required_funds == 5000.0
        assert goals[1].timing == 3.0
        assert goals[4].current_savings == 0.0
        assert goals[4].category is GoalCategory.LOAN_REPAYMENT
        assert goals[9].category is GoalCategory.RETIREMENT
        assert goals[9].lump_sum_return_rate is None
        assert goals[9].periodic_return_rate == 4.0

    def test_legacy_snapshot_projection(self, legacy_snapshot):
        with pytest.warns(UserWarning):
            plan = plan_from_dict(legacy_snapshot)
        wedding = plan.derive()[0]
        assert round(wedding.future_value_required, 2) == 5384.45

    def test_version_mismatch_warns(self, plan):
        data = plan_to_dict(plan)
        data["schema_version"] = "9.9.9"
        with pytest.warns(UserWarning, match="9.9.9"):
            plan_from_dict(data)

    @pytest.mark.parametrize("section", ["personalInfo", "economicAssumptions", "goals"])
    def test_missing_section(self, plan, section):
        data = plan_to_dict(plan)
        del data[section]
        with pytest.raises(SnapshotError, match=section):
            plan_from_dict(data)

    def test_not_a_dict(self):
        with pytest.raises(SnapshotError):
            plan_from_dict([1, 2, 3])

    def test_invalid_record(self, plan):
        data = plan_to_dict(plan)
        data["goals"].append(dict(data["goals"][0]))
        with pytest.raises(SnapshotError, match="Invalid plan snapshot"):
            plan_from_dict(data)

    def test_snapshot_error_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            plan_from_dict({})

    def test_saved_total_not_trusted(self, plan):
        """The stored total is informational; the plan recomputes it."""
        data = plan_to_dict(plan)
        data["totalSavingsPrincipal"] = -1
        restored = plan_from_dict(data)
        assert restored.total_savings_principal() == pytest.approx(plan.total_savings_principal())


# ============================================================================
# FILE TESTS
# ============================================================================

class TestFiles:
    """Test JSON files on disk."""

    def test_save_and_load(self, plan, tmp_path):
        path = tmp_path / "nested" / "plan.json"
        save_plan(plan, path)
        assert path.exists()
        assert load_plan(path) == plan

    def test_non_ascii_names_kept_readable(self, plan, tmp_path):
        path = tmp_path / "plan.json"
        save_plan(plan, path)
        assert "은퇴자금" in path.read_text(encoding="utf-8")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SnapshotError, match="not valid JSON"):
            load_plan(path)

    def test_load_legacy_file(self, legacy_file):
        with pytest.warns(UserWarning):
            plan = load_plan(legacy_file)
        assert len(plan.goals) == 3


class TestReadSavedTotal:
    """Test saved-total lookup without loading the plan."""

    def test_saved_plan(self, plan, plan_file):
        assert read_saved_total(plan_file) == pytest.approx(plan.total_savings_principal())

    def test_legacy_file(self, legacy_file):
        assert read_saved_total(legacy_file) == 12345.5

    def test_missing_file(self, tmp_path):
        assert read_saved_total(tmp_path / "nope.json") is None

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert read_saved_total(path) is None

    @pytest.mark.parametrize("payload", [
        {"goals": []},
        {"totalSavingsPrincipal": "100"},
        {"totalSavingsPrincipal": True},
        [1, 2],
    ])
    def test_no_numeric_total(self, tmp_path, payload):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        assert read_saved_total(path) is None


class TestTemplates:
    """Test starter plans."""

    def test_default(self):
        assert len(plan_template("default").goals) == 10

    def test_empty(self):
        assert plan_template("empty") == Plan()

    def test_unknown(self):
        with pytest.raises(ConfigurationError, match="fancy"):
            plan_template("fancy")
