"""
Serialization module for GoalPlan plan persistence.

Purpose
-------
JSON snapshots of a complete plan (household profile, economic assumptions
and ordered goals), enabling saving, restoring and sharing plans.

Snapshot layout::

    {
      "schema_version": "0.1.0",
      "personalInfo": {"client": {...}, "spouse": {...}, "dependents": [...]},
      "economicAssumptions": {"inflationRate": 2.5, ...},
      "goals": [{"id": 1, "name": "...", "requiredFunds": 5000, ...}, ...],
      "totalSavingsPrincipal": 123456.0
    }

``totalSavingsPrincipal`` is recomputed at save time so that a list of saved
plans can be summarized without re-running projections (``read_saved_total``).

Design Principles
-----------------
- Type-safe: records are validated through the pydantic configs
- Human-readable: indented UTF-8 JSON (goal names are often non-ASCII)
- Backward compatible: unversioned snapshots with flat personal info and
  uncategorized goals still load; version mismatches only warn

Example
-------
>>> from pathlib import Path
>>> from goalplan.plan import default_plan
>>> from goalplan.serialization import save_plan, load_plan
>>> save_plan(default_plan(), Path("plan.json"))
>>> plan = load_plan(Path("plan.json"))
>>> len(plan.goals)
10
"""

from __future__ import annotations

import json
import logging
import warnings
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .config import (
    EconomicAssumptionsConfig,
    GoalConfig,
    PersonalInfoConfig,
    PlanConfig,
)
from .exceptions import ConfigurationError, SnapshotError
from .plan import Plan, default_plan
from .types import PlanSnapshotDict
from .utils import finite_or_zero

__all__ = [
    "SCHEMA_VERSION",
    "REQUIRED_SECTIONS",
    "PLAN_TEMPLATES",
    "plan_to_config",
    "plan_from_config",
    "plan_to_dict",
    "plan_from_dict",
    "save_plan",
    "load_plan",
    "read_saved_total",
    "plan_template",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"

REQUIRED_SECTIONS = ("personalInfo", "economicAssumptions", "goals")

PLAN_TEMPLATES = ("default", "empty")


# ---------------------------------------------------------------------------
# Plan ↔ Config
# ---------------------------------------------------------------------------

def plan_to_config(plan: Plan) -> PlanConfig:
    """Convert a Plan to its boundary record, including the savings principal."""
    return PlanConfig(
        personal_info=PersonalInfoConfig.from_domain(plan.personal_info),
        economic_assumptions=EconomicAssumptionsConfig.from_domain(plan.assumptions),
        goals=[GoalConfig.from_domain(g) for g in plan.goals],
        total_savings_principal=finite_or_zero(plan.total_savings_principal()),
    )


def plan_from_config(config: PlanConfig) -> Plan:
    return Plan(
        assumptions=config.economic_assumptions.to_domain(),
        personal_info=config.personal_info.to_domain(),
        goals=tuple(g.to_domain() for g in config.goals),
    )


# ---------------------------------------------------------------------------
# Plan ↔ Dict
# ---------------------------------------------------------------------------

def plan_to_dict(plan: Plan) -> PlanSnapshotDict:
    """
    Convert a Plan to its snapshot dictionary.

    Parameters
    ----------
    plan : Plan
        Plan to serialize.

    Returns
    -------
    dict
        JSON-ready snapshot with camelCase keys, the current
        ``schema_version`` and ``totalSavingsPrincipal``.
    """
    body = plan_to_config(plan).model_dump(mode="json", by_alias=True)
    return {"schema_version": SCHEMA_VERSION, **body}


def plan_from_dict(data: Dict[str, Any]) -> Plan:
    """
    Rebuild a Plan from a snapshot dictionary.

    Parameters
    ----------
    data : dict
        Snapshot as written by ``plan_to_dict`` or by earlier releases
        (no ``schema_version``, flat personal info, no goal categories).

    Returns
    -------
    Plan

    Raises
    ------
    SnapshotError
        If a required section is missing or a record fails validation.

    Warns
    -----
    UserWarning
        If the snapshot's schema version differs from ``SCHEMA_VERSION``.
    """
    if not isinstance(data, dict):
        raise SnapshotError(f"Plan snapshot must be a JSON object, got {type(data).__name__}")

    missing = [key for key in REQUIRED_SECTIONS if key not in data]
    if missing:
        raise SnapshotError(f"Plan snapshot is missing required section(s): {missing}")

    # Check schema version
    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"Plan schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )

    body = {key: value for key, value in data.items() if key != "schema_version"}
    try:
        config = PlanConfig.model_validate(body)
    except PydanticValidationError as e:
        raise SnapshotError(f"Invalid plan snapshot: {e}") from e

    plan = plan_from_config(config)
    logger.debug("loaded plan snapshot with %d goal(s)", len(plan.goals))
    return plan


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def save_plan(plan: Plan, path: Union[str, Path]) -> None:
    """
    Save a plan snapshot to a JSON file.

    Examples
    --------
    >>> save_plan(plan, Path("plans/plan_1.json"))
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(plan_to_dict(plan), f, indent=2, ensure_ascii=False)


def load_plan(path: Union[str, Path]) -> Plan:
    """
    Load a plan from a JSON snapshot file.

    Raises
    ------
    SnapshotError
        If the file is not valid JSON or not a valid snapshot.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Plan file {path} is not valid JSON: {e}") from e
    return plan_from_dict(data)


def read_saved_total(path: Union[str, Path]) -> Optional[float]:
    """
    Saved ``totalSavingsPrincipal`` of a snapshot file, without loading the plan.

    Returns None when the file is missing, unreadable, not JSON, or carries
    no numeric total.
    """
    path = Path(path)
    if not path.is_file():
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("cannot read saved total from %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        return None
    total = data.get("totalSavingsPrincipal")
    if isinstance(total, bool) or not isinstance(total, (int, float)):
        return None
    return float(total)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

def plan_template(name: str) -> Plan:
    """
    Starter plan by template name.

    ``"default"``: default household and the ten starter goals.
    ``"empty"``: default household and assumptions, no goals.
    """
    if name == "default":
        return default_plan()
    if name == "empty":
        return Plan()
    raise ConfigurationError(f"Unknown plan template '{name}'. Choose from {list(PLAN_TEMPLATES)}")
