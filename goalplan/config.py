"""
Configuration management module for GoalPlan.

Purpose
-------
Pydantic models for the plan records that cross the package boundary (JSON
snapshots, CLI input), plus environment-driven application settings.

Every boundary record:

- accepts camelCase keys (``requiredFunds``) as well as field names
  (``required_funds``),
- coerces lenient numeric input once (``None``, ``""``, ``"abc"`` and NaN
  become 0; ``"5,000"`` becomes 5000). Optional goal rate overrides become
  ``None`` instead,
- converts to the frozen domain dataclasses via ``to_domain()`` and back via
  ``from_domain()``.

Design Principles
-----------------
- Immutable: frozen models
- Strict shape: unknown keys are rejected
- Backward compatible: flat personal-info records (``clientAge``,
  ``spouseIncome``, ``children``, ...) and goals without a category load
  unchanged

Example
-------
>>> from goalplan.config import GoalConfig
>>> cfg = GoalConfig.model_validate(
...     {"id": 1, "name": "은퇴자금", "timing": "35", "requiredFunds": "1,000"}
... )
>>> cfg.required_funds
1000.0
>>> cfg.to_domain().category
<GoalCategory.RETIREMENT: 'retirement'>
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_EDUCATION_INFLATION_RATE,
    DEFAULT_EXPECTED_RETURN_RATE,
    DEFAULT_INFLATION_RATE,
    DEFAULT_LIFE_EXPECTANCY,
    DEFAULT_LOAN_INTEREST_RATE,
    DEFAULT_POST_RETIREMENT_EXPECTED_RETURN_RATE,
    DEFAULT_POST_RETIREMENT_INFLATION_RATE,
    DEFAULT_RETIREMENT_AGE,
    DEFAULT_SALARY_INCREASE_RATE,
)
from .goals import Goal, GoalCategory, infer_category
from .income import Dependent, Earner, PersonalInfo
from .rates import EconomicAssumptions
from .utils import coerce_number, coerce_optional_number

__all__ = [
    "EconomicAssumptionsConfig",
    "EarnerConfig",
    "DependentConfig",
    "PersonalInfoConfig",
    "GoalConfig",
    "PlanConfig",
    "AppSettings",
]


_RECORD_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


# ---------------------------------------------------------------------------
# Economic Assumptions
# ---------------------------------------------------------------------------

class EconomicAssumptionsConfig(BaseModel):
    """
    Household-wide economic assumptions (annual percentages).

    Examples
    --------
    >>> EconomicAssumptionsConfig.model_validate({"inflationRate": ""}).inflation_rate
    0.0
    """

    model_config = _RECORD_CONFIG

    inflation_rate: float = Field(
        default=DEFAULT_INFLATION_RATE,
        description="General inflation (%)"
    )
    education_inflation_rate: float = Field(
        default=DEFAULT_EDUCATION_INFLATION_RATE,
        description="Education inflation (%)"
    )
    loan_interest_rate: float = Field(
        default=DEFAULT_LOAN_INTEREST_RATE,
        description="Loan interest rate (%)"
    )
    expected_return_rate: float = Field(
        default=DEFAULT_EXPECTED_RETURN_RATE,
        description="Fallback expected return (%)"
    )
    post_retirement_inflation_rate: float = Field(
        default=DEFAULT_POST_RETIREMENT_INFLATION_RATE,
        description="Post-retirement inflation (%)"
    )
    post_retirement_expected_return_rate: float = Field(
        default=DEFAULT_POST_RETIREMENT_EXPECTED_RETURN_RATE,
        description="Post-retirement expected return (%)"
    )

    @field_validator("*", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        return coerce_number(v)

    def to_domain(self) -> EconomicAssumptions:
        return EconomicAssumptions(**self.model_dump())

    @classmethod
    def from_domain(cls, assumptions: EconomicAssumptions) -> "EconomicAssumptionsConfig":
        return cls(**vars(assumptions))


# ---------------------------------------------------------------------------
# Personal Information
# ---------------------------------------------------------------------------

class EarnerConfig(BaseModel):
    """One wage earner; ``monthly_income`` and ``pension`` are monthly amounts."""

    model_config = _RECORD_CONFIG

    age: float = Field(default=0.0, description="Current age")
    monthly_income: float = Field(default=0.0, description="Monthly income")
    pension: float = Field(default=0.0, description="Estimated monthly pension")
    retirement_age: float = Field(default=DEFAULT_RETIREMENT_AGE, description="Retirement age")
    life_expectancy: float = Field(default=DEFAULT_LIFE_EXPECTANCY, description="Life expectancy")
    salary_increase_rate: float = Field(
        default=DEFAULT_SALARY_INCREASE_RATE,
        description="Annual salary increase (%)"
    )

    @field_validator("*", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        return coerce_number(v)

    def to_domain(self) -> Earner:
        return Earner(**self.model_dump())

    @classmethod
    def from_domain(cls, earner: Earner) -> "EarnerConfig":
        return cls(**vars(earner))


class DependentConfig(BaseModel):
    model_config = _RECORD_CONFIG

    age: float = Field(default=0.0, description="Age offset; negative if not yet born")

    @field_validator("age", mode="before")
    @classmethod
    def coerce_age(cls, v):
        return coerce_number(v)

    def to_domain(self) -> Dependent:
        return Dependent(age=self.age)


# Flat personal-info keys: "<client|spouse><suffix>" → earner field alias
_LEGACY_EARNER_KEYS: Dict[str, str] = {
    "Age": "age",
    "Income": "monthlyIncome",
    "Pension": "pension",
    "RetirementAge": "retirementAge",
    "LifeExpectancy": "lifeExpectancy",
    "SalaryIncreaseRate": "salaryIncreaseRate",
}


def _default_personal_info() -> PersonalInfo:
    return PersonalInfo()


class PersonalInfoConfig(BaseModel):
    """
    Household profile: client, spouse and dependents.

    Accepts the nested form ``{"client": {...}, "spouse": {...},
    "dependents": [...]}`` and the flat form ``{"clientAge": 25,
    "spouseIncome": 250, ..., "children": [{"age": -4}]}``.

    Examples
    --------
    >>> cfg = PersonalInfoConfig.model_validate({"clientAge": 40, "spouseAge": 38})
    >>> cfg.client.age, cfg.spouse.age
    (40.0, 38.0)
    """

    model_config = _RECORD_CONFIG

    client: EarnerConfig = Field(
        default_factory=lambda: EarnerConfig.from_domain(_default_personal_info().client),
        description="Primary earner"
    )
    spouse: EarnerConfig = Field(
        default_factory=lambda: EarnerConfig.from_domain(_default_personal_info().spouse),
        description="Second earner"
    )
    dependents: List[DependentConfig] = Field(
        default_factory=lambda: [DependentConfig(age=d.age) for d in _default_personal_info().dependents],
        description="Dependents (children)"
    )

    @model_validator(mode="before")
    @classmethod
    def unflatten_legacy_keys(cls, data: Any) -> Any:
        """Map flat ``clientX`` / ``spouseX`` / ``children`` keys onto nested records."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for role in ("client", "spouse"):
            flat = {
                alias: data.pop(role + suffix)
                for suffix, alias in _LEGACY_EARNER_KEYS.items()
                if role + suffix in data
            }
            if flat:
                nested = dict(data.get(role) or {})
                for alias, value in flat.items():
                    nested.setdefault(alias, value)
                data[role] = nested
        if "children" in data:
            children = data.pop("children")
            data.setdefault("dependents", children)
        return data

    def to_domain(self) -> PersonalInfo:
        return PersonalInfo(
            client=self.client.to_domain(),
            spouse=self.spouse.to_domain(),
            dependents=tuple(d.to_domain() for d in self.dependents),
        )

    @classmethod
    def from_domain(cls, info: PersonalInfo) -> "PersonalInfoConfig":
        return cls(
            client=EarnerConfig.from_domain(info.client),
            spouse=EarnerConfig.from_domain(info.spouse),
            dependents=[DependentConfig(age=d.age) for d in info.dependents],
        )


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

class GoalConfig(BaseModel):
    """
    One goal record.

    ``category`` and ``education`` are optional: when absent they are
    inferred from ``name`` on conversion to the domain ``Goal``.

    Examples
    --------
    >>> GoalConfig(id=4, name="대출상환").to_domain().category
    <GoalCategory.LOAN_REPAYMENT: 'loan_repayment'>
    >>> GoalConfig(id=5, lumpSumReturnRate="").lump_sum_return_rate is None
    True
    """

    model_config = _RECORD_CONFIG

    id: int = Field(description="Stable goal identity")
    name: str = Field(default="", description="Display name")
    timing: float = Field(default=0.0, description="Target year offset")
    required_funds: float = Field(default=0.0, description="Funds needed at today's value")
    current_savings: float = Field(default=0.0, description="Savings already earmarked")
    saving_start: float = Field(default=0.0, description="Years until contributions begin")
    saving_period: float = Field(default=0.0, description="Saving window length (years)")
    lump_sum_return_rate: Optional[float] = Field(
        default=None,
        description="Annual % return on lump-sum savings (None = expected return)"
    )
    periodic_return_rate: Optional[float] = Field(
        default=None,
        description="Annual % return on periodic contributions (None = expected return)"
    )
    category: Optional[GoalCategory] = Field(
        default=None,
        description="Goal category (None = infer from name)"
    )
    education: Optional[bool] = Field(
        default=None,
        description="Use education inflation (None = infer from name)"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return int(coerce_number(v))

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v):
        return "" if v is None else str(v)

    @field_validator(
        "timing", "required_funds", "current_savings", "saving_start", "saving_period",
        mode="before",
    )
    @classmethod
    def coerce_numbers(cls, v):
        return coerce_number(v)

    @field_validator("lump_sum_return_rate", "periodic_return_rate", mode="before")
    @classmethod
    def coerce_overrides(cls, v):
        return coerce_optional_number(v)

    def to_domain(self) -> Goal:
        category, education = infer_category(self.name)
        return Goal(
            id=self.id,
            name=self.name,
            timing=self.timing,
            required_funds=self.required_funds,
            current_savings=self.current_savings,
            saving_start=self.saving_start,
            saving_period=self.saving_period,
            lump_sum_return_rate=self.lump_sum_return_rate,
            periodic_return_rate=self.periodic_return_rate,
            category=self.category if self.category is not None else category,
            education=self.education if self.education is not None else education,
        )

    @classmethod
    def from_domain(cls, goal: Goal) -> "GoalConfig":
        return cls(**vars(goal))


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------

class PlanConfig(BaseModel):
    """
    Complete plan record (the body of a persisted snapshot).

    Attributes
    ----------
    personal_info : PersonalInfoConfig
    economic_assumptions : EconomicAssumptionsConfig
    goals : list of GoalConfig
        Ordered goals; ids must be unique.
    total_savings_principal : float, optional
        Σ saving_period × monthly_payment × 12, recorded at save time.
    """

    model_config = _RECORD_CONFIG

    personal_info: PersonalInfoConfig = Field(
        default_factory=PersonalInfoConfig,
        description="Household profile"
    )
    economic_assumptions: EconomicAssumptionsConfig = Field(
        default_factory=EconomicAssumptionsConfig,
        description="Economic assumptions"
    )
    goals: List[GoalConfig] = Field(
        default_factory=list,
        description="Ordered goals"
    )
    total_savings_principal: Optional[float] = Field(
        default=None,
        description="Total savings principal at save time"
    )

    @field_validator("goals")
    @classmethod
    def validate_unique_ids(cls, v):
        """Ensure goal ids are unique."""
        ids = [g.id for g in v]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate goal id(s): {duplicates}")
        return v

    @field_validator("total_savings_principal", mode="before")
    @classmethod
    def coerce_total(cls, v):
        return coerce_optional_number(v)


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    should be prefixed with GOALPLAN_ (e.g., GOALPLAN_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    debug : bool
        Enable debug mode (forces DEBUG logging)
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    currency_symbol : str
        Prefix for amounts in CLI tables (e.g., "₩", "$")

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="GOALPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    currency_symbol: str = Field(
        default=DEFAULT_CURRENCY_SYMBOL,
        description="Currency prefix for displayed amounts"
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
