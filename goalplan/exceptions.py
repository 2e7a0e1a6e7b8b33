"""
Custom exceptions for GoalPlan.

Purpose
-------
Provides a unified exception hierarchy for consistent error handling
across all GoalPlan modules. All exceptions inherit from GoalPlanError,
enabling catch-all handling when needed.

The projection formulas themselves never raise: invalid numbers are coerced
at the record boundary and the degenerate cases (zero rates, empty saving
windows) have closed-form fallbacks. These exceptions cover structural
problems only.

Exception Hierarchy
-------------------
GoalPlanError (base)
├── ConfigurationError - Invalid configuration or parameters
│   └── SnapshotError - Malformed or incomplete plan snapshot
└── ValidationError - Structural validation failures
    └── GoalNotFoundError - Goal identity not present in the collection

Usage
-----
>>> from goalplan.exceptions import GoalNotFoundError, GoalPlanError
>>>
>>> try:
...     book.remove(goal_id=42)
... except GoalNotFoundError as e:
...     print(f"No such goal: {e}")
"""


class GoalPlanError(Exception):
    """
    Base exception for all GoalPlan errors.

    Examples
    --------
    >>> try:
    ...     plan = load_plan(path)
    ... except GoalPlanError as e:
    ...     logger.error(f"Could not load plan: {e}")
    """
    pass


class ConfigurationError(GoalPlanError):
    """
    Invalid configuration or parameters.

    Raised when a configuration record cannot be built, such as:
    - Unknown template or settings value
    - Records that fail pydantic validation at the boundary

    Examples
    --------
    >>> raise ConfigurationError("Unknown plan template 'fancy'")
    """
    pass


class SnapshotError(ConfigurationError):
    """
    Malformed or incomplete plan snapshot.

    Raised when a persisted snapshot lacks one of the required sections
    (personalInfo, economicAssumptions, goals) or is not valid JSON.

    Examples
    --------
    >>> raise SnapshotError(
    ...     "Snapshot is missing required section(s): goals. "
    ...     "Expected personalInfo, economicAssumptions and goals."
    ... )
    """
    pass


class ValidationError(GoalPlanError):
    """
    Structural validation failures.

    Raised when input records are structurally inconsistent, such as
    duplicate goal identities in one collection.

    Examples
    --------
    >>> raise ValidationError("Duplicate goal id 3 in goal collection")
    """
    pass


class GoalNotFoundError(ValidationError):
    """
    Goal identity not present in the collection.

    Examples
    --------
    >>> raise GoalNotFoundError("Goal id 42 not found. Known ids: [1, 2, 3]")
    """
    pass
