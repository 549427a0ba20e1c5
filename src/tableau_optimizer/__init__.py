"""Dense-tableau LP and MILP solver: two-phase simplex with best-bound branch and cut."""

from .errors import ModelError
from .options import (
    BACKUP_DEFAULT_OPTIONS,
    get_default_options,
    reset_default_options,
    set_default_options,
)
from .schemas import (
    Constraint,
    Model,
    Solution,
    SolveOptions,
    equal_to,
    greater_eq,
    in_range,
    less_eq,
)
from .solver import solve

__all__ = [
    "solve",
    "Model",
    "Constraint",
    "SolveOptions",
    "Solution",
    "ModelError",
    "less_eq",
    "greater_eq",
    "equal_to",
    "in_range",
    "BACKUP_DEFAULT_OPTIONS",
    "get_default_options",
    "set_default_options",
    "reset_default_options",
]
