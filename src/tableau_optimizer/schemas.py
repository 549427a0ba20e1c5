from __future__ import annotations

import math
from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Direction = Literal["maximize", "minimize"]
Status = Literal["optimal", "infeasible", "unbounded", "cycled", "timedout"]

# Sparse collections may be given as a mapping or as an ordered list of pairs.
Coefficients = Union[Dict[str, float], List[Tuple[str, float]]]


class Constraint(BaseModel):
    """Bounds on the weighted sum of variables sharing a constraint name."""

    min: Optional[float] = None
    max: Optional[float] = None
    equal: Optional[float] = None

    def lower(self) -> float:
        if self.equal is not None:
            return self.equal
        return self.min if self.min is not None else -math.inf

    def upper(self) -> float:
        if self.equal is not None:
            return self.equal
        return self.max if self.max is not None else math.inf


def less_eq(value: float) -> Constraint:
    """Equivalent to ``Constraint(max=value)``."""
    return Constraint(max=value)


def greater_eq(value: float) -> Constraint:
    """Equivalent to ``Constraint(min=value)``."""
    return Constraint(min=value)


def equal_to(value: float) -> Constraint:
    """Equivalent to ``Constraint(equal=value)``."""
    return Constraint(equal=value)


def in_range(lower: float, upper: float) -> Constraint:
    """Equivalent to ``Constraint(min=lower, max=upper)``."""
    return Constraint(min=lower, max=upper)


class Model(BaseModel):
    """
    Optimisation model in sparse form.

    ``variables`` maps each variable name to its coefficients on named
    constraints; the objective is just another constraint name. Constraint
    names given more than once (pair-list form) have their bounds merged.
    ``integers``/``binaries`` accept a collection of names or ``True`` for all.
    """

    direction: Optional[Direction] = None
    objective: Optional[str] = None
    constraints: Union[Dict[str, Constraint], List[Tuple[str, Constraint]]]
    variables: Union[Dict[str, Coefficients], List[Tuple[str, Coefficients]]]
    integers: Union[bool, List[str], None] = None
    binaries: Union[bool, List[str], None] = None


class SolveOptions(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    precision: float = Field(default=1e-8, gt=0)
    check_cycles: bool = False
    max_pivots: int = Field(default=8192, ge=0)
    tolerance: float = Field(default=0.0, ge=0)
    timeout: float = math.inf
    max_iterations: int = Field(default=32768, ge=0)


class Solution(BaseModel):
    model_config = ConfigDict(ser_json_inf_nan="constants")

    status: Status
    result: float
    variables: List[Tuple[str, float]] = Field(default_factory=list)

    def as_dict(self) -> Dict[str, float]:
        return dict(self.variables)
