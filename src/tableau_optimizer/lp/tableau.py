from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Set, Tuple, Union

import numpy as np

from ..errors import ModelError
from ..schemas import Model

logger = logging.getLogger(__name__)


@dataclass
class Tableau:
    """
    Dense simplex tableau stored row-major in a single float64 buffer.

    Column 0 holds the right-hand side and row 0 the objective. Variables are
    numbered 0..width+height-1: structural variables own columns 1..width-1 and
    each row owns one slack variable. A position below ``width`` is a column;
    ``width + r`` means "basic in row r".
    """

    matrix: np.ndarray
    width: int
    height: int
    position_of_variable: np.ndarray
    variable_at_position: np.ndarray

    @property
    def grid(self) -> np.ndarray:
        # Reshaping a contiguous 1-D buffer returns a view, so writes go through.
        return self.matrix.reshape(self.height, self.width)

    def copy(self) -> "Tableau":
        return Tableau(
            matrix=self.matrix.copy(),
            width=self.width,
            height=self.height,
            position_of_variable=self.position_of_variable.copy(),
            variable_at_position=self.variable_at_position.copy(),
        )


class TableauModel(NamedTuple):
    tableau: Tableau
    sign: int
    variables: List[Tuple[str, Any]]
    integers: List[int]


def index(tableau: Tableau, row: int, col: int) -> float:
    return float(tableau.matrix[row * tableau.width + col])


def update(tableau: Tableau, row: int, col: int, value: float) -> None:
    tableau.matrix[row * tableau.width + col] = value


@dataclass
class _Bounds:
    row: int = 0
    lower: float = -math.inf
    upper: float = math.inf


def build_tableau(model: Model) -> TableauModel:
    """
    Convert a sparse model into a dense tableau where every row reads ``<= rhs``.

    A constraint bounded on both sides takes two rows (upper first, then the
    negated lower); each binary variable adds an implicit ``x <= 1`` row.
    """
    if model.variables is None:
        raise ModelError("variables was null or undefined.")
    if model.constraints is None:
        raise ModelError("constraints was null or undefined.")

    sign = _direction_sign(model.direction)
    variables = as_pairs("variables", model.variables)

    binary_columns: List[int] = []
    integers: List[int] = []
    if model.integers or model.binaries:
        binaries = _name_set(model.binaries)
        integer_names = True if binaries is True else _name_set(model.integers)
        for col, (name, _) in enumerate(variables, start=1):
            if binaries is True or name in binaries:
                binary_columns.append(col)
                integers.append(col)
            elif integer_names is True or name in integer_names:
                integers.append(col)

    bounds: Dict[str, _Bounds] = {}
    for name, constraint in as_pairs("constraints", model.constraints):
        if constraint is None:
            raise ModelError("A constraint was null or undefined.")
        entry = bounds.setdefault(name, _Bounds())
        entry.lower = max(entry.lower, constraint.lower())
        entry.upper = min(entry.upper, constraint.upper())

    num_rows = 1
    for entry in bounds.values():
        entry.row = num_rows
        num_rows += int(math.isfinite(entry.lower)) + int(math.isfinite(entry.upper))

    width = len(variables) + 1
    height = num_rows + len(binary_columns)
    num_vars = width + height
    tableau = Tableau(
        matrix=np.zeros(width * height, dtype=np.float64),
        width=width,
        height=height,
        position_of_variable=np.arange(num_vars, dtype=np.int32),
        variable_at_position=np.arange(num_vars, dtype=np.int32),
    )
    grid = tableau.grid

    has_objective = model.objective is not None
    for col, (_, coefficients) in enumerate(variables, start=1):
        for constraint, coef in as_pairs("A variable", coefficients):
            if has_objective and constraint == model.objective:
                grid[0, col] = sign * coef
            entry = bounds.get(constraint)
            if entry is None:
                continue
            if math.isfinite(entry.upper):
                grid[entry.row, col] = coef
                if math.isfinite(entry.lower):
                    grid[entry.row + 1, col] = -coef
            elif math.isfinite(entry.lower):
                grid[entry.row, col] = -coef

    for entry in bounds.values():
        if math.isfinite(entry.upper):
            grid[entry.row, 0] = entry.upper
            if math.isfinite(entry.lower):
                grid[entry.row + 1, 0] = -entry.lower
        elif math.isfinite(entry.lower):
            grid[entry.row, 0] = -entry.lower

    for offset, col in enumerate(binary_columns):
        row = num_rows + offset
        grid[row, 0] = 1.0
        grid[row, col] = 1.0

    logger.debug(
        "Built %dx%d tableau: %d variables, %d constraints, %d integer columns",
        height,
        width,
        len(variables),
        len(bounds),
        len(integers),
    )
    return TableauModel(tableau=tableau, sign=sign, variables=variables, integers=integers)


def _direction_sign(direction: Any) -> int:
    if direction is None or direction == "maximize":
        return 1
    if direction == "minimize":
        return -1
    raise ModelError(
        f"'{direction}' is not a valid optimization direction. "
        "Should be 'maximize', 'minimize', or left blank."
    )


def as_pairs(label: str, seq: Any) -> List[Tuple[Any, Any]]:
    if seq is None:
        raise ModelError(f"{label} was null or undefined.")
    if isinstance(seq, Mapping):
        return list(seq.items())
    if isinstance(seq, Iterable) and not isinstance(seq, (str, bytes)):
        return [tuple(pair) for pair in seq]
    raise ModelError(f"{label} was not a mapping or iterable.")


def _name_set(names: Union[bool, Iterable[str], None]) -> Union[bool, Set[str]]:
    if names is True:
        return True
    if not names:
        return set()
    return set(names)
