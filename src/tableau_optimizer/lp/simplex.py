from __future__ import annotations

import logging
import math
import sys
from typing import List, NamedTuple, Tuple

import numpy as np

from ..schemas import SolveOptions
from .pivot import pivot
from .tableau import Tableau

logger = logging.getLogger(__name__)

PivotHistory = List[Tuple[int, int]]


class PhaseResult(NamedTuple):
    """
    Outcome of a simplex phase.

    ``result`` is the rounded objective-row RHS when optimal (smaller is
    better after sign adjustment) and NaN otherwise. ``entering`` is the
    column that proved unboundedness.
    """

    status: str
    result: float
    entering: int = 0


def round_to_precision(num: float, precision: float) -> float:
    if not math.isfinite(num):
        return num
    rounding = round(1 / precision)
    if rounding == 0:
        return num
    scaled = (num + sys.float_info.epsilon) * rounding
    if not math.isfinite(scaled):
        return num
    # Half-up rounding, not Python's banker's rounding.
    return math.floor(scaled + 0.5) / rounding


def has_cycle(history: PivotHistory, tableau: Tableau, row: int, col: int) -> bool:
    """Record the (leaving, entering) pair and report whether the tail of the history repeats."""
    history.append(
        (
            int(tableau.variable_at_position[tableau.width + row]),
            int(tableau.variable_at_position[col]),
        )
    )
    size = len(history)
    for length in range(1, size // 2 + 1):
        if history[size - length :] == history[size - 2 * length : size - length]:
            return True
    return False


def phase2(tableau: Tableau, options: SolveOptions) -> PhaseResult:
    """Optimise from a basic feasible solution using Dantzig's rule."""
    history: PivotHistory = []
    precision = options.precision
    grid = tableau.grid
    for _ in range(options.max_pivots):
        # Entering column: largest reduced cost above precision, first found.
        reduced_costs = grid[0, 1:]
        col = 0
        if reduced_costs.size:
            best = int(np.argmax(reduced_costs))
            if reduced_costs[best] > precision:
                col = best + 1
        if col == 0:
            return PhaseResult("optimal", round_to_precision(float(grid[0, 0]), precision))

        row = _leaving_row(grid, col, precision)
        if row == 0:
            return PhaseResult("unbounded", math.nan, entering=col)

        if options.check_cycles and has_cycle(history, tableau, row, col):
            logger.debug("Phase II cycle detected after %d pivots", len(history))
            return PhaseResult("cycled", math.nan)
        pivot(tableau, row, col)

    logger.warning("Phase II exhausted %d pivots without converging", options.max_pivots)
    return PhaseResult("cycled", math.nan)


def phase1(tableau: Tableau, options: SolveOptions) -> PhaseResult:
    """Pivot away negative right-hand sides, then hand the feasible basis to phase II."""
    history: PivotHistory = []
    precision = options.precision
    grid = tableau.grid
    for _ in range(options.max_pivots):
        # Leaving row: most negative RHS below -precision, first found.
        rhs = grid[1:, 0]
        row = 0
        if rhs.size:
            worst = int(np.argmin(rhs))
            if rhs[worst] < -precision:
                row = worst + 1
        if row == 0:
            return phase2(tableau, options)

        # Entering column: ratio test restricted to negative coefficients.
        coefficients = grid[row, 1:]
        candidates = np.flatnonzero(coefficients < -precision)
        if candidates.size == 0:
            logger.debug("Phase I found row %d infeasible", row)
            return PhaseResult("infeasible", math.nan)
        ratios = -grid[0, candidates + 1] / coefficients[candidates]
        col = int(candidates[int(np.argmax(ratios))]) + 1

        if options.check_cycles and has_cycle(history, tableau, row, col):
            logger.debug("Phase I cycle detected after %d pivots", len(history))
            return PhaseResult("cycled", math.nan)
        pivot(tableau, row, col)

    logger.warning("Phase I exhausted %d pivots without reaching feasibility", options.max_pivots)
    return PhaseResult("cycled", math.nan)


def _leaving_row(grid: np.ndarray, col: int, precision: float) -> int:
    column = grid[1:, col]
    rhs = grid[1:, 0]
    eligible = np.abs(column) > precision

    # A degenerate row takes priority over any ratio seen so far.
    degenerate = np.flatnonzero(eligible & (np.abs(rhs) <= precision) & (column > 0))
    if degenerate.size:
        return int(degenerate[0]) + 1

    candidates = np.flatnonzero(eligible)
    if candidates.size == 0:
        return 0
    ratios = rhs[candidates] / column[candidates]
    ratios[~(ratios > precision)] = math.inf
    best = int(np.argmin(ratios))
    if ratios[best] == math.inf:
        return 0
    return int(candidates[best]) + 1
