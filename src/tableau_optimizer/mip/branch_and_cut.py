from __future__ import annotations

import heapq
import logging
import math
import time
from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple

import numpy as np

from ..lp.simplex import phase1
from ..lp.solution import extract_solution
from ..lp.tableau import Tableau, TableauModel, index
from ..schemas import Solution, SolveOptions

logger = logging.getLogger(__name__)


class Cut(NamedTuple):
    """``direction * variable <= direction * value``: +1 is an upper bound, -1 a lower bound."""

    direction: int
    variable: int
    value: float


@dataclass(order=True)
class Branch:
    # Heap order uses the relaxation bound only; ties fall to heap position.
    bound: float
    cuts: List[Cut] = field(compare=False)


class ScratchBuffer:
    """Preallocated storage for a tableau plus the largest possible set of cut rows."""

    def __init__(self, matrix_length: int, positions_length: int) -> None:
        self.matrix = np.empty(matrix_length, dtype=np.float64)
        self.position_of_variable = np.empty(positions_length, dtype=np.int32)
        self.variable_at_position = np.empty(positions_length, dtype=np.int32)


def apply_cuts(tableau: Tableau, buffer: ScratchBuffer, cuts: List[Cut]) -> Tableau:
    """
    Copy ``tableau`` into ``buffer`` and append one row per cut.

    A cut on a non-basic variable is a plain bound row. A cut on a basic
    variable is rewritten in terms of the non-basic columns of its row. The
    returned tableau is a view trimmed to size, so the root tableau is never
    touched.
    """
    width = tableau.width
    size = tableau.matrix.size
    matrix = buffer.matrix
    matrix[:size] = tableau.matrix

    for i, (sign, variable, value) in enumerate(cuts):
        r = (tableau.height + i) * width
        pos = int(tableau.position_of_variable[variable])
        if pos < width:
            matrix[r] = sign * value
            matrix[r + 1 : r + width] = 0.0
            matrix[r + pos] = sign
        else:
            row = (pos - width) * width
            matrix[r] = sign * (value - matrix[row])
            matrix[r + 1 : r + width] = -sign * matrix[row + 1 : row + width]

    base = width + tableau.height
    length = base + len(cuts)
    buffer.position_of_variable[:base] = tableau.position_of_variable
    buffer.variable_at_position[:base] = tableau.variable_at_position
    buffer.position_of_variable[base:length] = np.arange(base, length, dtype=np.int32)
    buffer.variable_at_position[base:length] = np.arange(base, length, dtype=np.int32)

    return Tableau(
        matrix=matrix[: size + width * len(cuts)],
        width=width,
        height=tableau.height + len(cuts),
        position_of_variable=buffer.position_of_variable[:length],
        variable_at_position=buffer.variable_at_position[:length],
    )


def most_fractional_var(tableau: Tableau, integers: List[int]) -> Tuple[int, float, float]:
    """Return ``(variable, value, fraction)`` for the basic integer variable farthest from integral."""
    highest_frac = 0.0
    variable = 0
    value = 0.0
    for int_var in integers:
        row = int(tableau.position_of_variable[int_var]) - tableau.width
        if row < 0:
            continue
        val = index(tableau, row, 0)
        frac = abs(val - round(val))
        if frac > highest_frac:
            highest_frac = frac
            variable = int_var
            value = val
    return variable, value, highest_frac


def branch_and_cut(tabmod: TableauModel, initial_result: float, options: SolveOptions) -> Solution:
    """
    Best-bound branch and cut over the integer columns of ``tabmod``.

    ``tabmod.tableau`` must already hold an optimal relaxation whose phase
    result is ``initial_result``. Each node re-solves a copy of that tableau
    with its cuts appended.
    """
    precision = options.precision
    variable, value, frac = most_fractional_var(tabmod.tableau, tabmod.integers)
    if frac <= precision:
        return extract_solution(tabmod, "optimal", initial_result, precision)

    branches: List[Branch] = []
    heapq.heappush(branches, Branch(initial_result, [Cut(-1, variable, math.ceil(value))]))
    heapq.heappush(branches, Branch(initial_result, [Cut(1, variable, math.floor(value))]))

    # One buffer holds the incumbent, the other the candidate being solved.
    # They swap roles whenever a new incumbent is accepted.
    max_extra_rows = len(tabmod.integers) * 2
    root = tabmod.tableau
    matrix_length = root.matrix.size + max_extra_rows * root.width
    positions_length = root.position_of_variable.size + max_extra_rows
    candidate_buffer = ScratchBuffer(matrix_length, positions_length)
    incumbent_buffer = ScratchBuffer(matrix_length, positions_length)

    optimal_threshold = initial_result * (1 - tabmod.sign * options.tolerance)
    deadline = _now_ms() + options.timeout
    timed_out = _now_ms() >= deadline
    solution_found = False
    best_eval = math.inf
    best_tableau = root
    iteration = 0

    while (
        iteration < options.max_iterations
        and branches
        and best_eval >= optimal_threshold
        and not timed_out
    ):
        branch = heapq.heappop(branches)
        if branch.bound > best_eval:
            # Everything left in the heap is worse than the incumbent.
            break

        tableau = apply_cuts(root, candidate_buffer, branch.cuts)
        status, result, _ = phase1(tableau, options)
        # Cuts cannot make a bounded relaxation unbounded; infeasible and
        # cycled nodes carry NaN and are simply dropped.
        if status == "optimal" and result < best_eval:
            variable, value, frac = most_fractional_var(tableau, tabmod.integers)
            if frac <= precision:
                solution_found = True
                best_eval = result
                best_tableau = tableau
                candidate_buffer, incumbent_buffer = incumbent_buffer, candidate_buffer
                logger.debug("Node %d: new incumbent %g", iteration, result)
            else:
                cuts_upper: List[Cut] = []
                cuts_lower: List[Cut] = []
                for cut in branch.cuts:
                    if cut.variable == variable:
                        (cuts_lower if cut.direction < 0 else cuts_upper).append(cut)
                    else:
                        cuts_upper.append(cut)
                        cuts_lower.append(cut)
                cuts_lower.append(Cut(1, variable, math.floor(value)))
                cuts_upper.append(Cut(-1, variable, math.ceil(value)))
                heapq.heappush(branches, Branch(result, cuts_upper))
                heapq.heappush(branches, Branch(result, cuts_lower))

        timed_out = _now_ms() >= deadline
        iteration += 1

    # Pending nodes only matter if one of them could still beat the incumbent.
    unfinished = (
        bool(branches)
        and branches[0].bound <= best_eval
        and best_eval >= optimal_threshold
        and (timed_out or iteration >= options.max_iterations)
    )
    if unfinished:
        status = "timedout"
    elif solution_found:
        status = "optimal"
    else:
        status = "infeasible"

    logger.info(
        "Branch and cut finished: status=%s nodes=%d pending=%d",
        status,
        iteration,
        len(branches),
    )
    return extract_solution(
        tabmod._replace(tableau=best_tableau),
        status,
        best_eval if solution_found else math.nan,
        precision,
    )


def _now_ms() -> float:
    return time.monotonic() * 1000.0
