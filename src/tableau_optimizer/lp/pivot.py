from __future__ import annotations

import numpy as np

from .tableau import Tableau

# Entries this small are treated as exact zeros to limit floating-point drift.
ZERO_THRESHOLD = 1e-16


def pivot(tableau: Tableau, row: int, col: int) -> None:
    """
    Gauss-Jordan step making ``col`` basic in ``row``, in place.

    Each updated entry is computed as ``M[r, c] - coef * M[row, c]`` with the
    multiply and subtract done separately, matching the scalar formulation.
    """
    width = tableau.width
    grid = tableau.grid
    quotient = grid[row, col]

    leaving = int(tableau.variable_at_position[width + row])
    entering = int(tableau.variable_at_position[col])
    tableau.variable_at_position[width + row] = entering
    tableau.variable_at_position[col] = leaving
    tableau.position_of_variable[leaving] = col
    tableau.position_of_variable[entering] = width + row

    # (1 / quotient) * R_pivot -> R_pivot
    pivot_row = grid[row]
    non_zero = np.flatnonzero(np.abs(pivot_row) > ZERO_THRESHOLD)
    scaled = pivot_row[non_zero] / quotient
    pivot_row.fill(0.0)
    pivot_row[non_zero] = scaled
    pivot_row[col] = 1.0 / quotient

    # -M[r, col] * R_pivot + R_r -> R_r
    column = grid[:, col]
    rows = np.flatnonzero(np.abs(column) > ZERO_THRESHOLD)
    rows = rows[rows != row]
    if rows.size == 0:
        return
    coefs = column[rows].copy()
    block = np.ix_(rows, non_zero)
    grid[block] = grid[block] - np.multiply.outer(coefs, pivot_row[non_zero])
    grid[rows, col] = -coefs / quotient
