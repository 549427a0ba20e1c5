import numpy as np

from tableau_optimizer.lp.pivot import pivot

from helpers import make_tableau


def test_pivot_with_unit_quotient():
    tableau = make_tableau([[0, 1, 1], [10, 1, 0], [10, 0, 1]])
    pivot(tableau, 1, 1)

    np.testing.assert_array_equal(tableau.grid, [[-10, -1, 1], [10, 1, 0], [10, 0, 1]])
    # Column 1's variable is now basic in row 1; the row's slack took column 1.
    assert tableau.position_of_variable[1] == 4
    assert tableau.position_of_variable[4] == 1
    assert tableau.variable_at_position[4] == 1
    assert tableau.variable_at_position[1] == 4


def test_pivot_scales_and_eliminates():
    tableau = make_tableau([[0, 3, 1], [8, 2, 4], [5, 1, 1]])
    pivot(tableau, 1, 1)

    np.testing.assert_allclose(
        tableau.grid,
        [[-12, -1.5, -5], [4, 0.5, 2], [1, -0.5, -1]],
    )


def test_pivot_snaps_tiny_entries_to_zero():
    tableau = make_tableau([[0, 1, 0], [4, 2, 1e-17], [1, 1, 1]])
    pivot(tableau, 1, 1)

    assert tableau.grid[1, 2] == 0.0
    # The snapped column is skipped for the other rows.
    assert tableau.grid[2, 2] == 1.0
    assert tableau.grid[0, 2] == 0.0


def test_pivot_skips_rows_with_zero_in_pivot_column():
    tableau = make_tableau([[0, 1, 2], [6, 3, 3], [7, 0, 5]])
    pivot(tableau, 1, 1)

    np.testing.assert_array_equal(tableau.grid[2], [7, 0, 5])


def test_pivot_back_restores_tableau():
    rows = [[0, 3, 1], [8, 2, 4], [5, 1, 1]]
    tableau = make_tableau(rows)
    pivot(tableau, 1, 1)
    pivot(tableau, 1, 1)

    np.testing.assert_allclose(tableau.grid, rows)
    np.testing.assert_array_equal(tableau.position_of_variable, np.arange(6))
    np.testing.assert_array_equal(tableau.variable_at_position, np.arange(6))
