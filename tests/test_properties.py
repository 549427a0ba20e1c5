"""Cross-checks against SciPy's HiGHS-backed solvers on random models."""

import numpy as np
import pytest
from scipy.optimize import LinearConstraint, linprog, milp

from tableau_optimizer import Model, solve


def generate_model(num_vars: int, num_constraints: int, seed: int, integer: bool = False):
    rng = np.random.default_rng(seed)
    c = rng.uniform(1.0, 4.0, size=num_vars)
    A = rng.uniform(0.5, 5.0, size=(num_constraints, num_vars))
    b = rng.uniform(num_vars * 2.0, num_vars * 6.0, size=num_constraints)
    names = [f"x{i}" for i in range(num_vars)]
    variables = {
        name: {"value": float(c[i]), **{f"c{j}": float(A[j, i]) for j in range(num_constraints)}}
        for i, name in enumerate(names)
    }
    model = Model(
        objective="value",
        constraints={f"c{j}": {"max": float(b[j])} for j in range(num_constraints)},
        variables=variables,
        integers=names if integer else None,
    )
    return model, c, A, b


def constraint_activity(model: Model, values):
    activity = {}
    for name, coefficients in model.variables.items():
        for constraint, coef in coefficients.items():
            activity[constraint] = activity.get(constraint, 0.0) + coef * values.get(name, 0.0)
    return activity


@pytest.mark.parametrize("seed", range(8))
def test_lp_matches_highs(seed):
    model, c, A, b = generate_model(4, 3, seed)
    solution = solve(model)
    reference = linprog(-c, A_ub=A, b_ub=b, method="highs")

    assert solution.status == "optimal"
    assert solution.result == pytest.approx(-reference.fun, rel=1e-6)


@pytest.mark.parametrize("seed", range(8))
def test_lp_solution_satisfies_constraints(seed):
    model, _, _, _ = generate_model(5, 4, seed)
    solution = solve(model)
    activity = constraint_activity(model, solution.as_dict())

    for name, bounds in model.constraints.items():
        assert activity.get(name, 0.0) <= bounds.upper() + 1e-6


@pytest.mark.parametrize("seed", range(6))
def test_milp_matches_highs(seed):
    model, c, A, b = generate_model(3, 2, seed, integer=True)
    solution = solve(model)
    reference = milp(
        -c,
        constraints=LinearConstraint(A, -np.inf, b),
        integrality=np.ones(c.size, dtype=int),
    )

    assert solution.status == "optimal"
    assert solution.result == pytest.approx(-reference.fun, abs=1e-6)
    for value in solution.as_dict().values():
        assert value == pytest.approx(round(value), abs=1e-8)
    activity = constraint_activity(model, solution.as_dict())
    for name, bounds in model.constraints.items():
        assert activity.get(name, 0.0) <= bounds.upper() + 1e-6


@pytest.mark.parametrize("seed", range(4))
def test_binary_values_are_zero_or_one(seed):
    model, _, _, _ = generate_model(4, 2, seed)
    model = model.model_copy(update={"binaries": True})
    solution = solve(model)

    assert solution.status == "optimal"
    for value in solution.as_dict().values():
        assert value == pytest.approx(1.0, abs=1e-8)
