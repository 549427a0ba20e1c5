from __future__ import annotations

import math
from typing import List, Tuple

from ..schemas import Solution
from .simplex import round_to_precision
from .tableau import TableauModel, index


def extract_solution(tabmod: TableauModel, status: str, result: float, precision: float, entering: int = 0) -> Solution:
    """Read the basis of ``tabmod.tableau`` into a ``Solution``; non-basic variables are zero and omitted."""
    tableau = tabmod.tableau

    if status == "optimal" or (status == "timedout" and not math.isnan(result)):
        variables: List[Tuple[str, float]] = []
        for i, (name, _) in enumerate(tabmod.variables):
            row = int(tableau.position_of_variable[i + 1]) - tableau.width
            if row < 0:
                continue
            value = index(tableau, row, 0)
            if value > precision:
                variables.append((name, round_to_precision(value, precision)))
        return Solution(status=status, result=-tabmod.sign * result, variables=variables)

    if status == "unbounded":
        variable = int(tableau.variable_at_position[entering]) - 1
        unbounded = (
            [(tabmod.variables[variable][0], math.inf)]
            if 0 <= variable < len(tabmod.variables)
            else []
        )
        return Solution(status="unbounded", result=tabmod.sign * math.inf, variables=unbounded)

    # infeasible | cycled | timedout without an incumbent
    return Solution(status=status, result=math.nan, variables=[])
