from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

from .lp.tableau import as_pairs
from .options import OptionsLike
from .schemas import Model
from .solver import as_model, solve


def analyze_infeasibility(model: Union[Model, Mapping[str, Any]], options: OptionsLike = None) -> Dict[str, Any]:
    """Very small IIS-style heuristic: drop each constraint name in turn and re-solve."""
    model = as_model(model)
    solution = solve(model, options)
    if solution.status != "infeasible":
        return {
            "status": solution.status,
            "message": "Model is not infeasible.",
            "conflicting_constraints": [],
            "suggestions": [],
        }

    pairs = as_pairs("constraints", model.constraints)
    names = list(dict.fromkeys(name for name, _ in pairs))

    conflicts: List[str] = []
    for name in names:
        relaxed = model.model_copy(update={"constraints": [pair for pair in pairs if pair[0] != name]})
        if solve(relaxed, options).status != "infeasible":
            conflicts.append(name)

    suggestions = []
    if conflicts:
        suggestions.append("Relax or inspect the conflicting constraints above.")
    else:
        suggestions.append("Consider relaxing bounds or checking for contradictory requirements.")
    if model.integers or model.binaries:
        suggestions.append("Check whether the continuous relaxation is feasible before adding integrality.")

    return {
        "status": "infeasible",
        "message": "Detected infeasibility; listed constraints critical to infeasibility.",
        "conflicting_constraints": conflicts,
        "suggestions": suggestions,
    }
