from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError

from .errors import ModelError
from .lp.simplex import phase1
from .lp.solution import extract_solution
from .lp.tableau import build_tableau
from .mip.branch_and_cut import branch_and_cut
from .options import OptionsLike, resolve_options
from .schemas import Model, Solution

logger = logging.getLogger(__name__)


def solve(model: Union[Model, Mapping[str, Any]], options: OptionsLike = None) -> Solution:
    """
    Solve an LP or MILP.

    ``model`` may be a ``Model`` or a plain mapping of the same shape and
    ``options`` a ``SolveOptions`` or a mapping of overrides. Malformed models
    raise ``ModelError``; every solver outcome, including failure to find a
    solution, is reported through ``Solution.status``.
    """
    model = as_model(model)
    tabmod = build_tableau(model)
    opts = resolve_options(options)

    status, result, entering = phase1(tabmod.tableau, opts)
    logger.debug("Relaxation finished with status %s (%s)", status, result)

    if not tabmod.integers:
        return extract_solution(tabmod, status, result, opts.precision, entering)
    if status == "optimal":
        return branch_and_cut(tabmod, result, opts)
    # Unbounded or infeasible relaxations stay that way under cuts, and a
    # cycled relaxation leaves nothing to branch from.
    return extract_solution(tabmod, status, result, opts.precision, entering)


def as_model(model: Union[Model, Mapping[str, Any], None]) -> Model:
    if model is None:
        raise ModelError("model was null or undefined.")
    if isinstance(model, Model):
        return model
    if not isinstance(model, Mapping):
        raise ModelError("model was not a mapping or Model instance.")
    try:
        return Model.model_validate(dict(model))
    except ValidationError as exc:
        raise ModelError(_describe(exc)) from exc


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "Invalid model: " + "; ".join(parts)
