"""Tableau construction and the two-phase primal simplex."""

from .simplex import has_cycle, phase1, phase2, round_to_precision
from .solution import extract_solution
from .tableau import Tableau, TableauModel, build_tableau, index, update

__all__ = [
    "Tableau",
    "TableauModel",
    "build_tableau",
    "index",
    "update",
    "phase1",
    "phase2",
    "has_cycle",
    "round_to_precision",
    "extract_solution",
]
