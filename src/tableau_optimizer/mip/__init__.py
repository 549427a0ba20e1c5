"""Mixed-integer programming helpers."""

from .branch_and_cut import branch_and_cut as solve_branch_and_cut

__all__ = ["solve_branch_and_cut"]
