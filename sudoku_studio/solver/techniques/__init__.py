"""
Techniques Package - Logical rules used by the logical solver.

Elimination techniques shrink candidate sets without filling cells;
singles techniques place one digit at a time.
"""

from .naked_pair import apply_naked_pairs
from .hidden_pair import apply_hidden_pairs
from .pointing_pairs import apply_pointing_pairs
from .singles import (
    HIDDEN_SINGLE,
    NAKED_SINGLE,
    SolverState,
    apply_hidden_single,
    apply_naked_single,
)

__all__ = [
    "apply_naked_pairs",
    "apply_hidden_pairs",
    "apply_pointing_pairs",
    "SolverState",
    "apply_naked_single",
    "apply_hidden_single",
    "NAKED_SINGLE",
    "HIDDEN_SINGLE",
]
