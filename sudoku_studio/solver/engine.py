"""
Logical Engine Module - Fixed-point driver for the logical techniques.

Recompute candidates (with the enabled eliminations), try a naked single,
then a hidden single, and repeat until neither places a digit. The engine
never guesses, so the result may be only partially solved.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .board import Board
from .candidate_grid import CandidateGrid
from .candidates import candidates_for_board_with_strategy
from .config import StrategyFlags
from .placement import Placement
from .techniques import SolverState, apply_hidden_single, apply_naked_single

logger = logging.getLogger(__name__)


@dataclass
class LogicalResult:
    """
    Outcome of one logical solve.

    Attributes:
        board: Working board at the fixed point
        candidates: Candidate grid for that board
        placements: Digits placed, in order
        iterations: Number of loop iterations run
    """
    board: Board
    candidates: CandidateGrid
    placements: List[Placement] = field(default_factory=list)
    iterations: int = 0

    @property
    def is_complete(self) -> bool:
        return self.board.is_complete()

    @property
    def has_dead_cell(self) -> bool:
        """True if some empty cell has no candidate left."""
        return any(not self.candidates[r][c] for r, c in self.board.empty_cells())


def compute_candidates(board: Board, flags: StrategyFlags) -> CandidateGrid:
    return candidates_for_board_with_strategy(
        board,
        pointing_pairs=flags.pointing_pairs,
        naked_pairs=flags.naked_pairs,
        hidden_pairs=flags.hidden_pairs,
    )


def solve_step(state: SolverState):
    """Try naked single, then hidden single. Returns the placement or None."""
    return apply_naked_single(state) or apply_hidden_single(state)


def solve_logically(board: Board, flags: StrategyFlags = StrategyFlags()) -> LogicalResult:
    """
    Run the logical techniques to a fixed point.

    Args:
        board: Starting board (not modified)
        flags: Elimination techniques to apply when computing candidates

    Returns:
        LogicalResult holding a copy of the board at the fixed point
    """
    working = board.copy()
    candidates = compute_candidates(working, flags)
    placements: List[Placement] = []
    iterations = 0

    while True:
        iterations += 1
        placement = solve_step(SolverState(working, candidates))
        if placement is None:
            break
        placements.append(placement)
        candidates = compute_candidates(working, flags)

    logger.debug(
        f"Logical fixed point after {iterations} iteration(s), "
        f"{len(placements)} placement(s), techniques={flags.enabled_names()}"
    )
    return LogicalResult(working, candidates, placements, iterations)
