"""
Solution Module - Result of a solver run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .board import Board
from .placement import Placement


class SolveStatus(Enum):
    """
    How a solve ended.

    States:
        SOLVED: Board is complete and consistent
        PARTIAL: Logical fixed point; every empty cell still has candidates
        STUCK: Logical fixed point; some empty cell has no candidate left
        NO_SOLUTION: Backtracking exhausted every branch
        INCONSISTENT: Input already repeats a digit in some unit
        CANCELLED: Stopped by the context before finishing
    """
    SOLVED = "solved"
    PARTIAL = "partial"
    STUCK = "stuck"
    NO_SOLUTION = "no_solution"
    INCONSISTENT = "inconsistent"
    CANCELLED = "cancelled"


@dataclass
class SolutionMetrics:
    """
    Performance metrics for a solver run.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        placements: Digits placed (including retracted ones)
        backtracks: Placements undone by the search
        iterations: Logical loop iterations
        strategy_name: Name of the solver that produced this result
    """
    computation_time_ms: float = 0.0
    placements: int = 0
    backtracks: int = 0
    iterations: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Result of a solver run.

    Attributes:
        board: Resulting board, or None when there is nothing to return
        status: How the run ended
        message: Human-readable explanation
        placements: Logical placements in order (empty for backtracking)
        metrics: Performance statistics
    """
    board: Optional[Board] = None
    status: SolveStatus = SolveStatus.NO_SOLUTION
    message: str = ""
    placements: List[Placement] = field(default_factory=list)
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def is_solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    @property
    def placement_count(self) -> int:
        return len(self.placements)

    @property
    def empty_remaining(self) -> int:
        """Empty cells left on the resulting board (81 if there is none)."""
        if self.board is None:
            return 81
        return len(self.board.empty_cells())
