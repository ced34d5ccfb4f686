"""
Base Strategy Module - Abstract base class for solvers.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from .board import Board, find_conflicts
from .context import SolutionContext
from .solution import Solution, SolutionMetrics, SolveStatus

logger = logging.getLogger(__name__)


class SolverStrategy(ABC):
    """
    Abstract base class for all solvers.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the solver
        description: Human-readable description
        time_complexity: Time complexity label
        space_complexity: Space complexity label
        timeout_sec: Default timeout for this solver (None = no limit)
    """
    name: str = "base"
    description: str = "Base solver"
    time_complexity: Optional[str] = None
    space_complexity: Optional[str] = None
    timeout_sec: Optional[float] = None

    @abstractmethod
    def solve(self, context: SolutionContext) -> Solution:
        """
        Solve the board held by the context.

        Must not modify context.board.

        Args:
            context: Solution context with board and cancellation

        Returns:
            Solution with status, board and metrics
        """
        pass

    def solve_board(self, board: Board) -> Optional[Board]:
        """
        Board in, board or None out.

        Args:
            board: Board to solve (not modified)

        Returns:
            Resulting board, or None if this solver has nothing to return
        """
        context = SolutionContext(board=board, timeout_sec=self.timeout_sec)
        return self.solve(context).board

    def _check_conflicts(self, context: SolutionContext) -> Optional[Solution]:
        """
        Reject boards that already repeat a digit in some unit.

        Returns:
            An INCONSISTENT Solution, or None if the board is consistent
        """
        conflicts = find_conflicts(context.board)
        if not conflicts:
            return None
        message = "; ".join(conflicts)
        logger.warning(f"[{self.name}] Inconsistent board: {message}")
        return Solution(
            board=None,
            status=SolveStatus.INCONSISTENT,
            message=message,
            metrics=SolutionMetrics(strategy_name=self.name),
        )
