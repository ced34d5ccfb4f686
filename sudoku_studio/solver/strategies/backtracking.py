"""
Backtracking Strategy - Exhaustive depth-first search.
"""

import logging
import time

from ..base import SolverStrategy
from ..context import SolutionContext
from ..factory import register_strategy
from ..search import solve_backtracking
from ..solution import Solution, SolutionMetrics, SolveStatus

logger = logging.getLogger(__name__)


@register_strategy
class BacktrackingStrategy(SolverStrategy):
    """
    Depth-first search over empty cells in row-major order, digits 1-9.

    Complete but not fast: finds a solution whenever one exists. Ignores
    the logical solver configuration entirely.
    """
    name = "backtracking"
    description = "m = number of empty cells. Uses depth-first search with backtracking."
    time_complexity = "O(9^m)"
    space_complexity = "O(m)"

    def solve(self, context: SolutionContext) -> Solution:
        """
        Search for a solution.

        Args:
            context: Solution context with board and cancellation

        Returns:
            Solution with status SOLVED, NO_SOLUTION, INCONSISTENT or CANCELLED
        """
        start_time = time.perf_counter()

        rejected = self._check_conflicts(context)
        if rejected is not None:
            return rejected

        result = solve_backtracking(context.board, context)

        if result.solved:
            status = SolveStatus.SOLVED
            message = f"Solved in {result.placements} steps"
        elif result.cancelled:
            status = SolveStatus.CANCELLED
            message = f"Stopped after {result.placements} steps"
        else:
            status = SolveStatus.NO_SOLUTION
            message = "No solution found"

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"[{self.name}] {status.name}: {message} ({elapsed_ms:.1f}ms)")
        context.report_progress(1.0, message)

        return Solution(
            board=result.board,
            status=status,
            message=message,
            metrics=SolutionMetrics(
                computation_time_ms=elapsed_ms,
                placements=result.placements,
                backtracks=result.backtracks,
                strategy_name=self.name,
            ),
        )
