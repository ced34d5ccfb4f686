"""
Logical Strategy - Human-style techniques, no guessing.
"""

import logging
import time
from typing import Optional

from ..base import SolverStrategy
from ..config import StrategyFlags, get_logical_config
from ..context import SolutionContext
from ..engine import solve_logically
from ..factory import register_strategy
from ..solution import Solution, SolutionMetrics, SolveStatus

logger = logging.getLogger(__name__)


@register_strategy
class LogicalStrategy(SolverStrategy):
    """
    Logical solver using naked/hidden singles plus optional eliminations.

    Runs the logical engine to a fixed point. The result may be only
    partially solved; the status says which.

    Args:
        flags: Elimination techniques to use. When None, the process-wide
               default (config.get_logical_config()) is read once per solve.
    """
    name = "logical"
    description = ("n = board size (81 cells). Uses logical strategies: naked singles, "
                   "hidden singles, naked pairs, hidden pairs, and pointing pairs.")
    time_complexity = "O(n²)"
    space_complexity = "O(n²)"

    def __init__(self, flags: Optional[StrategyFlags] = None):
        self.flags = flags

    def solve(self, context: SolutionContext) -> Solution:
        """
        Solve as far as pure logic allows.

        Args:
            context: Solution context with board

        Returns:
            Solution with status SOLVED, PARTIAL, STUCK or INCONSISTENT
        """
        start_time = time.perf_counter()

        rejected = self._check_conflicts(context)
        if rejected is not None:
            return rejected

        flags = self.flags if self.flags is not None else get_logical_config()
        result = solve_logically(context.board, flags)

        if result.is_complete:
            status = SolveStatus.SOLVED
            message = f"Solved with {len(result.placements)} placement(s)"
        elif result.has_dead_cell:
            status = SolveStatus.STUCK
            message = "Reached a cell with no remaining candidate"
        else:
            remaining = len(result.board.empty_cells())
            status = SolveStatus.PARTIAL
            message = f"No further logical progress, {remaining} cell(s) left"

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"[{self.name}] {status.name}: {message} ({elapsed_ms:.1f}ms)")
        context.report_progress(1.0, message)

        return Solution(
            board=result.board,
            status=status,
            message=message,
            placements=result.placements,
            metrics=SolutionMetrics(
                computation_time_ms=elapsed_ms,
                placements=len(result.placements),
                iterations=result.iterations,
                strategy_name=self.name,
            ),
        )
