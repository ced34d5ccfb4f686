"""
Solver Package - Sudoku solving core.

Two solvers share one interface: a logical solver that applies human-style
techniques to a fixed point, and a backtracking solver that searches
exhaustively. The backtracking search also has an instrumented variant
that records a search tree and supports pause, delay and throttled
tree notifications.

Public API:
    - Board: 9x9 board, is_valid(): legal-placement rule
    - candidates_for(), candidates_for_board(),
      candidates_for_board_with_strategy(): candidate computation
    - StrategyFlags and get/set/reset_logical_config(): technique selection
    - SolverStrategy, create_strategy(), get_strategy_names(),
      get_strategy_info(): solver framework
    - solve_with_updates(), SearchTree: instrumented search

Usage:
    from sudoku_studio.solver import Board, create_strategy, StrategyFlags

    board = Board.from_string(puzzle_text)

    solver = create_strategy("logical", flags=StrategyFlags(naked_pairs=True))
    result = solver.solve_board(board)   # Board or None

    # Or with full status and metrics
    solution = solver.solve(SolutionContext(board=board))
    print(solution.status, solution.message)
"""

# Core data structures
from .board import (
    Board,
    BoardError,
    BoardShapeError,
    BoardValueError,
    find_conflicts,
    is_solved_grid,
    is_valid,
)
from .candidate_grid import CandidateGrid
from .candidates import candidates_for, candidates_for_board, candidates_for_board_with_strategy
from .placement import Placement
from .solution import Solution, SolutionMetrics, SolveStatus
from .context import SolutionContext
from .config import StrategyFlags, get_logical_config, reset_logical_config, set_logical_config
from .engine import LogicalResult, solve_logically

# Search
from .tree import ROOT_ID, SearchNode, SearchTree
from .throttle import ThrottledNotifier
from .search import (
    BacktrackResult,
    SearchScheduler,
    SearchStep,
    iter_search_steps,
    solve_backtracking,
    solve_with_updates,
)

# Solver framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "Board",
    "BoardError",
    "BoardShapeError",
    "BoardValueError",
    "CandidateGrid",
    "Placement",
    "Solution",
    "SolutionMetrics",
    "SolveStatus",
    "SolutionContext",
    "StrategyFlags",
    "LogicalResult",
    # Board rules and candidates
    "is_valid",
    "find_conflicts",
    "is_solved_grid",
    "candidates_for",
    "candidates_for_board",
    "candidates_for_board_with_strategy",
    "solve_logically",
    # Logical solver configuration
    "get_logical_config",
    "set_logical_config",
    "reset_logical_config",
    # Search
    "ROOT_ID",
    "SearchNode",
    "SearchTree",
    "ThrottledNotifier",
    "BacktrackResult",
    "SearchScheduler",
    "SearchStep",
    "iter_search_steps",
    "solve_backtracking",
    "solve_with_updates",
    # Solver framework
    "SolverStrategy",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
]
