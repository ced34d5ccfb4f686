"""
Sudoku Studio - Entry Point

Solves one puzzle with the selected solver, or traces the backtracking
search through the background worker.

Example:
    python main.py 530070000600195000098000060800060003400803001700020006060000280000419005000080079
    python main.py --solver backtracking puzzle.txt
    python main.py --naked-pairs --hidden-pairs --pointing-pairs <puzzle>
    python main.py --trace --delay 0 <puzzle>
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from PyQt5.QtCore import QCoreApplication

from sudoku_studio.search_worker import SearchWorker
from sudoku_studio.settings import flags_from_settings, load_settings
from sudoku_studio.solver import (
    Board,
    BoardError,
    SolutionContext,
    SolveStatus,
    StrategyFlags,
    create_strategy,
    get_strategy_names,
)


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNSOLVED = 1
EXIT_BAD_INPUT = 2


def configure_logging(debug: bool = False) -> None:
    """Log to both console and solver.log."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("solver.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def read_puzzle(source: str) -> Board:
    """
    Build a Board from an 81-cell string or a file containing one.

    Raises:
        BoardError: If the text is not a 9x9 puzzle
    """
    path = Path(source)
    if len(source) < 256 and path.is_file():
        text = path.read_text(encoding='utf-8')
    else:
        text = source
    return Board.from_string(text)


def resolve_flags(args: argparse.Namespace, settings: dict) -> StrategyFlags:
    """CLI switches turn techniques on; otherwise saved settings apply."""
    saved = flags_from_settings(settings)
    return StrategyFlags(
        pointing_pairs=args.pointing_pairs or saved.pointing_pairs,
        naked_pairs=args.naked_pairs or saved.naked_pairs,
        hidden_pairs=args.hidden_pairs or saved.hidden_pairs,
    )


def run_solver(board: Board, solver_name: str, flags: StrategyFlags) -> int:
    """
    Solve with a registered solver and print the result.

    Returns:
        Exit code
    """
    kwargs = {"flags": flags} if solver_name == "logical" else {}
    solver = create_strategy(solver_name, **kwargs)
    solution = solver.solve(SolutionContext(board=board, timeout_sec=solver.timeout_sec))

    print(f"Solver: {solver.name} ({solver.time_complexity} time, {solver.space_complexity} space)")
    print(f"Status: {solution.status.value} - {solution.message}")
    if solution.board is not None:
        print(solution.board.format())
    print(f"Time: {solution.metrics.computation_time_ms:.1f}ms")

    if solution.status in (SolveStatus.SOLVED, SolveStatus.PARTIAL):
        return EXIT_OK
    return EXIT_UNSOLVED


def run_trace(board: Board, delay_ms: float, tree_interval_ms: float) -> int:
    """
    Run the instrumented search in the background worker and print a
    summary of the recorded search tree.

    Returns:
        Exit code
    """
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)

    worker = SearchWorker(board, delay_ms=delay_ms, tree_update_interval_ms=tree_interval_ms)
    worker.status_changed.connect(lambda status: logger.info(f"Status: {status}"))
    worker.error_occurred.connect(lambda message: logger.error(f"Search error: {message}"))
    worker.finished.connect(app.quit)
    worker.start()
    app.exec_()
    worker.wait()

    stats = worker.tree.stats()
    print(f"Status: {'solved' if worker.solved else 'no solution'}")
    print(worker.board.format())
    print(f"Moves: {worker.moves}")
    print(f"Tree: {stats['nodes']} node(s), {stats['retracted']} retracted, "
          f"max depth {stats['max_depth']}")
    return EXIT_OK if worker.solved else EXIT_UNSOLVED


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Sudoku Studio - Logical and backtracking Sudoku solver"
    )
    parser.add_argument(
        "puzzle",
        help="81-cell puzzle string (0 or . for empty) or a file containing one"
    )
    parser.add_argument(
        "--solver", "-s",
        choices=get_strategy_names(),
        default=None,
        help="Solver to use (default: saved setting, else logical)"
    )
    parser.add_argument("--naked-pairs", action="store_true", help="Enable naked pairs")
    parser.add_argument("--hidden-pairs", action="store_true", help="Enable hidden pairs")
    parser.add_argument("--pointing-pairs", action="store_true", help="Enable pointing pairs")
    parser.add_argument(
        "--trace", "-t",
        action="store_true",
        help="Run the instrumented backtracking search and summarise its tree"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Milliseconds to wait after each search step in --trace mode"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging (technique passes and placements)"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, solve and return an exit code."""
    args = parse_args(argv)
    settings = load_settings()
    configure_logging(args.debug or settings.get("debug_enabled", False))

    try:
        board = read_puzzle(args.puzzle)
    except BoardError as e:
        logger.error(f"Invalid puzzle: {e}")
        return EXIT_BAD_INPUT

    if args.trace:
        delay = args.delay if args.delay is not None else settings.get("step_delay_ms", 0)
        return run_trace(board, delay, settings.get("tree_update_interval_ms", 50))

    solver_name = args.solver or settings.get("solver_name", "logical")
    if solver_name not in get_strategy_names():
        logger.warning(f"Unknown saved solver {solver_name!r}, using logical")
        solver_name = "logical"

    return run_solver(board, solver_name, resolve_flags(args, settings))


if __name__ == "__main__":
    sys.exit(main())
