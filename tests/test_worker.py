"""
Test script for the search worker, settings and command line

Covers:
1. SearchWorker signals, pause/speed controls and stop requests
2. JSON settings persistence and defaults
3. CLI parsing, puzzle input and solver runs

Usage:
    python tests/test_worker.py
    pytest tests/test_worker.py
"""

import json
import sys
import tempfile
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from PyQt5.QtCore import QCoreApplication

import main as cli
from sudoku_studio.search_worker import SearchWorker
from sudoku_studio.settings import DEFAULT_SETTINGS, flags_from_settings, load_settings, save_settings
from sudoku_studio.solver import Board, BoardError, StrategyFlags, get_strategy_names

from puzzles import PUZZLE, SOLUTION, banner, fillable_conflicting_board, two_blank_board, unsatisfiable_board


def get_app():
    """Signals need an application instance."""
    return QCoreApplication.instance() or QCoreApplication([])


class SignalRecorder:
    """Collects everything a worker emits."""

    def __init__(self, worker: SearchWorker):
        self.statuses = []
        self.boards = []
        self.trees = []
        self.nodes = []
        self.moves = []
        self.finished = []
        self.errors = []
        worker.status_changed.connect(self.statuses.append)
        worker.board_changed.connect(self.boards.append)
        worker.tree_changed.connect(self.trees.append)
        worker.node_changed.connect(self.nodes.append)
        worker.moves_changed.connect(self.moves.append)
        worker.search_finished.connect(self.finished.append)
        worker.error_occurred.connect(self.errors.append)


def test_worker_solves():
    """Worker run() solves a copy and reports through signals."""
    banner("SearchWorker (solvable)")
    get_app()

    board = two_blank_board()
    worker = SearchWorker(board, delay_ms=0, tree_update_interval_ms=0)
    recorder = SignalRecorder(worker)
    worker.run()

    print(f"  Statuses: {recorder.statuses}, moves: {worker.moves}")
    assert worker.solved is True
    assert worker.board == Board.from_string(SOLUTION)
    # Caller's board is untouched
    assert board == two_blank_board()

    assert recorder.statuses == ["Searching", "Solved"]
    assert recorder.finished == [True]
    assert recorder.errors == []
    assert recorder.moves == [1, 2]
    assert recorder.nodes == ["root-0", "root-0-0"]
    assert recorder.boards[-1] == worker.board
    # Forced initial, one per step, forced final
    assert len(recorder.trees) == 4
    assert recorder.trees[-1]["children"][0]["children"][0]["path"] == "root-0-0"
    print("  [PASS] Solvable worker tests")


def test_worker_no_solution():
    """An unsatisfiable board finishes with False and a full retraction."""
    banner("SearchWorker (unsatisfiable)")
    get_app()

    worker = SearchWorker(unsatisfiable_board(), delay_ms=0, tree_update_interval_ms=0)
    recorder = SignalRecorder(worker)
    worker.run()

    assert worker.solved is False
    assert recorder.statuses == ["Searching", "No solution found"]
    assert recorder.finished == [False]
    assert worker.moves == 18
    assert worker.tree.stats()["retracted"] == 9

    # Repeated givens are refused before any placement
    worker = SearchWorker(fillable_conflicting_board(), delay_ms=0)
    recorder = SignalRecorder(worker)
    worker.run()

    assert worker.solved is False
    assert worker.moves == 0
    assert recorder.statuses == ["Searching", "No solution found"]
    assert recorder.finished == [False]
    print("  [PASS] Unsatisfiable worker tests")


def test_worker_stop():
    """A stop requested before the first step ends the search at once."""
    banner("SearchWorker (stop)")
    get_app()

    worker = SearchWorker(Board.from_string(PUZZLE), delay_ms=0)
    recorder = SignalRecorder(worker)
    worker.set_paused(True)
    worker.request_stop()
    assert not worker.is_paused()
    worker.run()

    assert worker.solved is False
    assert worker.moves == 0
    assert recorder.statuses[-1] == "Stopped"
    assert recorder.finished == [False]
    print("  [PASS] Stop tests")


def test_worker_controls():
    """Pause toggling and delay changes."""
    banner("SearchWorker (controls)")
    get_app()

    worker = SearchWorker(Board.from_string(PUZZLE), delay_ms=25)
    recorder = SignalRecorder(worker)

    assert worker.get_delay_ms() == 25
    worker.set_delay_ms(5)
    assert worker.get_delay_ms() == 5.0
    worker.set_delay_ms(-10)
    assert worker.get_delay_ms() == 0.0

    assert worker.toggle_pause() is True
    assert worker.is_paused()
    assert worker.toggle_pause() is False
    assert recorder.statuses == ["Paused", "Searching"]
    print("  [PASS] Control tests")


def test_settings():
    """Settings fall back to defaults and survive a save/load cycle."""
    banner("Settings")

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"

        assert load_settings(path) == DEFAULT_SETTINGS
        assert flags_from_settings(load_settings(path)) == StrategyFlags()

        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

        # Missing keys come from defaults
        path.write_text(json.dumps({"naked_pairs": True}), encoding="utf-8")
        loaded = load_settings(path)
        assert loaded["naked_pairs"] is True
        assert loaded["step_delay_ms"] == DEFAULT_SETTINGS["step_delay_ms"]

        settings = dict(DEFAULT_SETTINGS, solver_name="backtracking", hidden_pairs=True)
        save_settings(settings, path)
        loaded = load_settings(path)
        assert loaded == settings
        assert flags_from_settings(loaded) == StrategyFlags(hidden_pairs=True)

    # Loading never mutates the shared defaults
    assert DEFAULT_SETTINGS["solver_name"] == "logical"
    print("  [PASS] Settings tests")


def test_cli_arguments():
    """Argument parsing and flag resolution."""
    banner("CLI arguments")

    args = cli.parse_args([PUZZLE])
    assert args.puzzle == PUZZLE
    assert args.solver is None
    assert not (args.naked_pairs or args.hidden_pairs or args.pointing_pairs)
    assert not args.trace

    args = cli.parse_args(["-s", "backtracking", "--hidden-pairs", "--trace", "--delay", "0", PUZZLE])
    assert args.solver == "backtracking"
    assert args.hidden_pairs and args.trace
    assert args.delay == 0.0

    # Switches add to saved flags
    settings = dict(DEFAULT_SETTINGS, pointing_pairs=True)
    assert cli.resolve_flags(args, settings) == StrategyFlags(pointing_pairs=True, hidden_pairs=True)

    assert set(get_strategy_names()) >= {"logical", "backtracking"}
    print("  [PASS] CLI argument tests")


def test_cli_input_and_run():
    """Puzzles load from strings or files and solve with exit codes."""
    banner("CLI run")

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "puzzle.txt"
        grid = "\n".join(PUZZLE[i:i + 9] for i in range(0, 81, 9))
        path.write_text(grid + "\n", encoding="utf-8")
        assert cli.read_puzzle(str(path)) == Board.from_string(PUZZLE)

    assert cli.read_puzzle(PUZZLE) == Board.from_string(PUZZLE)

    try:
        cli.read_puzzle("123")
        assert False, "short puzzle accepted"
    except BoardError:
        pass

    assert cli.run_solver(Board.from_string(PUZZLE), "logical", StrategyFlags()) == cli.EXIT_OK
    assert cli.run_solver(Board.from_string(PUZZLE), "backtracking", StrategyFlags()) == cli.EXIT_OK
    assert cli.run_solver(fillable_conflicting_board(), "backtracking", StrategyFlags()) == cli.EXIT_UNSOLVED
    assert cli.run_solver(unsatisfiable_board(), "backtracking", StrategyFlags()) == cli.EXIT_UNSOLVED
    print("  [PASS] CLI run tests")


def main():
    """Run all tests."""
    print("\n" + "#" * 60)
    print("# WORKER / SETTINGS / CLI TESTS")
    print("#" * 60)

    tests = [
        ("Worker Solves", test_worker_solves),
        ("Worker No Solution", test_worker_no_solution),
        ("Worker Stop", test_worker_stop),
        ("Worker Controls", test_worker_controls),
        ("Settings", test_settings),
        ("CLI Arguments", test_cli_arguments),
        ("CLI Run", test_cli_input_and_run),
    ]

    all_passed = True
    for name, test in tests:
        try:
            test()
            print(f"  {name}: [PASS]")
        except AssertionError as e:
            print(f"  {name}: [FAIL] {e}")
            all_passed = False

    print()
    if all_passed:
        print("All tests PASSED!")
        return 0
    else:
        print("Some tests FAILED!")
        return 1


if __name__ == "__main__":
    sys.exit(main())
