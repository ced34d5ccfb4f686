"""
Search Worker Module for Sudoku Studio

Provides a background QThread worker that runs the instrumented
backtracking search. Progress reaches the UI via Qt signals for
thread-safe updates; pause, speed and stop requests come back through
plain methods that the search polls at each step.
"""

import logging
import threading
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from sudoku_studio.solver import Board, SearchStep, SearchTree, SolutionContext, solve_with_updates
from sudoku_studio.solver.search import PAUSE_POLL_INTERVAL


# Configure module logger
logger = logging.getLogger(__name__)


class SearchWorker(QThread):
    """
    Background worker thread for the instrumented backtracking search.

    Signals:
        status_changed(str): Emitted when worker status changes
        board_changed(object): Board copy after each placement/retraction
        tree_changed(object): Throttled nested-dict tree snapshot
        node_changed(str): Path label of the node just placed or retracted
        moves_changed(int): Running count of placements plus retractions
        search_finished(bool): True if the board was solved
        error_occurred(str): Emitted when an error occurs

    Example:
        worker = SearchWorker(board, delay_ms=20)
        worker.tree_changed.connect(view.set_tree)
        worker.search_finished.connect(on_done)
        worker.start()
        # ...
        worker.toggle_pause()
        worker.request_stop()
        worker.wait()
    """

    status_changed = pyqtSignal(str)
    board_changed = pyqtSignal(object)
    tree_changed = pyqtSignal(object)
    node_changed = pyqtSignal(str)
    moves_changed = pyqtSignal(int)
    search_finished = pyqtSignal(bool)
    error_occurred = pyqtSignal(str)

    def __init__(self, board: Board, delay_ms: float = 50,
                 tree_update_interval_ms: float = 50, root_path: str = "root"):
        """
        Initialize the search worker.

        Args:
            board: Board to solve (the worker searches a copy)
            delay_ms: Pause after every step, adjustable while running
            tree_update_interval_ms: Minimum time between tree signals
            root_path: Label of the tree root
        """
        super().__init__()
        self.board = board.copy()
        self.tree = SearchTree(root_path=root_path)
        self.solved: Optional[bool] = None
        self.moves = 0
        self._delay_ms = delay_ms
        self._tree_interval = tree_update_interval_ms / 1000.0
        self._paused = threading.Event()
        self._context = SolutionContext(board=self.board)

    def run(self):
        """
        Main worker body. Called when thread starts.

        Runs one instrumented search and emits search_finished with the
        outcome. A stopped search reports False.
        """
        logger.info("Search worker started")
        self.status_changed.emit("Searching")

        try:
            self.solved = solve_with_updates(
                self.board,
                on_board=self.board_changed.emit,
                is_paused=self._paused.is_set,
                get_delay=self.get_delay_ms,
                on_move=self._on_move,
                tree=self.tree,
                on_tree=self.tree_changed.emit,
                path=self.tree.root.path,
                context=self._context,
                on_step=self._on_step,
                min_interval=self._tree_interval,
                poll_interval=PAUSE_POLL_INTERVAL,
            )
        except Exception as e:
            logger.exception("Error in search worker")
            self.solved = False
            self.error_occurred.emit(str(e))
            self.status_changed.emit("Error")
            self.search_finished.emit(False)
            return

        if self.solved:
            status = "Solved"
        elif self._context.cancel_flag.is_set():
            status = "Stopped"
        else:
            status = "No solution found"

        logger.info(f"Search worker finished: {status} after {self.moves} move(s)")
        self.status_changed.emit(status)
        self.search_finished.emit(bool(self.solved))

    def _on_move(self, count: int) -> None:
        self.moves = count
        self.moves_changed.emit(count)

    def _on_step(self, step: SearchStep) -> None:
        self.node_changed.emit(step.path)

    def get_delay_ms(self) -> float:
        """Current per-step delay in milliseconds."""
        return self._delay_ms

    def set_delay_ms(self, delay_ms: float) -> None:
        """
        Change the per-step delay; takes effect at the next step.

        Args:
            delay_ms: Milliseconds to wait after each step (0 = full speed)
        """
        self._delay_ms = max(0.0, float(delay_ms))

    def set_paused(self, paused: bool) -> None:
        """Pause or resume the search at its next step."""
        if paused:
            self._paused.set()
            self.status_changed.emit("Paused")
        else:
            self._paused.clear()
            self.status_changed.emit("Searching")

    def toggle_pause(self) -> bool:
        """
        Flip the pause state.

        Returns:
            True if now paused
        """
        self.set_paused(not self.is_paused())
        return self.is_paused()

    def is_paused(self) -> bool:
        return self._paused.is_set()

    def request_stop(self):
        """
        Request the worker to stop.

        The search stops at its next step (or while paused). Use wait()
        after calling this to block until stopped.
        """
        logger.info("Stop requested")
        self._context.cancel()
        self._paused.clear()
