"""
Backtracking Search Module - Depth-first search over empty cells.

Two variants share the same order (first empty cell in row-major order,
digits 1-9 ascending) and the same is_valid() rule:

    solve_backtracking()   plain, synchronous, returns a solved copy or None
    solve_with_updates()   instrumented: records a SearchTree, streams board,
                           move and tree updates, honours pause and delay

The instrumented variant is built from a generator, iter_search_steps(),
that yields after every placement and every retraction. SearchScheduler
drives it and does all waiting, so the search itself never sleeps.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generator, Optional

from .board import DIGITS, Board, find_conflicts, is_valid
from .context import SolutionContext
from .throttle import TREE_UPDATE_INTERVAL, ThrottledNotifier
from .tree import ROOT_ID, SearchTree

logger = logging.getLogger(__name__)

# Seconds between pause-predicate checks
PAUSE_POLL_INTERVAL = 0.1

# Placements between cancellation checks in the plain search
CANCEL_CHECK_EVERY = 1024

PLACE = "place"
RETRACT = "retract"


@dataclass
class BacktrackResult:
    """
    Outcome of a plain backtracking search.

    Attributes:
        board: Solved copy, or None if no solution was found
        placements: Digits placed, including ones later retracted
        backtracks: Placements retracted
        cancelled: True if the context stopped the search
    """
    board: Optional[Board]
    placements: int = 0
    backtracks: int = 0
    cancelled: bool = False

    @property
    def solved(self) -> bool:
        return self.board is not None


def solve_backtracking(board: Board, context: Optional[SolutionContext] = None) -> BacktrackResult:
    """
    Exhaustive depth-first search.

    Args:
        board: Starting board (not modified)
        context: Optional context checked for cancellation

    Returns:
        BacktrackResult with a solved copy, or board=None (also when the
        givens already repeat a digit in some unit)
    """
    conflicts = find_conflicts(board)
    if conflicts:
        logger.warning(f"Backtracking refused inconsistent board: {'; '.join(conflicts)}")
        return BacktrackResult(board=None)

    working = board.copy()
    result = BacktrackResult(board=None)

    def search() -> bool:
        empty = working.find_empty()
        if empty is None:
            return True
        row, col = empty

        for value in DIGITS:
            if not is_valid(working, row, col, value):
                continue
            working.set_cell(row, col, value)
            result.placements += 1

            if context is not None and result.placements % CANCEL_CHECK_EVERY == 0:
                if context.is_cancelled():
                    result.cancelled = True
                    return False

            if search():
                return True
            if result.cancelled:
                return False

            working.clear_cell(row, col)
            result.backtracks += 1
        return False

    if search():
        result.board = working
    return result


@dataclass(frozen=True)
class SearchStep:
    """
    One suspension point of the instrumented search.

    Attributes:
        kind: PLACE after a digit was placed, RETRACT after it was undone
        row: Row of the cell
        col: Column of the cell
        value: Digit placed or retracted
        node_id: SearchTree node for the placement
        path: Frame label of that node
    """
    kind: str
    row: int
    col: int
    value: int
    node_id: int
    path: str


def iter_search_steps(
    board: Board,
    tree: SearchTree,
    parent_id: int = ROOT_ID,
    path: Optional[str] = None,
) -> Generator[SearchStep, None, bool]:
    """
    Backtracking search as a generator.

    Mutates board in place and appends to tree. Yields a SearchStep after
    each placement and each retraction; the generator's return value is
    True when the board was completed.

    Args:
        board: Board to fill in place
        tree: Tree receiving one node per placement
        parent_id: Node the next placements hang under
        path: Frame label of parent_id (defaults to the node's own path)
    """
    empty = board.find_empty()
    if empty is None:
        return True
    row, col = empty

    if path is None:
        path = tree.node(parent_id).path

    for value in DIGITS:
        if not is_valid(board, row, col, value):
            continue

        node_path = f"{path}-{len(tree.node(parent_id).children)}"
        node = tree.add_child(parent_id, row, col, value, node_path)
        board.set_cell(row, col, value)
        yield SearchStep(PLACE, row, col, value, node.node_id, node_path)

        if (yield from iter_search_steps(board, tree, node.node_id, node_path)):
            return True

        tree.mark_retracted(node.node_id)
        board.clear_cell(row, col)
        yield SearchStep(RETRACT, row, col, value, node.node_id, node_path)

    return False


class SearchScheduler:
    """
    Drives iter_search_steps() and enforces pause, delay and notifications.

    At every step: notify the tree (throttled), send a board copy, bump the
    move counter, report the step, then wait while paused (polling every
    poll_interval) and finally sleep for the caller's delay.

    Attributes:
        moves: Steps processed so far (placements plus retractions)
        current: Last step processed
        cancelled: True if the context stopped the search
    """

    def __init__(
        self,
        board: Board,
        on_board: Optional[Callable[[Board], None]] = None,
        is_paused: Optional[Callable[[], bool]] = None,
        get_delay: Optional[Callable[[], float]] = None,
        on_move: Optional[Callable[[int], None]] = None,
        notifier: Optional[ThrottledNotifier] = None,
        on_step: Optional[Callable[[SearchStep], None]] = None,
        context: Optional[SolutionContext] = None,
        poll_interval: float = PAUSE_POLL_INTERVAL,
    ):
        self.board = board
        self.on_board = on_board
        self.is_paused = is_paused
        self.get_delay = get_delay
        self.on_move = on_move
        self.notifier = notifier
        self.on_step = on_step
        self.context = context
        self.poll_interval = poll_interval
        self.moves = 0
        self.current: Optional[SearchStep] = None
        self.cancelled = False

    def run(self, steps: Generator[SearchStep, None, bool]) -> bool:
        """
        Consume the generator.

        Returns:
            The generator's solved flag, or False if cancelled
        """
        solved = False

        def drive():
            nonlocal solved
            solved = yield from steps

        driver = drive()
        for step in driver:
            if self._stopped():
                driver.close()
                return False
            self._handle(step)
            self.wait()
            if self._stopped():
                driver.close()
                return False
        return solved

    def _handle(self, step: SearchStep) -> None:
        self.current = step
        self.moves += 1
        if self.notifier is not None:
            self.notifier.notify()
        if self.on_board is not None:
            self.on_board(self.board.copy())
        if self.on_move is not None:
            self.on_move(self.moves)
        if self.on_step is not None:
            self.on_step(step)

    def wait(self) -> None:
        """Block while paused, then sleep for the current delay (ms)."""
        if self.is_paused is not None:
            while self.is_paused():
                if self._stopped():
                    return
                self._sleep(self.poll_interval)

        if self.get_delay is not None:
            delay_ms = self.get_delay()
            if delay_ms and delay_ms > 0:
                self._sleep(delay_ms / 1000.0)

    def _sleep(self, seconds: float) -> None:
        if self.context is not None:
            # Wakes early on cancellation
            self.context.cancel_flag.wait(seconds)
        else:
            time.sleep(seconds)

    def _stopped(self) -> bool:
        if self.context is not None and self.context.is_cancelled():
            if not self.cancelled:
                logger.warning(f"Search cancelled after {self.moves} move(s)")
            self.cancelled = True
        return self.cancelled


def solve_with_updates(
    board: Board,
    on_board: Optional[Callable[[Board], None]] = None,
    is_paused: Optional[Callable[[], bool]] = None,
    get_delay: Optional[Callable[[], float]] = None,
    on_move: Optional[Callable[[int], None]] = None,
    tree: Optional[SearchTree] = None,
    on_tree: Optional[Callable[[Dict[str, Any]], None]] = None,
    path: str = "root",
    parent_id: int = ROOT_ID,
    context: Optional[SolutionContext] = None,
    on_step: Optional[Callable[[SearchStep], None]] = None,
    min_interval: float = TREE_UPDATE_INTERVAL,
    poll_interval: float = PAUSE_POLL_INTERVAL,
) -> bool:
    """
    Instrumented backtracking search.

    The board is mutated in place and the tree is grown in place. The
    caller observes progress only through the sinks: on_board gets board
    copies, on_move the running move count, on_tree throttled tree
    snapshots (a forced one before the search starts and a forced final
    one when it ends). A board whose givens already repeat a digit is
    not searched: both forced tree updates are sent and False returned.

    Args:
        board: Board to solve in place
        on_board: Board-update sink
        is_paused: Pause predicate, polled every poll_interval while True
        get_delay: Delay provider, milliseconds slept after every step
        on_move: Move-counter sink
        tree: Tree to grow (a new one is created if None)
        on_tree: Tree-update notifier
        path: Label of the parent frame
        parent_id: Tree node the search starts under
        context: Optional cancellation context
        on_step: Optional per-step callback (current node)
        min_interval: Minimum seconds between tree deliveries
        poll_interval: Seconds between pause checks

    Returns:
        True if the board was solved
    """
    if tree is None:
        tree = SearchTree(root_path=path)

    notifier = None
    if on_tree is not None:
        notifier = ThrottledNotifier(on_tree, tree.snapshot, min_interval=min_interval)
        notifier.flush()

    conflicts = find_conflicts(board)
    if conflicts:
        logger.warning(f"Instrumented search refused inconsistent board: {'; '.join(conflicts)}")
        if on_board is not None:
            on_board(board.copy())
        if notifier is not None:
            notifier.flush()
        return False

    scheduler = SearchScheduler(
        board,
        on_board=on_board,
        is_paused=is_paused,
        get_delay=get_delay,
        on_move=on_move,
        notifier=notifier,
        on_step=on_step,
        context=context,
        poll_interval=poll_interval,
    )

    start = time.perf_counter()
    solved = scheduler.run(iter_search_steps(board, tree, parent_id, path))
    elapsed_ms = (time.perf_counter() - start) * 1000

    if on_board is not None:
        on_board(board.copy())
    if notifier is not None:
        notifier.flush()

    stats = tree.stats()
    logger.info(
        f"Instrumented search {'solved' if solved else 'failed'}: "
        f"{scheduler.moves} move(s), {stats['nodes']} node(s), "
        f"{stats['retracted']} retracted, {elapsed_ms:.1f}ms"
    )
    return solved
