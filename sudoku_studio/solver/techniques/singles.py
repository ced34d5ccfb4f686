"""
Singles Techniques - Naked single and hidden single placement rules.

Both rules place at most one digit per call so the caller can recompute
candidates after every change.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..board import BOX, DIGITS, SIZE, Board, Cell, box_cells, col_cells, row_cells
from ..candidate_grid import CandidateGrid
from ..placement import Placement

logger = logging.getLogger(__name__)

NAKED_SINGLE = "NakedSingle"
HIDDEN_SINGLE = "HiddenSingle"


@dataclass
class SolverState:
    """
    Board plus the candidate hint grid computed from it.

    The board is the source of truth; candidates are only valid until the
    next board mutation.

    Attributes:
        board: Working board (mutated by placements)
        candidates: Candidate grid derived from the board
    """
    board: Board
    candidates: CandidateGrid


def apply_naked_single(state: SolverState) -> Optional[Placement]:
    """
    Fill the first empty cell (row-major) whose candidate set has one digit.

    Args:
        state: Current board and candidates

    Returns:
        The placement made, or None if no cell qualifies
    """
    board, candidates = state.board, state.candidates
    for row in range(SIZE):
        for col in range(SIZE):
            if not board.is_empty(row, col):
                continue
            cell_candidates = candidates[row][col]
            if len(cell_candidates) == 1:
                value = next(iter(cell_candidates))
                board.set_cell(row, col, value)
                placement = Placement(row, col, value, NAKED_SINGLE, "cell")
                logger.debug(placement.describe())
                return placement
    return None


def apply_hidden_single(state: SolverState) -> Optional[Placement]:
    """
    Place a digit that fits only one empty cell of some unit.

    For each digit 1-9, rows are scanned first, then columns, then boxes;
    the first unit with exactly one possible cell wins.

    Args:
        state: Current board and candidates

    Returns:
        The placement made, or None if no unit qualifies
    """
    for digit in DIGITS:
        for row in range(SIZE):
            placement = _place_if_single(state, digit, row_cells(row), "row")
            if placement:
                return placement

        for col in range(SIZE):
            placement = _place_if_single(state, digit, col_cells(col), "column")
            if placement:
                return placement

        for box_row in range(0, SIZE, BOX):
            for box_col in range(0, SIZE, BOX):
                placement = _place_if_single(state, digit, box_cells(box_row, box_col), "box")
                if placement:
                    return placement
    return None


def _place_if_single(state: SolverState, digit: int, cells: List[Cell], unit: str) -> Optional[Placement]:
    board, candidates = state.board, state.candidates
    positions = [(r, c) for r, c in cells
                 if board.is_empty(r, c) and digit in candidates[r][c]]
    if len(positions) != 1:
        return None

    row, col = positions[0]
    board.set_cell(row, col, digit)
    placement = Placement(row, col, digit, HIDDEN_SINGLE, unit)
    logger.debug(placement.describe())
    return placement
