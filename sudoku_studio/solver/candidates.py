"""
Candidate Engine Module - Candidate computation from raw consistency checks.

Candidates are always derived from a board snapshot with is_valid();
nothing here patches a grid incrementally.
"""

from typing import Set

from .board import Board, DIGITS, SIZE, is_valid
from .candidate_grid import CandidateGrid
from .techniques import apply_hidden_pairs, apply_naked_pairs, apply_pointing_pairs


def candidates_for(board: Board, row: int, col: int) -> Set[int]:
    """
    Get all digits that may legally go in a cell.

    Args:
        board: Current board
        row: Row index
        col: Column index

    Returns:
        Empty set for a filled cell, otherwise every digit passing is_valid()
    """
    if not board.is_empty(row, col):
        return set()
    return {value for value in DIGITS if is_valid(board, row, col, value)}


def candidates_for_board(board: Board) -> CandidateGrid:
    """Candidate set for every cell of the board."""
    return [[candidates_for(board, r, c) for c in range(SIZE)] for r in range(SIZE)]


def candidates_for_board_with_strategy(
    board: Board,
    pointing_pairs: bool = False,
    naked_pairs: bool = False,
    hidden_pairs: bool = False,
) -> CandidateGrid:
    """
    Candidate grid with the enabled elimination techniques applied.

    Order is fixed: naked pairs, then hidden pairs, then pointing pairs.
    Unit-local cleanup runs before the box/line scan.

    Args:
        board: Current board
        pointing_pairs: Apply pointing pairs / box-line reduction
        naked_pairs: Apply naked pairs
        hidden_pairs: Apply hidden pairs

    Returns:
        New candidate grid
    """
    candidates = candidates_for_board(board)
    if naked_pairs:
        candidates = apply_naked_pairs(candidates)
    if hidden_pairs:
        candidates = apply_hidden_pairs(candidates)
    if pointing_pairs:
        candidates = apply_pointing_pairs(candidates)
    return candidates
