"""
Candidate Grid Module - Per-cell candidate sets shared by the techniques.
"""

from typing import List, Set

from .board import SIZE

# 9x9 grid of candidate digit sets; filled cells carry an empty set
CandidateGrid = List[List[Set[int]]]


def empty_candidate_grid() -> CandidateGrid:
    return [[set() for _ in range(SIZE)] for _ in range(SIZE)]


def copy_candidates(grid: CandidateGrid) -> CandidateGrid:
    """Deep copy so a transform never mutates its input."""
    return [[set(cell) for cell in row] for row in grid]


def count_candidates(grid: CandidateGrid) -> int:
    """Total number of candidates across the grid."""
    return sum(len(cell) for row in grid for cell in row)


def is_subset_grid(smaller: CandidateGrid, larger: CandidateGrid) -> bool:
    """True if every cell of smaller is a subset of the same cell in larger."""
    return all(
        smaller[r][c] <= larger[r][c]
        for r in range(SIZE)
        for c in range(SIZE)
    )
