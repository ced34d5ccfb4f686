"""
Pointing Pairs Technique - Box/line reduction.

If every candidate position of a digit inside a 3x3 box lies on one row
(or one column), the digit must be placed on that line inside the box,
so it is removed from the rest of that line outside the box.

Example: if 5 only appears in row 1 within box 1, remove 5 from row 1
in boxes 2 and 3.
"""

import logging

from ..board import BOX, DIGITS, SIZE, box_cells
from ..candidate_grid import CandidateGrid, copy_candidates

logger = logging.getLogger(__name__)


def apply_pointing_pairs(candidates: CandidateGrid) -> CandidateGrid:
    """
    Apply box/line reduction to every box until a pass finds nothing.

    Args:
        candidates: Input grid (not modified)

    Returns:
        New candidate grid with pointing-pair eliminations applied
    """
    result = copy_candidates(candidates)

    total_found = 0
    iteration = 0
    while True:
        iteration += 1
        found = 0
        for box_row in range(0, SIZE, BOX):
            for box_col in range(0, SIZE, BOX):
                found += _reduce_from_box(result, box_row, box_col)
        logger.debug(f"[PointingPairs] pass {iteration}: {found} reduction(s)")
        total_found += found
        if found == 0:
            break

    if total_found:
        logger.debug(f"[PointingPairs] Found {total_found} reduction(s) in {iteration} iteration(s)")
    return result


def _reduce_from_box(candidates: CandidateGrid, box_row: int, box_col: int) -> int:
    """
    Check one box for digits confined to a single row or column.

    Returns:
        Number of (digit, line) reductions that removed a candidate
    """
    reductions = 0
    cells = box_cells(box_row, box_col)

    for digit in DIGITS:
        positions = [(r, c) for r, c in cells if digit in candidates[r][c]]
        # A lone position is a hidden single, not a pointing pair
        if len(positions) < 2:
            continue

        rows = {r for r, _ in positions}
        cols = {c for _, c in positions}

        if len(rows) == 1:
            row = positions[0][0]
            line = [(row, c) for c in range(SIZE) if not box_col <= c < box_col + BOX]
            axis = f"row {row}"
        elif len(cols) == 1:
            col = positions[0][1]
            line = [(r, col) for r in range(SIZE) if not box_row <= r < box_row + BOX]
            axis = f"col {col}"
        else:
            continue

        eliminated = [(r, c) for r, c in line if digit in candidates[r][c]]
        if not eliminated:
            continue

        for r, c in eliminated:
            candidates[r][c].discard(digit)
        reductions += 1
        logger.debug(
            f"[PointingPairs] Box({box_row // BOX},{box_col // BOX}): {digit} in {axis} "
            f"-> eliminated from {', '.join(f'[{r},{c}]' for r, c in eliminated)}"
        )

    return reductions
