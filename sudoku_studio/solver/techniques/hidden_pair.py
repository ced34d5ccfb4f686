"""
Hidden Pair Technique - Restrict two cells to the two digits only they can hold.

If two digits appear as candidates in exactly the same two cells of a unit,
even when those cells carry other candidates, the cells must hold those two
digits. All other candidates are removed from the two cells.
"""

import logging
from itertools import combinations
from typing import Dict, List

from ..board import DIGITS, Cell, all_units
from ..candidate_grid import CandidateGrid, copy_candidates

logger = logging.getLogger(__name__)


def apply_hidden_pairs(candidates: CandidateGrid) -> CandidateGrid:
    """
    Apply hidden pairs across all 27 units until a pass finds nothing.

    Args:
        candidates: Input grid (not modified)

    Returns:
        New candidate grid with hidden pairs isolated
    """
    result = copy_candidates(candidates)

    total_found = 0
    iteration = 0
    while True:
        iteration += 1
        found = 0
        for _kind, cells in all_units():
            found += _isolate_in_unit(result, cells)
        logger.debug(f"[HiddenPair] pass {iteration}: {found} pair(s)")
        total_found += found
        if found == 0:
            break

    if total_found:
        logger.debug(f"[HiddenPair] Found {total_found} pair(s) in {iteration} iteration(s)")
    return result


def _isolate_in_unit(candidates: CandidateGrid, cells: List[Cell]) -> int:
    """
    Find hidden pairs in one unit and strip the extra candidates.

    Returns:
        Number of pairs that removed at least one candidate
    """
    positions: Dict[int, List[Cell]] = {digit: [] for digit in DIGITS}
    for r, c in cells:
        for digit in candidates[r][c]:
            positions[digit].append((r, c))

    applied = 0
    for first, second in combinations(DIGITS, 2):
        if len(positions[first]) != 2 or positions[first] != positions[second]:
            continue

        pair = {first, second}
        changed = False
        for r, c in positions[first]:
            if len(candidates[r][c]) > 2:
                candidates[r][c] &= pair
                changed = True

        if changed:
            applied += 1
    return applied
