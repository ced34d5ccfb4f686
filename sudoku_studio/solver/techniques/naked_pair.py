"""
Naked Pair Technique - Candidate elimination from identical two-candidate cells.

If two cells of a unit carry exactly the same two candidates and nothing
else, those digits must go in those two cells, so they are removed from
every other cell of the unit. Never fills a cell.
"""

import logging
from collections import defaultdict
from typing import Dict, FrozenSet, List

from ..board import Cell, all_units
from ..candidate_grid import CandidateGrid, copy_candidates

logger = logging.getLogger(__name__)


def apply_naked_pairs(candidates: CandidateGrid) -> CandidateGrid:
    """
    Apply naked pairs across all 27 units until a pass finds nothing.

    Args:
        candidates: Input grid (not modified)

    Returns:
        New candidate grid with naked-pair eliminations applied
    """
    result = copy_candidates(candidates)

    total_found = 0
    iteration = 0
    while True:
        iteration += 1
        found = 0
        for _kind, cells in all_units():
            found += _eliminate_in_unit(result, cells)
        logger.debug(f"[NakedPair] pass {iteration}: {found} pair(s)")
        total_found += found
        if found == 0:
            break

    if total_found:
        logger.debug(f"[NakedPair] Found {total_found} pair(s) in {iteration} iteration(s)")
    return result


def _eliminate_in_unit(candidates: CandidateGrid, cells: List[Cell]) -> int:
    """
    Find naked pairs in one unit and strip their digits from the others.

    Returns:
        Number of pairs that removed at least one candidate
    """
    by_pair: Dict[FrozenSet[int], List[Cell]] = defaultdict(list)
    for r, c in cells:
        if len(candidates[r][c]) == 2:
            by_pair[frozenset(candidates[r][c])].append((r, c))

    applied = 0
    for pair, positions in by_pair.items():
        if len(positions) != 2:
            continue

        changed = False
        for r, c in cells:
            if (r, c) in positions:
                continue
            if candidates[r][c] & pair:
                candidates[r][c] -= pair
                changed = True

        if changed:
            applied += 1
    return applied
