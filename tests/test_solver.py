"""
Test script for solver validation

Covers:
1. Board creation, validation and the legal-placement rule
2. Candidate computation
3. Elimination and singles techniques
4. Logical solver loop and configuration
5. Backtracking solver
6. Solver factory

Usage:
    python tests/test_solver.py
    pytest tests/test_solver.py
"""

import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sudoku_studio.solver import (
    Board,
    BoardShapeError,
    BoardValueError,
    SolutionContext,
    SolveStatus,
    StrategyFlags,
    candidates_for,
    candidates_for_board,
    candidates_for_board_with_strategy,
    create_strategy,
    find_conflicts,
    get_default_strategy_name,
    get_logical_config,
    get_strategy_info,
    get_strategy_names,
    is_solved_grid,
    is_valid,
    reset_logical_config,
    set_logical_config,
    solve_backtracking,
    solve_logically,
)
from sudoku_studio.solver.candidate_grid import copy_candidates, count_candidates, empty_candidate_grid, is_subset_grid
from sudoku_studio.solver.techniques import (
    SolverState,
    apply_hidden_pairs,
    apply_hidden_single,
    apply_naked_pairs,
    apply_naked_single,
    apply_pointing_pairs,
)

from puzzles import HARD_PUZZLE, PUZZLE, SOLUTION, banner, conflicting_board, dead_cell_board


def test_board_creation():
    """Test Board construction, conversion and boundary errors."""
    banner("Board")

    board = Board.from_string(PUZZLE)
    print(f"  Filled cells: {board.count_filled()}")
    assert board.count_filled() == 30
    assert board.get_cell(0, 0) == 5
    assert board.get_cell(0, 2) is None
    assert board.find_empty() == (0, 2)

    # None and 0 both mean empty
    as_list = board.to_list()
    assert as_list[0][:3] == [5, 3, None]
    zeros = [[v or 0 for v in row] for row in as_list]
    assert Board.from_2d_list(as_list) == board
    assert Board.from_2d_list(zeros) == board
    assert board.to_string() == PUZZLE.replace("0", ".")

    # Copies never alias
    copy = board.copy()
    copy.set_cell(0, 2, 4)
    assert board.get_cell(0, 2) is None
    assert board.diff(copy) == [(0, 2)]

    for bad in ([[0] * 9] * 8, [[0] * 8] * 9, []):
        try:
            Board.from_2d_list(bad)
        except BoardShapeError:
            pass
        else:
            raise AssertionError(f"Shape {len(bad)} rows accepted")

    bad_value = [[0] * 9 for _ in range(9)]
    bad_value[4][4] = 10
    try:
        Board.from_2d_list(bad_value)
    except BoardValueError:
        pass
    else:
        raise AssertionError("Value 10 accepted")

    try:
        Board.from_string(PUZZLE[:-1])
    except BoardShapeError:
        pass
    else:
        raise AssertionError("80-cell string accepted")

    try:
        Board.from_string("x" + PUZZLE[1:])
    except BoardValueError:
        pass
    else:
        raise AssertionError("Letter accepted")

    # Raw arrays: any integer dtype, nothing fractional, nothing ragged
    assert Board(np.ones((9, 9), dtype=np.int64)).count_filled() == 81
    try:
        Board(np.full((9, 9), 1.5))
    except BoardValueError:
        pass
    else:
        raise AssertionError("Float grid accepted")

    ragged = [[0] * 9 for _ in range(8)] + [[0] * 8]
    try:
        Board(ragged)
    except BoardShapeError:
        pass
    else:
        raise AssertionError("Ragged grid accepted")

    print("  [PASS] Board tests")


def test_is_valid_exhaustive():
    """Check is_valid against a direct unit scan for all 729 triples."""
    banner("is_valid (729 triples)")

    board = Board.from_string(PUZZLE)
    grid = board.to_list()
    checked = 0

    for row in range(9):
        for col in range(9):
            r0, c0 = (row // 3) * 3, (col // 3) * 3
            seen = set(grid[row]) | {grid[r][col] for r in range(9)}
            seen |= {grid[r][c] for r in range(r0, r0 + 3) for c in range(c0, c0 + 3)}
            for value in range(1, 10):
                assert is_valid(board, row, col, value) == (value not in seen), (row, col, value)
                checked += 1

    print(f"  Checked {checked} triples")
    assert checked == 729
    print("  [PASS] is_valid tests")


def test_conflicts():
    """Test duplicate detection on givens."""
    banner("Conflict detection")

    assert find_conflicts(Board.from_string(PUZZLE)) == []
    conflicts = find_conflicts(conflicting_board())
    print(f"  Conflicts: {conflicts}")
    assert conflicts == ["Column 8 has duplicate digit(s) 9"]
    assert is_solved_grid(Board.from_string(SOLUTION))
    assert not is_solved_grid(Board.from_string(PUZZLE))
    print("  [PASS] Conflict tests")


def test_candidates():
    """Test per-cell and per-board candidate computation."""
    banner("Candidates")

    rows = [[None] * 9 for _ in range(9)]
    rows[0] = [1, 2, 3, 4, 5, 6, 7, 8, None]
    board = Board.from_2d_list(rows)
    assert candidates_for(board, 0, 8) == {9}
    assert candidates_for(board, 0, 0) == set()

    board = Board.from_string(PUZZLE)
    grid = candidates_for_board(board)
    # Filled cells carry no candidates
    assert grid[0][0] == set()
    assert grid[0][2] == {1, 2, 4}
    assert grid[4][4] == {5}

    # No flags: same as the plain grid
    assert candidates_for_board_with_strategy(board) == grid

    strategised = candidates_for_board_with_strategy(
        board, pointing_pairs=True, naked_pairs=True, hidden_pairs=True
    )
    assert is_subset_grid(strategised, grid)
    print("  [PASS] Candidate tests")


def test_naked_pairs():
    """Identical two-candidate cells clear their digits from the unit."""
    banner("Naked Pairs")

    grid = empty_candidate_grid()
    grid[0][0] = {1, 2}
    grid[0][1] = {1, 2}
    grid[0][2] = {1, 2, 3}
    grid[0][5] = {2, 4}
    before = copy_candidates(grid)

    result = apply_naked_pairs(grid)
    assert grid == before, "input was mutated"
    assert result[0][0] == {1, 2}
    assert result[0][1] == {1, 2}
    assert result[0][2] == {3}
    assert result[0][5] == {4}

    # Two disjoint pairs in one column are both applied
    grid = empty_candidate_grid()
    grid[0][4] = {1, 2}
    grid[1][4] = {1, 2}
    grid[2][4] = {3, 4}
    grid[3][4] = {3, 4}
    grid[4][4] = {1, 3, 5}
    result = apply_naked_pairs(grid)
    assert result[4][4] == {5}
    assert [result[r][4] for r in range(4)] == [{1, 2}, {1, 2}, {3, 4}, {3, 4}]
    print("  [PASS] Naked pair tests")


def test_hidden_pairs():
    """Digits 4 and 7 confined to (0,2) and (0,5) isolate those cells."""
    banner("Hidden Pairs")

    grid = empty_candidate_grid()
    row = [{1, 2}, {2, 3}, {1, 4, 7}, {3, 5}, {5, 6}, {4, 7, 8}, {6, 9}, {8, 9}, {1, 9}]
    for col, cands in enumerate(row):
        grid[0][col] = set(cands)
    before = copy_candidates(grid)

    result = apply_hidden_pairs(grid)
    assert grid == before, "input was mutated"
    assert result[0][2] == {4, 7}
    assert result[0][5] == {4, 7}
    for col in (0, 1, 3, 4, 6, 7, 8):
        assert result[0][col] == row[col]
    print("  [PASS] Hidden pair tests")


def test_pointing_pairs():
    """A digit confined to one line of a box leaves the rest of the line."""
    banner("Pointing Pairs")

    grid = empty_candidate_grid()
    # 5 only on row 0 inside box 0
    grid[0][0] = {1, 5}
    grid[0][1] = {2, 5}
    grid[0][5] = {5, 6}
    grid[3][0] = {5, 7}
    # 4 only on column 2 inside box 0
    grid[0][2] = {4, 8}
    grid[2][2] = {4, 9}
    grid[6][2] = {3, 4}
    before = copy_candidates(grid)

    result = apply_pointing_pairs(grid)
    assert grid == before, "input was mutated"
    assert result[0][5] == {6}
    assert result[6][2] == {3}
    assert result[3][0] == {5, 7}
    assert result[0][0] == {1, 5}
    assert result[2][2] == {4, 9}

    # 7 spans two rows and two columns of box 0: nothing to eliminate
    grid = empty_candidate_grid()
    grid[0][0] = {7, 8}
    grid[1][1] = {6, 7}
    grid[0][5] = {7, 9}
    grid[5][0] = {2, 7}
    grid[1][7] = {3, 7}
    assert apply_pointing_pairs(grid) == grid
    print("  [PASS] Pointing pair tests")


def test_eliminations_are_monotonic():
    """Techniques never add candidates."""
    banner("Elimination monotonicity")

    for text in (PUZZLE, HARD_PUZZLE):
        grid = candidates_for_board(Board.from_string(text))
        for transform in (apply_naked_pairs, apply_hidden_pairs, apply_pointing_pairs):
            result = transform(grid)
            assert is_subset_grid(result, grid), transform.__name__
            assert count_candidates(result) <= count_candidates(grid)
    print("  [PASS] Monotonicity tests")


def test_singles():
    """Each singles rule places exactly one digit per call."""
    banner("Singles")

    board = Board.empty()
    grid = empty_candidate_grid()
    grid[2][5] = {7}
    grid[4][1] = {3}
    state = SolverState(board, grid)

    placement = apply_naked_single(state)
    print(f"  Naked single: {placement}")
    assert placement.cell == (2, 5) and placement.value == 7
    assert board.get_cell(2, 5) == 7
    assert board.get_cell(4, 1) is None

    board = Board.empty()
    grid = empty_candidate_grid()
    grid[0][3] = {1, 2}
    grid[0][4] = {2, 3}
    grid[5][4] = {1, 3}
    state = SolverState(board, grid)

    assert apply_naked_single(state) is None
    placement = apply_hidden_single(state)
    print(f"  Hidden single: {placement}")
    assert (placement.row, placement.col, placement.value, placement.unit) == (0, 3, 1, "row")
    assert board.count_filled() == 1

    # No row has a single 1; column 0 does, and columns come before boxes
    grid = empty_candidate_grid()
    grid[0][0] = {1}
    grid[0][4] = {1}
    placement = apply_hidden_single(SolverState(Board.empty(), grid))
    assert (placement.cell, placement.value, placement.unit) == ((0, 0), 1, "column")

    # No row or column has a single 1; box 0 does
    grid = empty_candidate_grid()
    for r, c in [(0, 0), (0, 4), (4, 0), (4, 4)]:
        grid[r][c] = {1}
    placement = apply_hidden_single(SolverState(Board.empty(), grid))
    assert (placement.cell, placement.value, placement.unit) == ((0, 0), 1, "box")

    assert apply_hidden_single(SolverState(Board.empty(), empty_candidate_grid())) is None
    print("  [PASS] Singles tests")


def test_logical_solver():
    """Logical solver solves an easy puzzle and is stable on its output."""
    banner("Logical Solver")

    board = Board.from_string(PUZZLE)
    for flags in (StrategyFlags(), StrategyFlags.all_enabled()):
        result = solve_logically(board, flags)
        print(f"  {flags.enabled_names()}: {len(result.placements)} placements")
        assert result.board == Board.from_string(SOLUTION)
        assert board == Board.from_string(PUZZLE), "input was mutated"

    solver = create_strategy("logical", flags=StrategyFlags.all_enabled())
    progress = []
    hard = Board.from_string(HARD_PUZZLE)
    solution = solver.solve(SolutionContext(board=hard, progress_callback=lambda p, m: progress.append(p)))
    print(f"  Hard puzzle: {solution.status.name}, {solution.message}")
    assert solution.board is not None
    assert not find_conflicts(solution.board)
    assert progress == [1.0]

    # Only empty cells were filled, one per placement
    changed = solution.board.diff(hard)
    assert len(changed) == solution.placement_count
    assert all(hard.is_empty(r, c) for r, c in changed)
    assert solution.empty_remaining == 81 - solution.board.count_filled()

    again = solver.solve(SolutionContext(board=solution.board))
    assert again.board == solution.board
    assert again.placement_count == 0

    stuck = solver.solve(SolutionContext(board=dead_cell_board()))
    assert stuck.status is SolveStatus.STUCK

    inconsistent = solver.solve(SolutionContext(board=conflicting_board()))
    assert inconsistent.status is SolveStatus.INCONSISTENT
    assert inconsistent.board is None
    print("  [PASS] Logical solver tests")


def test_logical_config():
    """Process-wide flags are read only when none are passed."""
    banner("Logical configuration")

    try:
        assert get_logical_config() == StrategyFlags()
        updated = set_logical_config(naked_pairs=True)
        assert updated == StrategyFlags(naked_pairs=True)
        assert get_logical_config().naked_pairs

        try:
            set_logical_config(x_wing=True)
        except ValueError:
            pass
        else:
            raise AssertionError("Unknown option accepted")

        solution = create_strategy("logical").solve(SolutionContext(board=Board.from_string(PUZZLE)))
        assert solution.is_solved
    finally:
        reset_logical_config()

    assert get_logical_config() == StrategyFlags()
    print("  [PASS] Configuration tests")


def test_backtracking_solver():
    """Backtracking finds valid completions and reports failure."""
    banner("Backtracking Solver")

    solver = create_strategy("backtracking")

    solved = solver.solve_board(Board.from_string(PUZZLE))
    assert solved == Board.from_string(SOLUTION)

    # Idempotent on its own output
    assert solver.solve_board(solved) == solved

    empty_result = solver.solve_board(Board.empty())
    print(f"  Empty board:\n{empty_result.format()}")
    assert is_solved_grid(empty_result)

    no_solution = solver.solve(SolutionContext(board=dead_cell_board()))
    assert no_solution.status is SolveStatus.NO_SOLUTION
    assert no_solution.board is None

    inconsistent = solver.solve(SolutionContext(board=conflicting_board()))
    assert inconsistent.status is SolveStatus.INCONSISTENT
    assert solver.solve_board(conflicting_board()) is None

    # Cancellation is honoured inside the search
    context = SolutionContext(board=Board.from_string(HARD_PUZZLE))
    context.cancel()
    result = solve_backtracking(context.board, context)
    assert result.cancelled and result.board is None
    print("  [PASS] Backtracking tests")


def test_factory():
    """Test solver registry."""
    banner("Solver Factory")

    assert get_strategy_names() == ["logical", "backtracking"]
    assert get_default_strategy_name() == "logical"

    info = {entry["name"]: entry for entry in get_strategy_info()}
    assert info["backtracking"]["time_complexity"] == "O(9^m)"
    assert info["logical"]["space_complexity"] == "O(n²)"

    try:
        create_strategy("x_wing")
    except ValueError as e:
        print(f"  Unknown solver rejected: {e}")
    else:
        raise AssertionError("Unknown solver accepted")
    print("  [PASS] Factory tests")


def main():
    """Run all tests."""
    print("\n" + "#" * 60)
    print("# SOLVER VALIDATION TESTS")
    print("#" * 60)

    tests = [
        ("Board", test_board_creation),
        ("is_valid", test_is_valid_exhaustive),
        ("Conflicts", test_conflicts),
        ("Candidates", test_candidates),
        ("Naked Pairs", test_naked_pairs),
        ("Hidden Pairs", test_hidden_pairs),
        ("Pointing Pairs", test_pointing_pairs),
        ("Monotonicity", test_eliminations_are_monotonic),
        ("Singles", test_singles),
        ("Logical Solver", test_logical_solver),
        ("Logical Config", test_logical_config),
        ("Backtracking", test_backtracking_solver),
        ("Factory", test_factory),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"  [FAIL] {e}")
            results.append((name, False))

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)

    all_passed = True
    for name, passed in results:
        status = "PASS" if passed else "FAIL"
        print(f"  {name}: [{status}]")
        if not passed:
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
