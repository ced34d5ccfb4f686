"""
Board Module - 9x9 Sudoku grid and the legal-placement primitive.
"""

from typing import Iterator, List, Optional, Tuple

import numpy as np

SIZE = 9
BOX = 3
EMPTY = 0
DIGITS = range(1, SIZE + 1)

Cell = Tuple[int, int]


class BoardError(ValueError):
    """Raised when a board cannot be built from the supplied data."""


class BoardShapeError(BoardError):
    """Board is not exactly 9x9."""


class BoardValueError(BoardError):
    """Board holds a value that is neither empty nor a digit 1-9."""


class Board:
    """
    Mutable 9x9 Sudoku board.

    Cells hold 0 for empty or a digit 1-9. The grid is a numpy array so
    row, column and box scans are plain slices. Search code mutates a
    board in place; anything handed to a caller is a copy.

    Attributes:
        grid: 9x9 numpy int8 array
    """

    def __init__(self, grid: Optional[np.ndarray] = None):
        if grid is None:
            grid = np.zeros((SIZE, SIZE), dtype=np.int8)
        try:
            grid = np.asarray(grid)
        except ValueError as e:
            # Ragged nested sequences
            raise BoardShapeError(f"Board must be {SIZE}x{SIZE}: {e}") from e
        if grid.shape != (SIZE, SIZE):
            raise BoardShapeError(f"Board must be {SIZE}x{SIZE}, got shape {grid.shape}")
        if not np.issubdtype(grid.dtype, np.integer):
            raise BoardValueError(f"Board values must be integers, got dtype {grid.dtype}")
        if grid.min() < 0 or grid.max() > SIZE:
            raise BoardValueError("Board values must be 0 (empty) or digits 1-9")
        self.grid = grid.astype(np.int8, copy=True)

    @classmethod
    def empty(cls) -> 'Board':
        """Create a board with every cell empty."""
        return cls()

    @classmethod
    def from_2d_list(cls, rows: List[List[Optional[int]]]) -> 'Board':
        """
        Create a Board from a 2D list.

        Args:
            rows: 9 rows of 9 cells; empty cells are None or 0

        Returns:
            Board instance

        Raises:
            BoardShapeError: If the list is not 9x9
            BoardValueError: If a cell is not None/0-9
        """
        if len(rows) != SIZE or any(len(row) != SIZE for row in rows):
            raise BoardShapeError(f"Board must have {SIZE} rows of {SIZE} cells")

        grid = np.zeros((SIZE, SIZE), dtype=np.int8)
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if value is None:
                    continue
                if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                    raise BoardValueError(f"Cell ({r},{c}) has non-integer value {value!r}")
                if not 0 <= value <= SIZE:
                    raise BoardValueError(f"Cell ({r},{c}) has out-of-range value {value}")
                grid[r, c] = value
        return cls(grid)

    @classmethod
    def from_string(cls, text: str) -> 'Board':
        """
        Create a Board from an 81-cell string.

        Digits 1-9 are givens, '0' or '.' mark empty cells and whitespace
        is ignored. Row-major order.

        Raises:
            BoardShapeError: If the string does not hold exactly 81 cells
            BoardValueError: If an unexpected character is found
        """
        cells = [ch for ch in text if not ch.isspace()]
        if len(cells) != SIZE * SIZE:
            raise BoardShapeError(f"Expected {SIZE * SIZE} cells, got {len(cells)}")

        values = []
        for index, ch in enumerate(cells):
            if ch == '.':
                values.append(EMPTY)
            elif ch.isdigit():
                values.append(int(ch))
            else:
                raise BoardValueError(f"Unexpected character {ch!r} at cell {index}")
        return cls(np.array(values, dtype=np.int8).reshape(SIZE, SIZE))

    def copy(self) -> 'Board':
        """Return an independent copy of this board."""
        return Board(self.grid)

    def get_cell(self, row: int, col: int) -> Optional[int]:
        """Get value at (row, col), or None if empty."""
        value = int(self.grid[row, col])
        return value if value != EMPTY else None

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Place a digit at (row, col)."""
        self.grid[row, col] = value

    def clear_cell(self, row: int, col: int) -> None:
        """Reset (row, col) to empty."""
        self.grid[row, col] = EMPTY

    def is_empty(self, row: int, col: int) -> bool:
        return self.grid[row, col] == EMPTY

    def find_empty(self) -> Optional[Cell]:
        """
        Find the first empty cell in row-major order.

        Returns:
            (row, col) of the first empty cell, or None if the board is full
        """
        positions = np.argwhere(self.grid == EMPTY)
        if positions.size == 0:
            return None
        return int(positions[0][0]), int(positions[0][1])

    def empty_cells(self) -> List[Cell]:
        """All empty cells in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.grid == EMPTY)]

    def count_filled(self) -> int:
        """Number of cells holding a digit."""
        return int(np.count_nonzero(self.grid))

    def is_complete(self) -> bool:
        """True if no cell is empty."""
        return self.count_filled() == SIZE * SIZE

    def diff(self, other: 'Board') -> List[Cell]:
        """
        Find cells that differ between this board and another.

        Args:
            other: Another Board to compare against

        Returns:
            List of (row, col) tuples where cells differ
        """
        if not isinstance(other, Board):
            raise TypeError("Can only diff against another Board")
        return [(int(r), int(c)) for r, c in np.argwhere(self.grid != other.grid)]

    def to_list(self) -> List[List[Optional[int]]]:
        """Convert to a 2D list with None for empty cells."""
        return [[int(v) if v != EMPTY else None for v in row] for row in self.grid]

    def to_string(self) -> str:
        """81-character row-major string with '.' for empty cells."""
        return "".join(str(int(v)) if v != EMPTY else "." for v in self.grid.ravel())

    def format(self) -> str:
        """Multi-line grid with box separators, for logs and the CLI."""
        lines = []
        for r in range(SIZE):
            if r and r % BOX == 0:
                lines.append("------+-------+------")
            cells = [str(int(v)) if v != EMPTY else "." for v in self.grid[r]]
            lines.append(" | ".join(" ".join(cells[i:i + BOX]) for i in range(0, SIZE, BOX)))
        return "\n".join(lines)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return False
        return bool(np.array_equal(self.grid, other.grid))

    def __hash__(self):
        return hash(self.grid.tobytes())

    def __repr__(self):
        return f"Board('{self.to_string()}')"


def is_valid(board: Board, row: int, col: int, value: int) -> bool:
    """
    Check whether value may be placed at (row, col).

    False if value already occurs in the row, the column, or the 3x3 box
    containing the cell. The cell's own content is not treated specially.
    """
    grid = board.grid
    if value in grid[row, :]:
        return False
    if value in grid[:, col]:
        return False

    r0 = (row // BOX) * BOX
    c0 = (col // BOX) * BOX
    if value in grid[r0:r0 + BOX, c0:c0 + BOX]:
        return False

    return True


def row_cells(row: int) -> List[Cell]:
    return [(row, c) for c in range(SIZE)]


def col_cells(col: int) -> List[Cell]:
    return [(r, col) for r in range(SIZE)]


def box_cells(box_row: int, box_col: int) -> List[Cell]:
    """Cells of the box whose top-left corner is (box_row, box_col)."""
    return [(r, c)
            for r in range(box_row, box_row + BOX)
            for c in range(box_col, box_col + BOX)]


def all_units() -> Iterator[Tuple[str, List[Cell]]]:
    """Yield ("row"|"column"|"box", cells) for all 27 units."""
    for row in range(SIZE):
        yield "row", row_cells(row)
    for col in range(SIZE):
        yield "column", col_cells(col)
    for box_row in range(0, SIZE, BOX):
        for box_col in range(0, SIZE, BOX):
            yield "box", box_cells(box_row, box_col)


def find_conflicts(board: Board) -> List[str]:
    """
    List duplicate digits among the filled cells of each unit.

    Returns:
        One message per offending unit; empty if the board is consistent
    """
    conflicts = []
    for kind, cells in all_units():
        values = [int(board.grid[r, c]) for r, c in cells if board.grid[r, c] != EMPTY]
        if len(values) == len(set(values)):
            continue
        duplicates = sorted({v for v in values if values.count(v) > 1})
        r, c = cells[0]
        if kind == "row":
            where = f"Row {r + 1}"
        elif kind == "column":
            where = f"Column {c + 1}"
        else:
            where = f"3x3 box ({r // BOX + 1},{c // BOX + 1})"
        conflicts.append(f"{where} has duplicate digit(s) {', '.join(map(str, duplicates))}")
    return conflicts


def is_solved_grid(board: Board) -> bool:
    """True if the board is full and has no duplicate in any unit."""
    return board.is_complete() and not find_conflicts(board)
