"""
Placement Module - A single digit placed by a logical technique.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Placement:
    """
    Represents one digit placed on the board by a logical technique.

    Attributes:
        row: Row index
        col: Column index
        value: Digit placed (1-9)
        technique: Name of the technique that found it
        unit: Unit that forced it ("cell", "row", "column" or "box")
    """
    row: int
    col: int
    value: int
    technique: str
    unit: str = "cell"

    @property
    def cell(self):
        """(row, col) of the placement."""
        return (self.row, self.col)

    def describe(self) -> str:
        """Short log-friendly description."""
        return f"[{self.technique}] Placed {self.value} at [{self.row},{self.col}] ({self.unit})"
