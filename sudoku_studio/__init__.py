"""
Sudoku Studio

Logical and backtracking Sudoku solvers with an instrumented search that
records its decision tree.

This package contains modules for:
- The solving core (sudoku_studio.solver)
- Persistent settings
- A background worker that streams search progress via Qt signals
"""

__version__ = "1.0.0"
