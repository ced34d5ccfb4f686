"""
Strategies Package - Built-in solvers.

Import this module to register them.
"""

from .logical import LogicalStrategy
from .backtracking import BacktrackingStrategy

__all__ = [
    "LogicalStrategy",
    "BacktrackingStrategy",
]
