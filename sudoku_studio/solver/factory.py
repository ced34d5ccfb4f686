"""
Solver Factory Module - Registry and factory for solver instantiation.
"""

from typing import Any, Dict, List, Optional, Type

from .base import SolverStrategy


# Registry of built-in solvers, in display order
_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}

DEFAULT_STRATEGY = "logical"


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Decorator to register a solver class.

    Usage:
        @register_strategy
        class LogicalStrategy(SolverStrategy):
            name = "logical"
            ...

    Args:
        cls: Solver class to register

    Returns:
        The same class (for decorator chaining)
    """
    _STRATEGIES[cls.name] = cls
    return cls


def create_strategy(name: str, **kwargs: Any) -> SolverStrategy:
    """
    Create a solver instance by name.

    Args:
        name: Solver name ("logical" or "backtracking")
        **kwargs: Additional arguments passed to the solver constructor

    Returns:
        Solver instance

    Raises:
        ValueError: If solver name not found
    """
    if name not in _STRATEGIES:
        available = ", ".join(_STRATEGIES.keys())
        raise ValueError(f"Unknown solver: {name}. Available: {available}")
    return _STRATEGIES[name](**kwargs)


def get_strategy_names() -> List[str]:
    """List of registered solver names."""
    return list(_STRATEGIES.keys())


def get_strategy_info() -> List[Dict[str, Optional[str]]]:
    """
    Get name, description and complexity labels for all registered solvers.

    Returns:
        List of dicts with 'name', 'description', 'time_complexity'
        and 'space_complexity' keys
    """
    return [
        {
            "name": cls.name,
            "description": cls.description,
            "time_complexity": cls.time_complexity,
            "space_complexity": cls.space_complexity,
        }
        for cls in _STRATEGIES.values()
    ]


def get_default_strategy_name() -> str:
    """
    Get the default solver name.

    Returns:
        "logical" if available, else first registered
    """
    if DEFAULT_STRATEGY in _STRATEGIES:
        return DEFAULT_STRATEGY
    if _STRATEGIES:
        return next(iter(_STRATEGIES.keys()))
    return ""
