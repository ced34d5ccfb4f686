"""
Logical Solver Configuration - Which elimination techniques are enabled.

StrategyFlags is an immutable value passed explicitly to the logical
solver. A process-wide default is kept for callers that select techniques
up front and create solvers later; it is read once per solve and only
when no flags were passed.
"""

import logging
import threading
from dataclasses import dataclass, fields, replace
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyFlags:
    """
    Elimination techniques enabled for the logical solver.

    Attributes:
        pointing_pairs: Apply pointing pairs / box-line reduction
        naked_pairs: Apply naked pairs
        hidden_pairs: Apply hidden pairs
    """
    pointing_pairs: bool = False
    naked_pairs: bool = False
    hidden_pairs: bool = False

    @classmethod
    def all_enabled(cls) -> 'StrategyFlags':
        return cls(pointing_pairs=True, naked_pairs=True, hidden_pairs=True)

    def enabled_names(self):
        """Names of the enabled techniques, in application order."""
        order = ("naked_pairs", "hidden_pairs", "pointing_pairs")
        return [name for name in order if getattr(self, name)]


_DEFAULT_FLAGS = StrategyFlags()
_config = _DEFAULT_FLAGS
_lock = threading.Lock()


def get_logical_config() -> StrategyFlags:
    """Current process-wide default flags."""
    with _lock:
        return _config


def set_logical_config(**changes: Any) -> StrategyFlags:
    """
    Update some of the process-wide default flags.

    Args:
        **changes: Flag names and new values

    Returns:
        The updated flags

    Raises:
        ValueError: If an unknown flag name is given
    """
    known = {f.name for f in fields(StrategyFlags)}
    unknown = set(changes) - known
    if unknown:
        raise ValueError(f"Unknown logical solver option(s): {', '.join(sorted(unknown))}")

    global _config
    with _lock:
        _config = replace(_config, **{k: bool(v) for k, v in changes.items()})
        logger.debug(f"Logical solver config: {_config}")
        return _config


def reset_logical_config() -> StrategyFlags:
    """Restore all flags to off."""
    global _config
    with _lock:
        _config = _DEFAULT_FLAGS
        return _config
