"""
Solution Context Module - Shared context for solver execution.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .board import Board


@dataclass
class SolutionContext:
    """
    Shared context passed to solvers containing the board,
    cancellation, and progress reporting.

    Attributes:
        board: Board to solve (solvers work on a copy)
        cancel_flag: Threading event for cancellation
        timeout_sec: Maximum computation time in seconds (None = no limit)
        start_time: When computation started
        progress_callback: Optional callback for progress updates
    """
    board: Board
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[float, str], None]] = None

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested or timeout exceeded.

        Returns:
            True if the solver should stop
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and time.time() - self.start_time > self.timeout_sec:
            return True
        return False

    def cancel(self) -> None:
        """Request cancellation."""
        self.cancel_flag.set()

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)
