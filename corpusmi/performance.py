"""
Progress and performance reporting utilities for corpusmi.

Counting runs over a whole corpus in one pass, so these helpers only
report what is going on: progress lines while counting, timing of slow
operations, and warnings when tables grow very large. Messages go to
standard error so they never mix with scores written to standard output.

Classes:
    ProgressTracker: Progress tracking for long-running counting passes
    PerformanceMonitor: Timing of slow operations
    MemoryOptimizer: Table size checks

Example:
    Performance monitoring::

        from corpusmi.performance import PerformanceMonitor

        with PerformanceMonitor("Scoring tuples") as monitor:
            table = mi_table(collector)

        print(f"Operation took {monitor.elapsed_time:.2f} seconds")

.. codeauthor:: corpusmi contributors
"""

import sys
import time
import warnings
from typing import Optional

from .config import CONFIG
from .validation import PerformanceWarning


def _report(message: str):
    print(message, file=sys.stderr)


class ProgressTracker:
    """
    Lightweight progress tracking for long-running operations.

    The total is usually unknown while streaming a corpus, in which case a
    line is reported every ``CONFIG.PROGRESS_INTERVAL`` items.
    """

    def __init__(
        self,
        total: Optional[int] = None,
        description: str = "Processing",
        show_progress: Optional[bool] = None,
    ):
        self.total = total
        self.description = description
        self.current = 0
        self.start_time = time.time()
        if show_progress is None:
            show_progress = CONFIG.SHOW_PROGRESS
        self.show_progress = show_progress

        if self.show_progress:
            if total is None:
                _report(f"Starting {description}...")
            else:
                _report(f"Starting {description} ({total:,} items)...")

    def _interval(self) -> int:
        if self.total is None:
            return max(1, CONFIG.PROGRESS_INTERVAL)
        return max(1, self.total // 10)

    def update(self, increment: int = 1):
        """Update progress counter."""
        previous = self.current
        self.current += increment

        if not self.show_progress:
            return

        interval = self._interval()
        if self.current // interval == previous // interval:
            return

        elapsed = time.time() - self.start_time
        rate = self.current / elapsed if elapsed > 0 else 0

        if self.total is None:
            _report(
                f"{self.description}: {self.current:,} items [{rate:.1f} items/sec]"
            )
        else:
            percent = (self.current / self.total) * 100
            _report(
                f"{self.description}: {percent:.1f}% ({self.current:,}/{self.total:,}) "  # noqa: E501
                f"[{rate:.1f} items/sec]"
            )

    def finish(self):
        """Mark progress as complete."""
        if self.show_progress:
            elapsed = time.time() - self.start_time
            _report(
                f"{self.description} completed in {elapsed:.2f}s "
                f"({self.current:,} items processed)"
            )


class PerformanceMonitor:
    """Monitor the duration of an operation."""

    def __init__(self, operation: str, threshold: Optional[float] = None):
        self.operation = operation
        self.threshold = (
            CONFIG.SLOW_OPERATION_SECONDS if threshold is None else threshold
        )
        self.start_time = None
        self.end_time = None

    @property
    def elapsed_time(self) -> float:
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time

    def __enter__(self):
        self.start_time = time.time()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.time()
        elapsed = self.elapsed_time

        if elapsed > self.threshold:
            _report(f"Performance: {self.operation} completed in {elapsed:.2f}s")


class MemoryOptimizer:
    """Utilities for keeping an eye on table sizes."""

    @staticmethod
    def is_large_table(n_entries: int) -> bool:
        """Check if a joint table is large enough to strain memory."""
        return n_entries > CONFIG.LARGE_TABLE_THRESHOLD

    @staticmethod
    def warn_if_large(n_entries: int, context: str = ""):
        """Warn when a table is large enough to strain memory."""
        if MemoryOptimizer.is_large_table(n_entries):
            warnings.warn(
                f"Large joint table ({n_entries:,} distinct tuples) {context}. "
                "Consider pruning rare tuples with TupleCollector.prune() "
                "before building tables.",
                PerformanceWarning,
            )
