"""
Timing statistics for transform invocations.

A ``StatsAccumulator`` is owned by whoever orchestrates several invocations
(the CLI, a batch run) and passed to each one; the loader itself keeps no
process-wide state.
"""

import time
from contextlib import asynccontextmanager
from typing import Dict, Optional

from jitc.utils.logging import get_logger, log_transform_stats

logger = get_logger(__name__)


class StatsAccumulator:
    """Append-only aggregate of transform durations."""

    def __init__(self):
        self.total_ms: float = 0.0
        self.files: Dict[str, float] = {}

    @property
    def file_count(self) -> int:
        return len(self.files)

    def add(self, file: str, duration_ms: float) -> float:
        """
        Record one transform duration.

        Args:
            file: Transformed file
            duration_ms: Duration in milliseconds

        Returns:
            The new running total in milliseconds
        """
        self.files[file] = self.files.get(file, 0.0) + duration_ms
        self.total_ms += duration_ms
        return self.total_ms

    def get_summary(self) -> Dict[str, float]:
        summary = {
            "files": self.file_count,
            "total_ms": round(self.total_ms, 2),
        }
        if self.files:
            summary["max_ms"] = round(max(self.files.values()), 2)
            summary["avg_ms"] = round(self.total_ms / len(self.files), 2)
        return summary


class TransformStats:
    """
    Per-file timing of one transform.

    Does nothing when disabled, so callers can always call ``start``/``end``.
    """

    def __init__(self, file: str, enabled: bool, accumulator: Optional[StatsAccumulator] = None):
        self.file = file
        self.enabled = enabled
        self.accumulator = accumulator if accumulator is not None else StatsAccumulator()
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self.duration_ms: Optional[float] = None

    def start(self) -> None:
        if self.enabled:
            self.start_time = time.perf_counter()

    def end(self) -> None:
        """Stop the clock, add to the accumulator and log both figures."""
        if not self.enabled:
            return
        self.end_time = time.perf_counter()
        self.duration_ms = (self.end_time - self.start_time) * 1000
        total_ms = self.accumulator.add(self.file, self.duration_ms)
        log_transform_stats(logger, self.file, self.duration_ms, total_ms)


@asynccontextmanager
async def track_transform(stats: TransformStats):
    """
    Context manager timing a transform.

    Usage:
        async with track_transform(stats):
            result = await run_pipeline()
    """
    stats.start()
    try:
        yield stats
    finally:
        stats.end()
