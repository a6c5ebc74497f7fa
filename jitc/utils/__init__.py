"""
Utility modules for the await try/catch injector.
"""

from jitc.utils.logging import (
    get_logger,
    setup_logging,
    log_transform_stats,
    log_error_with_context,
)
from jitc.utils.metrics import (
    StatsAccumulator,
    TransformStats,
    track_transform,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "log_transform_stats",
    "log_error_with_context",
    "StatsAccumulator",
    "TransformStats",
    "track_transform",
]
