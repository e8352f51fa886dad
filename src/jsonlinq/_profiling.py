"""
Opt-in hot path profiling for the parser and writer.

Setting JSONLINQ_PROFILE in the environment turns ProfileContext into a
timing context manager; otherwise it is a no-op and the stats accessors
return empty results.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "JSONLINQ_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during parsing and dumping."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        """Records a function call with timing and character processing info."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars

    @property
    def average_time_ns(self) -> float:
        return self.total_time_ns / self.call_count if self.call_count else 0.0


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    def record_hot_path(func_name: str, duration_ns: int, chars: int = 0) -> None:
        """Adds one timed call to the stats of func_name."""
        stats = _hot_path_stats.get(func_name)
        if stats is None:
            stats = _hot_path_stats[func_name] = HotPathStats(func_name)
        stats.record_call(duration_ns, chars)

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, chars_to_process: int = 0):
            self.func_name = func_name
            self.chars = chars_to_process
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            record_hot_path(self.func_name, duration, self.chars)

        def processed(self, chars: int) -> None:
            """Sets the character count once it is known."""
            self.chars = chars

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    def record_hot_path(func_name: str, duration_ns: int, chars: int = 0) -> None:
        pass

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, chars_to_process: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

        def processed(self, chars: int) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


def log_hot_path_stats(level: int = logging.INFO) -> None:
    """
    Emits one log record per profiled hot path.

    Paths are ordered by total time spent so the most expensive ones come
    first. Nothing is logged when profiling is disabled.
    """
    stats = sorted(
        get_hot_path_stats().values(),
        key=lambda s: s.total_time_ns,
        reverse=True,
    )
    for entry in stats:
        logger.log(
            level,
            "%s: %d calls, %d ns total, %.1f ns avg, %d chars",
            entry.function_name,
            entry.call_count,
            entry.total_time_ns,
            entry.average_time_ns,
            entry.chars_processed,
        )
