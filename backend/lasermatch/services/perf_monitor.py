"""Performance monitoring utilities for the workspace matching engine."""
import time
import logging
import threading
import functools
from typing import Any, Callable, Dict

logger = logging.getLogger("lasermatch.perf")


def timed(func: Callable) -> Callable:
    """
    Decorator that measures and logs execution time for synchronous functions.

    Usage::

        @timed
        def match_workspace(...):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.debug(
                "function timed",
                extra={
                    "function_name": func.__qualname__,
                    "duration_ms": duration_ms,
                },
            )
    return wrapper


class MatchTracker:
    """
    Thread-safe in-memory counters for match runs.

    Tracks:
    - Match runs completed
    - Candidate surfaces evaluated across all runs
    - Runs rejected by input validation
    - Cost estimates produced
    - API requests and 4xx rejections per route
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._matches_completed: int = 0
        self._candidates_evaluated: int = 0
        self._validation_failures: int = 0
        self._cost_estimates: int = 0
        self._requests_by_route: Dict[str, int] = {}
        self._rejections_by_route: Dict[str, int] = {}

    def record_match(self, candidate_count: int) -> None:
        with self._lock:
            self._matches_completed += 1
            self._candidates_evaluated += candidate_count

    def record_validation_failure(self) -> None:
        with self._lock:
            self._validation_failures += 1

    def record_cost_estimate(self) -> None:
        with self._lock:
            self._cost_estimates += 1

    def record_request(self, route: str, rejected: bool = False) -> None:
        with self._lock:
            self._requests_by_route[route] = self._requests_by_route.get(route, 0) + 1
            if rejected:
                self._rejections_by_route[route] = self._rejections_by_route.get(route, 0) + 1

    def get_metrics(self) -> Dict[str, Any]:
        """
        Return a snapshot of all collected metrics.

        Returns
        -------
        dict with keys:
            matches_completed     : int
            candidates_evaluated  : int
            avg_candidates_per_match : float  (0 if none completed)
            validation_failures   : int
            cost_estimates        : int
            requests_by_route     : dict  {route: count}
            rejections_by_route   : dict  {route: 4xx count}
        """
        with self._lock:
            avg = (
                round(self._candidates_evaluated / self._matches_completed, 2)
                if self._matches_completed > 0
                else 0.0
            )
            return {
                "matches_completed": self._matches_completed,
                "candidates_evaluated": self._candidates_evaluated,
                "avg_candidates_per_match": avg,
                "validation_failures": self._validation_failures,
                "cost_estimates": self._cost_estimates,
                "requests_by_route": dict(self._requests_by_route),
                "rejections_by_route": dict(self._rejections_by_route),
            }

    def reset(self) -> None:
        """Reset all counters (useful in tests)."""
        with self._lock:
            self._matches_completed = 0
            self._candidates_evaluated = 0
            self._validation_failures = 0
            self._cost_estimates = 0
            self._requests_by_route.clear()
            self._rejections_by_route.clear()


# Module-level singleton; import this instance everywhere else.
tracker = MatchTracker()
