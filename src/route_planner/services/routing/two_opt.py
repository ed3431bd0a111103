"""2-opt local search over open paths.

The optimizer uses a first-improvement policy: each pass scans ``(i, j)``
pairs in a fixed order, accepts the first reversal that strictly shortens the
path, and ends. The next pass restarts the scan from ``i = 0``. A pass that
finds nothing means the order is 2-opt locally optimal. The number of passes
is capped, so a call costs at most ``max_iterations`` scans of ``O(n^2)``
candidates with an ``O(n)`` length evaluation each; this is meant for
interactive waypoint counts (tens, not thousands).

Candidate lengths are recomputed in full rather than by edge deltas so that
acceptance decisions are reproducible bit for bit.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from .matrix import path_length
from .models import TwoOptResult

DEFAULT_MAX_ITERATIONS = 100

logger = logging.getLogger(__name__)


def two_opt_swap(order: Sequence[int], i: int, j: int) -> list[int]:
    """Return a copy of ``order`` with positions ``i+1 .. j`` reversed."""
    return [*order[: i + 1], *reversed(order[i + 1 : j + 1]), *order[j + 1 :]]


def optimize_order(
    matrix: Sequence[Sequence[float]],
    initial_order: Sequence[int] | None = None,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    should_stop: Callable[[], bool] | None = None,
) -> TwoOptResult:
    """Reorder indices of ``matrix`` to shorten the open path visiting all of them.

    Args:
        matrix: Symmetric distance matrix.
        initial_order: Starting permutation; identity when omitted.
        max_iterations: Maximum number of improvement passes.
        should_stop: Polled between passes; returning True ends the search
            early with the best order found so far.

    Returns:
        TwoOptResult whose ``length`` never exceeds the initial order's length.
    """
    route = list(initial_order) if initial_order is not None else list(range(len(matrix)))
    best_distance = path_length(route, matrix)

    if len(route) < 3:
        return TwoOptResult(order=route, length=best_distance, iterations=0, converged=True)

    improved = True
    iterations = 0
    cancelled = False

    while improved and iterations < max_iterations:
        if should_stop is not None and should_stop():
            cancelled = True
            break
        improved = False
        iterations += 1

        for i in range(len(route) - 2):
            for j in range(i + 2, len(route)):
                candidate = two_opt_swap(route, i, j)
                candidate_distance = path_length(candidate, matrix)
                if candidate_distance < best_distance:
                    route = candidate
                    best_distance = candidate_distance
                    improved = True
                    break
            if improved:
                break

    converged = not improved and not cancelled
    if improved and iterations >= max_iterations:
        logger.warning(
            f"2-opt stopped at the iteration cap ({max_iterations}) before reaching a local optimum "
            f"for {len(route)} points"
        )
    return TwoOptResult(
        order=route,
        length=best_distance,
        iterations=iterations,
        converged=converged,
        cancelled=cancelled,
    )
