"""Pairwise distance matrices over waypoint sequences."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Waypoint
from ..geospatial import distance_km


def build_distance_matrix(waypoints: Sequence[Waypoint]) -> list[list[float]]:
    """Return the symmetric haversine distance matrix for ``waypoints``.

    Row/column ``i`` corresponds to ``waypoints[i]``; callers keep the mapping
    back to waypoint identity.
    """
    n = len(waypoints)
    matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            distance = distance_km(waypoints[i], waypoints[j])
            matrix[i][j] = distance
            matrix[j][i] = distance
    return matrix


def path_length(order: Sequence[int], matrix: Sequence[Sequence[float]]) -> float:
    """Sum of consecutive edge weights along ``order`` (open path, no return edge)."""
    total = 0.0
    for i in range(len(order) - 1):
        total += matrix[order[i]][order[i + 1]]
    return total
