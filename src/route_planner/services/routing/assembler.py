"""Route assembly for free and fixed-endpoint optimization."""

from __future__ import annotations

import logging
from typing import Callable, Literal, Sequence

from ...models.domain import Waypoint
from ..geospatial import is_valid_coordinate
from .matrix import build_distance_matrix
from .models import RouteErrorCode, RouteFailure, RouteMode, RouteResult
from .two_opt import DEFAULT_MAX_ITERATIONS, optimize_order

logger = logging.getLogger(__name__)


def _find_duplicates(waypoints: Sequence[Waypoint]) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for waypoint in waypoints:
        if waypoint.id in seen and waypoint.id not in duplicates:
            duplicates.append(waypoint.id)
        seen.add(waypoint.id)
    return duplicates


def _optimize(
    waypoints: Sequence[Waypoint],
    max_iterations: int,
    should_stop: Callable[[], bool] | None,
):
    matrix = build_distance_matrix(waypoints)
    result = optimize_order(matrix, max_iterations=max_iterations, should_stop=should_stop)
    return [waypoints[index] for index in result.order], result


def assemble_route(
    waypoints: Sequence[Waypoint],
    *,
    start_id: str | None = None,
    end_id: str | None = None,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    should_stop: Callable[[], bool] | None = None,
    invalid_coordinates: Literal["reject", "filter"] = "reject",
) -> RouteResult | RouteFailure:
    """Validate ``waypoints`` and build an optimized route.

    Without endpoints every waypoint is reordered (free mode). With both
    ``start_id`` and ``end_id`` only the interior waypoints are reordered and
    the route is pinned between the two.

    All validation happens here, before any distance is computed. Invalid
    input is reported as a RouteFailure rather than raised.
    """
    waypoints = list(waypoints)

    duplicates = _find_duplicates(waypoints)
    if duplicates:
        return RouteFailure(
            code=RouteErrorCode.DUPLICATE_WAYPOINT,
            message=f"Waypoint ids must be unique; duplicated: {', '.join(duplicates)}.",
            waypoint_ids=tuple(duplicates),
        )

    if (start_id is None) != (end_id is None):
        return RouteFailure(
            code=RouteErrorCode.INVALID_WAYPOINT_COUNT,
            message="Both a start and an end waypoint are required when either is given.",
            waypoint_ids=tuple(wid for wid in (start_id, end_id) if wid is not None),
        )

    fixed = start_id is not None
    malformed = [waypoint for waypoint in waypoints if not is_valid_coordinate(waypoint.lat, waypoint.lng)]
    dropped_ids: tuple[str, ...] = ()
    if malformed:
        malformed_ids = tuple(waypoint.id for waypoint in malformed)
        pinned_malformed = [wid for wid in malformed_ids if fixed and wid in (start_id, end_id)]
        if invalid_coordinates == "reject" or pinned_malformed:
            offending = tuple(pinned_malformed) if invalid_coordinates == "filter" else malformed_ids
            return RouteFailure(
                code=RouteErrorCode.INVALID_COORDINATE,
                message=f"Waypoints with invalid coordinates: {', '.join(offending)}.",
                waypoint_ids=offending,
            )
        logger.warning(f"Dropping {len(malformed_ids)} waypoint(s) with invalid coordinates: {malformed_ids}")
        waypoints = [waypoint for waypoint in waypoints if waypoint.id not in malformed_ids]
        dropped_ids = malformed_ids

    if not fixed:
        if len(waypoints) < 2:
            return RouteFailure(
                code=RouteErrorCode.INVALID_WAYPOINT_COUNT,
                message=f"At least 2 waypoints are required; got {len(waypoints)}.",
                waypoint_ids=tuple(waypoint.id for waypoint in waypoints),
            )
        ordered, search = _optimize(waypoints, max_iterations, should_stop)
        return RouteResult(
            mode=RouteMode.FREE,
            route=tuple(ordered),
            iterations=search.iterations,
            converged=search.converged,
            cancelled=search.cancelled,
            dropped_ids=dropped_ids,
        )

    if start_id == end_id:
        return RouteFailure(
            code=RouteErrorCode.INVALID_WAYPOINT_COUNT,
            message="Start and end waypoints must be different.",
            waypoint_ids=(start_id,),
        )

    lookup = {waypoint.id: waypoint for waypoint in waypoints}
    missing = tuple(wid for wid in (start_id, end_id) if wid not in lookup)
    if missing:
        return RouteFailure(
            code=RouteErrorCode.INVALID_WAYPOINT_COUNT,
            message=f"Endpoint waypoints not found in the waypoint set: {', '.join(missing)}.",
            waypoint_ids=missing,
        )

    interior = [waypoint for waypoint in waypoints if waypoint.id not in (start_id, end_id)]
    if len(interior) < 2:
        ordered_interior, iterations, converged, cancelled = interior, 0, True, False
    else:
        ordered_interior, search = _optimize(interior, max_iterations, should_stop)
        iterations, converged, cancelled = search.iterations, search.converged, search.cancelled

    return RouteResult(
        mode=RouteMode.FIXED_ENDPOINTS,
        route=(lookup[start_id], *ordered_interior, lookup[end_id]),
        iterations=iterations,
        converged=converged,
        cancelled=cancelled,
        dropped_ids=dropped_ids,
    )
