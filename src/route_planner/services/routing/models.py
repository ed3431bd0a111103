"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from ...models.domain import Waypoint
from ..geospatial import distance_km


class RouteMode(str, Enum):
    FREE = "free"
    FIXED_ENDPOINTS = "fixed_endpoints"


class RouteErrorCode(str, Enum):
    INVALID_WAYPOINT_COUNT = "invalid_waypoint_count"
    INVALID_COORDINATE = "invalid_coordinate"
    DUPLICATE_WAYPOINT = "duplicate_waypoint"
    TOO_MANY_WAYPOINTS = "too_many_waypoints"


@dataclass(frozen=True, slots=True)
class RouteLeg:
    sequence: int
    from_id: str
    to_id: str
    distance_km: float


@dataclass(frozen=True, slots=True)
class TwoOptResult:
    order: List[int]
    length: float
    iterations: int
    converged: bool
    cancelled: bool = False


@dataclass(frozen=True)
class RouteResult:
    """Immutable snapshot of an optimized route.

    Legs and the total are computed from ``route`` when the snapshot is built,
    so they cannot drift from the stop order.
    """

    mode: RouteMode
    route: Tuple[Waypoint, ...]
    iterations: int = 0
    converged: bool = True
    cancelled: bool = False
    dropped_ids: Tuple[str, ...] = ()
    legs: Tuple[RouteLeg, ...] = field(init=False)
    total_distance_km: float = field(init=False)

    def __post_init__(self) -> None:
        route = tuple(self.route)
        legs = tuple(
            RouteLeg(
                sequence=index,
                from_id=current.id,
                to_id=following.id,
                distance_km=distance_km(current, following),
            )
            for index, (current, following) in enumerate(zip(route, route[1:]), start=1)
        )
        object.__setattr__(self, "route", route)
        object.__setattr__(self, "dropped_ids", tuple(self.dropped_ids))
        object.__setattr__(self, "legs", legs)
        object.__setattr__(self, "total_distance_km", sum(leg.distance_km for leg in legs))

    @property
    def waypoint_ids(self) -> list[str]:
        return [waypoint.id for waypoint in self.route]


@dataclass(frozen=True, slots=True)
class RouteFailure:
    code: RouteErrorCode
    message: str
    waypoint_ids: Tuple[str, ...] = ()
