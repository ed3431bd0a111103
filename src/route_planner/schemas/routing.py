"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.domain import Waypoint


class WaypointModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = ""
    # Range checks live in the assembler so that malformed points produce a typed failure.
    lat: float
    lng: float
    address: Optional[str] = None
    road_address: Optional[str] = Field(default=None, alias="roadAddress")
    phone: Optional[str] = None
    category: Optional[str] = None

    def to_domain(self) -> Waypoint:
        return Waypoint(
            id=self.id,
            name=self.name,
            lat=self.lat,
            lng=self.lng,
            address=self.address,
            road_address=self.road_address,
            phone=self.phone,
            category=self.category,
        )

    @classmethod
    def from_domain(cls, waypoint: Waypoint) -> "WaypointModel":
        return cls(
            id=waypoint.id,
            name=waypoint.name,
            lat=waypoint.lat,
            lng=waypoint.lng,
            address=waypoint.address,
            road_address=waypoint.road_address,
            phone=waypoint.phone,
            category=waypoint.category,
        )


class RouteRequest(BaseModel):
    waypoints: List[WaypointModel]
    start_id: Optional[str] = Field(default=None, description="Pinned first waypoint (requires end_id).")
    end_id: Optional[str] = Field(default=None, description="Pinned last waypoint (requires start_id).")


class RouteLegModel(BaseModel):
    sequence: int
    from_id: str
    to_id: str
    distance_km: float


class RouteResponse(BaseModel):
    mode: str
    route: List[WaypointModel]
    legs: List[RouteLegModel]
    total_distance_km: float
    metadata: dict


class RouteErrorModel(BaseModel):
    code: str
    message: str
    waypoint_ids: List[str] = Field(default_factory=list)
