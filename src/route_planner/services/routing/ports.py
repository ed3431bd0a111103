"""Capabilities the planner expects from external collaborators."""

from __future__ import annotations

from typing import Any, Literal, Mapping, Protocol, Sequence

from ...models.domain import Waypoint
from .models import RouteResult

SearchType = Literal["keyword", "address"]


class MapRenderer(Protocol):
    """Draws computed routes. Receives immutable snapshots only."""

    def render_route(self, result: RouteResult) -> None:
        ...

    def clear_route(self) -> None:
        ...


class PlaceSearch(Protocol):
    """Resolves free-text queries into candidate waypoints."""

    def search(self, query: str, *, search_type: SearchType = "keyword") -> Sequence[Waypoint]:
        ...


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float("nan")


def waypoint_from_place(document: Mapping[str, Any], *, search_type: SearchType = "keyword") -> Waypoint:
    """Convert a raw place-search document into a Waypoint.

    Documents carry longitude in ``x`` and latitude in ``y`` as strings.
    Unparseable coordinates become NaN so the assembler rejects them.
    """
    road_address = document.get("road_address")
    if isinstance(road_address, Mapping):
        road_address = road_address.get("address_name")
    road_address = road_address or document.get("road_address_name") or None

    if search_type == "keyword":
        name = document.get("place_name") or document.get("address_name") or ""
        category = document.get("category_name")
    else:
        name = document.get("address_name") or ""
        category = "address"

    return Waypoint(
        id=str(document.get("id") or f"{document.get('y')},{document.get('x')}"),
        name=name,
        lat=_to_float(document.get("y")),
        lng=_to_float(document.get("x")),
        address=document.get("address_name"),
        road_address=road_address,
        phone=document.get("phone") or None,
        category=category,
    )
