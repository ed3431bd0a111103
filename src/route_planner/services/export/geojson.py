"""GeoJSON export utilities for computed routes."""

from __future__ import annotations

from typing import Any, Dict, List

from shapely.geometry import LineString, Point, mapping

from ..routing.models import RouteResult


def route_to_linestring(result: RouteResult) -> LineString:
    """Build the route path as a shapely LineString (x = lng, y = lat).

    Raises:
        ValueError: If the route has fewer than 2 stops.
    """
    if len(result.route) < 2:
        raise ValueError("LineString must have at least 2 coordinates")
    return LineString([(waypoint.lng, waypoint.lat) for waypoint in result.route])


def route_bounds(result: RouteResult) -> Dict[str, float]:
    """Bounding box of all stops, for fitting a map viewport."""
    min_lng, min_lat, max_lng, max_lat = route_to_linestring(result).bounds
    return {"south": min_lat, "west": min_lng, "north": max_lat, "east": max_lng}


def export_route_to_geojson(result: RouteResult) -> Dict[str, Any]:
    """Convert a route into a GeoJSON FeatureCollection.

    One Point feature per stop (with its sequence number and distance to the
    next stop) followed by one LineString feature for the whole path.
    """
    last = len(result.route) - 1
    features: List[Dict[str, Any]] = []

    for index, waypoint in enumerate(result.route):
        if index == 0:
            role = "start"
        elif index == last:
            role = "end"
        else:
            role = "stop"
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(Point(waypoint.lng, waypoint.lat)),
                "properties": {
                    "id": waypoint.id,
                    "name": waypoint.name,
                    "sequence": index + 1,
                    "role": role,
                    "address": waypoint.address,
                    "road_address": waypoint.road_address,
                    "phone": waypoint.phone,
                    "category": waypoint.category,
                    "distance_to_next_km": result.legs[index].distance_km if index < last else None,
                },
            }
        )

    features.append(
        {
            "type": "Feature",
            "geometry": mapping(route_to_linestring(result)),
            "properties": {
                "mode": result.mode.value,
                "total_distance_km": result.total_distance_km,
                "stops": len(result.route),
            },
        }
    )

    return {
        "type": "FeatureCollection",
        "features": features,
        "bbox": list(route_to_linestring(result).bounds),
    }
