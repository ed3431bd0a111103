"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ..routing.models import RouteResult


def route_result_metadata(result: RouteResult) -> dict:
    return {
        "status": "cancelled" if result.cancelled else "complete",
        "stops": len(result.route),
        "iterations": result.iterations,
        "converged": result.converged,
        "dropped_ids": list(result.dropped_ids),
    }


def route_result_to_json(result: RouteResult) -> dict:
    return {
        "mode": result.mode.value,
        "route": [asdict(waypoint) for waypoint in result.route],
        "legs": [asdict(leg) for leg in result.legs],
        "total_distance_km": result.total_distance_km,
        "metadata": route_result_metadata(result),
    }


def route_result_to_csv(result: RouteResult) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "sequence",
        "waypoint_id",
        "name",
        "lat",
        "lng",
        "distance_to_next_km",
        "cumulative_distance_km",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    cumulative = 0.0
    for index, waypoint in enumerate(result.route):
        leg = result.legs[index] if index < len(result.legs) else None
        writer.writerow(
            {
                "sequence": index + 1,
                "waypoint_id": waypoint.id,
                "name": waypoint.name,
                "lat": waypoint.lat,
                "lng": waypoint.lng,
                "distance_to_next_km": leg.distance_km if leg else "",
                "cumulative_distance_km": cumulative,
            }
        )
        if leg:
            cumulative += leg.distance_km
    return buffer.getvalue()
