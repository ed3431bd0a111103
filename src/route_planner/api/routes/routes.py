"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, status

from ...schemas.routing import RouteErrorModel, RouteLegModel, RouteRequest, RouteResponse, WaypointModel
from ...services.export.geojson import export_route_to_geojson, route_bounds
from ...services.outputs.routing_formatter import route_result_metadata, route_result_to_csv
from ...services.routing.models import RouteFailure, RouteResult
from ...services.routing.service import PlannerBusyError, get_planner

router = APIRouter(prefix="/routes", tags=["routes"])

logger = logging.getLogger(__name__)


def _compute(payload: RouteRequest) -> RouteResult:
    try:
        outcome = get_planner().compute(
            [waypoint.to_domain() for waypoint in payload.waypoints],
            start_id=payload.start_id,
            end_id=payload.end_id,
        )
    except PlannerBusyError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc

    if isinstance(outcome, RouteFailure):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=RouteErrorModel(
                code=outcome.code.value,
                message=outcome.message,
                waypoint_ids=list(outcome.waypoint_ids),
            ).model_dump(),
        )
    return outcome


@router.post("/optimize", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RouteRequest) -> RouteResponse:
    result = _compute(payload)
    metadata = route_result_metadata(result)
    metadata["bounds"] = route_bounds(result)
    return RouteResponse(
        mode=result.mode.value,
        route=[WaypointModel.from_domain(waypoint) for waypoint in result.route],
        legs=[
            RouteLegModel(
                sequence=leg.sequence,
                from_id=leg.from_id,
                to_id=leg.to_id,
                distance_km=leg.distance_km,
            )
            for leg in result.legs
        ],
        total_distance_km=result.total_distance_km,
        metadata=metadata,
    )


@router.post("/optimize.csv", status_code=status.HTTP_200_OK)
def optimize_csv(payload: RouteRequest) -> Response:
    result = _compute(payload)
    return Response(content=route_result_to_csv(result), media_type="text/csv")


@router.post("/optimize.geojson", status_code=status.HTTP_200_OK)
def optimize_geojson(payload: RouteRequest) -> dict:
    result = _compute(payload)
    return export_route_to_geojson(result)
