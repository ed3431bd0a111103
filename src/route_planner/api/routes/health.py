"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/planner", status_code=status.HTTP_200_OK)
def health_planner() -> dict:
    """Report the route planner state and its configured limits."""
    from ...services.routing.service import get_planner

    planner = get_planner()
    return {
        "service": "planner",
        "state": planner.state.value,
        "max_iterations": planner.max_iterations,
        "max_waypoints": planner.max_waypoints,
        "oversize_policy": planner.oversize_policy,
        "invalid_coordinate_policy": planner.invalid_coordinate_policy,
    }
