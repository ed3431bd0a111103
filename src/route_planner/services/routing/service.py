"""Routing orchestration service."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Sequence

from ...config import settings
from ...models.domain import Waypoint
from .assembler import assemble_route
from .models import RouteErrorCode, RouteFailure, RouteResult
from .ports import MapRenderer

logger = logging.getLogger(__name__)


class PlannerState(str, Enum):
    IDLE = "idle"
    COMPUTING = "computing"


class PlannerBusyError(RuntimeError):
    """Raised when a computation is requested while another is in flight."""


class RoutePlanner:
    """Runs route computations one at a time.

    A request that arrives while another is computing is rejected with
    PlannerBusyError rather than queued. ``cancel()`` asks the running
    computation to stop after its current 2-opt pass.
    """

    def __init__(
        self,
        renderer: MapRenderer | None = None,
        *,
        max_iterations: int | None = None,
        max_waypoints: int | None = None,
        oversize_policy: str | None = None,
        invalid_coordinate_policy: str | None = None,
    ) -> None:
        self.renderer = renderer
        self.max_iterations = max_iterations if max_iterations is not None else settings.max_iterations
        self.max_waypoints = max_waypoints if max_waypoints is not None else settings.max_waypoints
        self.oversize_policy = oversize_policy or settings.oversize_policy
        self.invalid_coordinate_policy = invalid_coordinate_policy or settings.invalid_coordinate_policy
        self._state = PlannerState.IDLE
        self._lock = threading.Lock()
        self._cancel = threading.Event()

    @property
    def state(self) -> PlannerState:
        return self._state

    def cancel(self) -> None:
        if self._state is PlannerState.COMPUTING:
            logger.info("Cancellation requested for in-flight route computation")
            self._cancel.set()

    def compute(
        self,
        waypoints: Sequence[Waypoint],
        *,
        start_id: str | None = None,
        end_id: str | None = None,
    ) -> RouteResult | RouteFailure:
        if not self._lock.acquire(blocking=False):
            logger.warning("Rejected route computation: planner is busy")
            raise PlannerBusyError("A route computation is already in progress.")
        try:
            self._state = PlannerState.COMPUTING
            self._cancel.clear()
            return self._compute(waypoints, start_id=start_id, end_id=end_id)
        finally:
            self._state = PlannerState.IDLE
            self._lock.release()

    def _compute(
        self,
        waypoints: Sequence[Waypoint],
        *,
        start_id: str | None,
        end_id: str | None,
    ) -> RouteResult | RouteFailure:
        if len(waypoints) > self.max_waypoints:
            if self.oversize_policy == "reject":
                logger.warning(f"Rejected {len(waypoints)} waypoints (limit {self.max_waypoints})")
                return RouteFailure(
                    code=RouteErrorCode.TOO_MANY_WAYPOINTS,
                    message=f"At most {self.max_waypoints} waypoints can be optimized; got {len(waypoints)}.",
                )
            logger.warning(
                f"Optimizing {len(waypoints)} waypoints (limit {self.max_waypoints}); "
                f"2-opt cost grows with max_iterations x n^2 and may be slow"
            )

        mode = "fixed-endpoint" if start_id is not None or end_id is not None else "free"
        logger.info(f"Computing {mode} route for {len(waypoints)} waypoints")

        outcome = assemble_route(
            waypoints,
            start_id=start_id,
            end_id=end_id,
            max_iterations=self.max_iterations,
            should_stop=self._cancel.is_set,
            invalid_coordinates=self.invalid_coordinate_policy,
        )

        if isinstance(outcome, RouteFailure):
            logger.info(f"Route computation failed: {outcome.code.value}: {outcome.message}")
            if self.renderer is not None:
                self.renderer.clear_route()
            return outcome

        logger.info(
            f"Route computed: {len(outcome.route)} stops, {outcome.total_distance_km:.2f} km, "
            f"{outcome.iterations} pass(es), converged={outcome.converged}, cancelled={outcome.cancelled}"
        )
        if self.renderer is not None:
            self.renderer.render_route(outcome)
        return outcome


_planner: RoutePlanner | None = None


def get_planner() -> RoutePlanner:
    """Return the process-wide planner used by the HTTP layer."""
    global _planner
    if _planner is None:
        _planner = RoutePlanner()
    return _planner
