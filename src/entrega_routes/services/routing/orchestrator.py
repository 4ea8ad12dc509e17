"""Per-courier route orchestration."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Mapping, Protocol, Sequence

from ...config import settings
from ...models.domain import Courier, CourierKey, Delivery
from ..geospatial import haversine_m, is_valid_position
from .builder import DistanceFn, build_route
from .eligibility import filter_eligible_deliveries
from .models import DrawRouteRequest
from .styles import style_for_courier

logger = logging.getLogger(__name__)


class RouteRenderer(Protocol):
    """Collaborator that displays routes, e.g. a map overlay store."""

    def draw_route(self, request: DrawRouteRequest) -> None: ...

    def clear_routes(self) -> None: ...


class RouteOrchestrator:
    """Builds one route per permitted courier and hands it to the renderer.

    The orchestrator is the only writer of the set of currently rendered routes:
    every recompute first retracts what it drew before, then draws again.
    """

    def __init__(
        self,
        renderer: RouteRenderer,
        allowed_couriers: Iterable[str] | None = None,
        distance: DistanceFn = haversine_m,
        styles: Mapping[str, tuple[str, str]] | None = None,
    ) -> None:
        names = settings.allowed_couriers if allowed_couriers is None else allowed_couriers
        self.renderer = renderer
        self.allowed_keys = frozenset(CourierKey(name) for name in names)
        self.distance = distance
        self.styles = styles
        self._rendered: dict[str, DrawRouteRequest] = {}

    @property
    def rendered_routes(self) -> tuple[DrawRouteRequest, ...]:
        return tuple(self._rendered.values())

    def clear(self) -> None:
        self.renderer.clear_routes()
        self._rendered = {}

    def _plan_for_courier(
        self,
        courier: Courier,
        deliveries: Sequence[Delivery],
        now: datetime,
    ) -> DrawRouteRequest | None:
        eligible = filter_eligible_deliveries(deliveries, courier.key, now.hour, now.minute)
        if not eligible:
            logger.debug(f"No available or in-progress deliveries for {courier.key}")
            return None

        route = build_route(courier, eligible, self.distance)
        if route.is_empty:
            return None

        style = style_for_courier(courier, self.styles)
        return DrawRouteRequest(
            courier_id=courier.courier_id,
            courier_name=courier.key.name,
            style_key=style.key,
            color=style.color,
            class_name=style.class_name,
            positions=tuple(route.positions),
            delivery_ids=tuple(route.delivery_ids),
            total_distance_m=route.total_distance_m,
        )

    def plan(
        self,
        couriers: Sequence[Courier],
        deliveries: Sequence[Delivery],
        now: datetime | None = None,
    ) -> list[DrawRouteRequest]:
        """Compute draw requests for every permitted courier without touching the renderer."""
        now = now or datetime.now()
        requests: list[DrawRouteRequest] = []
        seen: set[str] = set()
        for courier in couriers:
            if courier.key not in self.allowed_keys:
                continue
            if courier.courier_id in seen:
                logger.warning(f"Duplicate courier {courier.courier_id} in roster, keeping the first entry")
                continue
            seen.add(courier.courier_id)
            if not is_valid_position(courier.position):
                logger.warning(f"Skipping courier {courier.courier_id}: position missing or invalid")
                continue

            try:
                request = self._plan_for_courier(courier, deliveries, now)
            except Exception as exc:
                logger.exception(f"Failed to compute route for courier {courier.courier_id}: {exc}")
                continue
            if request is not None:
                requests.append(request)
        return requests

    def apply(self, requests: Sequence[DrawRouteRequest]) -> list[DrawRouteRequest]:
        """Retract every drawn route, then draw ``requests``. Returns the ones the renderer accepted."""
        self.clear()
        drawn: list[DrawRouteRequest] = []
        for request in requests:
            try:
                self.renderer.draw_route(request)
            except Exception as exc:
                logger.error(f"Renderer rejected route for courier {request.courier_id}: {exc}")
                continue
            self._rendered[request.courier_id] = request
            drawn.append(request)
            logger.info(
                f"Route drawn for {request.courier_name} with {len(request.positions)} points "
                f"({request.total_distance_m:.0f} m)"
            )
        return drawn

    def recompute(
        self,
        couriers: Sequence[Courier],
        deliveries: Sequence[Delivery],
        now: datetime | None = None,
    ) -> list[DrawRouteRequest]:
        """Retract every drawn route and draw one per permitted courier with due deliveries."""
        return self.apply(self.plan(couriers, deliveries, now))
