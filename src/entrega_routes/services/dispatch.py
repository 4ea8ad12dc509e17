"""Latest courier/delivery snapshots and the route pipeline fed by them."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Callable, Sequence

from ..models.domain import Courier, Delivery
from ..persistence.filesystem import FileStorage
from .export.geojson import GeoJsonRouteRenderer, save_feature_collection
from .routing.models import DrawRouteRequest
from .routing.orchestrator import RouteOrchestrator
from .routing.scheduler import DebouncedRecompute

logger = logging.getLogger(__name__)


class DispatchState:
    """Holds the pushed snapshots and recomputes routes whenever one is replaced.

    Snapshots are replaced wholesale and never mutated in place.
    """

    def __init__(
        self,
        renderer: GeoJsonRouteRenderer | None = None,
        orchestrator: RouteOrchestrator | None = None,
        delay_seconds: float | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.renderer = renderer or GeoJsonRouteRenderer()
        self.orchestrator = orchestrator or RouteOrchestrator(self.renderer)
        self.scheduler = DebouncedRecompute(self.orchestrator, delay_seconds=delay_seconds, clock=clock)
        self.clock = clock
        self._lock = threading.Lock()
        self._couriers: tuple[Courier, ...] = ()
        self._deliveries: tuple[Delivery, ...] = ()

    @property
    def couriers(self) -> tuple[Courier, ...]:
        return self._couriers

    @property
    def deliveries(self) -> tuple[Delivery, ...]:
        return self._deliveries

    def replace_couriers(self, couriers: Sequence[Courier]) -> int:
        with self._lock:
            self._couriers = tuple(couriers)
            token = self.scheduler.schedule(self._couriers, self._deliveries)
        logger.info(f"Courier roster updated ({len(self._couriers)} couriers)")
        return token

    def replace_deliveries(self, deliveries: Sequence[Delivery]) -> int:
        with self._lock:
            self._deliveries = tuple(deliveries)
            token = self.scheduler.schedule(self._couriers, self._deliveries)
        logger.info(f"Delivery set updated ({len(self._deliveries)} deliveries)")
        return token

    def recompute_now(self) -> list[DrawRouteRequest]:
        """Re-evaluate eligibility against the current clock, bypassing the debounce."""
        with self._lock:
            self.scheduler.schedule(self._couriers, self._deliveries)
        return self.scheduler.flush() or []

    def clear_routes(self) -> None:
        self.scheduler.cancel()
        self.orchestrator.clear()

    def current_routes(self) -> tuple[DrawRouteRequest, ...]:
        return self.orchestrator.rendered_routes

    def export_routes(self, storage: FileStorage | None = None) -> Path:
        """Write the current overlays to a timestamped run directory."""
        storage = storage or FileStorage()
        run_dir = storage.make_run_directory(prefix="routes")
        output_path = run_dir / "routes.geojson"
        save_feature_collection(self.renderer.feature_collection(), output_path)
        logger.info(f"Exported {len(self.current_routes())} routes to {output_path}")
        return output_path

    def shutdown(self) -> None:
        self.scheduler.cancel()


_state: DispatchState | None = None
_state_lock = threading.Lock()


def get_dispatch_state() -> DispatchState:
    global _state
    with _state_lock:
        if _state is None:
            _state = DispatchState()
        return _state


def reset_dispatch_state(state: DispatchState | None = None) -> DispatchState | None:
    """Swap the process-wide state; used at shutdown and by tests."""
    global _state
    with _state_lock:
        previous, _state = _state, state
    if previous is not None:
        previous.shutdown()
    return _state
