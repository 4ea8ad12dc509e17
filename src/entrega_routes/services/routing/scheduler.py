"""Debounced route recomputation driven by pushed updates."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Sequence

from ...config import settings
from ...models.domain import Courier, Delivery
from .models import DrawRouteRequest
from .orchestrator import RouteOrchestrator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _PendingRun:
    token: int
    couriers: tuple[Courier, ...]
    deliveries: tuple[Delivery, ...]


class DebouncedRecompute:
    """Coalesce bursts of updates into a single recompute once inputs settle.

    Every ``schedule`` call cancels the pending timer and arms a new one. Each
    run carries a generation token; a run whose token is no longer the latest
    is discarded, including when it was superseded while its routes were being
    computed.
    """

    def __init__(
        self,
        orchestrator: RouteOrchestrator,
        delay_seconds: float | None = None,
        clock: Callable[[], datetime] = datetime.now,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self.orchestrator = orchestrator
        self.delay_seconds = settings.debounce_seconds if delay_seconds is None else delay_seconds
        self.clock = clock
        self.timer_factory = timer_factory
        self._lock = threading.Lock()
        self._idle = threading.Event()
        self._idle.set()
        self._generation = 0
        self._pending: _PendingRun | None = None
        self._timer: threading.Timer | None = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def schedule(self, couriers: Sequence[Courier], deliveries: Sequence[Delivery]) -> int:
        """Replace any pending run with one for these inputs. Returns its token."""
        with self._lock:
            self._generation += 1
            token = self._generation
            if self._timer is not None:
                self._timer.cancel()
            self._pending = _PendingRun(token, tuple(couriers), tuple(deliveries))
            self._idle.clear()
            timer = self.timer_factory(self.delay_seconds, self._fire, args=(token,))
            timer.daemon = True
            self._timer = timer
        timer.start()
        logger.debug(f"Route recompute {token} scheduled in {self.delay_seconds}s")
        return token

    def cancel(self) -> None:
        """Drop the pending run, if any."""
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None
            self._idle.set()

    def flush(self) -> list[DrawRouteRequest] | None:
        """Run the pending recompute now instead of waiting for the timer."""
        with self._lock:
            if self._pending is None:
                return None
            token = self._pending.token
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        return self._fire(token)

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until no recompute is pending. Returns False on timeout."""
        return self._idle.wait(timeout)

    def _is_current(self, token: int) -> bool:
        return self._generation == token

    def _fire(self, token: int) -> list[DrawRouteRequest] | None:
        with self._lock:
            run = self._pending
            if run is None or run.token != token:
                return None

        try:
            requests = self.orchestrator.plan(run.couriers, run.deliveries, self.clock())
        except Exception as exc:
            logger.exception(f"Route recompute {token} failed: {exc}")
            with self._lock:
                if self._is_current(token) and self._pending is run:
                    self._pending = None
                    self._timer = None
                    self._idle.set()
            return None

        with self._lock:
            if not self._is_current(token):
                logger.debug(f"Route recompute {token} superseded, discarding")
                return None
            if self._pending is not run:
                # already applied by a concurrent flush
                return None
            self._pending = None
            self._timer = None
            try:
                return self.orchestrator.apply(requests)
            finally:
                self._idle.set()
