"""Greedy nearest-neighbour route construction."""

from __future__ import annotations

import logging
import math
from typing import Callable, Sequence

from ...models.domain import Courier, Delivery, Position
from ..geospatial import haversine_m, is_valid_position
from .models import Route

DistanceFn = Callable[[Position, Position], float]

logger = logging.getLogger(__name__)


def _safe_distance(distance: DistanceFn, origin: Position, target: Position) -> float:
    """Distance between two points; failures count as unreachable."""
    try:
        value = float(distance(origin, target))
    except Exception as exc:
        logger.warning(f"Distance lookup failed between {origin} and {target}: {exc}")
        return math.inf
    if math.isnan(value) or value < 0:
        return math.inf
    return value


def find_nearest(
    current: Position,
    candidates: Sequence[Delivery],
    visited: set[str],
    distance: DistanceFn = haversine_m,
) -> tuple[Delivery | None, float]:
    """Closest unvisited candidate; ties go to the earliest candidate in input order."""
    nearest: Delivery | None = None
    min_distance = math.inf
    for candidate in candidates:
        if candidate.delivery_id in visited:
            continue
        d = _safe_distance(distance, current, candidate.destination)
        if d < min_distance:
            min_distance = d
            nearest = candidate
    return nearest, min_distance


def build_route(
    courier: Courier,
    deliveries: Sequence[Delivery],
    distance: DistanceFn = haversine_m,
) -> Route:
    """Order ``deliveries`` into a path starting at the courier's position.

    Each step walks to the closest delivery not yet visited. Deliveries without
    a finite destination are dropped up front. Deliveries that share an
    identifier are visited once, using the first occurrence.
    """
    if not is_valid_position(courier.position):
        logger.warning(f"Courier {courier.courier_id} has no valid position, returning an empty route")
        return Route(courier_id=courier.courier_id, positions=[], delivery_ids=[])

    candidates: list[Delivery] = []
    seen: set[str] = set()
    for delivery in deliveries:
        if delivery.delivery_id in seen or not is_valid_position(delivery.destination):
            continue
        seen.add(delivery.delivery_id)
        candidates.append(delivery)

    route = Route(courier_id=courier.courier_id, positions=[courier.position])
    visited: set[str] = set()
    current = courier.position

    while len(visited) < len(candidates):
        nearest, hop = find_nearest(current, candidates, visited, distance)
        if nearest is None:
            # every remaining candidate is unreachable from here
            unreachable = [c.delivery_id for c in candidates if c.delivery_id not in visited]
            logger.warning(f"Dropping unreachable deliveries for courier {courier.courier_id}: {unreachable}")
            break
        route.positions.append(nearest.destination)
        route.delivery_ids.append(nearest.delivery_id)
        route.total_distance_m += hop
        visited.add(nearest.delivery_id)
        current = nearest.destination

    return route
