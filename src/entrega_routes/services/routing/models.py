"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...models.domain import Position


@dataclass(slots=True)
class Route:
    """Ordered visiting sequence for one courier; positions[0] is the courier itself unless the route is empty."""

    courier_id: str
    positions: List[Position]
    delivery_ids: List[str] = field(default_factory=list)
    total_distance_m: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.delivery_ids


@dataclass(frozen=True, slots=True)
class DrawRouteRequest:
    courier_id: str
    courier_name: str
    style_key: str
    color: str
    class_name: str
    positions: tuple[Position, ...]
    delivery_ids: tuple[str, ...]
    total_distance_m: float
