"""Geospatial helper functions."""

from __future__ import annotations

import math

from ..models.domain import Position

EARTH_RADIUS_M = 6371008.8


def haversine_m(origin: Position, target: Position) -> float:
    """Compute distance in metres between two positions using the Haversine formula."""

    phi1, phi2 = math.radians(origin.latitude), math.radians(target.latitude)
    d_phi = math.radians(target.latitude - origin.latitude)
    d_lambda = math.radians(target.longitude - origin.longitude)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def is_valid_position(position: object) -> bool:
    """Return True for a Position holding a finite latitude/longitude pair."""

    return isinstance(position, Position) and position.is_finite
