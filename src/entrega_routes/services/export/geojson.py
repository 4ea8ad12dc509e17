"""GeoJSON map overlays for drawn courier routes."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, List

from shapely.geometry import LineString, mapping

from ...config import settings
from ..routing.models import DrawRouteRequest


def _line_for(request: DrawRouteRequest) -> LineString:
    return LineString([(p.longitude, p.latitude) for p in request.positions])


def route_to_feature(
    request: DrawRouteRequest,
    *,
    opacity: float | None = None,
    weight: int | None = None,
) -> Dict[str, Any]:
    """Build a GeoJSON LineString feature carrying the courier's style."""
    if len(request.positions) < 2:
        raise ValueError(f"Route for courier {request.courier_id} has no stops to draw")

    line = _line_for(request)
    start = request.positions[0]
    return {
        "type": "Feature",
        "id": request.courier_id,
        "geometry": mapping(line),
        "properties": {
            "courier_id": request.courier_id,
            "courier_name": request.courier_name,
            "style_key": request.style_key,
            "color": request.color,
            "opacity": settings.route_opacity if opacity is None else opacity,
            "weight": settings.route_weight if weight is None else weight,
            "class_name": request.class_name,
            "delivery_ids": list(request.delivery_ids),
            "stop_count": len(request.delivery_ids),
            "total_distance_m": round(request.total_distance_m, 1),
            "start": [start.latitude, start.longitude],
            "wkt": line.wkt,
        },
    }


class GeoJsonRouteRenderer:
    """Keeps one LineString overlay per drawn route for map clients to fetch."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._features: Dict[str, Dict[str, Any]] = {}

    def draw_route(self, request: DrawRouteRequest) -> None:
        feature = route_to_feature(request)
        with self._lock:
            self._features[request.courier_id] = feature

    def clear_routes(self) -> None:
        with self._lock:
            self._features = {}

    def features(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._features.values())

    def feature_collection(self) -> Dict[str, Any]:
        return {"type": "FeatureCollection", "features": self.features()}


def save_feature_collection(collection: Dict[str, Any], output_path: Path) -> None:
    """Save a FeatureCollection to disk."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(collection, f, indent=2, ensure_ascii=False)
