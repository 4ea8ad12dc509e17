"""Export services."""

from .geojson import (
    GeoJsonRouteRenderer,
    route_to_feature,
    save_feature_collection,
)

__all__ = [
    "GeoJsonRouteRenderer",
    "route_to_feature",
    "save_feature_collection",
]
