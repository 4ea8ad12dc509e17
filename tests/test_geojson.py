import json

import pytest

from entrega_routes.models.domain import Position
from entrega_routes.services.export import GeoJsonRouteRenderer, route_to_feature, save_feature_collection
from entrega_routes.services.routing.models import DrawRouteRequest


def _request(cid: str = "u-leo", positions=None) -> DrawRouteRequest:
    positions = positions or (Position(-25.82, -48.53), Position(-25.821, -48.531), Position(-25.83, -48.54))
    return DrawRouteRequest(
        courier_id=cid,
        courier_name="Leo",
        style_key="emerald-500",
        color="#10B981",
        class_name="delivery-route delivery-route-leo",
        positions=tuple(positions),
        delivery_ids=tuple(f"D{i}" for i in range(1, len(positions))),
        total_distance_m=1234.56,
    )


def test_renderer_keeps_linestring_in_lon_lat_order():
    renderer = GeoJsonRouteRenderer()

    renderer.draw_route(_request())
    collection = renderer.feature_collection()

    assert collection["type"] == "FeatureCollection"
    feature = collection["features"][0]
    assert feature["geometry"]["type"] == "LineString"
    assert [list(c) for c in feature["geometry"]["coordinates"]][0] == [-48.53, -25.82]
    props = feature["properties"]
    assert props["color"] == "#10B981"
    assert props["opacity"] == 0.4
    assert props["weight"] == 4
    assert props["delivery_ids"] == ["D1", "D2"]
    assert props["stop_count"] == 2
    assert props["start"] == [-25.82, -48.53]


def test_clear_routes_removes_every_overlay():
    renderer = GeoJsonRouteRenderer()
    renderer.draw_route(_request("u1"))
    renderer.draw_route(_request("u2"))

    renderer.clear_routes()

    assert renderer.features() == []


def test_route_without_stops_is_rejected():
    renderer = GeoJsonRouteRenderer()

    with pytest.raises(ValueError):
        renderer.draw_route(_request(positions=(Position(-25.82, -48.53),)))


def test_feature_carries_wkt_in_lon_lat_order():
    feature = route_to_feature(_request(positions=(Position(1.0, 2.0), Position(3.0, 4.0))), opacity=1.0)

    assert feature["properties"]["wkt"] == "LINESTRING (2 1, 4 3)"
    assert feature["properties"]["opacity"] == 1.0


def test_save_feature_collection(tmp_path):
    renderer = GeoJsonRouteRenderer()
    renderer.draw_route(_request())
    output = tmp_path / "nested" / "routes.geojson"

    save_feature_collection(renderer.feature_collection(), output)

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["features"][0]["id"] == "u-leo"
