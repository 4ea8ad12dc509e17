from datetime import datetime

from entrega_routes.models.domain import Courier, CourierKey, Delivery, DeliveryStatus, Position, TimeOfDay
from entrega_routes.services.routing.models import DrawRouteRequest
from entrega_routes.services.routing.orchestrator import RouteOrchestrator

NOON = datetime(2026, 10, 19, 12, 0)
STYLES = {"Leo": ("emerald-500", "#10B981"), "Marcos": ("blue-500", "#3B82F6")}


class RecordingRenderer:
    def __init__(self, fail_for: set[str] | None = None) -> None:
        self.calls: list[tuple[str, str | None]] = []
        self.fail_for = fail_for or set()

    def draw_route(self, request: DrawRouteRequest) -> None:
        if request.courier_id in self.fail_for:
            raise RuntimeError("map not ready")
        self.calls.append(("draw", request.courier_id))

    def clear_routes(self) -> None:
        self.calls.append(("clear", None))


def _courier(cid: str, name: str, lat: float | None = -25.82, lon: float | None = -48.53) -> Courier:
    position = Position(lat, lon) if lat is not None and lon is not None else None
    return Courier(courier_id=cid, display_name=name, key=CourierKey(name), position=position)


def _delivery(did: str, courier: str, lat: float, lon: float, hour: int = 9) -> Delivery:
    return Delivery(
        delivery_id=did,
        destination=Position(lat, lon),
        assigned_to=CourierKey(courier),
        status=DeliveryStatus.AVAILABLE,
        scheduled=TimeOfDay(hour, 0),
    )


def _orchestrator(renderer: RecordingRenderer, allowed=("Leo", "Marcos", "Uene")) -> RouteOrchestrator:
    return RouteOrchestrator(renderer, allowed_couriers=allowed, styles=STYLES)


def test_recompute_clears_then_draws_one_route_per_permitted_courier():
    renderer = RecordingRenderer()
    orchestrator = _orchestrator(renderer)
    couriers = [_courier("u1", "Leo"), _courier("u2", "Marcos"), _courier("u3", "Intruso")]
    deliveries = [
        _delivery("D1", "Leo", -25.821, -48.531),
        _delivery("D2", "Marcos", -25.825, -48.535),
        _delivery("D3", "Intruso", -25.822, -48.532),
    ]

    emitted = orchestrator.recompute(couriers, deliveries, NOON)

    assert renderer.calls == [("clear", None), ("draw", "u1"), ("draw", "u2")]
    assert [r.courier_id for r in emitted] == ["u1", "u2"]
    leo = emitted[0]
    assert leo.style_key == "emerald-500"
    assert leo.color == "#10B981"
    assert leo.class_name == "delivery-route delivery-route-leo"
    assert leo.positions[0] == Position(-25.82, -48.53)
    assert leo.delivery_ids == ("D1",)


def test_courier_without_deliveries_gets_no_route():
    renderer = RecordingRenderer()
    orchestrator = _orchestrator(renderer)
    couriers = [_courier("u1", "Leo"), _courier("u3", "Uene")]
    deliveries = [_delivery("D1", "Leo", -25.821, -48.531), _delivery("LATE", "Uene", -25.83, -48.54, hour=23)]

    emitted = orchestrator.recompute(couriers, deliveries, NOON)

    assert [r.courier_id for r in emitted] == ["u1"]
    assert renderer.calls.count(("draw", "u3")) == 0


def test_unknown_courier_gets_default_style():
    renderer = RecordingRenderer()
    orchestrator = _orchestrator(renderer)

    emitted = orchestrator.recompute([_courier("u3", "Uene")], [_delivery("D1", "Uene", -25.821, -48.531)], NOON)

    assert emitted[0].style_key == "slate-500"
    assert emitted[0].color == "#64748B"


def test_courier_with_invalid_position_is_skipped():
    renderer = RecordingRenderer()
    orchestrator = _orchestrator(renderer)
    couriers = [_courier("u1", "Leo", lat=None), _courier("u2", "Marcos", lat=float("nan"))]
    deliveries = [_delivery("D1", "Leo", -25.821, -48.531), _delivery("D2", "Marcos", -25.821, -48.531)]

    emitted = orchestrator.recompute(couriers, deliveries, NOON)

    assert emitted == []
    assert renderer.calls == [("clear", None)]


def test_renderer_failure_does_not_block_other_couriers():
    renderer = RecordingRenderer(fail_for={"u1"})
    orchestrator = _orchestrator(renderer)
    couriers = [_courier("u1", "Leo"), _courier("u2", "Marcos")]
    deliveries = [_delivery("D1", "Leo", -25.821, -48.531), _delivery("D2", "Marcos", -25.825, -48.535)]

    emitted = orchestrator.recompute(couriers, deliveries, NOON)

    assert [r.courier_id for r in emitted] == ["u2"]
    assert [r.courier_id for r in orchestrator.rendered_routes] == ["u2"]


def test_distance_failure_for_one_courier_does_not_block_others():
    renderer = RecordingRenderer()

    def distance(a: Position, b: Position) -> float:
        if b.latitude < -26:
            raise RuntimeError("boom")
        return abs(a.latitude - b.latitude) + abs(a.longitude - b.longitude)

    orchestrator = RouteOrchestrator(renderer, allowed_couriers=("Leo", "Marcos"), distance=distance, styles=STYLES)
    couriers = [_courier("u1", "Leo"), _courier("u2", "Marcos")]
    deliveries = [_delivery("D1", "Leo", -27.0, -48.531), _delivery("D2", "Marcos", -25.825, -48.535)]

    emitted = orchestrator.recompute(couriers, deliveries, NOON)

    assert [r.courier_id for r in emitted] == ["u2"]


def test_recompute_replaces_previous_routes():
    renderer = RecordingRenderer()
    orchestrator = _orchestrator(renderer)
    couriers = [_courier("u1", "Leo"), _courier("u2", "Marcos")]

    orchestrator.recompute(couriers, [_delivery("D1", "Leo", -25.821, -48.531)], NOON)
    orchestrator.recompute(couriers, [_delivery("D2", "Marcos", -25.825, -48.535)], NOON)

    assert [r.courier_id for r in orchestrator.rendered_routes] == ["u2"]
    assert renderer.calls[-2:] == [("clear", None), ("draw", "u2")]

    orchestrator.clear()

    assert orchestrator.rendered_routes == ()
    assert renderer.calls[-1] == ("clear", None)


def test_duplicate_courier_in_roster_is_drawn_once():
    renderer = RecordingRenderer()
    orchestrator = _orchestrator(renderer)
    couriers = [_courier("u1", "Leo"), _courier("u1", "Leo", lat=-25.9)]

    emitted = orchestrator.recompute(couriers, [_delivery("D1", "Leo", -25.821, -48.531)], NOON)

    assert len(emitted) == 1
    assert emitted[0].positions[0] == Position(-25.82, -48.53)


def test_duplicate_courier_after_invalid_first_entry_is_not_drawn():
    renderer = RecordingRenderer()
    orchestrator = _orchestrator(renderer)
    couriers = [_courier("u1", "Leo", lat=None), _courier("u1", "Leo")]

    emitted = orchestrator.recompute(couriers, [_delivery("D1", "Leo", -25.821, -48.531)], NOON)

    assert emitted == []
    assert renderer.calls == [("clear", None)]
