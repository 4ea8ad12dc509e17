from entrega_routes.config import Settings
from entrega_routes.models.domain import Courier, CourierKey, Position
from entrega_routes.services.routing.styles import style_for_courier


def test_allowed_couriers_accept_comma_separated_values():
    settings = Settings(allowed_couriers="Ana, Bruno ,")

    assert settings.allowed_couriers == ("Ana", "Bruno")


def test_route_styles_accept_json_object():
    settings = Settings(route_styles='{"Ana": ["pink-500", "#EC4899"]}')

    assert settings.route_styles == {"Ana": ("pink-500", "#EC4899")}


def test_style_lookup_prefers_eligibility_name():
    courier = Courier(courier_id="u1", display_name="Leo Silva", key=CourierKey("Leo"), position=Position(0.0, 0.0))

    style = style_for_courier(courier)

    assert style.key == "emerald-500"
    assert style.color == "#10B981"
    assert style.class_name == "delivery-route delivery-route-leo"
