"""Per-courier visual identity for drawn routes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from ...config import settings
from ...models.domain import Courier


@dataclass(frozen=True, slots=True)
class RouteStyle:
    key: str
    color: str
    class_name: str


def style_for_courier(
    courier: Courier,
    styles: Mapping[str, tuple[str, str]] | None = None,
    default: tuple[str, str] | None = None,
) -> RouteStyle:
    """Look up the style by eligibility name, then display name, falling back to the default."""
    styles = settings.route_styles if styles is None else styles
    default = default or settings.default_route_style
    key, color = styles.get(courier.key.name) or styles.get(courier.display_name) or default
    slug = courier.key.name.strip().lower().replace(" ", "-")
    return RouteStyle(key=key, color=color, class_name=f"delivery-route delivery-route-{slug}")
