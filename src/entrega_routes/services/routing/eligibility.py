"""Selection of the deliveries a courier should route to right now."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import ROUTABLE_STATUSES, CourierKey, Delivery
from ..geospatial import is_valid_position


def is_eligible(delivery: Delivery, courier_key: CourierKey, current_minutes: int) -> bool:
    if delivery.assigned_to is None or delivery.assigned_to != courier_key:
        return False
    if delivery.status not in ROUTABLE_STATUSES:
        return False
    if delivery.scheduled.minutes > current_minutes:
        return False
    return is_valid_position(delivery.destination)


def filter_eligible_deliveries(
    deliveries: Sequence[Delivery],
    courier_key: CourierKey,
    hour: int,
    minute: int,
) -> list[Delivery]:
    """Return the deliveries assigned to ``courier_key`` that are due by ``hour:minute``.

    A delivery qualifies when its courier key matches exactly, its status is
    available or in progress, its scheduled time of day is not later than the
    current one and its destination is a finite coordinate. Input order is kept.
    """
    current_minutes = hour * 60 + minute
    return [delivery for delivery in deliveries if is_eligible(delivery, courier_key, current_minutes)]
