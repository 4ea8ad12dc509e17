"""Domain models for couriers and deliveries."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class DeliveryStatus(str, Enum):
    AVAILABLE = "Available"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, label: object) -> Optional["DeliveryStatus"]:
        """Map a canonical name or a dashboard label to a status, or ``None`` if unknown."""
        if isinstance(label, DeliveryStatus):
            return label
        if not isinstance(label, str):
            return None
        return _STATUS_LABELS.get(label.strip())

    @property
    def label(self) -> str:
        """Portuguese label shown on the dashboard."""
        return _DASHBOARD_LABELS[self]


_DASHBOARD_LABELS = {
    DeliveryStatus.AVAILABLE: "Disponível",
    DeliveryStatus.IN_PROGRESS: "Andamento",
    DeliveryStatus.COMPLETED: "Concluída",
}

_STATUS_LABELS = {
    **{status.value: status for status in DeliveryStatus},
    **{label: status for status, label in _DASHBOARD_LABELS.items()},
}

ROUTABLE_STATUSES = frozenset({DeliveryStatus.AVAILABLE, DeliveryStatus.IN_PROGRESS})

# Report label for records whose status could not be parsed.
UNKNOWN_STATUS_LABEL = "Desconhecido"


@dataclass(frozen=True, slots=True)
class CourierKey:
    """Eligibility name linking deliveries to a courier. Matching is exact."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Position:
    latitude: float
    longitude: float

    @property
    def is_finite(self) -> bool:
        try:
            lat = float(self.latitude)
            lon = float(self.longitude)
        except (TypeError, ValueError):
            return False
        return math.isfinite(lat) and math.isfinite(lon) and -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


@dataclass(frozen=True, slots=True)
class TimeOfDay:
    hour: int
    minute: int

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


MIDNIGHT = TimeOfDay(0, 0)


@dataclass(frozen=True, slots=True)
class Courier:
    """A courier whose live position starts a route."""

    courier_id: str
    display_name: str
    key: CourierKey
    position: Optional[Position]


@dataclass(frozen=True, slots=True)
class Delivery:
    """A single order with destination, status, schedule and optional courier assignment.

    Only the first five fields take part in routing; the rest are carried for reports.
    """

    delivery_id: str
    destination: Optional[Position]
    assigned_to: Optional[CourierKey]
    status: Optional[DeliveryStatus]
    scheduled: TimeOfDay = MIDNIGHT
    customer_name: Optional[str] = None
    day: Optional[date] = None
    amount: Optional[float] = None
    payment: Optional[str] = None
    phone: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    neighbourhood: Optional[str] = None
    city: Optional[str] = None
    volume: Optional[str] = None
    notes: Optional[str] = None
