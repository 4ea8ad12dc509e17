"""Courier/delivery snapshot and route schemas."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Courier, CourierKey, Delivery, DeliveryStatus, Position, TimeOfDay
from ..services.routing.models import DrawRouteRequest


class PositionModel(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_domain(self) -> Optional[Position]:
        if self.latitude is None or self.longitude is None:
            return None
        return Position(latitude=self.latitude, longitude=self.longitude)

    @classmethod
    def from_domain(cls, position: Position) -> "PositionModel":
        return cls(latitude=position.latitude, longitude=position.longitude)


class CourierModel(BaseModel):
    id: str = Field(..., min_length=1)
    display_name: str = Field(..., description="Name shown on the dashboard.")
    eligibility_name: str = Field(..., min_length=1, description="Name deliveries are assigned to.")
    position: Optional[PositionModel] = None

    def to_domain(self) -> Courier:
        return Courier(
            courier_id=self.id,
            display_name=self.display_name,
            key=CourierKey(self.eligibility_name),
            position=self.position.to_domain() if self.position else None,
        )


class DeliveryModel(BaseModel):
    id: str = Field(..., min_length=1)
    destination: Optional[PositionModel] = None
    assigned_to: Optional[str] = Field(default=None, description="Eligibility name of the assigned courier.")
    status: Optional[str] = Field(default=None, description="Available/InProgress/Completed or dashboard label.")
    scheduled_hour: int = Field(default=0, ge=0, le=23)
    scheduled_minute: int = Field(default=0, ge=0, le=59)
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

    def to_domain(self) -> Delivery:
        return Delivery(
            delivery_id=self.id,
            destination=self.destination.to_domain() if self.destination else None,
            assigned_to=CourierKey(self.assigned_to) if self.assigned_to else None,
            status=DeliveryStatus.parse(self.status),
            scheduled=TimeOfDay(self.scheduled_hour, self.scheduled_minute),
            customer_name=self.customer_name,
            day=self.day,
            amount=self.amount,
            payment=self.payment,
            phone=self.phone,
            street=self.street,
            number=self.number,
            neighbourhood=self.neighbourhood,
            city=self.city,
            volume=self.volume,
            notes=self.notes,
        )

    @classmethod
    def from_domain(cls, delivery: Delivery) -> "DeliveryModel":
        return cls(
            id=delivery.delivery_id,
            destination=PositionModel.from_domain(delivery.destination) if delivery.destination else None,
            assigned_to=delivery.assigned_to.name if delivery.assigned_to else None,
            status=delivery.status.value if delivery.status else None,
            scheduled_hour=delivery.scheduled.hour,
            scheduled_minute=delivery.scheduled.minute,
            customer_name=delivery.customer_name,
            day=delivery.day,
            amount=delivery.amount,
            payment=delivery.payment,
            phone=delivery.phone,
            street=delivery.street,
            number=delivery.number,
            neighbourhood=delivery.neighbourhood,
            city=delivery.city,
            volume=delivery.volume,
            notes=delivery.notes,
        )


class SnapshotAck(BaseModel):
    received: int
    recompute_token: int
    debounce_seconds: float


class RouteModel(BaseModel):
    courier_id: str
    courier_name: str
    style_key: str
    color: str
    class_name: str
    positions: List[PositionModel]
    delivery_ids: List[str]
    total_distance_m: float

    @classmethod
    def from_request(cls, request: DrawRouteRequest) -> "RouteModel":
        return cls(
            courier_id=request.courier_id,
            courier_name=request.courier_name,
            style_key=request.style_key,
            color=request.color,
            class_name=request.class_name,
            positions=[PositionModel.from_domain(p) for p in request.positions],
            delivery_ids=list(request.delivery_ids),
            total_distance_m=request.total_distance_m,
        )


class RoutesResponse(BaseModel):
    count: int
    routes: List[RouteModel]
