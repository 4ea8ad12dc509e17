"""Period and summary reports over the delivery set."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import UNKNOWN_STATUS_LABEL, Delivery

UNASSIGNED = "Sem entregador"


@dataclass(slots=True)
class PeriodFilters:
    start: Optional[date] = None
    end: Optional[date] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None
    courier: Optional[str] = None
    payment: Optional[str] = None

    def __post_init__(self) -> None:
        if self.start and self.end and self.start > self.end:
            raise ValueError(f"Start date {self.start} is after end date {self.end}.")
        if self.min_amount is not None and self.max_amount is not None and self.min_amount > self.max_amount:
            raise ValueError("Minimum amount is greater than maximum amount.")


@dataclass(slots=True)
class DeliverySummary:
    total_deliveries: int
    total_amount: float
    by_status: dict[str, int] = field(default_factory=dict)
    by_courier: dict[str, int] = field(default_factory=dict)
    by_payment: dict[str, int] = field(default_factory=dict)


def recent_deliveries(deliveries: Sequence[Delivery], limit: int | None = None) -> list[Delivery]:
    """Most recent deliveries first; undated records sort last. Ties keep input order."""
    limit = settings.report_limit if limit is None else limit
    ordered = sorted(deliveries, key=lambda d: d.day.toordinal() if d.day else 0, reverse=True)
    return ordered[:limit]


def _matches(delivery: Delivery, filters: PeriodFilters) -> bool:
    if filters.start and (delivery.day is None or delivery.day < filters.start):
        return False
    if filters.end and (delivery.day is None or delivery.day > filters.end):
        return False
    if filters.min_amount is not None and (delivery.amount is None or delivery.amount < filters.min_amount):
        return False
    if filters.max_amount is not None and (delivery.amount is None or delivery.amount > filters.max_amount):
        return False
    if filters.courier:
        if delivery.assigned_to is None or delivery.assigned_to.name != filters.courier:
            return False
    if filters.payment and delivery.payment != filters.payment:
        return False
    return True


def filter_period(
    deliveries: Sequence[Delivery],
    filters: PeriodFilters,
    limit: int | None = None,
) -> list[Delivery]:
    """Apply every provided bound inclusively to the most recent deliveries."""
    return [delivery for delivery in recent_deliveries(deliveries, limit) if _matches(delivery, filters)]


def summarize(deliveries: Sequence[Delivery]) -> DeliverySummary:
    status_counts: Counter[str] = Counter()
    courier_counts: Counter[str] = Counter()
    payment_counts: Counter[str] = Counter()
    total_amount = 0.0
    for delivery in deliveries:
        status_counts[delivery.status.value if delivery.status else UNKNOWN_STATUS_LABEL] += 1
        courier_counts[delivery.assigned_to.name if delivery.assigned_to else UNASSIGNED] += 1
        if delivery.payment:
            payment_counts[delivery.payment] += 1
        total_amount += delivery.amount or 0.0
    return DeliverySummary(
        total_deliveries=len(deliveries),
        total_amount=round(total_amount, 2),
        by_status=dict(status_counts),
        by_courier=dict(courier_counts),
        by_payment=dict(payment_counts),
    )
