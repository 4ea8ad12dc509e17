"""Delivery report API schemas."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .dispatch import DeliveryModel


class PeriodReportRequest(BaseModel):
    deliveries: Optional[List[DeliveryModel]] = Field(
        default=None,
        description="Deliveries to report on. Defaults to the last pushed delivery set.",
    )
    start: Optional[date] = None
    end: Optional[date] = None
    min_amount: Optional[float] = Field(default=None, ge=0)
    max_amount: Optional[float] = Field(default=None, ge=0)
    courier: Optional[str] = None
    payment: Optional[str] = None
    limit: Optional[int] = Field(default=None, gt=0, description="Most recent deliveries to consider.")


class DeliverySummaryModel(BaseModel):
    total_deliveries: int
    total_amount: float
    by_status: Dict[str, int]
    by_courier: Dict[str, int]
    by_payment: Dict[str, int]


class PeriodReportResponse(BaseModel):
    summary: DeliverySummaryModel
    deliveries: List[DeliveryModel]
