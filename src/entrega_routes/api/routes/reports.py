"""Delivery report endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from ...models.domain import Delivery
from ...persistence.filesystem import FileStorage
from ...schemas.dispatch import DeliveryModel
from ...schemas.reports import DeliverySummaryModel, PeriodReportRequest, PeriodReportResponse
from ...services.dispatch import DispatchState, get_dispatch_state
from ...services.outputs.report_formatter import (
    deliveries_to_csv,
    deliveries_to_docx,
    deliveries_to_pdf,
    deliveries_to_xlsx,
)
from ...services.reports import PeriodFilters, filter_period, summarize

router = APIRouter(prefix="/reports", tags=["reports"])

MEDIA_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


def _select(payload: PeriodReportRequest, state: DispatchState) -> list[Delivery]:
    if payload.deliveries is not None:
        deliveries = [delivery.to_domain() for delivery in payload.deliveries]
    else:
        deliveries = list(state.deliveries)
    try:
        filters = PeriodFilters(
            start=payload.start,
            end=payload.end,
            min_amount=payload.min_amount,
            max_amount=payload.max_amount,
            courier=payload.courier,
            payment=payload.payment,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return filter_period(deliveries, filters, payload.limit)


@router.post("/period", response_model=PeriodReportResponse, status_code=status.HTTP_200_OK)
def period_report(
    payload: PeriodReportRequest,
    state: DispatchState = Depends(get_dispatch_state),
) -> PeriodReportResponse:
    selected = _select(payload, state)
    summary = summarize(selected)
    return PeriodReportResponse(
        summary=DeliverySummaryModel(
            total_deliveries=summary.total_deliveries,
            total_amount=summary.total_amount,
            by_status=summary.by_status,
            by_courier=summary.by_courier,
            by_payment=summary.by_payment,
        ),
        deliveries=[DeliveryModel.from_domain(delivery) for delivery in selected],
    )


@router.post("/period/export", status_code=status.HTTP_200_OK)
def export_period_report(
    payload: PeriodReportRequest,
    format: Literal["csv", "xlsx", "pdf", "docx"] = Query(default="xlsx", description="Output file format"),
    persist: bool = Query(default=False, description="Also keep a copy under the data root"),
    state: DispatchState = Depends(get_dispatch_state),
) -> Response:
    selected = _select(payload, state)
    generated_at = datetime.now()
    stamp = generated_at.strftime("%d-%m-%Y")
    if format == "csv":
        content: bytes = deliveries_to_csv(selected).encode("utf-8")
    elif format == "pdf":
        content = deliveries_to_pdf(selected, generated_at)
    elif format == "docx":
        content = deliveries_to_docx(selected, generated_at)
    else:
        content = deliveries_to_xlsx(selected)
    file_name = f"relatorio-entregas-{stamp}.{format}"
    if persist:
        storage = FileStorage()
        storage.write_bytes(storage.make_run_directory(prefix="report") / file_name, content)
    return Response(
        content=content,
        media_type=MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )
