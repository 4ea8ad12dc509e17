"""Courier/delivery push endpoints and route overlays."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...schemas.dispatch import CourierModel, DeliveryModel, RouteModel, RoutesResponse, SnapshotAck
from ...services.dispatch import DispatchState, get_dispatch_state

router = APIRouter(prefix="/dispatch", tags=["dispatch"])

logger = logging.getLogger(__name__)


def _routes_response(state: DispatchState) -> RoutesResponse:
    routes = [RouteModel.from_request(request) for request in state.current_routes()]
    return RoutesResponse(count=len(routes), routes=routes)


@router.put("/couriers", response_model=SnapshotAck, status_code=status.HTTP_202_ACCEPTED)
def replace_couriers(
    payload: list[CourierModel],
    state: DispatchState = Depends(get_dispatch_state),
) -> SnapshotAck:
    token = state.replace_couriers([courier.to_domain() for courier in payload])
    return SnapshotAck(received=len(payload), recompute_token=token, debounce_seconds=state.scheduler.delay_seconds)


@router.put("/deliveries", response_model=SnapshotAck, status_code=status.HTTP_202_ACCEPTED)
def replace_deliveries(
    payload: list[DeliveryModel],
    state: DispatchState = Depends(get_dispatch_state),
) -> SnapshotAck:
    token = state.replace_deliveries([delivery.to_domain() for delivery in payload])
    return SnapshotAck(received=len(payload), recompute_token=token, debounce_seconds=state.scheduler.delay_seconds)


@router.post("/recompute", response_model=RoutesResponse, status_code=status.HTTP_200_OK)
def recompute(state: DispatchState = Depends(get_dispatch_state)) -> RoutesResponse:
    try:
        state.recompute_now()
    except Exception as exc:
        logger.exception(f"Error recomputing routes: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to recompute routes: {str(exc)}"
        ) from exc
    return _routes_response(state)


@router.get("/routes", response_model=RoutesResponse, status_code=status.HTTP_200_OK)
def get_routes(state: DispatchState = Depends(get_dispatch_state)) -> RoutesResponse:
    return _routes_response(state)


@router.get("/routes.geojson", status_code=status.HTTP_200_OK)
def get_routes_geojson(state: DispatchState = Depends(get_dispatch_state)) -> dict:
    """Current route overlays as a GeoJSON FeatureCollection."""
    return state.renderer.feature_collection()


@router.delete("/routes", status_code=status.HTTP_204_NO_CONTENT)
def clear_routes(state: DispatchState = Depends(get_dispatch_state)) -> None:
    state.clear_routes()


@router.post("/routes/export", status_code=status.HTTP_201_CREATED)
def export_routes(state: DispatchState = Depends(get_dispatch_state)) -> dict:
    try:
        output_path = state.export_routes()
    except OSError as exc:
        logger.exception(f"Error exporting routes: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export routes: {str(exc)}"
        ) from exc
    return {"run_id": output_path.parent.name, "file_name": output_path.name, "route_count": len(state.current_routes())}
