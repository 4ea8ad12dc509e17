"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...services.dispatch import DispatchState, get_dispatch_state

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/dispatch", status_code=status.HTTP_200_OK)
def health_dispatch(state: DispatchState = Depends(get_dispatch_state)) -> dict:
    """Snapshot sizes and whether a route recompute is waiting to settle."""
    return {
        "couriers": len(state.couriers),
        "deliveries": len(state.deliveries),
        "routes": len(state.current_routes()),
        "recompute_pending": state.scheduler.pending,
    }
