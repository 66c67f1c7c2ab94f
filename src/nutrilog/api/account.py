"""Weights, daily views, history and export endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from nutrilog.api.auth import current_user_id, get_container
from nutrilog.api.schemas import WeightPayload  # noqa: TC001

if TYPE_CHECKING:
    from nutrilog.containers import AppContainer

router = APIRouter(tags=["account"])


@router.get("/")
def today(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the summary for the current day."""
    container: AppContainer = get_container(request)
    return {"summary": container.stats_service.get_today(user_id)}


@router.get("/days/{day}")
def day_summary(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return weight, consumptions and totals for a day."""
    container: AppContainer = get_container(request)
    return {"summary": container.stats_service.get_day(user_id, day)}


@router.get("/account/history")
def history(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return per-day weight, kcal and protein, newest first."""
    container: AppContainer = get_container(request)
    return {"days": container.stats_service.get_history(user_id)}


@router.get("/account/export")
def export_account(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> JSONResponse:
    """Download everything the user has stored as a JSON attachment."""
    container: AppContainer = get_container(request)
    document = container.export_service.export_all(user_id)
    filename = container.export_service.filename()
    return JSONResponse(
        content=document,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/weights")
def list_weights(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the user's weight records, newest measurement first."""
    container: AppContainer = get_container(request)
    return {"weights": container.weight_service.list_weights(user_id)}


@router.post("/weights", status_code=status.HTTP_201_CREATED)
def create_weight(
    payload: WeightPayload, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Record a weight measurement."""
    container: AppContainer = get_container(request)
    weight = container.weight_service.record_weight(
        user_id, payload.weight, payload.measured_at
    )
    return {"weight": weight}


@router.get("/weights/{weight_id}")
def get_weight(
    weight_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return one weight record."""
    container: AppContainer = get_container(request)
    return {"weight": container.weight_service.get_weight(user_id, weight_id)}


@router.put("/weights/{weight_id}")
def update_weight(
    weight_id: UUID,
    payload: WeightPayload,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Replace a weight record."""
    container: AppContainer = get_container(request)
    weight = container.weight_service.update_weight(
        user_id, weight_id, payload.weight, payload.measured_at
    )
    return {"weight": weight}


@router.delete("/weights/{weight_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_weight(
    weight_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> Response:
    """Delete a weight record."""
    container: AppContainer = get_container(request)
    container.weight_service.delete_weight(user_id, weight_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
