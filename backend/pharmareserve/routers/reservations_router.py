from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from pharmareserve.api.deps import get_current_principal, get_store
from pharmareserve.core.config import settings
from pharmareserve.core.enums import ReservationStatus
from pharmareserve.core.principal import Principal
from pharmareserve.db.store import EntityStore
from pharmareserve.schemas.common_schemas import PageResponse, page_response
from pharmareserve.schemas.reservation_schemas import (
    ReservationCreate,
    ReservationResponse,
    ReservationStatusUpdate,
)
from pharmareserve.services import reservation_service

router = APIRouter()


@router.get(
    "/",
    response_model=PageResponse[ReservationResponse],
    summary="Мої бронювання",
    description="Покупець бачить свої, аптека - бронювання своєї аптеки, адмін - усі.",
    responses={404: {"description": "У користувача з роллю pharmacy немає аптеки"}}
)
def read_reservations(
    status_filter: Optional[ReservationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    result = reservation_service.list_reservations(
        store, principal, status=status_filter, page=page, limit=limit
    )
    return page_response(result)


@router.get(
    "/{reservation_id}",
    response_model=ReservationResponse,
    summary="Деталі бронювання",
    responses={
        403: {"description": "Чуже бронювання"},
        404: {"description": "Бронювання не знайдено"}
    }
)
def read_reservation(
    reservation_id: int,
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    return reservation_service.get_reservation(store, principal, reservation_id)


@router.post(
    "/",
    response_model=ReservationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Забронювати ліки",
    description="Покупець бронює доступні ліки. Аптека береться з ліків.",
    responses={
        403: {"description": "Роль не може бронювати"},
        404: {"description": "Ліки не знайдено"},
        409: {"description": "Ліки недоступні або вже є pending бронювання"}
    }
)
def create_reservation(
    reservation: ReservationCreate,
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    return reservation_service.create_reservation(store, principal, reservation.medicine_id)


@router.put(
    "/{reservation_id}",
    response_model=ReservationResponse,
    summary="Змінити статус бронювання",
    description="Покупець може лише скасувати своє. Аптека - підтвердити або скасувати. Адмін - будь-що.",
    responses={
        403: {"description": "Недостатньо прав для цього переходу"},
        404: {"description": "Бронювання не знайдено"}
    }
)
def update_reservation_status(
    reservation_id: int,
    body: ReservationStatusUpdate,
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    return reservation_service.set_reservation_status(store, principal, reservation_id, body.status)


@router.delete(
    "/{reservation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Видалити бронювання",
    responses={
        403: {"description": "Чуже бронювання"},
        404: {"description": "Бронювання не знайдено"}
    }
)
def delete_reservation(
    reservation_id: int,
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    reservation_service.delete_reservation(store, principal, reservation_id)
    return None
