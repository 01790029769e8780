from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from pharmareserve.api.deps import get_current_principal, get_store
from pharmareserve.core.config import settings
from pharmareserve.core.principal import Principal
from pharmareserve.db.store import EntityStore
from pharmareserve.schemas.common_schemas import PageResponse, page_response
from pharmareserve.schemas.pharmacy_schemas import PharmacyCreate, PharmacyResponse, PharmacyUpdate
from pharmareserve.services import pharmacy_service

router = APIRouter()


# ПУБЛІЧНИЙ ПЕРЕГЛЯД
@router.get(
    "/",
    response_model=PageResponse[PharmacyResponse],
    summary="Отримати список аптек",
    description="Публічно. Фільтри: verified, location (пошук підрядка)."
)
def read_pharmacies(
    verified: Optional[bool] = None,
    location: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    store: EntityStore = Depends(get_store)
):
    result = pharmacy_service.list_pharmacies(store, verified=verified, location=location, page=page, limit=limit)
    return page_response(result)


@router.get(
    "/mypharmacy",
    response_model=PharmacyResponse,
    summary="Моя аптека",
    responses={
        403: {"description": "Тільки для ролі pharmacy"},
        404: {"description": "У користувача немає аптеки"}
    }
)
def read_my_pharmacy(
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    return pharmacy_service.get_my_pharmacy(store, principal)


@router.get(
    "/{pharmacy_id}",
    response_model=PharmacyResponse,
    summary="Деталі аптеки",
    responses={404: {"description": "Аптека не знайдена"}}
)
def read_pharmacy(pharmacy_id: int, store: EntityStore = Depends(get_store)):
    return pharmacy_service.get_pharmacy(store, pharmacy_id)


# УПРАВЛІННЯ АПТЕКАМИ
@router.post(
    "/",
    response_model=PharmacyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Створити аптеку",
    description="Роль pharmacy (або адмін). Один користувач - одна аптека.",
    responses={
        403: {"description": "Недостатньо прав"},
        409: {"description": "Аптека вже є або ліцензія зайнята"}
    }
)
def create_pharmacy(
    pharmacy: PharmacyCreate,
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    return pharmacy_service.create_pharmacy(store, principal, pharmacy.model_dump())


@router.put(
    "/{pharmacy_id}",
    response_model=PharmacyResponse,
    summary="Оновити аптеку",
    description="Власник або адмін. Тут же змінюється прапорець verified.",
    responses={
        403: {"description": "Чужа аптека"},
        404: {"description": "Аптека не знайдена"},
        409: {"description": "Ліцензія зайнята"}
    }
)
def update_pharmacy(
    pharmacy_id: int,
    pharmacy: PharmacyUpdate,
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    fields = pharmacy.model_dump(exclude_unset=True, exclude_none=True)
    return pharmacy_service.update_pharmacy(store, principal, pharmacy_id, fields)


@router.delete(
    "/{pharmacy_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Видалити аптеку",
    responses={
        403: {"description": "Тільки власник або адмін"},
        404: {"description": "Аптека не знайдена"}
    }
)
def delete_pharmacy(
    pharmacy_id: int,
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    pharmacy_service.delete_pharmacy(store, principal, pharmacy_id)
    return None
