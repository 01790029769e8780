from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from pharmareserve.api.deps import get_current_principal, get_store
from pharmareserve.core.config import settings
from pharmareserve.core.principal import Principal
from pharmareserve.db.store import EntityStore
from pharmareserve.schemas.common_schemas import PageResponse, page_response
from pharmareserve.schemas.medicine_schemas import MedicineCreate, MedicineResponse, MedicineUpdate
from pharmareserve.services import medicine_service

router = APIRouter()


# ПОШУК ЛІКІВ (публічно)
@router.get(
    "/",
    response_model=PageResponse[MedicineResponse],
    summary="Пошук ліків",
    description="Фільтри: pharmacy_id, name (підрядок), availability, min_price, max_price."
)
def read_medicines(
    pharmacy_id: Optional[int] = None,
    name: Optional[str] = None,
    availability: Optional[bool] = None,
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    store: EntityStore = Depends(get_store)
):
    result = medicine_service.list_medicines(
        store,
        pharmacy_id=pharmacy_id,
        name=name,
        availability=availability,
        min_price=min_price,
        max_price=max_price,
        page=page,
        limit=limit,
    )
    return page_response(result)


@router.get(
    "/pharmacy/{pharmacy_id}",
    response_model=PageResponse[MedicineResponse],
    summary="Ліки конкретної аптеки"
)
def read_medicines_by_pharmacy(
    pharmacy_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    store: EntityStore = Depends(get_store)
):
    result = medicine_service.list_medicines_by_pharmacy(store, pharmacy_id, page=page, limit=limit)
    return page_response(result)


@router.get(
    "/{medicine_id}",
    response_model=MedicineResponse,
    summary="Деталі ліків",
    responses={404: {"description": "Ліки не знайдено"}}
)
def read_medicine(medicine_id: int, store: EntityStore = Depends(get_store)):
    return medicine_service.get_medicine(store, medicine_id)


# УПРАВЛІННЯ АСОРТИМЕНТОМ
@router.post(
    "/",
    response_model=MedicineResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Додати ліки в аптеку",
    description="Тільки власник аптеки (або адмін).",
    responses={
        403: {"description": "Чужа аптека"},
        404: {"description": "Аптека не знайдена"}
    }
)
def create_medicine(
    medicine: MedicineCreate,
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    return medicine_service.create_medicine(store, principal, medicine.model_dump())


@router.put(
    "/{medicine_id}",
    response_model=MedicineResponse,
    summary="Оновити ліки",
    description="Ціна, назва, дозування, наявність. Власник аптеки або адмін.",
    responses={
        403: {"description": "Ліки з чужої аптеки"},
        404: {"description": "Ліки не знайдено"}
    }
)
def update_medicine(
    medicine_id: int,
    medicine: MedicineUpdate,
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    fields = medicine.model_dump(exclude_unset=True, exclude_none=True)
    return medicine_service.update_medicine(store, principal, medicine_id, fields)


@router.delete(
    "/{medicine_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Видалити ліки",
    responses={
        403: {"description": "Ліки з чужої аптеки"},
        404: {"description": "Ліки не знайдено"}
    }
)
def delete_medicine(
    medicine_id: int,
    store: EntityStore = Depends(get_store),
    principal: Principal = Depends(get_current_principal)
):
    medicine_service.delete_medicine(store, principal, medicine_id)
    return None
