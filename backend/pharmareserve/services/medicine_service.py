import logging
from typing import Any, Dict, Optional

from pharmareserve.core.principal import Principal
from pharmareserve.db.models import Medicine
from pharmareserve.db.store import EntityStore
from pharmareserve.services.audit_service import log_action
from pharmareserve.services.ownership import load_medicine, load_pharmacy, owns_medicine, owns_pharmacy
from pharmareserve.services.pagination import Page, paginate
from pharmareserve.services.policy import Action, Relation, Resource, authorize

logger = logging.getLogger(__name__)


def create_medicine(store: EntityStore, principal: Principal, fields: Dict[str, Any]) -> Medicine:
    pharmacy = load_pharmacy(store, fields["pharmacy_id"])
    relations = {Relation.OWNER} if owns_pharmacy(store, principal, pharmacy.id) else set()
    authorize(
        principal.role, Resource.MEDICINE, Action.CREATE, relations,
        message="Not authorized to add medicines to this pharmacy",
    )

    medicine = store.create(Medicine, **fields)
    logger.info("Medicine %s added to pharmacy %s by user %s", medicine.id, pharmacy.id, principal.id)
    return medicine


def update_medicine(
    store: EntityStore, principal: Principal, medicine_id: int, fields: Dict[str, Any]
) -> Medicine:
    medicine = load_medicine(store, medicine_id)
    # Власник визначається через поточну аптеку ліків
    relations = {Relation.OWNER} if owns_medicine(store, principal, medicine_id) else set()
    authorize(
        principal.role, Resource.MEDICINE, Action.UPDATE, relations,
        message="Not authorized to update this medicine",
    )

    # Переносити ліки в іншу аптеку через update не можна
    fields = {k: v for k, v in fields.items() if k != "pharmacy_id"}
    return store.update(medicine, **fields)


def delete_medicine(store: EntityStore, principal: Principal, medicine_id: int) -> None:
    medicine = load_medicine(store, medicine_id)
    relations = {Relation.OWNER} if owns_medicine(store, principal, medicine_id) else set()
    authorize(
        principal.role, Resource.MEDICINE, Action.DELETE, relations,
        message="Not authorized to delete this medicine",
    )

    log_action(store, principal, "MEDICINE_DELETED", {
        "medicine_id": medicine.id,
        "name": medicine.name,
        "pharmacy_id": medicine.pharmacy_id,
    })
    store.delete(medicine)


def get_medicine(store: EntityStore, medicine_id: int) -> Medicine:
    return load_medicine(store, medicine_id)


def list_medicines(
    store: EntityStore,
    pharmacy_id: Optional[int] = None,
    name: Optional[str] = None,
    availability: Optional[bool] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    page: int = 1,
    limit: int = 10,
) -> Page:
    query = store.find(Medicine)

    if pharmacy_id is not None:
        query = query.filter(Medicine.pharmacy_id == pharmacy_id)
    if name:
        query = query.filter(Medicine.name.ilike(f"%{name}%"))
    if availability is not None:
        query = query.filter(Medicine.availability == availability)
    if min_price is not None:
        query = query.filter(Medicine.price >= min_price)
    if max_price is not None:
        query = query.filter(Medicine.price <= max_price)

    query = query.order_by(Medicine.created_at.desc(), Medicine.id.desc())
    return paginate(query, page, limit)


def list_medicines_by_pharmacy(store: EntityStore, pharmacy_id: int, page: int = 1, limit: int = 10) -> Page:
    return list_medicines(store, pharmacy_id=pharmacy_id, page=page, limit=limit)
