"""
Аптеки: один користувач - одна аптека, ліцензія унікальна,
змінювати/видаляти може лише власник або адмін.
"""
import logging
from typing import Any, Dict, Optional

from pharmareserve.core.exceptions import ConflictError, NotFoundError
from pharmareserve.core.principal import Principal
from pharmareserve.db.models import Pharmacy
from pharmareserve.db.store import EntityStore
from pharmareserve.services.audit_service import log_action
from pharmareserve.services.ownership import load_pharmacy, owns_pharmacy, pharmacy_of_user
from pharmareserve.services.pagination import Page, paginate
from pharmareserve.services.policy import Action, Relation, Resource, authorize

logger = logging.getLogger(__name__)


def _owner_relations(store: EntityStore, principal: Principal, pharmacy_id: int):
    return {Relation.OWNER} if owns_pharmacy(store, principal, pharmacy_id) else set()


def create_pharmacy(store: EntityStore, principal: Principal, fields: Dict[str, Any]) -> Pharmacy:
    authorize(
        principal.role, Resource.PHARMACY, Action.CREATE,
        message="Not authorized to create a pharmacy",
    )

    if pharmacy_of_user(store, principal.id):
        raise ConflictError("User already has a pharmacy")

    # Власника беремо тільки з principal, а не з тіла запиту
    fields = {k: v for k, v in fields.items() if k not in ("user_id", "verified")}
    pharmacy = store.add(Pharmacy(user_id=principal.id, **fields))

    # Аптека і запис аудиту комітяться разом
    log_action(store, principal, "PHARMACY_CREATED", {"pharmacy_id": pharmacy.id, "license": pharmacy.license})
    store.commit()
    store.db.refresh(pharmacy)
    return pharmacy


def update_pharmacy(
    store: EntityStore, principal: Principal, pharmacy_id: int, fields: Dict[str, Any]
) -> Pharmacy:
    pharmacy = load_pharmacy(store, pharmacy_id)
    authorize(
        principal.role, Resource.PHARMACY, Action.UPDATE,
        _owner_relations(store, principal, pharmacy_id),
        message="Not authorized to update this pharmacy",
    )

    fields = {k: v for k, v in fields.items() if k != "user_id"}
    if "verified" in fields and fields["verified"] != pharmacy.verified:
        log_action(store, principal, "PHARMACY_VERIFICATION_CHANGED", {
            "pharmacy_id": pharmacy.id,
            "verified": fields["verified"],
        })

    return store.update(pharmacy, **fields)


def delete_pharmacy(store: EntityStore, principal: Principal, pharmacy_id: int) -> None:
    pharmacy = load_pharmacy(store, pharmacy_id)
    authorize(
        principal.role, Resource.PHARMACY, Action.DELETE,
        _owner_relations(store, principal, pharmacy_id),
        message="Not authorized to delete this pharmacy",
    )

    log_action(store, principal, "PHARMACY_DELETED", {"pharmacy_id": pharmacy.id, "license": pharmacy.license})
    store.delete(pharmacy)


def get_pharmacy(store: EntityStore, pharmacy_id: int) -> Pharmacy:
    return load_pharmacy(store, pharmacy_id)


def get_my_pharmacy(store: EntityStore, principal: Principal) -> Pharmacy:
    # Власна аптека: лише роль pharmacy (і адмін)
    authorize(
        principal.role, Resource.PHARMACY, Action.VIEW, {Relation.OWNER},
        message="Only pharmacy accounts have a pharmacy",
    )
    pharmacy = pharmacy_of_user(store, principal.id)
    if not pharmacy:
        raise NotFoundError("No pharmacy found for this user")
    return pharmacy


def list_pharmacies(
    store: EntityStore,
    verified: Optional[bool] = None,
    location: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Page:
    query = store.find(Pharmacy)

    if verified is not None:
        query = query.filter(Pharmacy.verified == verified)
    if location:
        query = query.filter(Pharmacy.location.ilike(f"%{location}%"))

    query = query.order_by(Pharmacy.created_at.desc(), Pharmacy.id.desc())
    return paginate(query, page, limit)
