"""
Бронювання ліків: створення, зміна статусу, видалення, перегляд.

Стани: pending -> confirmed | cancelled. Виходи з confirmed/cancelled
не блокуються (так працює поточна система, див. DESIGN.md).
"""
import logging
from typing import Optional

from pharmareserve.core.enums import ReservationStatus, Role
from pharmareserve.core.exceptions import ConflictError, NotFoundError, ValidationError
from pharmareserve.core.principal import Principal
from pharmareserve.db.models import Reservation
from pharmareserve.db.store import EntityStore
from pharmareserve.services.ownership import (
    load_medicine,
    load_reservation,
    pharmacy_of_user,
    reservation_relation,
)
from pharmareserve.services.pagination import Page, paginate
from pharmareserve.services.policy import Action, Resource, authorize

logger = logging.getLogger(__name__)


def create_reservation(store: EntityStore, principal: Principal, medicine_id: int) -> Reservation:
    authorize(
        principal.role, Resource.RESERVATION, Action.CREATE,
        message="Not authorized to create reservations",
    )

    # 1. Ліки існують
    medicine = load_medicine(store, medicine_id)

    # 2. Ліки доступні саме зараз
    if not medicine.availability:
        raise ConflictError("Medicine is not available")

    # 3. Немає іншої pending броні на ці ж ліки
    existing = store.find(
        Reservation,
        user_id=principal.id,
        medicine_id=medicine.id,
        status=ReservationStatus.PENDING.value,
    ).first()
    if existing:
        raise ConflictError("You already have a pending reservation for this medicine")

    reservation = store.create(
        Reservation,
        user_id=principal.id,
        medicine_id=medicine.id,
        pharmacy_id=medicine.pharmacy_id,
        status=ReservationStatus.PENDING.value,
    )
    logger.info(
        "Reservation %s created by user %s for medicine %s (pharmacy %s)",
        reservation.id, principal.id, medicine.id, reservation.pharmacy_id,
    )
    return reservation


def set_reservation_status(
    store: EntityStore,
    principal: Principal,
    reservation_id: int,
    new_status: ReservationStatus,
) -> Reservation:
    try:
        new_status = ReservationStatus(new_status)
    except ValueError:
        raise ValidationError(f"Unknown reservation status: {new_status}")

    reservation = load_reservation(store, reservation_id)
    relation = reservation_relation(store, principal, reservation)

    authorize(
        principal.role, Resource.RESERVATION, Action.UPDATE_STATUS,
        relation.relations, new_status,
        message="Not authorized to update this reservation",
    )

    old_status = reservation.status
    reservation = store.update(reservation, status=new_status.value)
    logger.info(
        "Reservation %s status %s -> %s by user %s",
        reservation.id, old_status, reservation.status, principal.id,
    )
    return reservation


def delete_reservation(store: EntityStore, principal: Principal, reservation_id: int) -> None:
    reservation = load_reservation(store, reservation_id)
    relation = reservation_relation(store, principal, reservation)

    authorize(
        principal.role, Resource.RESERVATION, Action.DELETE, relation.relations,
        message="Not authorized to delete this reservation",
    )

    store.delete(reservation)
    logger.info("Reservation %s deleted by user %s", reservation_id, principal.id)


def get_reservation(store: EntityStore, principal: Principal, reservation_id: int) -> Reservation:
    reservation = load_reservation(store, reservation_id)
    relation = reservation_relation(store, principal, reservation)

    authorize(
        principal.role, Resource.RESERVATION, Action.VIEW, relation.relations,
        message="Not authorized to view this reservation",
    )
    return reservation


def list_reservations(
    store: EntityStore,
    principal: Principal,
    status: Optional[ReservationStatus] = None,
    page: int = 1,
    limit: int = 10,
) -> Page:
    query = store.find(Reservation)

    if principal.role == Role.CONSUMER:
        query = query.filter(Reservation.user_id == principal.id)
    elif principal.role == Role.PHARMACY:
        pharmacy = pharmacy_of_user(store, principal.id)
        if not pharmacy:
            raise NotFoundError("No pharmacy found for this user")
        query = query.filter(Reservation.pharmacy_id == pharmacy.id)
    # Адмін бачить усі бронювання

    if status:
        query = query.filter(Reservation.status == ReservationStatus(status).value)

    query = query.order_by(Reservation.created_at.desc(), Reservation.id.desc())
    return paginate(query, page, limit)
