"""
Визначення власника: аптека -> user_id, ліки -> аптека -> user_id,
бронювання -> (замовник, власник аптеки, що обслуговує).

Неіснуюча сутність дає NotFoundError, а не False.
"""
from dataclasses import dataclass
from typing import FrozenSet, Optional

from pharmareserve.core.exceptions import NotFoundError
from pharmareserve.core.principal import Principal
from pharmareserve.db.models import Medicine, Pharmacy, Reservation
from pharmareserve.db.store import EntityStore
from pharmareserve.services.policy import Relation


@dataclass(frozen=True)
class ReservationRelation:
    is_requester: bool
    is_servicing_pharmacy_owner: bool

    @property
    def relations(self) -> FrozenSet[Relation]:
        found = set()
        if self.is_requester:
            found.add(Relation.REQUESTER)
        if self.is_servicing_pharmacy_owner:
            found.add(Relation.SERVICING_PHARMACY_OWNER)
        return frozenset(found)


def load_pharmacy(store: EntityStore, pharmacy_id: int) -> Pharmacy:
    pharmacy = store.get(Pharmacy, pharmacy_id)
    if not pharmacy:
        raise NotFoundError("Pharmacy not found")
    return pharmacy


def load_medicine(store: EntityStore, medicine_id: int) -> Medicine:
    medicine = store.get(Medicine, medicine_id)
    if not medicine:
        raise NotFoundError("Medicine not found")
    return medicine


def load_reservation(store: EntityStore, reservation_id: int) -> Reservation:
    reservation = store.get(Reservation, reservation_id)
    if not reservation:
        raise NotFoundError("Reservation not found")
    return reservation


def owns_pharmacy(store: EntityStore, principal: Principal, pharmacy_id: int) -> bool:
    # Завжди читаємо поточного власника з БД
    pharmacy = load_pharmacy(store, pharmacy_id)
    return pharmacy.user_id == principal.id


def owns_medicine(store: EntityStore, principal: Principal, medicine_id: int) -> bool:
    medicine = load_medicine(store, medicine_id)
    return owns_pharmacy(store, principal, medicine.pharmacy_id)


def pharmacy_of_user(store: EntityStore, user_id: int) -> Optional[Pharmacy]:
    return store.find(Pharmacy, user_id=user_id).first()


def reservation_relation(store: EntityStore, principal: Principal, reservation: Reservation) -> ReservationRelation:
    servicing = store.get(Pharmacy, reservation.pharmacy_id)
    return ReservationRelation(
        is_requester=reservation.user_id == principal.id,
        is_servicing_pharmacy_owner=servicing is not None and servicing.user_id == principal.id,
    )
