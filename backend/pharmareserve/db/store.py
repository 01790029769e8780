"""
Тонка обгортка над Session: get / find / create / update / delete.

create/update/delete одразу комітять, add лише робить flush. IntegrityError перетворюється на
ConflictError (унікальність, зовнішні ключі) або ValidationError (інші обмеження).
"""
import logging
from typing import Any, Optional, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from pharmareserve.core.exceptions import ConflictError, DomainError, ValidationError

logger = logging.getLogger(__name__)

# Фрагмент повідомлення драйвера -> текст для клієнта (sqlite / postgres)
UNIQUE_VIOLATION_MESSAGES = {
    "pharmacies.license": "License number already exists",
    "pharmacies_license_key": "License number already exists",
    "users.email": "Email already registered",
    "ix_users_email": "Email already registered",
    "reservations.user_id": "You already have a pending reservation for this medicine",
    "uq_reservations_pending_user_medicine": "You already have a pending reservation for this medicine",
}


def translate_integrity_error(exc: IntegrityError) -> DomainError:
    message = str(exc.orig)
    lowered = message.lower()

    if "unique" in lowered or "duplicate" in lowered:
        for fragment, detail in UNIQUE_VIOLATION_MESSAGES.items():
            if fragment in message:
                return ConflictError(detail)
        return ConflictError("Resource already exists")

    if "foreign key" in lowered:
        return ConflictError("Resource is still referenced by other records")

    return ValidationError("Invalid data: a required field is missing or malformed")


class EntityStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, model: Type[Any], entity_id: int) -> Optional[Any]:
        return self.db.get(model, entity_id)

    def find(self, model: Type[Any], **filters) -> Query:
        query = self.db.query(model)
        if filters:
            query = query.filter_by(**filters)
        return query

    def create(self, model: Type[Any], **fields) -> Any:
        instance = model(**fields)
        self.db.add(instance)
        self.commit()
        self.db.refresh(instance)
        return instance

    def add(self, instance: Any) -> Any:
        """Додає без коміту; flush потрібен, щоб отримати id."""
        self.db.add(instance)
        self._write(self.db.flush)
        return instance

    def update(self, instance: Any, **fields) -> Any:
        for key, value in fields.items():
            setattr(instance, key, value)
        self.commit()
        self.db.refresh(instance)
        return instance

    def delete(self, instance: Any) -> None:
        self.db.delete(instance)
        self.commit()

    def commit(self) -> None:
        self._write(self.db.commit)

    def _write(self, operation) -> None:
        try:
            operation()
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("Integrity error on write: %s", exc.orig)
            raise translate_integrity_error(exc) from exc
