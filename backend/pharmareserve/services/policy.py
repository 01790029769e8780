"""
Політика доступу: чиста функція allowed(role, resource, action, relations, new_status).

Таблиця правил перелічена явно. Все, що не дозволено правилом, заборонено.
"""
import enum
import logging
from typing import AbstractSet, Callable, Dict, Optional

from pharmareserve.core.enums import ReservationStatus, Role
from pharmareserve.core.exceptions import ForbiddenError

logger = logging.getLogger(__name__)


class Resource(str, enum.Enum):
    PHARMACY = "pharmacy"
    MEDICINE = "medicine"
    RESERVATION = "reservation"


class Action(str, enum.Enum):
    CREATE = "create"
    VIEW = "view"
    UPDATE = "update"
    UPDATE_STATUS = "update_status"
    DELETE = "delete"


class Relation(str, enum.Enum):
    OWNER = "owner"
    REQUESTER = "requester"
    SERVICING_PHARMACY_OWNER = "servicing_pharmacy_owner"


Rule = Callable[[Resource, Action, AbstractSet[Relation], Optional[ReservationStatus]], bool]

PHARMACY_STATUS_TARGETS = frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED})


def _consumer_rules(resource, action, relations, new_status) -> bool:
    if resource != Resource.RESERVATION:
        return False
    if action == Action.CREATE:
        return True
    if action == Action.UPDATE_STATUS:
        return Relation.REQUESTER in relations and new_status == ReservationStatus.CANCELLED
    if action in (Action.VIEW, Action.DELETE):
        return Relation.REQUESTER in relations
    return False


def _pharmacy_rules(resource, action, relations, new_status) -> bool:
    if resource == Resource.RESERVATION:
        if action == Action.UPDATE_STATUS:
            return (
                Relation.SERVICING_PHARMACY_OWNER in relations
                and new_status in PHARMACY_STATUS_TARGETS
            )
        if action in (Action.VIEW, Action.DELETE):
            return Relation.SERVICING_PHARMACY_OWNER in relations
        return False

    if resource == Resource.PHARMACY:
        if action == Action.CREATE:
            return True
        if action in (Action.VIEW, Action.UPDATE, Action.DELETE):
            return Relation.OWNER in relations
        return False

    if resource == Resource.MEDICINE:
        if action in (Action.CREATE, Action.UPDATE, Action.DELETE):
            return Relation.OWNER in relations
        return False

    return False


def _admin_rules(resource, action, relations, new_status) -> bool:
    return True


RULES: Dict[Role, Rule] = {
    Role.CONSUMER: _consumer_rules,
    Role.PHARMACY: _pharmacy_rules,
    Role.ADMIN: _admin_rules,
}

def check_rules_cover_roles(rules: Dict[Role, Rule]) -> None:
    missing = set(Role) - set(rules)
    if missing:
        raise RuntimeError(
            "No access rules for roles: %s" % ", ".join(sorted(r.value for r in missing))
        )


# Нова роль без правил має впасти одразу при імпорті
check_rules_cover_roles(RULES)


def allowed(
    role: Role,
    resource: Resource,
    action: Action,
    relations: AbstractSet[Relation] = frozenset(),
    new_status: Optional[ReservationStatus] = None,
) -> bool:
    try:
        rule = RULES[Role(role)]
        resource, action = Resource(resource), Action(action)
        relations = frozenset(Relation(r) for r in relations)
        if new_status is not None:
            new_status = ReservationStatus(new_status)
    except (KeyError, ValueError):
        return False
    return rule(resource, action, relations, new_status)


def authorize(
    role: Role,
    resource: Resource,
    action: Action,
    relations: AbstractSet[Relation] = frozenset(),
    new_status: Optional[ReservationStatus] = None,
    message: str = "Not authorized to perform this action",
) -> None:
    if not allowed(role, resource, action, relations, new_status):
        logger.warning(
            "Denied %s %s for role=%s relations=%s new_status=%s",
            action, resource, role, sorted(str(r) for r in relations), new_status,
        )
        raise ForbiddenError(message)
