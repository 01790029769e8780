import logging
from typing import Any, Dict, Optional

from pharmareserve.core.principal import Principal
from pharmareserve.db.models import AuditLog
from pharmareserve.db.store import EntityStore

logger = logging.getLogger("pharmareserve.audit")


def log_action(
    store: EntityStore,
    principal: Optional[Principal],
    action: str,
    details: Optional[Dict[str, Any]] = None,
) -> AuditLog:
    """
    Додає запис до журналу аудиту в поточну сесію.
    Запис потрапляє в БД разом з наступним commit (тобто разом з самою зміною).
    """
    entry = AuditLog(
        user_id=principal.id if principal else None,
        action=action,
        details=details or {},
    )
    store.db.add(entry)
    logger.info("%s by user %s: %s", action, principal.id if principal else None, details)
    return entry
