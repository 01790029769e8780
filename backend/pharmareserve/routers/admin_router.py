from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Any, Optional
from datetime import datetime

from pydantic import BaseModel

from pharmareserve.api.deps import get_current_admin
from pharmareserve.core.enums import ReservationStatus
from pharmareserve.db.database import get_db
from pharmareserve.db.models import AuditLog, User, Pharmacy, Medicine, Reservation

router = APIRouter()


class AuditLogResponse(BaseModel):
    id: int
    user_id: int | None
    action: str
    details: Any
    created_at: datetime

    class Config:
        from_attributes = True


@router.get("/audit-logs", response_model=List[AuditLogResponse])
def read_audit_logs(
    limit: int = Query(100, ge=1, le=1000),
    action: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    """
    Журнал дій над аптеками та ліками. Найновіші спочатку.
    """
    query = db.query(AuditLog)
    if action:
        query = query.filter(AuditLog.action == action)
    return query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit).all()


@router.get("/dashboard-stats")
def get_dashboard_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    """
    Загальна статистика мережі: користувачі за ролями, аптеки,
    ліки в наявності, бронювання за статусами.
    """
    users_by_role = dict(
        db.query(User.role, func.count(User.id)).group_by(User.role).all()
    )
    reservations_by_status = dict(
        db.query(Reservation.status, func.count(Reservation.id)).group_by(Reservation.status).all()
    )

    return {
        "users_by_role": users_by_role,
        "total_pharmacies": db.query(func.count(Pharmacy.id)).scalar() or 0,
        "verified_pharmacies": db.query(func.count(Pharmacy.id)).filter(Pharmacy.verified == True).scalar() or 0,
        "total_medicines": db.query(func.count(Medicine.id)).scalar() or 0,
        "available_medicines": db.query(func.count(Medicine.id)).filter(Medicine.availability == True).scalar() or 0,
        "reservations_by_status": {
            s.value: reservations_by_status.get(s.value, 0) for s in ReservationStatus
        },
    }
