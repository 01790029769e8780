from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from pharmareserve.core.enums import ReservationStatus
from pharmareserve.schemas.medicine_schemas import MedicineBrief
from pharmareserve.schemas.pharmacy_schemas import PharmacyBrief
from pharmareserve.schemas.user_schemas import UserBrief

class ReservationCreate(BaseModel):
    # Аптеку не передаємо: вона береться з ліків
    medicine_id: int

class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus

class ReservationResponse(BaseModel):
    id: int
    user_id: int
    medicine_id: int
    pharmacy_id: int
    status: ReservationStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    user: Optional[UserBrief] = None
    medicine: Optional[MedicineBrief] = None
    pharmacy: Optional[PharmacyBrief] = None

    class Config:
        from_attributes = True
