from pydantic import BaseModel, Field, StringConstraints
from datetime import datetime
from typing import Optional
from typing_extensions import Annotated

from pharmareserve.schemas.pharmacy_schemas import PharmacyBrief

MedicineName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Strength = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# --- Ліки ---
class MedicineBase(BaseModel):
    name: MedicineName
    strength: Strength
    price: float = Field(ge=0)
    availability: bool = True

class MedicineCreate(MedicineBase):
    pharmacy_id: int

class MedicineUpdate(BaseModel):
    name: Optional[MedicineName] = None
    strength: Optional[Strength] = None
    price: Optional[float] = Field(default=None, ge=0)
    availability: Optional[bool] = None

class MedicineResponse(MedicineBase):
    id: int
    pharmacy_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    pharmacy: Optional[PharmacyBrief] = None

    class Config:
        from_attributes = True

class MedicineBrief(BaseModel):
    id: int
    name: str
    strength: str
    price: float

    class Config:
        from_attributes = True
