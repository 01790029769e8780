from pydantic import BaseModel, StringConstraints
from datetime import datetime
from typing import Optional
from typing_extensions import Annotated

PharmacyName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# --- Аптеки ---
class PharmacyBase(BaseModel):
    name: PharmacyName
    location: RequiredText
    license: RequiredText
    contact: RequiredText

class PharmacyCreate(PharmacyBase):
    pass

# Усі поля необов'язкові; verified змінює власник або адмін
class PharmacyUpdate(BaseModel):
    name: Optional[PharmacyName] = None
    location: Optional[RequiredText] = None
    license: Optional[RequiredText] = None
    contact: Optional[RequiredText] = None
    verified: Optional[bool] = None

class PharmacyResponse(PharmacyBase):
    id: int
    verified: bool
    user_id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Вкладається у ліки та бронювання
class PharmacyBrief(BaseModel):
    id: int
    name: str
    location: str
    contact: str
    verified: bool

    class Config:
        from_attributes = True
