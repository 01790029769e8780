from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional

from pharmareserve.core.enums import Role

# Базова схема (спільні поля)
class UserBase(BaseModel):
    email: EmailStr
    full_name: str = Field(min_length=1, max_length=100)
    role: Role = Role.CONSUMER

# Що надсилають при реєстрації (тут є пароль)
class UserCreate(UserBase):
    password: str = Field(min_length=6)

# Оновлення профілю (PUT /auth/updatedetails)
class UserUpdate(BaseModel):
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=100)

class PasswordUpdate(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)

# Що віддаємо клієнту (тут НЕМАЄ пароля, але є ID)
class UserResponse(UserBase):
    id: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True

# Коротка форма для вкладення в бронювання
class UserBrief(BaseModel):
    id: int
    full_name: str
    email: str

    class Config:
        from_attributes = True
