from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from typing import List, Optional

from pharmareserve.api.deps import get_current_admin, get_current_user, get_store
from pharmareserve.core.enums import Role
from pharmareserve.core.security import create_access_token, get_password_hash, verify_password
from pharmareserve.db.database import get_db
from pharmareserve.db.models import User
from pharmareserve.db.store import EntityStore
from pharmareserve.schemas.auth_schemas import Token
from pharmareserve.schemas.common_schemas import MessageResponse
from pharmareserve.schemas.user_schemas import PasswordUpdate, UserCreate, UserResponse, UserUpdate

router = APIRouter()


# ПУБЛІЧНА РЕЄСТРАЦІЯ
@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Реєстрація користувача",
    description="Публічний ендпоінт. Роль: consumer або pharmacy. Адміна так створити не можна.",
    responses={
        403: {"description": "Спроба зареєструвати адміністратора"},
        409: {"description": "Користувач з таким email вже існує"}
    }
)
def register(user_in: UserCreate, store: EntityStore = Depends(get_store)):
    if user_in.role == Role.ADMIN:
        raise HTTPException(status_code=403, detail="Admin accounts cannot be self-registered")

    if store.find(User, email=user_in.email).first():
        raise HTTPException(status_code=409, detail="Email already registered")

    return store.create(
        User,
        email=user_in.email,
        hashed_password=get_password_hash(user_in.password),
        full_name=user_in.full_name,
        role=user_in.role.value,
        is_active=True,
    )


# ВХІД В СИСТЕМУ
@router.post(
    "/login",
    response_model=Token,
    summary="Вхід (Отримання токена)",
    responses={
        401: {"description": "Невірний логін або пароль"},
        400: {"description": "Користувач неактивний"}
    }
)
def login_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == form_data.username).first()

    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")

    access_token = create_access_token(subject=user.email, role=user.role)
    return {"access_token": access_token, "token_type": "bearer"}


# ПОТОЧНИЙ КОРИСТУВАЧ
@router.get("/me", response_model=UserResponse, summary="Мій профіль")
def read_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put(
    "/updatedetails",
    response_model=UserResponse,
    summary="Оновити профіль",
    responses={409: {"description": "Email зайнятий"}}
)
def update_details(
    user_in: UserUpdate,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    fields = user_in.model_dump(exclude_unset=True, exclude_none=True)
    # Роль і пароль тут не змінюються
    return store.update(current_user, **fields)


@router.put(
    "/updatepassword",
    response_model=MessageResponse,
    summary="Змінити пароль",
    responses={401: {"description": "Поточний пароль невірний"}}
)
def update_password(
    passwords: PasswordUpdate,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    if not verify_password(passwords.current_password, current_user.hashed_password):
        raise HTTPException(status_code=401, detail="Current password is incorrect")

    store.update(current_user, hashed_password=get_password_hash(passwords.new_password))
    return {"message": "Password updated successfully"}


# СПИСОК КОРИСТУВАЧІВ (тільки адмін)
@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="Список користувачів",
    description="Адмін може фільтрувати за роллю."
)
def read_users(
    role: Optional[Role] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin)
):
    query = db.query(User)
    if role:
        query = query.filter(User.role == role.value)
    return query.order_by(User.id).all()


# ВИДАЛЕННЯ КОРИСТУВАЧА
@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Видалення користувача",
    description="Тільки адмін. Себе видалити не можна.",
    responses={
        403: {"description": "Недостатньо прав"},
        404: {"description": "Користувач не знайдений"}
    }
)
def delete_user(
    user_id: int,
    store: EntityStore = Depends(get_store),
    current_user: User = Depends(get_current_admin)
):
    user_to_delete = store.get(User, user_id)
    if not user_to_delete:
        raise HTTPException(status_code=404, detail="User not found")

    if user_to_delete.id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot delete yourself")

    store.delete(user_to_delete)
    return None
