from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from pharmareserve.core.enums import Role
from pharmareserve.core.principal import Principal
from pharmareserve.core.security import decode_access_token
from pharmareserve.db.database import get_db
from pharmareserve.db.models import User
from pharmareserve.db.store import EntityStore

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def get_store(db: Session = Depends(get_db)) -> EntityStore:
    return EntityStore(db)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    email = decode_access_token(token)
    if not email:
        raise credentials_exception

    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(status_code=400, detail="Inactive user")

    return user


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != Role.ADMIN.value:
        raise HTTPException(status_code=403, detail="Not enough privileges")
    return current_user


def get_current_principal(current_user: User = Depends(get_current_user)) -> Principal:
    # Роль береться з БД на кожен запит, а не з токена
    return Principal.from_user(current_user)
