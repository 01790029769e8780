from dataclasses import dataclass

from pharmareserve.core.enums import Role


@dataclass(frozen=True)
class Principal:
    """Автентифікований користувач, який виконує дію. Передається в сервіси явно."""
    id: int
    role: Role

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(id=user.id, role=Role(user.role))
