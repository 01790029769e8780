import enum


class Role(str, enum.Enum):
    CONSUMER = "consumer"
    PHARMACY = "pharmacy"
    ADMIN = "admin"


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
