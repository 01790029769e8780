from sqlalchemy import (
    Column, Integer, String, Boolean, ForeignKey, Float, DateTime, JSON,
    CheckConstraint, Index, text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from pharmareserve.core.enums import ReservationStatus
from pharmareserve.db.database import Base


# 1. КОРИСТУВАЧІ
class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    role = Column(String, nullable=False)  # consumer, pharmacy, admin
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    pharmacy = relationship("Pharmacy", back_populates="owner", uselist=False, passive_deletes="all")
    reservations = relationship("Reservation", back_populates="user", passive_deletes="all")
    audit_logs = relationship("AuditLog", back_populates="user", passive_deletes="all")


# 2. АПТЕКИ
class Pharmacy(Base):
    __tablename__ = "pharmacies"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    location = Column(String, nullable=False, index=True)
    license = Column(String, unique=True, nullable=False)
    contact = Column(String, nullable=False)
    verified = Column(Boolean, default=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="pharmacy")
    medicines = relationship("Medicine", back_populates="pharmacy", passive_deletes="all")


# 3. ЛІКИ (належать конкретній аптеці)
class Medicine(Base):
    __tablename__ = "medicines"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_medicine_price_non_negative"),
        Index("ix_medicines_name_availability", "name", "availability"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    strength = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    availability = Column(Boolean, default=True, index=True)
    pharmacy_id = Column(Integer, ForeignKey("pharmacies.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    pharmacy = relationship("Pharmacy", back_populates="medicines")
    reservations = relationship("Reservation", back_populates="medicine", passive_deletes="all")


# 4. БРОНЮВАННЯ
class Reservation(Base):
    __tablename__ = "reservations"
    __table_args__ = (
        # Не більше однієї pending броні на пару (user, medicine)
        Index(
            "uq_reservations_pending_user_medicine",
            "user_id",
            "medicine_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        Index("ix_reservations_user_status", "user_id", "status"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    medicine_id = Column(Integer, ForeignKey("medicines.id"), nullable=False, index=True)
    # Знімок medicine.pharmacy_id на момент створення, ніколи не перераховується
    pharmacy_id = Column(Integer, ForeignKey("pharmacies.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default=ReservationStatus.PENDING.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="reservations")
    medicine = relationship("Medicine", back_populates="reservations")
    pharmacy = relationship("Pharmacy")


# 5. АУДИТ
class AuditLog(Base):
    __tablename__ = "audit_logs"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    # Запис аудиту переживає видалення користувача
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action = Column(String, nullable=False)
    details = Column(JSON)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="audit_logs")
