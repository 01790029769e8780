"""
Заповнення БД демо-даними: адмін, дві аптеки з ліками, покупець, два бронювання.

    python -m pharmareserve.db.seed
"""
import logging

from pharmareserve.core.enums import ReservationStatus, Role
from pharmareserve.core.security import get_password_hash
from pharmareserve.db.database import Base, SessionLocal, engine
from pharmareserve.db.models import AuditLog, Medicine, Pharmacy, Reservation, User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

PHARMACIES = [
    {
        "owner": {"email": "citycare@pharmacy.com", "full_name": "CityCare Owner"},
        "pharmacy": {
            "name": "CityCare Pharmacy",
            "location": "Downtown, Main St 12",
            "license": "PH-2024-0001",
            "contact": "+1 555 0100",
            "verified": True,
        },
        "medicines": [
            {"name": "Paracetamol", "strength": "500mg", "price": 3.5, "availability": True},
            {"name": "Amoxicillin", "strength": "250mg", "price": 8.9, "availability": True},
            {"name": "Ibuprofen", "strength": "400mg", "price": 4.2, "availability": False},
        ],
    },
    {
        "owner": {"email": "greenleaf@pharmacy.com", "full_name": "GreenLeaf Owner"},
        "pharmacy": {
            "name": "GreenLeaf Drugstore",
            "location": "Uptown, Oak Ave 7",
            "license": "PH-2024-0002",
            "contact": "+1 555 0200",
            "verified": False,
        },
        "medicines": [
            {"name": "Cetirizine", "strength": "10mg", "price": 5.0, "availability": True},
            {"name": "Omeprazole", "strength": "20mg", "price": 7.25, "availability": True},
        ],
    },
]


def seed_database(db) -> dict:
    # Очищаємо попередні дані (залежні таблиці першими)
    for model in (Reservation, Medicine, Pharmacy, AuditLog, User):
        db.query(model).delete()
    db.commit()

    hashed = get_password_hash(DEMO_PASSWORD)

    admin = User(email="admin@pharmacy.com", full_name="Admin User", role=Role.ADMIN.value, hashed_password=hashed)
    consumer = User(email="consumer@example.com", full_name="John Consumer", role=Role.CONSUMER.value, hashed_password=hashed)
    db.add_all([admin, consumer])

    medicines = []
    for entry in PHARMACIES:
        owner = User(role=Role.PHARMACY.value, hashed_password=hashed, **entry["owner"])
        pharmacy = Pharmacy(owner=owner, **entry["pharmacy"])
        db.add_all([owner, pharmacy])
        for medicine_data in entry["medicines"]:
            medicine = Medicine(pharmacy=pharmacy, **medicine_data)
            db.add(medicine)
            medicines.append(medicine)
    db.flush()

    db.add_all([
        Reservation(
            user_id=consumer.id,
            medicine_id=medicines[0].id,
            pharmacy_id=medicines[0].pharmacy_id,
            status=ReservationStatus.PENDING.value,
        ),
        Reservation(
            user_id=consumer.id,
            medicine_id=medicines[1].id,
            pharmacy_id=medicines[1].pharmacy_id,
            status=ReservationStatus.CONFIRMED.value,
        ),
    ])
    db.commit()

    return {
        "users": db.query(User).count(),
        "pharmacies": db.query(Pharmacy).count(),
        "medicines": db.query(Medicine).count(),
        "reservations": db.query(Reservation).count(),
    }


def main():
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        counts = seed_database(db)
    finally:
        db.close()

    logger.info("Database seeded: %s", counts)
    print("Demo accounts (password: %s):" % DEMO_PASSWORD)
    print("  admin@pharmacy.com      (admin)")
    print("  consumer@example.com    (consumer)")
    for entry in PHARMACIES:
        print("  %-23s (pharmacy)" % entry["owner"]["email"])


if __name__ == "__main__":
    main()
