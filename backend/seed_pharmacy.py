"""Seed a demo pharmacy with sample stock and prescriptions, then scan it.

Usage: python seed_pharmacy.py
"""
from datetime import date
from decimal import Decimal
import secrets

from mediserve.core.security import get_password_hash
from mediserve.db.init_db import init_db
from mediserve.db.session import SessionLocal
from mediserve.models.medicine import Medicine
from mediserve.models.pharmacy import Pharmacy
from mediserve.models.prescription import Prescription, PrescriptionStatus
from mediserve.models.user import User
from mediserve.services.notification_service import NotificationCenter

DEMO_EMAIL = "owner@mediserve.com"

MEDICINES = [
    ("Paracetamol", "Calpol", 150, "2025-12-31", "5.00", 50),
    ("Ibuprofen", "Advil", 45, "2024-11-30", "8.50", 50),
    ("Amoxicillin", "Generic", 200, "2025-08-01", "12.75", 75),
    ("Lisinopril", "Zestril", 70, "2026-01-15", "22.00", 50),
    ("Metformin", "Glucophage", 10, "2024-09-20", "15.20", 20),
    ("Amlodipine", "Norvasc", 90, "2025-06-30", "18.00", 40),
    ("Cetirizine", "Zyrtec", 120, "2025-10-10", "7.80", 60),
]

PRESCRIPTIONS = [
    ("Alice Johnson", "Dr. Smith", "2024-07-20", PrescriptionStatus.PENDING,
     [("Paracetamol", "500mg, twice a day"), ("Cetirizine", "10mg, once a day")]),
    ("Bob Williams", "Dr. Jones", "2024-07-19", PrescriptionStatus.READY_FOR_PICKUP,
     [("Amoxicillin", "250mg, three times a day")]),
    ("Charlie Brown", "Dr. Davis", "2024-07-18", PrescriptionStatus.COMPLETED,
     [("Metformin", "500mg, twice daily")]),
    ("Diana Prince", "Dr. Miller", "2024-07-21", PrescriptionStatus.PENDING,
     [("Ozempic", "1mg/week")]),
]


def seed_pharmacy():
    init_db()
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == DEMO_EMAIL).first()
        if user:
            print(f"Demo owner {DEMO_EMAIL} already exists, nothing to do.")
            return

        password = secrets.token_urlsafe(12) + "1"
        user = User(email=DEMO_EMAIL, hashed_password=get_password_hash(password), name="Medico Owner")
        db.add(user)
        db.flush()
        pharmacy = Pharmacy(
            owner_id=user.id,
            owner_name="Medico Owner",
            pharmacy_name="MediServe",
            email=DEMO_EMAIL,
            is_open=True,
        )
        db.add(pharmacy)
        db.flush()

        by_name = {}
        for name, brand, quantity, expiry, price, threshold in MEDICINES:
            medicine = Medicine(
                pharmacy_id=pharmacy.id,
                name=name,
                brand=brand,
                quantity=quantity,
                expiry_date=date.fromisoformat(expiry),
                price=Decimal(price),
                low_stock_threshold=threshold,
            )
            db.add(medicine)
            by_name[name] = medicine
        db.flush()

        for patient, doctor, day, status, items in PRESCRIPTIONS:
            db.add(Prescription(
                pharmacy_id=pharmacy.id,
                patient_name=patient,
                doctor_name=doctor,
                date=date.fromisoformat(day),
                status=status,
                medicines=[
                    {
                        "medicine_id": by_name[med].id if med in by_name else None,
                        "name": med,
                        "dosage": dosage,
                        "quantity": 1,
                    }
                    for med, dosage in items
                ],
            ))
        db.commit()
        db.refresh(pharmacy)

        outcome = NotificationCenter.load(db, pharmacy).scan()

        print("\n" + "=" * 60)
        print("DEMO PHARMACY CREATED")
        print("=" * 60)
        print(f"Email:    {DEMO_EMAIL}")
        print(f"Password: {password}")
        print(f"Stock:    {len(MEDICINES)} medicines, {len(PRESCRIPTIONS)} prescriptions")
        print(f"Alerts:   {len(outcome.emitted)} notifications emitted")
        print("=" * 60 + "\n")
    finally:
        db.close()


if __name__ == "__main__":
    seed_pharmacy()
