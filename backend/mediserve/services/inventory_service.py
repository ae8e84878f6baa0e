"""Stock read/write for one pharmacy. Used by the stock routes and the seed script."""
import csv
import io
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from mediserve.core.config import settings
from mediserve.models.medicine import Medicine
from mediserve.schemas.medicine import MedicineCreate, MedicineUpdate
from mediserve.services.condition_scanner import days_until_expiry


class DuplicateMedicineError(ValueError):
    pass


def list_medicines(db: Session, pharmacy_id: int, search: Optional[str] = None) -> List[Medicine]:
    q = db.query(Medicine).filter(Medicine.pharmacy_id == pharmacy_id)
    if search:
        q = q.filter(Medicine.name.ilike(f"%{search}%") | Medicine.brand.ilike(f"%{search}%"))
    return q.order_by(Medicine.name).all()


def get_medicine(db: Session, pharmacy_id: int, medicine_id: int) -> Optional[Medicine]:
    return db.query(Medicine).filter(
        Medicine.id == medicine_id,
        Medicine.pharmacy_id == pharmacy_id,
    ).first()


def _name_taken(db: Session, pharmacy_id: int, name: str, exclude_id: int = None) -> bool:
    # Exact, case-insensitive match; "_" and "%" are ordinary characters in names
    q = db.query(Medicine.id).filter(
        Medicine.pharmacy_id == pharmacy_id,
        func.lower(Medicine.name) == name.lower(),
    )
    if exclude_id is not None:
        q = q.filter(Medicine.id != exclude_id)
    return q.first() is not None


def create_medicine(db: Session, pharmacy_id: int, data: MedicineCreate) -> Medicine:
    # Notification messages are keyed on the medicine name
    if _name_taken(db, pharmacy_id, data.name):
        raise DuplicateMedicineError(f"Medicine '{data.name}' already exists")

    threshold = data.low_stock_threshold
    if threshold is None:
        threshold = settings.DEFAULT_LOW_STOCK_THRESHOLD

    medicine = Medicine(
        pharmacy_id=pharmacy_id,
        name=data.name.strip(),
        brand=data.brand.strip(),
        quantity=data.quantity,
        expiry_date=data.expiry_date,
        price=Decimal(str(data.price)),
        low_stock_threshold=threshold,
    )
    db.add(medicine)
    db.commit()
    db.refresh(medicine)
    return medicine


def update_medicine(db: Session, medicine: Medicine, updates: MedicineUpdate) -> Medicine:
    changes = updates.model_dump(exclude_unset=True, exclude_none=True)
    if "name" in changes:
        changes["name"] = changes["name"].strip()
        if _name_taken(db, medicine.pharmacy_id, changes["name"], exclude_id=medicine.id):
            raise DuplicateMedicineError(f"Medicine '{changes['name']}' already exists")
    if "brand" in changes:
        changes["brand"] = changes["brand"].strip()
    if "price" in changes:
        changes["price"] = Decimal(str(changes["price"]))

    for key, value in changes.items():
        setattr(medicine, key, value)
    db.commit()
    db.refresh(medicine)
    return medicine


def delete_medicine(db: Session, medicine: Medicine) -> None:
    db.delete(medicine)
    db.commit()


def low_stock_medicines(db: Session, pharmacy_id: int) -> List[Medicine]:
    """Out-of-stock first, then by remaining quantity."""
    return db.query(Medicine).filter(
        Medicine.pharmacy_id == pharmacy_id,
        (Medicine.quantity < Medicine.low_stock_threshold) | (Medicine.quantity == 0),
    ).order_by(Medicine.quantity.asc(), Medicine.name).all()


def expiring_medicines(db: Session, pharmacy_id: int, days: int, today: date = None) -> List[dict]:
    """Medicines expiring within `days`, already-expired ones included."""
    today = today or date.today()
    items = db.query(Medicine).filter(
        Medicine.pharmacy_id == pharmacy_id,
        Medicine.expiry_date <= today + timedelta(days=days),
    ).order_by(Medicine.expiry_date.asc()).all()
    return [
        {
            "id": m.id,
            "name": m.name,
            "expiry_date": m.expiry_date,
            "days_until_expiry": days_until_expiry(m.expiry_date, today),
            "quantity": m.quantity,
        }
        for m in items
    ]


def stock_status(medicine, today: date = None) -> str:
    today = today or date.today()
    if medicine.expiry_date and days_until_expiry(medicine.expiry_date, today) <= 0:
        return "Expired"
    if int(medicine.quantity) == 0:
        return "Out of Stock"
    if int(medicine.quantity) < int(medicine.low_stock_threshold):
        return "Low Stock"
    return "In Stock"


def export_csv(medicines: List[Medicine]) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Medicine Name", "Brand", "Quantity", "Expiry Date", "Price", "Low Stock Threshold", "Status"])
    for m in medicines:
        writer.writerow([
            m.name,
            m.brand,
            int(m.quantity),
            m.expiry_date.isoformat() if m.expiry_date else "",
            f"{Decimal(str(m.price)):.2f}",
            int(m.low_stock_threshold),
            stock_status(m),
        ])
    return output.getvalue()
