"""Prescriptions: create (emits a new-prescription notification) and status changes."""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mediserve.models.prescription import Prescription, PrescriptionStatus
from mediserve.schemas.prescription import PrescriptionCreate
from mediserve.services.condition_scanner import new_prescription_candidate
from mediserve.services.notification_service import NotificationCenter

logger = logging.getLogger(__name__)


class InvalidStatusError(ValueError):
    pass


def validate_status(status: str) -> str:
    if status not in PrescriptionStatus.ALL:
        raise InvalidStatusError(
            f"Invalid status '{status}'. Allowed: {', '.join(PrescriptionStatus.ALL)}"
        )
    return status


def list_prescriptions(db: Session, pharmacy_id: int, status: Optional[str] = None) -> List[Prescription]:
    q = db.query(Prescription).filter(Prescription.pharmacy_id == pharmacy_id)
    if status:
        q = q.filter(Prescription.status == validate_status(status))
    return q.order_by(Prescription.date.desc(), Prescription.id.desc()).all()


def get_prescription(db: Session, pharmacy_id: int, prescription_id: int) -> Optional[Prescription]:
    return db.query(Prescription).filter(
        Prescription.id == prescription_id,
        Prescription.pharmacy_id == pharmacy_id,
    ).first()


def create_prescription(center: NotificationCenter, data: PrescriptionCreate) -> Prescription:
    db = center.db
    prescription = Prescription(
        pharmacy_id=center.pharmacy_id,
        patient_name=data.patient_name.strip(),
        doctor_name=data.doctor_name.strip(),
        date=data.date or date.today(),
        medicines=[m.model_dump() for m in data.medicines],
        status=validate_status(data.status),
    )
    db.add(prescription)
    db.commit()
    db.refresh(prescription)

    candidate = new_prescription_candidate(prescription.doctor_name, prescription.patient_name)
    try:
        center.emit(candidate)
    except SQLAlchemyError as e:
        # The prescription is already saved; a missing alert is logged, not fatal
        db.rollback()
        logger.error(f"Failed to store notification for prescription #{prescription.id}: {e}")
    return prescription


def update_status(db: Session, prescription: Prescription, status: str) -> Prescription:
    """Any status can move to any other status."""
    previous = prescription.status
    prescription.status = validate_status(status)
    db.commit()
    db.refresh(prescription)
    logger.info(f"Prescription #{prescription.id}: {previous} -> {prescription.status}")
    return prescription
