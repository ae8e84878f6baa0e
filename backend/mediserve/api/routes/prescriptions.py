"""Prescription handling: list, create, change status, AI patient update."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from mediserve.ai import draft_patient_update
from mediserve.api.deps import get_db, get_current_pharmacy, get_notification_center
from mediserve.core.exceptions import BusinessError, PatientUpdateError
from mediserve.models.pharmacy import Pharmacy
from mediserve.schemas.prescription import (
    PatientUpdateRequest,
    PatientUpdateResponse,
    PrescriptionCreate,
    PrescriptionResponse,
    PrescriptionStatusUpdate,
)
from mediserve.services import prescription_service
from mediserve.services.notification_service import NotificationCenter
from mediserve.services.prescription_service import InvalidStatusError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[PrescriptionResponse])
def list_prescriptions(
    status: str | None = Query(None),
    db: Session = Depends(get_db),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
):
    try:
        return prescription_service.list_prescriptions(db, pharmacy.id, status)
    except InvalidStatusError as e:
        raise BusinessError.bad_request(str(e))


@router.post("", response_model=PrescriptionResponse, status_code=201)
def create_prescription(
    data: PrescriptionCreate,
    center: NotificationCenter = Depends(get_notification_center),
):
    try:
        return prescription_service.create_prescription(center, data)
    except InvalidStatusError as e:
        raise BusinessError.bad_request(str(e))


@router.patch("/{prescription_id}/status", response_model=PrescriptionResponse)
def update_prescription_status(
    prescription_id: int,
    data: PrescriptionStatusUpdate,
    db: Session = Depends(get_db),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
):
    prescription = prescription_service.get_prescription(db, pharmacy.id, prescription_id)
    if not prescription:
        raise BusinessError.not_found("Prescription")
    try:
        return prescription_service.update_status(db, prescription, data.status)
    except InvalidStatusError as e:
        raise BusinessError.bad_request(str(e))


@router.post("/{prescription_id}/patient-update", response_model=PatientUpdateResponse)
def patient_update(
    prescription_id: int,
    data: Optional[PatientUpdateRequest] = None,
    db: Session = Depends(get_db),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
):
    """Draft a friendly message to the patient about their prescription's status."""
    prescription = prescription_service.get_prescription(db, pharmacy.id, prescription_id)
    if not prescription:
        raise BusinessError.not_found("Prescription")

    try:
        message = draft_patient_update(prescription, pharmacy.pharmacy_name, note=data.note if data else None)
    except PatientUpdateError as e:
        logger.warning(f"Patient update for prescription #{prescription_id} failed: {e}")
        raise BusinessError.upstream_unavailable("Failed to generate the patient update. Please try again.") from e

    return PatientUpdateResponse(
        prescription_id=prescription.id,
        patient_name=prescription.patient_name,
        message=message,
    )
