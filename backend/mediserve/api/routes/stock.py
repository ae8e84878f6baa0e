"""Stock management: medicine CRUD, alerts listings, CSV export, manual scan.

Adding or updating a medicine scans it right away, so a new low-stock or
expiry condition shows up in notifications without waiting for the monitor.
"""
import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from mediserve.api.deps import get_db, get_current_pharmacy, get_notification_center
from mediserve.core.config import settings
from mediserve.core.exceptions import BusinessError
from mediserve.models.pharmacy import Pharmacy
from mediserve.schemas.medicine import MedicineCreate, MedicineUpdate, MedicineResponse, ExpiringMedicine
from mediserve.schemas.notification import ScanResult
from mediserve.services import inventory_service
from mediserve.services.dashboard_state import MedicineSnapshot
from mediserve.services.inventory_service import DuplicateMedicineError
from mediserve.services.notification_service import NotificationCenter, ScanOutcome

logger = logging.getLogger(__name__)

router = APIRouter()


def _scan_result(center: NotificationCenter, outcome: ScanOutcome) -> ScanResult:
    return ScanResult(
        emitted=[r.as_dict() for r in outcome.emitted],
        suppressed=outcome.suppressed,
        unread_count=center.state.unread_count,
    )


@router.get("", response_model=list[MedicineResponse])
def list_stock(
    search: str | None = Query(None),
    db: Session = Depends(get_db),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
):
    return inventory_service.list_medicines(db, pharmacy.id, search)


@router.post("", response_model=MedicineResponse, status_code=201)
def add_medicine(
    data: MedicineCreate,
    center: NotificationCenter = Depends(get_notification_center),
):
    try:
        medicine = inventory_service.create_medicine(center.db, center.pharmacy_id, data)
    except DuplicateMedicineError as e:
        raise BusinessError.conflict(str(e))

    outcome = center.scan([MedicineSnapshot.from_model(medicine)])
    logger.info(f"[Stock] Added {medicine.name} ({len(outcome.emitted)} alerts)")
    return medicine


@router.patch("/{medicine_id}", response_model=MedicineResponse)
def update_medicine(
    medicine_id: int,
    updates: MedicineUpdate,
    center: NotificationCenter = Depends(get_notification_center),
):
    medicine = inventory_service.get_medicine(center.db, center.pharmacy_id, medicine_id)
    if not medicine:
        raise BusinessError.not_found("Medicine")

    try:
        medicine = inventory_service.update_medicine(center.db, medicine, updates)
    except DuplicateMedicineError as e:
        raise BusinessError.conflict(str(e))

    center.scan([MedicineSnapshot.from_model(medicine)])
    return medicine


@router.delete("/{medicine_id}")
def delete_medicine(
    medicine_id: int,
    db: Session = Depends(get_db),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
):
    medicine = inventory_service.get_medicine(db, pharmacy.id, medicine_id)
    if not medicine:
        raise BusinessError.not_found("Medicine")

    name = medicine.name
    inventory_service.delete_medicine(db, medicine)
    return {"message": f"Deleted {name}", "id": medicine_id}


@router.get("/low-stock", response_model=list[MedicineResponse])
def low_stock(
    db: Session = Depends(get_db),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
):
    """Medicines below their own low-stock threshold."""
    return inventory_service.low_stock_medicines(db, pharmacy.id)


@router.get("/expiring", response_model=list[ExpiringMedicine])
def expiring(
    days: int = Query(None, ge=0, description="Alert for items expiring within N days"),
    db: Session = Depends(get_db),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
):
    window = settings.EXPIRY_WINDOW_DAYS if days is None else days
    return inventory_service.expiring_medicines(db, pharmacy.id, window)


@router.get("/export")
def export_stock(
    db: Session = Depends(get_db),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
):
    content = inventory_service.export_csv(inventory_service.list_medicines(db, pharmacy.id))
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=stock_{date.today()}.csv"},
    )


@router.post("/scan", response_model=ScanResult)
def scan_stock(center: NotificationCenter = Depends(get_notification_center)):
    """Manual refresh: scan the whole stock list now."""
    outcome = center.scan()
    return _scan_result(center, outcome)
