"""Profile page: owner/pharmacy details and the open/closed toggle."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mediserve.api.deps import get_db, get_current_user, get_current_pharmacy
from mediserve.models.pharmacy import Pharmacy
from mediserve.models.user import User
from mediserve.schemas.pharmacy import ProfileResponse, ProfileUpdate, StatusUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=ProfileResponse)
def get_profile(pharmacy: Pharmacy = Depends(get_current_pharmacy)):
    return pharmacy


@router.put("", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
):
    if data.owner_name is not None:
        pharmacy.owner_name = data.owner_name
        current_user.name = data.owner_name
    if data.pharmacy_name is not None:
        pharmacy.pharmacy_name = data.pharmacy_name
    if data.email is not None:
        pharmacy.email = data.email
    db.commit()
    db.refresh(pharmacy)
    logger.info(f"[Profile] Updated pharmacy {pharmacy.id}")
    return pharmacy


@router.patch("/status", response_model=ProfileResponse)
def update_status(
    data: StatusUpdate,
    db: Session = Depends(get_db),
    pharmacy: Pharmacy = Depends(get_current_pharmacy),
):
    pharmacy.is_open = data.is_open
    db.commit()
    db.refresh(pharmacy)
    logger.info(f"[Profile] Pharmacy {pharmacy.id} is now {'open' if pharmacy.is_open else 'closed'}")
    return pharmacy
