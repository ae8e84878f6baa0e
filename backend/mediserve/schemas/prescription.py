from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date as date_type

from mediserve.models.prescription import PrescriptionStatus

# Both names go into the 512-char new-prescription notification message
PERSON_NAME_MAX_LENGTH = 200


class PrescribedMedicine(BaseModel):
    medicine_id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=255)
    dosage: str = Field("", max_length=255)
    quantity: int = Field(1, ge=0)


class PrescriptionCreate(BaseModel):
    patient_name: str = Field(..., min_length=2, max_length=PERSON_NAME_MAX_LENGTH)
    doctor_name: str = Field(..., min_length=2, max_length=PERSON_NAME_MAX_LENGTH)
    date: Optional[date_type] = None
    medicines: list[PrescribedMedicine] = Field(default_factory=list)
    status: str = PrescriptionStatus.PENDING

    @field_validator("patient_name", "doctor_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name is too short")
        return v


class PrescriptionStatusUpdate(BaseModel):
    status: str


class PrescriptionResponse(BaseModel):
    id: int
    patient_name: str
    doctor_name: str
    date: date_type
    medicines: list[PrescribedMedicine]
    status: str

    class Config:
        from_attributes = True


class PatientUpdateRequest(BaseModel):
    """Optional extra instructions from the owner, e.g. opening hours for pickup."""
    note: Optional[str] = Field(None, max_length=500)


class PatientUpdateResponse(BaseModel):
    prescription_id: int
    patient_name: str
    message: str
