"""
Prescription received by the pharmacy.

Status flow is free-form: the owner can move a prescription to any status at
any time. medicines is a JSON list of {medicine_id, name, dosage, quantity}.
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Date
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON
from mediserve.db.base import Base


class PrescriptionStatus:
    PENDING = "Pending"
    READY_FOR_PICKUP = "Ready for Pickup"
    COMPLETED = "Completed"
    OUT_OF_STOCK = "Out of Stock"

    ALL = (PENDING, READY_FOR_PICKUP, COMPLETED, OUT_OF_STOCK)


class Prescription(Base):
    __tablename__ = "prescriptions"

    id = Column(Integer, primary_key=True, index=True)
    pharmacy_id = Column(Integer, ForeignKey("pharmacies.id", ondelete="CASCADE"), nullable=False, index=True)
    patient_name = Column(String(255), nullable=False)
    doctor_name = Column(String(255), nullable=False)
    date = Column(Date, nullable=False)
    medicines = Column(JSON, nullable=False, default=list)
    status = Column(String(32), nullable=False, default=PrescriptionStatus.PENDING)

    pharmacy = relationship("Pharmacy", backref="prescriptions")
