"""
Pharmacy profile. One per owner account.

is_open backs the open/closed toggle shown in the dashboard header.
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from mediserve.db.base import Base


class Pharmacy(Base):
    __tablename__ = "pharmacies"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    owner_name = Column(String(255), nullable=False)
    pharmacy_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    is_open = Column(Boolean, default=True, nullable=False)

    owner = relationship("User", backref="pharmacies")
