from sqlalchemy import Column, Integer, String, ForeignKey, Numeric, Date
from sqlalchemy.orm import relationship
from mediserve.db.base import Base


class Medicine(Base):
    """
    One stock line in a pharmacy.

    low_stock_threshold: quantity below which the stock scanner raises a
    low-stock notification. Quantity 0 always raises "out of stock" instead.
    """
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    pharmacy_id = Column(Integer, ForeignKey("pharmacies.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    expiry_date = Column(Date, nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    low_stock_threshold = Column(Integer, nullable=False, default=10)

    pharmacy = relationship("Pharmacy", backref="medicines")
