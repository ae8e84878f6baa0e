from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date
from decimal import Decimal

# Matches the String(255) columns; notification messages embed the name
NAME_MAX_LENGTH = 255


def _strip_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if len(v) < 2:
        raise ValueError("Must be at least 2 characters")
    return v


class MedicineCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=NAME_MAX_LENGTH)
    brand: str = Field(..., min_length=2, max_length=NAME_MAX_LENGTH)
    quantity: int = Field(0, ge=0)
    expiry_date: date
    price: Decimal = Field(Decimal("0"), ge=0)
    low_stock_threshold: Optional[int] = Field(None, ge=0)

    @field_validator("name", "brand")
    @classmethod
    def strip_strings(cls, v: str) -> str:
        return _strip_name(v)


class MedicineUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=NAME_MAX_LENGTH)
    brand: Optional[str] = Field(None, min_length=2, max_length=NAME_MAX_LENGTH)
    quantity: Optional[int] = Field(None, ge=0)
    expiry_date: Optional[date] = None
    price: Optional[Decimal] = Field(None, ge=0)
    low_stock_threshold: Optional[int] = Field(None, ge=0)

    @field_validator("name", "brand")
    @classmethod
    def strip_strings(cls, v: Optional[str]) -> Optional[str]:
        return _strip_name(v)


class MedicineResponse(BaseModel):
    id: int
    name: str
    brand: str
    quantity: int
    expiry_date: date
    price: Decimal
    low_stock_threshold: int

    class Config:
        from_attributes = True


class ExpiringMedicine(BaseModel):
    id: int
    name: str
    expiry_date: date
    days_until_expiry: int
    quantity: int
