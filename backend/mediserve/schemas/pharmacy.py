from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional


class ProfileResponse(BaseModel):
    id: int
    owner_name: str
    pharmacy_name: str
    email: str
    is_open: bool

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    owner_name: Optional[str] = None
    pharmacy_name: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("owner_name", "pharmacy_name")
    @classmethod
    def name_min_length(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name is too short")
        return v


class StatusUpdate(BaseModel):
    is_open: bool
