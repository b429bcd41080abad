"""Valet domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import require_text, validate_email


class ValetCreate(BaseModel):
    """Schema for creating or updating a valet"""

    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = "active"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "Name")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def blank_phone_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class ValetUpdate(ValetCreate):
    """Updates replace every field, so name stays required"""


class ValetResponse(BaseModel):
    valet_id: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HolidayCreate(BaseModel):
    holiday_date: date
    reason: Optional[str] = None


class HolidayResponse(BaseModel):
    holiday_id: str
    valet_id: str
    holiday_date: date
    reason: Optional[str]

    class Config:
        from_attributes = True
