"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import require_text, validate_email, validate_time_of_day


class BookingCreate(BaseModel):
    """Schema for creating a new valet booking"""

    vehicle_make: str
    vehicle_model: str
    vehicle_registration: Optional[str] = None
    vehicle_colour: Optional[str] = None
    vehicle_condition: Optional[str] = "used"
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    booking_date: date
    booking_time: Optional[str] = None
    valet_id: str
    valet_name: Optional[str] = None
    key_number: Optional[str] = None
    sales_executive_name: Optional[str] = None
    paint_protection: Optional[str] = "no"
    special_requirements: Optional[str] = None
    notes: Optional[str] = None
    source: Optional[str] = "manual"
    prep_tracker_id: Optional[str] = None

    @field_validator("vehicle_make", "vehicle_model", "valet_id")
    @classmethod
    def validate_required(cls, v, info):
        return require_text(v, info.field_name)

    @field_validator("booking_time")
    @classmethod
    def validate_booking_time(cls, v):
        if v is None or not v.strip():
            return None
        return validate_time_of_day(v)

    @field_validator("customer_email")
    @classmethod
    def normalize_customer_email(cls, v):
        return validate_email(v)


class BookingResponse(BaseModel):
    booking_id: str
    booking_code: str
    vehicle_make: str
    vehicle_model: str
    vehicle_registration: Optional[str]
    vehicle_colour: Optional[str]
    vehicle_condition: str
    customer_name: Optional[str]
    customer_email: Optional[str]
    customer_phone: Optional[str]
    booking_date: date
    booking_time: Optional[str]
    valet_id: str
    valet_name: Optional[str]
    status: str
    paint_protection: str
    special_requirements: Optional[str]
    notes: Optional[str]
    key_number: Optional[str]
    sales_executive_name: Optional[str]
    source: str
    prep_tracker_id: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
