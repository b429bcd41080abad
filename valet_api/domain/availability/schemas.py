"""Availability domain schemas - Pydantic models for validation"""

from pydantic import BaseModel, field_validator

from ...shared.validators import require_text, validate_iso_date


class BatchAvailabilityRequest(BaseModel):
    """Schema for loading availability for many dates at once"""

    valet_id: str
    dates: list[str]

    @field_validator("valet_id")
    @classmethod
    def validate_valet_id(cls, v):
        return require_text(v, "valet_id")

    @field_validator("dates")
    @classmethod
    def validate_dates(cls, v):
        for value in v:
            validate_iso_date(value)
        return v
