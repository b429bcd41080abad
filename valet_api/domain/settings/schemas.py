"""Settings domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...shared.validators import validate_time_of_day


class SlotSettingsUpdate(BaseModel):
    """Schema for creating or replacing the global slot settings"""

    slot_start_time: str
    slot_end_time: str
    slot_duration_minutes: int = Field(gt=0)
    break_start_time: str
    break_end_time: str
    lead_time_hours: int = Field(ge=0)
    updated_by: Optional[str] = None

    @field_validator("slot_start_time", "slot_end_time", "break_start_time", "break_end_time")
    @classmethod
    def validate_times(cls, v):
        return validate_time_of_day(v)

    @model_validator(mode="after")
    def validate_windows(self):
        # HH:MM strings compare correctly once normalized
        if self.slot_start_time >= self.slot_end_time:
            raise ValueError("slot_start_time must be before slot_end_time")
        if self.break_start_time > self.break_end_time:
            raise ValueError("break_start_time must not be after break_end_time")
        return self


class SlotSettingsResponse(BaseModel):
    setting_id: int
    slot_start_time: str
    slot_end_time: str
    slot_duration_minutes: int
    break_start_time: str
    break_end_time: str
    lead_time_hours: int
    updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RotaUpdate(BaseModel):
    """Schema for updating one rota; omitted days keep their current values"""

    rota_id: str
    monday_available: Optional[bool] = None
    monday_capacity: Optional[int] = Field(default=None, ge=0)
    tuesday_available: Optional[bool] = None
    tuesday_capacity: Optional[int] = Field(default=None, ge=0)
    wednesday_available: Optional[bool] = None
    wednesday_capacity: Optional[int] = Field(default=None, ge=0)
    thursday_available: Optional[bool] = None
    thursday_capacity: Optional[int] = Field(default=None, ge=0)
    friday_available: Optional[bool] = None
    friday_capacity: Optional[int] = Field(default=None, ge=0)
    saturday_available: Optional[bool] = None
    saturday_capacity: Optional[int] = Field(default=None, ge=0)
    sunday_available: Optional[bool] = None
    sunday_capacity: Optional[int] = Field(default=None, ge=0)
    updated_by: Optional[str] = None


class RotaResponse(BaseModel):
    rota_id: str
    valet_id: str
    name: Optional[str] = None
    monday_available: bool
    monday_capacity: Optional[int]
    tuesday_available: bool
    tuesday_capacity: Optional[int]
    wednesday_available: bool
    wednesday_capacity: Optional[int]
    thursday_available: bool
    thursday_capacity: Optional[int]
    friday_available: bool
    friday_capacity: Optional[int]
    saturday_available: bool
    saturday_capacity: Optional[int]
    sunday_available: bool
    sunday_capacity: Optional[int]
    is_active: bool
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
