"""Availability service - Loads inputs for the engine and shapes its results"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import ConfigurationMissing, NotFoundError, ValidationError
from ...models import ValetRota
from ...shared.validators import validate_iso_date
from ..bookings.repository import BookingRepository
from ..settings.repository import SettingsRepository
from ..valets.repository import ValetRepository
from .engine import ClosedReason, DayOfWeek, SlotSettings, compute_availability, compute_day, utc_now

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Service layer for valet availability"""

    def __init__(self, db: Session):
        self.db = db
        self.settings_repo = SettingsRepository()
        self.valet_repo = ValetRepository()
        self.booking_repo = BookingRepository()

    def _load_slot_settings(self) -> SlotSettings:
        record = self.settings_repo.get_slot_settings(self.db)
        if not record:
            raise ConfigurationMissing("Settings not configured")
        try:
            return record.as_slot_settings()
        except ValueError as e:
            raise ConfigurationMissing(f"Slot settings are invalid: {e}") from e

    def _load_rota(self, valet_id: str) -> Optional[ValetRota]:
        if not self.valet_repo.get_valet_by_id(self.db, valet_id):
            raise NotFoundError("Valet not found")
        return self.valet_repo.get_active_rota(self.db, valet_id)

    def get_batch_availability(self, valet_id: str, date_strings: list[str]) -> dict:
        """
        Available/total slot counts for each requested date.

        Bookings and holidays for all dates are fetched with one query each.
        """
        settings = self._load_slot_settings()
        rota = self._load_rota(valet_id)

        if rota is None:
            return {
                "valet_id": valet_id,
                "availability": {value: {"available": 0, "total": 0} for value in date_strings},
                "message": ClosedReason.NO_ROTA.value,
            }

        days = {value: validate_iso_date(value) for value in date_strings}
        unique_days = set(days.values())
        booking_counts = self.booking_repo.get_slot_counts(self.db, valet_id, unique_days)
        holidays = self.valet_repo.get_holiday_dates(self.db, valet_id, unique_days)

        results = compute_availability(
            settings, rota.weekly_rota(), booking_counts, holidays, unique_days, now=utc_now()
        )

        return {
            "valet_id": valet_id,
            "availability": {value: results[day].summary() for value, day in days.items()},
            "message": f"Batch loaded {len(date_strings)} dates",
        }

    def get_day_slots(self, valet_id: str, date_string: str) -> dict:
        """Per-slot detail for one valet on one date"""
        try:
            day = validate_iso_date(date_string)
        except ValueError as e:
            raise ValidationError(str(e)) from None

        settings = self._load_slot_settings()
        rota = self._load_rota(valet_id)

        response = {
            "date": date_string,
            "valet_id": valet_id,
            "lead_time_hours": settings.lead_time_hours,
        }
        if rota is None:
            return {**response, "slots": [], "message": ClosedReason.NO_ROTA.value}

        weekly_rota = rota.weekly_rota()
        day_name = DayOfWeek.from_date(day).value
        booking_counts = self.booking_repo.get_slot_counts(self.db, valet_id, [day])
        holidays = self.valet_repo.get_holiday_dates(self.db, valet_id, [day])

        result = compute_day(
            settings, weekly_rota, day, booking_counts, holidays, now=utc_now(), detail=True
        )

        response.update(
            {
                "day_of_week": day_name,
                "is_available_today": weekly_rota.for_date(day).available,
                "max_slots_per_day": result.capacity,
                "total_slots_available": result.total,
                "available_slots": result.available,
            }
        )

        if not result.is_open:
            message = result.closed_reason.value
            if result.closed_reason == ClosedReason.UNAVAILABLE:
                message = f"Not available on {day_name}"
            return {**response, "bookable_slots": 0, "slots": [], "message": message}

        day_bookings = self.booking_repo.count_pending_for_day(self.db, valet_id, day)
        open_slots = [slot.to_dict() for slot in result.slots if slot.available]

        return {
            **response,
            "bookable_slots": max(0, result.capacity - day_bookings),
            "slots": open_slots,
        }
