"""Booking service - Business logic for valet bookings"""

import logging
import time
from typing import Optional

from sqlalchemy.orm import Session

from ...config import BOOKING_LIST_LIMIT
from ...errors import CapacityExceeded, ConfigurationMissing, NotFoundError, ValidationError
from ...models import ValetBooking
from ..availability.engine import check_capacity, parse_minutes
from ..settings.repository import SettingsRepository
from ..valets.repository import ValetRepository
from .repository import BookingRepository
from .schemas import BookingCreate

logger = logging.getLogger(__name__)


def generate_booking_code() -> str:
    """Human-readable booking reference, e.g. VB-1718000000000"""
    return f"VB-{int(time.time() * 1000)}"


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.valet_repo = ValetRepository()
        self.settings_repo = SettingsRepository()

    def get_bookings(
        self,
        status: Optional[str] = None,
        source: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[ValetBooking]:
        return self.repo.search_bookings(
            self.db, status=status, source=source, search=search, limit=BOOKING_LIST_LIMIT
        )

    def get_open_bookings_by_date(self) -> list[ValetBooking]:
        return self.repo.get_open_bookings_by_date(self.db)

    def create_booking(self, data: BookingCreate) -> ValetBooking:
        """
        Create a pending booking once the valet's daily capacity allows it.

        The valet's active rota row is locked for the count-then-insert, so
        concurrent bookings for the same valet wait for each other on
        databases that support SELECT ... FOR UPDATE.
        """
        logger.info(f"📅 Booking request for valet {data.valet_id} on {data.booking_date}")

        if data.booking_time is not None:
            self._check_slot_aligned(data.booking_time)

        rota = self.valet_repo.get_active_rota(self.db, data.valet_id, for_update=True)
        if not rota:
            self.db.rollback()
            raise ValidationError(
                "No active rota found for this valet", code="no_active_rota"
            )

        current = self.repo.count_pending_for_day(self.db, data.valet_id, data.booking_date)
        check = check_capacity(rota.weekly_rota(), data.booking_date, current)
        if not check.accepted:
            self.db.rollback()
            booking_date = data.booking_date.isoformat()
            logger.warning(
                f"⚠️ Valet {data.valet_id} at capacity for {booking_date}: "
                f"{check.current_count}/{check.max_capacity}"
            )
            raise CapacityExceeded(
                f"This valet has reached their maximum capacity of {check.max_capacity} "
                f"bookings for {booking_date}. Current bookings: {check.current_count}.",
                details={
                    "max_capacity": check.max_capacity,
                    "current_bookings": check.current_count,
                },
            )

        booking = self.repo.create_booking(
            self.db,
            booking_code=generate_booking_code(),
            vehicle_make=data.vehicle_make,
            vehicle_model=data.vehicle_model,
            vehicle_registration=data.vehicle_registration,
            vehicle_colour=data.vehicle_colour,
            vehicle_condition=data.vehicle_condition or "used",
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone,
            booking_date=data.booking_date,
            booking_time=data.booking_time,
            valet_id=data.valet_id,
            valet_name=data.valet_name,
            status="pending",
            paint_protection=data.paint_protection or "no",
            special_requirements=data.special_requirements,
            notes=data.notes,
            key_number=data.key_number,
            sales_executive_name=data.sales_executive_name,
            source=data.source or "manual",
            prep_tracker_id=data.prep_tracker_id,
        )
        logger.info(f"✅ Created booking {booking.booking_code} ({booking.booking_id})")
        return booking

    def _check_slot_aligned(self, booking_time: str) -> None:
        """A timed booking must start on one of the configured slots"""
        record = self.settings_repo.get_slot_settings(self.db)
        if not record:
            raise ConfigurationMissing("Settings not configured")

        try:
            settings = record.as_slot_settings()
        except ValueError as e:
            raise ConfigurationMissing(f"Slot settings are invalid: {e}") from e

        if parse_minutes(booking_time) not in settings.slot_starts():
            raise ValidationError(
                f"Booking time {booking_time} is not a bookable slot",
                code="invalid_slot",
                details={"booking_time": booking_time},
            )

    def get_booking(self, booking_id: str) -> ValetBooking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def complete_booking(self, booking_id: str) -> ValetBooking:
        booking = self.get_booking(booking_id)
        return self.repo.update_status(self.db, booking, "completed")

    def delete_booking(self, booking_id: str) -> None:
        booking = self.get_booking(booking_id)
        self.repo.delete_booking(self.db, booking)
        logger.info(f"🗑️ Deleted booking {booking_id}")
