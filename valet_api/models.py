import uuid

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base
from .domain.availability.engine import DayOfWeek, RotaDay, SlotSettings, WeeklyRota


def generate_id():
    """Generate a UUID string primary key"""
    return str(uuid.uuid4())


class BookingSlotSettings(Base):
    """Singleton slot template shared by every valet"""

    __tablename__ = "booking_slot_settings"

    setting_id = Column(Integer, primary_key=True, index=True)
    slot_start_time = Column(String(8), nullable=False)  # HH:MM
    slot_end_time = Column(String(8), nullable=False)
    slot_duration_minutes = Column(Integer, nullable=False)
    break_start_time = Column(String(8), nullable=False)  # equal to break_end_time means no break
    break_end_time = Column(String(8), nullable=False)
    lead_time_hours = Column(Integer, default=0, nullable=False)
    updated_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def as_slot_settings(self) -> SlotSettings:
        return SlotSettings.from_times(
            self.slot_start_time,
            self.slot_end_time,
            self.slot_duration_minutes,
            self.break_start_time,
            self.break_end_time,
            self.lead_time_hours,
        )


class Valet(Base):
    __tablename__ = "valets"

    valet_id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    status = Column(String(50), default="active", nullable=False)  # active, inactive
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    rotas = relationship("ValetRota", back_populates="valet", passive_deletes=True)


class ValetRota(Base):
    """Weekly availability and per-day capacity; one active row per valet"""

    __tablename__ = "valet_rota"
    __table_args__ = (
        Index(
            "uq_valet_rota_one_active",
            "valet_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )

    rota_id = Column(String(36), primary_key=True, default=generate_id)
    valet_id = Column(String(36), ForeignKey("valets.valet_id"), nullable=False, index=True)

    # Capacity left null falls back to DEFAULT_DAILY_CAPACITY
    monday_available = Column(Boolean, default=True, nullable=False)
    monday_capacity = Column(Integer, nullable=True)
    tuesday_available = Column(Boolean, default=True, nullable=False)
    tuesday_capacity = Column(Integer, nullable=True)
    wednesday_available = Column(Boolean, default=True, nullable=False)
    wednesday_capacity = Column(Integer, nullable=True)
    thursday_available = Column(Boolean, default=True, nullable=False)
    thursday_capacity = Column(Integer, nullable=True)
    friday_available = Column(Boolean, default=True, nullable=False)
    friday_capacity = Column(Integer, nullable=True)
    saturday_available = Column(Boolean, default=False, nullable=False)
    saturday_capacity = Column(Integer, nullable=True)
    sunday_available = Column(Boolean, default=False, nullable=False)
    sunday_capacity = Column(Integer, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)
    updated_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    valet = relationship("Valet", back_populates="rotas")

    def weekly_rota(self) -> WeeklyRota:
        return WeeklyRota(
            {
                DayOfWeek.MONDAY: RotaDay(bool(self.monday_available), self.monday_capacity),
                DayOfWeek.TUESDAY: RotaDay(bool(self.tuesday_available), self.tuesday_capacity),
                DayOfWeek.WEDNESDAY: RotaDay(bool(self.wednesday_available), self.wednesday_capacity),
                DayOfWeek.THURSDAY: RotaDay(bool(self.thursday_available), self.thursday_capacity),
                DayOfWeek.FRIDAY: RotaDay(bool(self.friday_available), self.friday_capacity),
                DayOfWeek.SATURDAY: RotaDay(bool(self.saturday_available), self.saturday_capacity),
                DayOfWeek.SUNDAY: RotaDay(bool(self.sunday_available), self.sunday_capacity),
            }
        )


class ValetBooking(Base):
    __tablename__ = "valet_bookings"
    __table_args__ = (Index("ix_valet_bookings_valet_date", "valet_id", "booking_date"),)

    booking_id = Column(String(36), primary_key=True, default=generate_id)
    booking_code = Column(String(50), nullable=False, index=True)  # VB-<epoch ms>

    # Vehicle
    vehicle_make = Column(String(100), nullable=False)
    vehicle_model = Column(String(100), nullable=False)
    vehicle_registration = Column(String(20), nullable=True)
    vehicle_colour = Column(String(50), nullable=True)
    vehicle_condition = Column(String(50), default="used", nullable=False)  # new, used

    # Customer
    customer_name = Column(String(255), nullable=True)
    customer_email = Column(String(255), nullable=True)
    customer_phone = Column(String(50), nullable=True)

    # Scheduling
    booking_date = Column(Date, nullable=False)
    booking_time = Column(String(5), nullable=True)  # HH:MM slot start
    valet_id = Column(String(36), ForeignKey("valets.valet_id"), nullable=False)
    valet_name = Column(String(255), nullable=True)

    # Status workflow: pending → completed, or pending → cancelled
    # Only pending bookings count against capacity
    status = Column(String(50), default="pending", nullable=False, index=True)

    paint_protection = Column(String(20), default="no", nullable=False)
    special_requirements = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    key_number = Column(String(50), nullable=True)
    sales_executive_name = Column(String(255), nullable=True)
    source = Column(String(50), default="manual", nullable=False)  # manual, prep_tracker, ...
    prep_tracker_id = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class ValetHoliday(Base):
    """A date on which the valet takes no bookings regardless of rota"""

    __tablename__ = "valet_holidays"
    __table_args__ = (UniqueConstraint("valet_id", "holiday_date", name="uq_valet_holiday_date"),)

    holiday_id = Column(String(36), primary_key=True, default=generate_id)
    valet_id = Column(String(36), ForeignKey("valets.valet_id"), nullable=False, index=True)
    holiday_date = Column(Date, nullable=False)
    reason = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ValetSlotOverride(Base):
    """Per-date slot adjustments; only removed when their valet is deleted"""

    __tablename__ = "valet_slot_overrides"

    override_id = Column(String(36), primary_key=True, default=generate_id)
    valet_id = Column(String(36), ForeignKey("valets.valet_id"), nullable=False, index=True)
    override_date = Column(Date, nullable=False)
    slot_time = Column(String(5), nullable=True)
    capacity = Column(Integer, nullable=True)
    is_blocked = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
