"""Booking repository - Database operations for valet bookings"""

from datetime import date
from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import ValetBooking
from ..availability.engine import format_minutes, parse_minutes

# Bookings in these states no longer hold a slot
TERMINAL_STATUSES = ("cancelled", "completed")


def escape_like(term: str) -> str:
    """Make % and _ in user input match literally under ESCAPE '\\'"""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def search_bookings(
        db: Session,
        status: Optional[str] = None,
        source: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 100,
    ) -> list[ValetBooking]:
        """Search and filter bookings, newest booking date first"""
        query = db.query(ValetBooking)

        if status and status != "all":
            query = query.filter(ValetBooking.status == status)

        if source and source != "all":
            query = query.filter(ValetBooking.source == source)

        if search:
            search_term = f"%{escape_like(search)}%"
            query = query.filter(
                (ValetBooking.booking_code.ilike(search_term, escape="\\"))
                | (ValetBooking.customer_name.ilike(search_term, escape="\\"))
            )

        return (
            query.order_by(ValetBooking.booking_date.desc(), ValetBooking.created_at.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def get_open_bookings_by_date(db: Session) -> list[ValetBooking]:
        """Everything not yet completed, in diary order"""
        return (
            db.query(ValetBooking)
            .filter(ValetBooking.status != "completed")
            .order_by(ValetBooking.booking_date.asc(), ValetBooking.booking_time.asc())
            .all()
        )

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: str) -> Optional[ValetBooking]:
        return db.query(ValetBooking).filter(ValetBooking.booking_id == booking_id).first()

    @staticmethod
    def count_pending_for_day(db: Session, valet_id: str, booking_date: date) -> int:
        """Count bookings that still hold capacity for the valet on a date"""
        return (
            db.query(func.count(ValetBooking.booking_id))
            .filter(
                ValetBooking.valet_id == valet_id,
                ValetBooking.booking_date == booking_date,
                ValetBooking.status.notin_(TERMINAL_STATUSES),
            )
            .scalar()
            or 0
        )

    @staticmethod
    def get_slot_counts(
        db: Session, valet_id: str, dates: Iterable[date]
    ) -> dict[tuple[date, str], int]:
        """
        Aggregate pending bookings per (date, slot time) in one query.

        Bookings without a time hold daily capacity but no particular slot,
        so they are left out of the per-slot counts.
        """
        dates = list(dates)
        if not dates:
            return {}

        rows = (
            db.query(
                ValetBooking.booking_date,
                ValetBooking.booking_time,
                func.count(ValetBooking.booking_id).label("count"),
            )
            .filter(
                ValetBooking.valet_id == valet_id,
                ValetBooking.booking_date.in_(dates),
                ValetBooking.status.notin_(TERMINAL_STATUSES),
                ValetBooking.booking_time.isnot(None),
            )
            .group_by(ValetBooking.booking_date, ValetBooking.booking_time)
            .all()
        )

        counts: dict[tuple[date, str], int] = {}
        for row in rows:
            key = (row.booking_date, format_minutes(parse_minutes(row.booking_time)))
            counts[key] = counts.get(key, 0) + int(row.count)
        return counts

    @staticmethod
    def create_booking(db: Session, **booking_data) -> ValetBooking:
        booking = ValetBooking(**booking_data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def update_status(db: Session, booking: ValetBooking, status: str) -> ValetBooking:
        booking.status = status
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def delete_booking(db: Session, booking: ValetBooking) -> None:
        db.delete(booking)
        db.commit()
