"""Valet repository - Database operations for valets, rotas and holidays"""

from datetime import date
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from ...models import Valet, ValetBooking, ValetHoliday, ValetRota, ValetSlotOverride


class ValetRepository:
    """Repository for valet database operations"""

    @staticmethod
    def get_valets(db: Session) -> list[Valet]:
        return db.query(Valet).order_by(Valet.name.asc()).all()

    @staticmethod
    def get_valet_by_id(db: Session, valet_id: str) -> Optional[Valet]:
        return db.query(Valet).filter(Valet.valet_id == valet_id).first()

    @staticmethod
    def create_valet_with_rota(db: Session, **valet_data) -> Valet:
        """Create a valet and their default active rota in one commit"""
        valet = Valet(**valet_data)
        db.add(valet)
        db.flush()

        # Weekdays on, weekends off; capacities fall back to the default
        db.add(ValetRota(valet_id=valet.valet_id, is_active=True, updated_by="system"))
        db.commit()
        db.refresh(valet)
        return valet

    @staticmethod
    def update_valet(db: Session, valet: Valet, **updates) -> Valet:
        for key, value in updates.items():
            setattr(valet, key, value)

        db.commit()
        db.refresh(valet)
        return valet

    @staticmethod
    def delete_valet(db: Session, valet: Valet) -> None:
        """Delete a valet and everything that references them"""
        valet_id = valet.valet_id
        # Children first, the valet row last
        for model in (ValetBooking, ValetHoliday, ValetSlotOverride, ValetRota, Valet):
            db.query(model).filter(model.valet_id == valet_id).delete(synchronize_session=False)
        db.commit()

    @staticmethod
    def get_active_rota(db: Session, valet_id: str, for_update: bool = False) -> Optional[ValetRota]:
        """Get the valet's active rota, optionally locking the row until commit"""
        query = db.query(ValetRota).filter(
            ValetRota.valet_id == valet_id, ValetRota.is_active.is_(True)
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    # Holiday Methods
    @staticmethod
    def get_holidays(db: Session, valet_id: str) -> list[ValetHoliday]:
        return (
            db.query(ValetHoliday)
            .filter(ValetHoliday.valet_id == valet_id)
            .order_by(ValetHoliday.holiday_date.asc())
            .all()
        )

    @staticmethod
    def get_holiday_dates(db: Session, valet_id: str, dates: Iterable[date]) -> set[date]:
        """Get which of the given dates are holidays for the valet"""
        dates = list(dates)
        if not dates:
            return set()

        rows = (
            db.query(ValetHoliday.holiday_date)
            .filter(ValetHoliday.valet_id == valet_id, ValetHoliday.holiday_date.in_(dates))
            .all()
        )
        return {row.holiday_date for row in rows}

    @staticmethod
    def get_holiday(db: Session, valet_id: str, holiday_date: date) -> Optional[ValetHoliday]:
        return (
            db.query(ValetHoliday)
            .filter(ValetHoliday.valet_id == valet_id, ValetHoliday.holiday_date == holiday_date)
            .first()
        )

    @staticmethod
    def create_holiday(db: Session, **holiday_data) -> ValetHoliday:
        holiday = ValetHoliday(**holiday_data)
        db.add(holiday)
        db.commit()
        db.refresh(holiday)
        return holiday

    @staticmethod
    def delete_holiday(db: Session, holiday: ValetHoliday) -> None:
        db.delete(holiday)
        db.commit()
