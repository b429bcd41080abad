"""Valet service - Business logic for valets and their holidays"""

import logging

from sqlalchemy.orm import Session

from ...errors import NotFoundError, ValidationError
from ...models import Valet, ValetHoliday
from .repository import ValetRepository
from .schemas import HolidayCreate, ValetCreate, ValetUpdate

logger = logging.getLogger(__name__)


class ValetService:
    """Service layer for valet business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ValetRepository()

    def get_valets(self) -> list[Valet]:
        return self.repo.get_valets(self.db)

    def get_valet(self, valet_id: str) -> Valet:
        valet = self.repo.get_valet_by_id(self.db, valet_id)
        if not valet:
            raise NotFoundError("Valet not found")
        return valet

    def create_valet(self, data: ValetCreate) -> Valet:
        """Create a valet along with a default active rota"""
        valet = self.repo.create_valet_with_rota(
            self.db,
            name=data.name,
            email=data.email,
            phone=data.phone,
            status=data.status or "active",
        )
        logger.info(f"👤 Created valet {valet.valet_id} ({valet.name})")
        return valet

    def update_valet(self, valet_id: str, data: ValetUpdate) -> Valet:
        valet = self.get_valet(valet_id)
        return self.repo.update_valet(
            self.db,
            valet,
            name=data.name,
            email=data.email,
            phone=data.phone,
            status=data.status or "active",
        )

    def delete_valet(self, valet_id: str) -> None:
        valet = self.get_valet(valet_id)
        self.repo.delete_valet(self.db, valet)
        logger.info(f"🗑️ Deleted valet {valet_id} with bookings, holidays, overrides and rota")

    # Holidays
    def get_holidays(self, valet_id: str) -> list[ValetHoliday]:
        self.get_valet(valet_id)
        return self.repo.get_holidays(self.db, valet_id)

    def add_holiday(self, valet_id: str, data: HolidayCreate) -> ValetHoliday:
        self.get_valet(valet_id)
        if self.repo.get_holiday(self.db, valet_id, data.holiday_date):
            raise ValidationError(
                f"Holiday already recorded for {data.holiday_date.isoformat()}",
                details={"holiday_date": data.holiday_date.isoformat()},
            )
        return self.repo.create_holiday(
            self.db, valet_id=valet_id, holiday_date=data.holiday_date, reason=data.reason
        )

    def remove_holiday(self, valet_id: str, holiday_date) -> None:
        holiday = self.repo.get_holiday(self.db, valet_id, holiday_date)
        if not holiday:
            raise NotFoundError("Holiday not found")
        self.repo.delete_holiday(self.db, holiday)
