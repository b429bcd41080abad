"""Settings service - Business logic for slot settings and valet rotas"""

import logging

from sqlalchemy.orm import Session

from ...errors import NotFoundError
from ...models import BookingSlotSettings, ValetRota
from .repository import SettingsRepository
from .schemas import RotaUpdate, SlotSettingsUpdate

logger = logging.getLogger(__name__)


class SettingsService:
    """Service layer for slot settings and rota business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SettingsRepository()

    def get_slot_settings(self) -> BookingSlotSettings:
        settings = self.repo.get_slot_settings(self.db)
        if not settings:
            raise NotFoundError("No slot settings configured")
        return settings

    def save_slot_settings(self, data: SlotSettingsUpdate) -> BookingSlotSettings:
        """Insert the settings row on first use, update it afterwards"""
        values = {
            "slot_start_time": data.slot_start_time,
            "slot_end_time": data.slot_end_time,
            "slot_duration_minutes": data.slot_duration_minutes,
            "break_start_time": data.break_start_time,
            "break_end_time": data.break_end_time,
            "lead_time_hours": data.lead_time_hours,
            "updated_by": data.updated_by or "system",
        }

        existing = self.repo.get_slot_settings(self.db)
        if existing is None:
            logger.info("⚙️ Creating slot settings")
            return self.repo.create_slot_settings(self.db, **values)

        logger.info(f"⚙️ Updating slot settings {existing.setting_id}")
        return self.repo.update_slot_settings(self.db, existing, **values)

    def get_active_rotas(self) -> list[ValetRota]:
        return self.repo.get_active_rotas(self.db)

    def update_rota(self, data: RotaUpdate) -> ValetRota:
        rota = self.repo.get_rota_by_id(self.db, data.rota_id)
        if not rota:
            raise NotFoundError("Rota not found")

        updates = data.model_dump(exclude={"rota_id", "updated_by"}, exclude_none=True)
        updates["updated_by"] = data.updated_by or "admin"

        logger.info(f"📅 Updating rota {rota.rota_id} for valet {rota.valet_id}")
        return self.repo.update_rota(self.db, rota, **updates)
