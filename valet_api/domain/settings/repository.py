"""Settings repository - Database operations for slot settings and rotas"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import BookingSlotSettings, Valet, ValetRota


class SettingsRepository:
    """Repository for slot settings and rota database operations"""

    @staticmethod
    def get_slot_settings(db: Session) -> Optional[BookingSlotSettings]:
        """Get the singleton settings row"""
        return db.query(BookingSlotSettings).order_by(BookingSlotSettings.setting_id).first()

    @staticmethod
    def create_slot_settings(db: Session, **settings_data) -> BookingSlotSettings:
        settings = BookingSlotSettings(**settings_data)
        db.add(settings)
        db.commit()
        db.refresh(settings)
        return settings

    @staticmethod
    def update_slot_settings(
        db: Session, settings: BookingSlotSettings, **updates
    ) -> BookingSlotSettings:
        for key, value in updates.items():
            setattr(settings, key, value)

        db.commit()
        db.refresh(settings)
        return settings

    @staticmethod
    def get_active_rotas(db: Session) -> list[ValetRota]:
        """Get active rotas with their valet loaded, ordered by valet name"""
        return (
            db.query(ValetRota)
            .outerjoin(Valet, ValetRota.valet_id == Valet.valet_id)
            .options(joinedload(ValetRota.valet))
            .filter(ValetRota.is_active.is_(True))
            .order_by(Valet.name.asc())
            .all()
        )

    @staticmethod
    def get_rota_by_id(db: Session, rota_id: str) -> Optional[ValetRota]:
        return db.query(ValetRota).filter(ValetRota.rota_id == rota_id).first()

    @staticmethod
    def update_rota(db: Session, rota: ValetRota, **updates) -> ValetRota:
        """Update a rota with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(rota, key):
                setattr(rota, key, value)

        db.commit()
        db.refresh(rota)
        return rota
