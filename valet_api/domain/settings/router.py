"""Settings router - FastAPI endpoints for slot settings and valet rotas"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import RotaResponse, RotaUpdate, SlotSettingsResponse, SlotSettingsUpdate
from .service import SettingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["Settings"])


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    """Dependency injection for SettingsService"""
    return SettingsService(db)


# ============================================================================
# SLOT SETTINGS
# ============================================================================


@router.get("/slot-settings")
async def get_slot_settings(service: SettingsService = Depends(get_settings_service)):
    settings = service.get_slot_settings()
    return {"success": True, "data": SlotSettingsResponse.model_validate(settings)}


@router.put("/slot-settings")
async def update_slot_settings(
    data: SlotSettingsUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    """Create or replace the global slot template"""
    settings = service.save_slot_settings(data)
    return {
        "success": True,
        "message": "Settings updated successfully",
        "data": SlotSettingsResponse.model_validate(settings),
    }


# ============================================================================
# VALET ROTA
# ============================================================================


@router.get("/valet-rota")
async def get_valet_rotas(service: SettingsService = Depends(get_settings_service)):
    """Active rotas joined with the valet name"""
    rotas = service.get_active_rotas()
    data = []
    for rota in rotas:
        item = RotaResponse.model_validate(rota)
        item.name = rota.valet.name if rota.valet else None
        data.append(item)
    return {"success": True, "data": data}


@router.post("/valet-rota")
async def update_valet_rota(
    data: RotaUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    rota = service.update_rota(data)
    return {
        "success": True,
        "message": "Rota updated successfully",
        "data": RotaResponse.model_validate(rota),
    }
