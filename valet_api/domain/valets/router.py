"""Valet router - FastAPI endpoints for valets and holidays"""

import logging
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import HolidayCreate, HolidayResponse, ValetCreate, ValetResponse, ValetUpdate
from .service import ValetService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/valets", tags=["Valets"])


def get_valet_service(db: Session = Depends(get_db)) -> ValetService:
    """Dependency injection for ValetService"""
    return ValetService(db)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("")
async def get_valets(service: ValetService = Depends(get_valet_service)):
    valets = service.get_valets()
    return {"success": True, "data": [ValetResponse.model_validate(v) for v in valets]}


@router.post("", status_code=201)
async def create_valet(data: ValetCreate, service: ValetService = Depends(get_valet_service)):
    """Create a valet; a default Monday-Friday rota is created with them"""
    valet = service.create_valet(data)
    return {
        "success": True,
        "message": "Valet created successfully",
        "valet_id": valet.valet_id,
    }


@router.put("/{valet_id}")
async def update_valet(
    valet_id: str,
    data: ValetUpdate,
    service: ValetService = Depends(get_valet_service),
):
    valet = service.update_valet(valet_id, data)
    return {
        "success": True,
        "message": "Valet updated successfully",
        "data": ValetResponse.model_validate(valet),
    }


@router.delete("/{valet_id}")
async def delete_valet(valet_id: str, service: ValetService = Depends(get_valet_service)):
    """Delete a valet with their bookings, holidays, slot overrides and rota"""
    service.delete_valet(valet_id)
    return {"success": True, "message": "Valet deleted successfully"}


# ============================================================================
# HOLIDAYS
# ============================================================================


@router.get("/{valet_id}/holidays")
async def get_holidays(valet_id: str, service: ValetService = Depends(get_valet_service)):
    holidays = service.get_holidays(valet_id)
    return {"success": True, "data": [HolidayResponse.model_validate(h) for h in holidays]}


@router.post("/{valet_id}/holidays", status_code=201)
async def add_holiday(
    valet_id: str,
    data: HolidayCreate,
    service: ValetService = Depends(get_valet_service),
):
    holiday = service.add_holiday(valet_id, data)
    return {
        "success": True,
        "message": "Holiday added successfully",
        "data": HolidayResponse.model_validate(holiday),
    }


@router.delete("/{valet_id}/holidays/{holiday_date}")
async def remove_holiday(
    valet_id: str,
    holiday_date: date,
    service: ValetService = Depends(get_valet_service),
):
    service.remove_holiday(valet_id, holiday_date)
    return {"success": True, "message": "Holiday removed successfully"}
