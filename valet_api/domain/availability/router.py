"""Availability router - FastAPI endpoints for slot availability"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import BatchAvailabilityRequest
from .service import AvailabilityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/availability", tags=["Availability"])


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    """Dependency injection for AvailabilityService"""
    return AvailabilityService(db)


@router.post("/batch")
async def get_batch_availability(
    data: BatchAvailabilityRequest,
    service: AvailabilityService = Depends(get_availability_service),
):
    """Available/total slot counts for many dates in one round trip"""
    return {"success": True, **service.get_batch_availability(data.valet_id, data.dates)}


@router.get("/slots/{valet_id}/{date}")
async def get_day_slots(
    valet_id: str,
    date: str,
    service: AvailabilityService = Depends(get_availability_service),
):
    """Per-slot availability for one date (YYYY-MM-DD)"""
    return {"success": True, **service.get_day_slots(valet_id, date)}
