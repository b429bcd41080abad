"""Booking router - FastAPI endpoints for valet bookings"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import BookingCreate, BookingResponse
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/valet-bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.get("/grouped/by-date")
async def get_bookings_by_date(service: BookingService = Depends(get_booking_service)):
    """Bookings that are not completed, ordered by date and time"""
    bookings = [BookingResponse.model_validate(b) for b in service.get_open_bookings_by_date()]
    return {"success": True, "data": bookings, "count": len(bookings)}


@router.get("")
async def get_bookings(
    filterStatus: str = Query("all"),
    filterSource: str = Query("all"),
    searchTerm: str = Query(""),
    service: BookingService = Depends(get_booking_service),
):
    """Newest bookings first, optionally filtered by status, source or code/customer search"""
    bookings = [
        BookingResponse.model_validate(b)
        for b in service.get_bookings(status=filterStatus, source=filterSource, search=searchTerm)
    ]
    return {"success": True, "data": bookings, "count": len(bookings)}


@router.post("", status_code=201)
async def create_booking(data: BookingCreate, service: BookingService = Depends(get_booking_service)):
    booking = service.create_booking(data)
    return {
        "success": True,
        "message": "Booking created successfully",
        "booking_id": booking.booking_id,
        "booking_code": booking.booking_code,
    }


@router.put("/{booking_id}")
async def complete_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    """Mark a booking as completed"""
    booking = service.complete_booking(booking_id)
    return {
        "success": True,
        "message": "Booking marked as completed",
        "booking_id": booking.booking_id,
        "status": booking.status,
    }


@router.delete("/{booking_id}")
async def delete_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    service.delete_booking(booking_id)
    return {
        "success": True,
        "message": "Booking deleted successfully",
        "deleted_id": booking_id,
    }
