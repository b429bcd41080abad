import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import BookingSlotSettings, Valet, ValetRota

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/test")
def test():
    return {"success": True, "message": "Server is working!"}


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """Readiness: slot settings, active valets and active rotas must all exist"""
    settings_count = db.query(func.count(BookingSlotSettings.setting_id)).scalar() or 0
    valets_count = db.query(func.count(Valet.valet_id)).filter(Valet.status == "active").scalar() or 0
    rotas_count = (
        db.query(func.count(ValetRota.rota_id)).filter(ValetRota.is_active.is_(True)).scalar() or 0
    )

    checks = {
        "booking_slot_settings": {"configured": settings_count > 0, "count": settings_count},
        "valets": {"configured": valets_count > 0, "count": valets_count},
        "valet_rota": {"configured": rotas_count > 0, "count": rotas_count},
    }
    all_configured = all(check["configured"] for check in checks.values())
    if not all_configured:
        logger.info(f"Health check incomplete: {checks}")

    return {
        "success": True,
        "status": "ready" if all_configured else "incomplete",
        "checks": checks,
    }
