import logging
from fastapi import APIRouter, Depends
from sqlmodel import Session, text
from datetime import datetime

from app.config import settings
from app.database import get_session

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/check")
def health_check(session: Session = Depends(get_session)):
    db_status = "ok"

    try:
        # simple DB ping
        session.exec(text("SELECT 1"))
    except Exception:
        logger.exception("Database ping failed")
        db_status = "failed"

    return {
        "status": "ok" if db_status == "ok" else "degraded",
        "database": db_status,
        "storage": "configured" if settings.R2_ACCOUNT_ID else "not configured",
        "payments": "configured" if settings.payments_configured else "not configured",
        "timestamp": datetime.utcnow().isoformat()
    }
