"""
Scheduled job: remove ads whose expiry has passed.

Run from cron or any scheduler:

    python -m app.jobs.cleanup_expired_ads
"""
import logging

from app.config import settings
from app.database import session_scope
from app.services.ad_service import cleanup_expired_ads

logger = logging.getLogger(__name__)


def run() -> dict:
    with session_scope() as session:
        return cleanup_expired_ads(session)


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    result = run()
    logger.info(result["message"])
