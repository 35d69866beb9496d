import logging
import requests
import re
from typing import Optional

from app.config import settings
from app.utils.template import render_template

logger = logging.getLogger(__name__)

BREVO_API_URL = "https://api.brevo.com/v3/smtp/email"

def is_valid_email(email):
    if not email:
        return False

    return re.match(r"[^@]+@[^@]+\.[^@]+", email) is not None


def send_email(
    to: str,
    subject: str,
    html: str,
) -> bool:
    """
    Send email via Brevo.

    Returns False instead of raising; callers treat email as best-effort.
    """

    if not is_valid_email(to):
        logger.warning(f"Invalid email address: {to}")
        return False

    if not settings.BREVO_API_KEY:
        logger.warning("BREVO_API_KEY not configured, skipping email to %s", to)
        return False

    payload = {
        "sender": {
            "email": settings.MAIL_FROM,
            "name": settings.STORE_NAME,
        },
        "to": [{"email": to}],
        "subject": subject,
        "htmlContent": html,
    }

    headers = {
        "api-key": settings.BREVO_API_KEY,
        "Content-Type": "application/json",
    }

    try:
        response = requests.post(
            BREVO_API_URL,
            json=payload,
            headers=headers,
            timeout=settings.NOTIFY_TIMEOUT_SECONDS,
        )

        if response.status_code >= 400:
            logger.error(
                f"Brevo email failed ({response.status_code}): {response.text}"
            )
            return False

        logger.info(f"Brevo email sent to {to}")
        return True

    except requests.RequestException:
        logger.exception("Brevo email exception")
        return False


def send_download_thanks_email(email: str, item_name: str, image_url: Optional[str]) -> bool:
    html = render_template(
        "user_emails/download_thanks.html",
        item_name=item_name,
        image_url=image_url,
        store_name=settings.STORE_NAME,
    )

    return send_email(
        to=email,
        subject=f"Thank You for Downloading {item_name}!",
        html=html,
    )
