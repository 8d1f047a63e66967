"""
Envois d'emails déclenchés par le paiement (confirmation commande / acompte).
Ces fonctions propagent les erreurs: l'appelant décide de la politique (BestEffortTask côté webhook).
"""
import logging
from typing import Any, Dict

from nailshop.config import Settings

from .mailer import Mailer
from .templates import deposit_confirmation, order_confirmation

logger = logging.getLogger(__name__)


def extract_recipient(session: Dict[str, Any]) -> str:
    """customer_email, sinon customer_details.email (sessions créées sans email pré-rempli)."""
    email = (session or {}).get("customer_email")
    if not email:
        email = ((session or {}).get("customer_details") or {}).get("email")
    return email or ""


def send_order_confirmation(session: Dict[str, Any], *, settings: Settings, mailer: Mailer) -> bool:
    recipient = extract_recipient(session)
    if not recipient:
        logger.warning("notifications.order skipped: no recipient session_id=%s", session.get("id"))
        return False
    mailer.send(order_confirmation(session, sender=settings.email_user, recipient=recipient))
    logger.info("notifications.order sent session_id=%s", session.get("id"))
    return True


def send_deposit_confirmation(session: Dict[str, Any], *, settings: Settings, mailer: Mailer) -> bool:
    recipient = extract_recipient(session)
    if not recipient:
        logger.warning("notifications.deposit skipped: no recipient session_id=%s", session.get("id"))
        return False
    mailer.send(deposit_confirmation(session, sender=settings.email_user, recipient=recipient))
    logger.info("notifications.deposit sent session_id=%s", session.get("id"))
    return True
