"""
Cas d'usage 'inquiries': demandes de prestation (house call 1–2 invités, event 2–5 invités).
"""
import logging
from typing import Tuple

from nailshop.config import Settings
from nailshop.errors import UpstreamError, ValidationError
from nailshop.notifications.mailer import Mailer
from nailshop.notifications.templates import inquiry_acknowledgment, inquiry_notice
from nailshop.utils.validators import clamp, is_valid_email, parse_int

from .models import Inquiry, InquiryRequest

logger = logging.getLogger(__name__)

GUEST_BOUNDS = {
    "house": (1, 2),
    "event": (2, 5),
}


def normalize_kind(value) -> str:
    return "event" if value == "event" else "house"


def guest_bounds(kind: str) -> Tuple[int, int]:
    return GUEST_BOUNDS[kind]


def clamp_guests(kind: str, raw) -> int:
    """Borne le nombre d'invités au type; valeur absente ou illisible -> borne basse."""
    low, high = guest_bounds(kind)
    guests = parse_int(raw)
    if guests is None:
        return low
    return clamp(guests, low, high)


def validate_inquiry(req: InquiryRequest) -> Inquiry:
    """
    Normalise et valide une demande.
    - type: "event" uniquement sur égalité exacte, sinon "house"
    - invités bornés: [1,2] (house), [2,5] (event)
    - requis: name, email valide, date, location; startTime en plus pour un event
    Soulève ValidationError avant tout envoi.
    """
    kind = normalize_kind(req.type)
    guests = clamp_guests(kind, req.guestCount)

    if not req.name or not is_valid_email(req.email) or not req.date or not req.location:
        raise ValidationError("Missing required fields (name, email, date, location).")
    if kind == "event" and not req.startTime:
        raise ValidationError("Missing required field: start time for events.")

    return Inquiry(
        kind=kind,
        name=req.name,
        email=req.email,
        phone=req.phone or None,
        date=req.date,
        start_time=req.startTime or None,
        guests=guests,
        location=req.location,
        notes=req.notes or None,
    )


def submit_inquiry(req: InquiryRequest, settings: Settings, mailer: Mailer) -> Inquiry:
    """
    Valide puis envoie, dans l'ordre:
      1) la notification interne (boîte de l'atelier)
      2) l'accusé de réception au demandeur
    Les deux envois sont tentés; tout échec -> UpstreamError (pas de succès partiel exposé).
    """
    inquiry = validate_inquiry(req)

    notice = inquiry_notice(
        sender=settings.email_user,
        inbox=settings.inbox,
        kind=inquiry.kind,
        name=inquiry.name,
        email=inquiry.email,
        phone=inquiry.phone,
        date=inquiry.date,
        start_time=inquiry.start_time,
        guests=inquiry.guests,
        location=inquiry.location,
        notes=inquiry.notes,
    )
    ack = inquiry_acknowledgment(
        sender=settings.email_user,
        kind=inquiry.kind,
        name=inquiry.name,
        email=inquiry.email,
    )
    failed = False
    for label, message in (("notice", notice), ("acknowledgment", ack)):
        try:
            mailer.send(message)
        except Exception:
            failed = True
            logger.exception("Experience inquiry email failed kind=%s step=%s", inquiry.kind, label)
    if failed:
        raise UpstreamError("Unable to send request right now. Please try again later.")

    logger.info("inquiries.submitted kind=%s guests=%s date=%s", inquiry.kind, inquiry.guests, inquiry.date)
    return inquiry
