"""
Cas d'usage 'payments': orchestre validation, cart, metadata et passerelle de paiement.
"""
import logging

from nailshop.config import Settings
from nailshop.errors import ValidationError
from nailshop.utils.validators import is_valid_email

from . import cart as cart_logic
from .metadata import make_metadata
from .models import CheckoutRequest, CheckoutSessionSpec
from .stripe_client import CreatedSession, PaymentGateway

logger = logging.getLogger(__name__)


def normalize_intent(intent) -> str:
    return "deposit" if intent == "deposit" else "order"


def normalize_fulfillment(fulfillment) -> str:
    return "in_person" if fulfillment == "in_person" else "shipping"


def build_checkout_session(req: CheckoutRequest, settings: Settings) -> CheckoutSessionSpec:
    """
    Valide une demande de checkout et construit les paramètres de session.
    - Email client obligatoire et bien formé
    - Acompte (deposit): une seule ligne, tarif par invité x invités (2 à 5)
    - Commande (order): une ligne par article du panier
    - Livraison: uniquement pour une commande en fulfillment "shipping"
    Soulève ValidationError avant tout appel externe.
    """
    if not is_valid_email(req.customer_email):
        raise ValidationError("Invalid email address")

    intent = normalize_intent(req.intent)
    fulfillment = normalize_fulfillment(req.fulfillment)
    meta = req.meta or {}

    if intent == "deposit":
        guests = cart_logic.deposit_guests(meta)
        line_items = [
            cart_logic.deposit_line_item(
                guests,
                per_guest_cents=settings.deposit_per_guest_cents,
                currency=settings.currency,
                placeholder_image=settings.placeholder_image,
                description=meta.get("desc"),
            )
        ]
    else:
        line_items = cart_logic.to_line_items(
            req.items or [],
            currency=settings.currency,
            placeholder_image=settings.placeholder_image,
        )

    shipping_options = None
    address_collection = None
    if intent == "order" and fulfillment == "shipping":
        address_collection = {"allowed_countries": list(settings.shipping_countries)}
        shipping_options = [{"shipping_rate": settings.shipping_rate_id}]

    return CheckoutSessionSpec(
        line_items=line_items,
        success_url=settings.success_url,
        cancel_url=settings.cancel_url,
        customer_email=req.customer_email,
        metadata=make_metadata(
            intent=intent,
            opted_in=bool(req.optedIn),
            fulfillment=fulfillment,
            meta=meta,
        ),
        shipping_options=shipping_options,
        shipping_address_collection=address_collection,
    )


def create_checkout_session(req: CheckoutRequest, settings: Settings, gateway: PaymentGateway) -> CreatedSession:
    spec = build_checkout_session(req, settings)
    logger.info(
        "payments.checkout creating intent=%s fulfillment=%s lines=%s",
        spec.intent,
        spec.metadata.get("fulfillment"),
        len(spec.line_items),
    )
    session = gateway.create_checkout_session(spec)
    logger.info("payments.checkout created session_id=%s", session.id)
    return session
