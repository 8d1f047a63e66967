"""
Module 'payments' (feature-first): point d'entrée public.
Réunit logique panier, metadata Stripe, client Stripe, construction de session et webhooks.
"""

from .cart import deposit_guests, deposit_line_item, quantity_for, to_line_items, unit_amount_for
from .metadata import extract_intent, make_metadata, session_from_event
from .models import CartItem, CheckoutRequest, CheckoutSessionSpec
from .stripe_client import CreatedSession, PaymentGateway, StripeGateway
from .service import build_checkout_session, create_checkout_session
from .webhooks import ProcessedEvents, dispatch_event

__all__ = [
    # cart
    "deposit_guests",
    "deposit_line_item",
    "quantity_for",
    "to_line_items",
    "unit_amount_for",
    # metadata
    "extract_intent",
    "make_metadata",
    "session_from_event",
    # models
    "CartItem",
    "CheckoutRequest",
    "CheckoutSessionSpec",
    # stripe
    "CreatedSession",
    "PaymentGateway",
    "StripeGateway",
    # services
    "build_checkout_session",
    "create_checkout_session",
    # webhooks
    "ProcessedEvents",
    "dispatch_event",
]
