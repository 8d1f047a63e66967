"""
Adaptateur Stripe: centralise les appels et la configuration Stripe.
- PaymentGateway: capacité attendue par les services (création de session, vérification webhook)
- StripeGateway: implémentation via le SDK stripe, clés injectées (pas de stripe.api_key global)
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import stripe

from nailshop.config import Settings
from nailshop.errors import SignatureError, UpstreamError

from .models import CheckoutSessionSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedSession:
    id: str
    url: str


class PaymentGateway(Protocol):
    def create_checkout_session(self, spec: CheckoutSessionSpec) -> CreatedSession:
        ...

    def construct_event(self, payload: bytes, sig_header: Optional[str]) -> Dict[str, Any]:
        ...


# module nailshop.payments.stripe_client
class StripeGateway:
    def __init__(self, api_key: str, webhook_secret: str):
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    @classmethod
    def from_settings(cls, settings: Settings) -> "StripeGateway":
        return cls(api_key=settings.stripe_secret_key, webhook_secret=settings.stripe_webhook_secret)

    def create_checkout_session(self, spec: CheckoutSessionSpec) -> CreatedSession:
        """
        Crée une session Stripe Checkout.
        - spec.to_params(): line_items, mode, URLs, customer_email, metadata, livraison éventuelle
        - Soulève UpstreamError avec le message Stripe en cas d'échec.
        Retour: CreatedSession(id, url)
        """
        if not self.api_key:
            raise UpstreamError("STRIPE_SECRET_KEY is not configured")
        try:
            session = stripe.checkout.Session.create(api_key=self.api_key, **spec.to_params())
        except Exception as e:
            message = getattr(e, "user_message", None) or str(e)
            logger.error("stripe.create_session failed intent=%s error=%s", spec.intent, message)
            raise UpstreamError(message)
        return CreatedSession(id=session.id, url=session.url)

    def construct_event(self, payload: bytes, sig_header: Optional[str]) -> Dict[str, Any]:
        """
        Valide un événement Stripe signé (webhook).
        - Valide la signature via Webhook.construct_event (STRIPE_WEBHOOK_SECRET)
        - Retourne le payload décodé en dict simple (indépendant des objets StripeObject)
        - Soulève SignatureError pour toute erreur: aucun traitement sans signature valide.
        """
        if not self.webhook_secret:
            raise SignatureError("STRIPE_WEBHOOK_SECRET is not configured")
        if not sig_header:
            raise SignatureError("Missing Stripe-Signature header")
        try:
            stripe.Webhook.construct_event(payload, sig_header, self.webhook_secret)
            return json.loads(payload)
        except Exception as e:
            raise SignatureError(str(e))
