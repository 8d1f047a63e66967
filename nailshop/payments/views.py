import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import PlainTextResponse

from nailshop.config import Settings
from nailshop.dependencies import get_event_ledger, get_gateway, get_mailer, get_settings, get_task_failures
from nailshop.errors import SignatureError
from nailshop.notifications.mailer import Mailer
from nailshop.notifications.tasks import TaskFailureLog
from nailshop.utils.rate_limit import optional_rate_limit

from . import service as payments_service
from . import webhooks
from .models import CheckoutOut, CheckoutRequest
from .stripe_client import PaymentGateway

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments API"])


# module nailshop.payments.views
@router.post(
    "/create-checkout-session",
    response_model=CheckoutOut,
    dependencies=[Depends(optional_rate_limit(times=10, seconds=60))],
)
def create_checkout_session(
    body: CheckoutRequest,
    settings: Settings = Depends(get_settings),
    gateway: PaymentGateway = Depends(get_gateway),
):
    """
    Crée une session Checkout Stripe (commande ou acompte d'événement).
    - Entrée JSON: { items, optedIn, customer_email, intent, meta, fulfillment }
    - Sécurité: allow-list CORS + rate limit (10 req / 60s)
    - Étapes:
      1) Valider l'email et, pour un acompte, le nombre d'invités
      2) Construire line_items + metadata + livraison (payments_service.build_checkout_session)
      3) Créer la session Stripe et renvoyer {url}
    - Erreurs: 400 si demande invalide, 500 si Stripe refuse (message Stripe)
    """
    session = payments_service.create_checkout_session(body, settings, gateway)
    return {"url": session.url}


async def _handle_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings,
    gateway: PaymentGateway,
    mailer: Mailer,
    ledger: webhooks.ProcessedEvents,
    failures: TaskFailureLog,
) -> PlainTextResponse:
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")
    try:
        event = gateway.construct_event(payload, sig_header)
    except SignatureError as e:
        logger.error("Webhook signature verification failed: %s", e.message)
        raise

    webhooks.dispatch_event(
        event,
        settings=settings,
        mailer=mailer,
        ledger=ledger,
        background_tasks=background_tasks,
        on_error=failures.record,
    )
    return PlainTextResponse("OK")


@router.post("/webhook", include_in_schema=False)
async def webhook_stripe(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    gateway: PaymentGateway = Depends(get_gateway),
    mailer: Mailer = Depends(get_mailer),
    ledger: webhooks.ProcessedEvents = Depends(get_event_ledger),
    failures: TaskFailureLog = Depends(get_task_failures),
):
    """
    Webhook Stripe (Checkout): consomme checkout.session.completed pour envoyer la confirmation.
    - Signature: corps brut + Stripe-Signature + STRIPE_WEBHOOK_SECRET; rien n'est lu avant validation
    - Aiguillage: metadata.intent "deposit" -> email d'acompte, sinon email de commande
    - Réponse: 200 "OK" dès l'acceptation; l'email part après la réponse (best-effort)
    - Erreurs: 400 "Webhook Error: ..." si la signature est invalide
    """
    return await _handle_webhook(request, background_tasks, settings, gateway, mailer, ledger, failures)


@router.post("/nails/webhook", include_in_schema=False)
async def webhook_stripe_legacy(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    gateway: PaymentGateway = Depends(get_gateway),
    mailer: Mailer = Depends(get_mailer),
    ledger: webhooks.ProcessedEvents = Depends(get_event_ledger),
    failures: TaskFailureLog = Depends(get_task_failures),
):
    """Alias de /webhook pour les endpoints Stripe déclarés sur l'ancien chemin."""
    return await _handle_webhook(request, background_tasks, settings, gateway, mailer, ledger, failures)
