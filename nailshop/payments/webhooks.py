"""
Aiguillage des événements Stripe vérifiés.
- checkout.session.completed: metadata.intent "deposit" -> confirmation d'acompte, sinon confirmation de commande
- autres types: acquittés et ignorés
- rejeu: un même event id n'envoie l'email qu'une fois par process (ProcessedEvents)
L'email part en BestEffortTask: la réponse au webhook ne dépend pas de l'envoi.
"""
import logging
import time
from collections import OrderedDict
from threading import Lock
from typing import Any, Callable, Dict, Optional

from fastapi import BackgroundTasks

from nailshop.config import Settings
from nailshop.notifications.mailer import Mailer
from nailshop.notifications.service import extract_recipient, send_deposit_confirmation, send_order_confirmation
from nailshop.notifications.tasks import BestEffortTask, ErrorCallback

from .metadata import extract_intent, session_from_event

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


class ProcessedEvents:
    """
    Registre en mémoire des event ids déjà traités (TTL + taille bornée).
    Limite: propre à un process; plusieurs workers gardent un comportement « au moins une fois ».
    """

    def __init__(self, ttl_seconds: int = 86400, max_size: int = 10000, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._seen: "OrderedDict[str, float]" = OrderedDict()
        self._lock = Lock()

    def _evict(self, now: float) -> None:
        while self._seen:
            oldest_id, seen_at = next(iter(self._seen.items()))
            if now - seen_at < self.ttl_seconds and len(self._seen) <= self.max_size:
                break
            self._seen.pop(oldest_id)

    def claim(self, event_id: Optional[str]) -> bool:
        """True si l'event est nouveau (et le réserve), False si déjà vu. Sans id: toujours True."""
        if not event_id:
            return True
        with self._lock:
            now = self._clock()
            self._evict(now)
            if event_id in self._seen:
                return False
            self._seen[event_id] = now
            self._evict(now)
            return True

    def release(self, event_id: Optional[str]) -> None:
        if not event_id:
            return
        with self._lock:
            self._seen.pop(event_id, None)

    def __len__(self) -> int:
        return len(self._seen)


# module nailshop.payments.webhooks
def dispatch_event(
    event: Dict[str, Any],
    *,
    settings: Settings,
    mailer: Mailer,
    ledger: ProcessedEvents,
    background_tasks: BackgroundTasks,
    on_error: Optional[ErrorCallback] = None,
) -> str:
    """
    Planifie le flux email correspondant à l'événement.
    Retour: "deposit" | "order" | "duplicate" | "ignored"
    """
    event_type = event.get("type")
    event_id = event.get("id")
    logger.info("payments.webhook type=%s id=%s", event_type, event_id)

    if event_type != CHECKOUT_COMPLETED:
        return "ignored"

    session = session_from_event(event)
    intent = extract_intent(session)
    logger.info(
        "payments.webhook email=%s intent=%s optedIn=%s",
        extract_recipient(session),
        intent,
        (session.get("metadata") or {}).get("optedIn"),
    )

    if not ledger.claim(event_id):
        logger.info("payments.webhook replay ignored id=%s", event_id)
        return "duplicate"

    def _failed(label: str, error: BaseException) -> None:
        # Libère l'event id: un renvoi manuel depuis Stripe pourra retenter l'email
        ledger.release(event_id)
        if on_error is not None:
            on_error(label, error)

    if intent == "deposit":
        flow, label, sender = "deposit", "deposit-confirmation", send_deposit_confirmation
    else:
        flow, label, sender = "order", "order-confirmation", send_order_confirmation

    BestEffortTask(
        f"{label}:{session.get('id')}",
        sender,
        session,
        settings=settings,
        mailer=mailer,
        on_error=_failed,
    ).schedule(background_tasks)
    return flow
