# module nailshop.app
from typing import Optional

from fastapi import FastAPI

from nailshop.app_setup.exceptions import register_exception_handlers
from nailshop.app_setup.lifespan import lifespan
from nailshop.app_setup.middlewares import (
    register_basic_middlewares,
    register_origin_guard,
    register_security_middleware,
)
from nailshop.app_setup.routers import register_routers
from nailshop.app_setup.routes import register_routes
from nailshop.config import Settings, load_settings
from nailshop.notifications.mailer import Mailer, SmtpMailer
from nailshop.notifications.tasks import TaskFailureLog
from nailshop.payments.stripe_client import PaymentGateway, StripeGateway
from nailshop.payments.webhooks import ProcessedEvents


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[PaymentGateway] = None,
    mailer: Optional[Mailer] = None,
) -> FastAPI:
    """
    Crée et configure l'instance FastAPI de l'application.
    Collaborateurs (injectés, sinon construits depuis les Settings):
      - settings: configuration (load_settings() par défaut)
      - gateway: passerelle de paiement (StripeGateway)
      - mailer: relais email (SmtpMailer)
    Étapes et ordre:
      1) état applicatif: settings, gateway, mailer, registre des events, journal des échecs
      2) register_basic_middlewares: CORS (allow-list)
      3) register_origin_guard: 403 pour une origine hors allow-list (s'exécute avant CORS)
      4) register_security_middleware: en-têtes de sécurité
      5) register_exception_handlers: erreurs métier -> {"error"}
      6) register_routes / register_routers
    """
    settings = settings or load_settings()
    app = FastAPI(title="NeNe Nail'd It API", lifespan=lifespan)

    app.state.settings = settings
    app.state.gateway = gateway or StripeGateway.from_settings(settings)
    app.state.mailer = mailer or SmtpMailer.from_settings(settings)
    app.state.processed_events = ProcessedEvents(ttl_seconds=settings.webhook_replay_ttl_seconds)
    app.state.task_failures = TaskFailureLog()

    register_basic_middlewares(app, settings.cors_origins)
    register_origin_guard(app, settings.cors_origins)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routes(app)
    register_routers(app)
    return app
