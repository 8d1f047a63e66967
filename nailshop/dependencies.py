"""
Dépendances FastAPI: exposent les collaborateurs injectés dans create_app() (app.state).
Les tests remplacent la passerelle Stripe et le mailer en passant leurs doublures à create_app().
"""
from fastapi import Request

from nailshop.config import Settings
from nailshop.notifications.mailer import Mailer
from nailshop.notifications.tasks import TaskFailureLog
from nailshop.payments.stripe_client import PaymentGateway
from nailshop.payments.webhooks import ProcessedEvents


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> PaymentGateway:
    return request.app.state.gateway


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer


def get_event_ledger(request: Request) -> ProcessedEvents:
    return request.app.state.processed_events


def get_task_failures(request: Request) -> TaskFailureLog:
    return request.app.state.task_failures
