"""
Module 'notifications' (feature-first): point d'entrée public.
Réunit l'adaptateur SMTP, les gabarits d'emails et les tâches best-effort.
"""

from .mailer import Mailer, OutgoingEmail, SmtpMailer
from .templates import (
    deposit_confirmation,
    format_amount,
    inquiry_acknowledgment,
    inquiry_notice,
    order_confirmation,
)
from .tasks import BestEffortTask, TaskFailureLog

__all__ = [
    # mailer
    "Mailer",
    "OutgoingEmail",
    "SmtpMailer",
    # templates
    "deposit_confirmation",
    "format_amount",
    "inquiry_acknowledgment",
    "inquiry_notice",
    "order_confirmation",
    # tasks
    "BestEffortTask",
    "TaskFailureLog",
]
