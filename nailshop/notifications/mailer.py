"""
Adaptateur email: centralise l'envoi via le relais SMTP.
- Mailer: capacité minimale attendue par les services (send)
- SmtpMailer: implémentation SMTP implicit-TLS (port 465), une connexion par message
"""
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Protocol

from nailshop.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    sender: str
    subject: str
    body: str

    def to_message(self) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = self.to
        msg["Subject"] = self.subject
        msg.set_content(self.body)
        return msg


class Mailer(Protocol):
    def send(self, email: OutgoingEmail) -> None:
        ...


# module nailshop.notifications.mailer
class SmtpMailer:
    def __init__(self, host: str, port: int, user: str, password: str, timeout: int = 30):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailer":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.email_user,
            password=settings.email_pass,
            timeout=settings.smtp_timeout,
        )

    def send(self, email: OutgoingEmail) -> None:
        """
        Envoie un message texte brut.
        - Authentifie avec EMAIL_USER/EMAIL_PASS si fournis.
        - Laisse remonter les erreurs smtplib/OSError: la politique d'échec appartient à l'appelant.
        """
        with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as server:
            if self.user:
                server.login(self.user, self.password)
            server.send_message(email.to_message())
        logger.info("mailer.sent to=%s subject=%r", email.to, email.subject)
