# nailshop.config
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional
import os
from dotenv import load_dotenv

"""
Configuration centrale du backend.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Construit une valeur Settings immuable, injectée dans create_app()
- Aucun autre module ne lit l'environnement après le démarrage
"""

BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"

DEFAULT_CORS_ORIGINS = "http://localhost:3000,https://nenethearchitect.com"
DEFAULT_SHIPPING_RATE_ID = "shr_1S5D1k09Bl7clDYMWosKxSYP"
DEFAULT_PLACEHOLDER_IMAGE = "https://nenethearchitect.com/nails-preview-placeholder.jpg"


def _clean_env(v: Optional[str]) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")


def _split_list(v: str) -> List[str]:
    return [x.strip() for x in (v or "").split(",") if x.strip()]


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = _clean_env(env.get(name))
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} doit être un entier (reçu: {raw!r})")


@dataclass(frozen=True)
class Settings:
    # Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    shipping_rate_id: str = DEFAULT_SHIPPING_RATE_ID
    shipping_countries: List[str] = field(default_factory=lambda: ["US"])
    currency: str = "usd"
    deposit_per_guest_cents: int = 2500

    # Email (relais SMTP)
    email_user: str = ""
    email_pass: str = ""
    business_inbox: str = ""
    smtp_host: str = "smtp.hostinger.com"
    smtp_port: int = 465
    smtp_timeout: int = 30

    # Redirections checkout
    frontend_url: str = "http://localhost:3000"
    checkout_success_path: str = "/nails/thank-you"
    checkout_cancel_path: str = "/nails/cart"
    placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE

    # HTTP
    cors_origins: List[str] = field(default_factory=lambda: _split_list(DEFAULT_CORS_ORIGINS))
    port: int = 4242

    # Webhooks
    webhook_replay_ttl_seconds: int = 86400

    @property
    def inbox(self) -> str:
        """Destinataire des notifications internes (BUSINESS_INBOX, sinon EMAIL_USER)."""
        return self.business_inbox or self.email_user

    @property
    def success_url(self) -> str:
        sep = "&" if "?" in self.checkout_success_path else "?"
        return f"{self.frontend_url}{self.checkout_success_path}{sep}session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.frontend_url}{self.checkout_cancel_path}"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Construit les Settings depuis un mapping d'environnement (os.environ par défaut).
        - FRONTEND_URL est normalisé sans slash final.
        - Les listes (CORS_ORIGINS, SHIPPING_COUNTRIES) sont séparées par des virgules.
        """
        env = os.environ if env is None else env
        frontend_url = _clean_env(env.get("FRONTEND_URL")) or "http://localhost:3000"
        countries = _split_list(_clean_env(env.get("SHIPPING_COUNTRIES")) or "US")
        return cls(
            stripe_secret_key=_clean_env(env.get("STRIPE_SECRET_KEY")),
            stripe_webhook_secret=_clean_env(env.get("STRIPE_WEBHOOK_SECRET")),
            shipping_rate_id=_clean_env(env.get("STRIPE_SHIPPING_RATE_ID")) or DEFAULT_SHIPPING_RATE_ID,
            shipping_countries=[c.upper() for c in countries],
            currency=(_clean_env(env.get("CHECKOUT_CURRENCY")) or "usd").lower(),
            deposit_per_guest_cents=_int_env(env, "DEPOSIT_PER_GUEST_CENTS", 2500),
            email_user=_clean_env(env.get("EMAIL_USER")),
            email_pass=_clean_env(env.get("EMAIL_PASS")),
            business_inbox=_clean_env(env.get("BUSINESS_INBOX")),
            smtp_host=_clean_env(env.get("SMTP_HOST")) or "smtp.hostinger.com",
            smtp_port=_int_env(env, "SMTP_PORT", 465),
            smtp_timeout=_int_env(env, "SMTP_TIMEOUT", 30),
            frontend_url=frontend_url.rstrip("/"),
            checkout_success_path=_clean_env(env.get("CHECKOUT_SUCCESS_PATH")) or "/nails/thank-you",
            checkout_cancel_path=_clean_env(env.get("CHECKOUT_CANCEL_PATH")) or "/nails/cart",
            placeholder_image=_clean_env(env.get("PRODUCT_PLACEHOLDER_IMAGE")) or DEFAULT_PLACEHOLDER_IMAGE,
            cors_origins=_split_list(env.get("CORS_ORIGINS") or DEFAULT_CORS_ORIGINS),
            port=_int_env(env, "PORT", 4242),
            webhook_replay_ttl_seconds=_int_env(env, "WEBHOOK_REPLAY_TTL_SECONDS", 86400),
        )


def load_settings() -> Settings:
    """Charge .env (sans écraser l'environnement du process) puis construit les Settings."""
    load_dotenv(dotenv_path=ENV_PATH, override=False)
    return Settings.from_env()
