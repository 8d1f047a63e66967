from fastapi import APIRouter, Depends

from nailshop.config import Settings
from nailshop.dependencies import get_mailer, get_settings
from nailshop.notifications.mailer import Mailer
from nailshop.utils.rate_limit import optional_rate_limit

from .models import InquiryRequest
from .service import submit_inquiry

router = APIRouter(tags=["Inquiries API"])


# Endpoint synchrone: FastAPI l'exécute dans le threadpool, les envois SMTP sont bloquants
@router.post("/experience-inquiry", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def experience_inquiry(
    body: InquiryRequest,
    settings: Settings = Depends(get_settings),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Demande de prestation (house call ou event).
    - 200 {"ok": true} une fois les deux emails envoyés
    - 400 {"error"} si champs requis manquants, 500 {"error"} si l'envoi échoue
    """
    submit_inquiry(body, settings, mailer)
    return {"ok": True}


@router.post(
    "/nails/experience-inquiry",
    include_in_schema=False,
    dependencies=[Depends(optional_rate_limit(times=10, seconds=60))],
)
def experience_inquiry_legacy(
    body: InquiryRequest,
    settings: Settings = Depends(get_settings),
    mailer: Mailer = Depends(get_mailer),
):
    submit_inquiry(body, settings, mailer)
    return {"ok": True}
