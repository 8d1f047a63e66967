"""
Sérialisation/lecture des métadonnées Stripe (intent, optedIn, fulfillment, meta appelant).
"""
import json
from typing import Any, Dict

RESERVED_KEYS = ("intent", "optedIn", "fulfillment")
# Limites Stripe: 50 clés, valeurs <= 500 caractères
MAX_KEYS = 50
MAX_VALUE_LENGTH = 500


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


# module nailshop.payments.metadata
def make_metadata(*, intent: str, opted_in: bool, fulfillment: str, meta: Dict[str, Any]) -> Dict[str, str]:
    """
    Construit les metadata de session.
    - intent / optedIn ("true"|"false") / fulfillment toujours présents
    - champs meta de l'appelant fusionnés sans écraser les trois clés réservées
    """
    metadata: Dict[str, str] = {
        "intent": intent,
        "optedIn": "true" if opted_in else "false",
        "fulfillment": fulfillment,
    }
    for key, value in (meta or {}).items():
        key = str(key)
        if key in RESERVED_KEYS:
            continue
        if len(metadata) >= MAX_KEYS:
            break
        metadata[key] = _stringify(value)[:MAX_VALUE_LENGTH]
    return metadata


def session_from_event(event: Dict[str, Any]) -> Dict[str, Any]:
    """Extrait data.object (la session Checkout) d'un event Stripe décodé."""
    data_obj = (event or {}).get("data", {}).get("object", {}) if isinstance(event, dict) else {}
    return data_obj if isinstance(data_obj, dict) else {}


def extract_intent(session: Dict[str, Any]) -> str:
    meta = (session or {}).get("metadata") or {}
    return meta.get("intent") or "order"

