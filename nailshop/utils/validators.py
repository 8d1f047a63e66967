import math
import re
from typing import Any, Optional

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
INT_RE = re.compile(r"^\s*[-+]?\d+\s*$")
# Tout sauf chiffres, point décimal et signe: "$", "+", espaces, séparateurs de milliers...
PRICE_NOISE_RE = re.compile(r"[^0-9.\-]")
# Lettres (ex: "1e3", "free"): rejetées plutôt que retirées
PRICE_LETTERS_RE = re.compile(r"[A-Za-z]")


def is_valid_email(email: Any) -> bool:
    if not isinstance(email, str):
        return False
    return EMAIL_RE.fullmatch(email) is not None


def parse_int(value: Any) -> Optional[int]:
    """
    Parse un entier tolérant (JSON ou formulaire).
    - int -> tel quel, float entier (3.0) -> 3, str "3" -> 3
    - bool, float non entier, texte libre, None -> None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and INT_RE.match(value):
        return int(value.strip())
    return None


def clamp(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def round_half_up(value: float) -> int:
    """Arrondi au plus proche, demi-unités vers l'infini (pas d'arrondi bancaire)."""
    return int(math.floor(value + 0.5))


def price_to_cents(price: Any) -> Optional[int]:
    """
    Convertit un prix d'affichage en centimes.
    - "$45.00+" -> 4500, "12.5" -> 1250, 7 -> 700
    - Prix absent/vide -> 0
    - Retourne None si le texte contient des lettres ("1e3") ou aucun nombre exploitable.
    """
    if price is None or price == "":
        return 0
    if is_number(price):
        return round_half_up(float(price) * 100)
    text = str(price)
    if PRICE_LETTERS_RE.search(text):
        return None
    cleaned = PRICE_NOISE_RE.sub("", text)
    if not cleaned:
        return None
    try:
        amount = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(amount):
        return None
    return round_half_up(amount * 100)
