"""
Logique panier pure (pas de Stripe, pas d'email).
"""
from typing import Any, Dict, List, Optional

from nailshop.errors import ValidationError
from nailshop.utils.validators import is_number, parse_int, price_to_cents, round_half_up

from .models import CartItem

DEPOSIT_MIN_GUESTS = 2
DEPOSIT_MAX_GUESTS = 5
DEFAULT_ITEM_NAME = "Custom Nail Set"
DEFAULT_ITEM_DESCRIPTION = "Custom press-on nails"
DEFAULT_DEPOSIT_DESCRIPTION = "Deposit to hold event slot"


# module nailshop.payments.cart
def unit_amount_for(item: CartItem) -> int:
    """
    Prix unitaire d'un article, en centimes.
    - priceCents numérique: utilisé tel quel (déjà en centimes)
    - sinon price d'affichage ("$45.00+") nettoyé puis x100, arrondi au plus proche
    - Soulève ValidationError si le prix est illisible ou négatif.
    """
    if is_number(item.priceCents):
        cents: Optional[int] = round_half_up(float(item.priceCents))
    else:
        cents = price_to_cents(item.price)
    label = item.title or DEFAULT_ITEM_NAME
    if cents is None:
        raise ValidationError(f"Invalid price for item: {label}")
    if cents < 0:
        raise ValidationError(f"Price cannot be negative for item: {label}")
    return cents


def quantity_for(item: CartItem) -> int:
    if item.quantity is None or item.quantity == "" or item.quantity == 0:
        return 1
    qty = parse_int(item.quantity)
    if qty is None or qty <= 0:
        raise ValidationError(f"Invalid quantity for item: {item.title or DEFAULT_ITEM_NAME}")
    return qty


def to_line_items(items: List[CartItem], *, currency: str, placeholder_image: str) -> List[Dict[str, Any]]:
    """
    Construit les line_items Stripe d'une commande à partir du panier.
    - price_data inline (pas de Price Stripe pré-créé): nom, description, image
    - Soulève ValidationError si le panier est vide.
    """
    if not items:
        raise ValidationError("Cart is empty")
    line_items: List[Dict[str, Any]] = []
    for item in items:
        line_items.append({
            "price_data": {
                "currency": currency,
                "product_data": {
                    "name": item.title or DEFAULT_ITEM_NAME,
                    "description": item.notes or DEFAULT_ITEM_DESCRIPTION,
                    "images": [item.thumbnail or placeholder_image],
                },
                "unit_amount": unit_amount_for(item),
            },
            "quantity": quantity_for(item),
        })
    return line_items


def deposit_guests(meta: Dict[str, Any]) -> int:
    """
    Nombre d'invités pour un acompte d'événement (2 à 5).
    - Lit meta.guestCount, ou l'ancienne clé meta.guests si absente.
    """
    raw = meta.get("guestCount")
    if raw is None:
        raw = meta.get("guests")
    guests = parse_int(raw)
    if guests is None or guests < DEPOSIT_MIN_GUESTS or guests > DEPOSIT_MAX_GUESTS:
        raise ValidationError("Invalid guests count for deposit (must be 2–5).")
    return guests


def deposit_line_item(
    guests: int,
    *,
    per_guest_cents: int,
    currency: str,
    placeholder_image: str,
    description: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "price_data": {
            "currency": currency,
            "product_data": {
                "name": f"Event Deposit — {guests} guest(s)",
                "description": description or DEFAULT_DEPOSIT_DESCRIPTION,
                "images": [placeholder_image],
            },
            "unit_amount": guests * per_guest_cents,
        },
        "quantity": 1,
    }
