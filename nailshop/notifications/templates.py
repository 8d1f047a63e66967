"""
Gabarits des emails transactionnels (texte brut).
Fonctions pures: reçoivent des données déjà validées, retournent OutgoingEmail.
"""
from typing import Any, Dict, Optional

from .mailer import OutgoingEmail

BRAND = "NeNe Nail’d It"
PLACEHOLDER = "—"
HOUSE_CALL_TRAVEL_FEE = "$20"


def _or_placeholder(value: Any) -> str:
    if value is None or value == "":
        return PLACEHOLDER
    return str(value)


def format_amount(amount_cents: Any) -> str:
    """Montant Stripe (centimes) -> "$12.34"; placeholder si absent."""
    if isinstance(amount_cents, bool) or not isinstance(amount_cents, (int, float)):
        return PLACEHOLDER
    return f"${amount_cents / 100:.2f}"


# --- Demandes de prestation (house call / event) ---
def inquiry_subject(kind: str, name: str, date: str, start_time: Optional[str], guests: int) -> str:
    if kind == "event":
        return f"EVENT REQUEST — {name} ({date} @ {start_time}) • {guests} guest(s)"
    return f"HOUSE CALL REQUEST — {name} ({date}) • {guests} guest(s)"


def travel_fee_line(kind: str) -> str:
    if kind == "event":
        return "Travel fee may apply depending on location."
    return f"Travel fee: {HOUSE_CALL_TRAVEL_FEE} (house call 1–2 guests)."


def inquiry_notice(
    *,
    sender: str,
    inbox: str,
    kind: str,
    name: str,
    email: str,
    phone: Optional[str],
    date: str,
    start_time: Optional[str],
    guests: int,
    location: str,
    notes: Optional[str],
) -> OutgoingEmail:
    label = "Events" if kind == "event" else "House Call"
    when = f"{date} {start_time}" if kind == "event" else date
    body = "\n".join([
        f"{BRAND} — {label} Inquiry",
        "",
        f"Type: {kind.upper()}",
        f"Name: {name}",
        f"Email: {email}",
        f"Phone: {_or_placeholder(phone)}",
        f"Date/Time: {when}",
        f"Guests: {guests}",
        f"Location: {location}",
        f"Notes: {_or_placeholder(notes)}",
        "",
        f"Timing: ~{guests} hour(s) total (≈1 hr per set)",
        travel_fee_line(kind),
    ])
    return OutgoingEmail(
        to=inbox,
        sender=sender,
        subject=inquiry_subject(kind, name, date, start_time, guests),
        body=body,
    )


def inquiry_acknowledgment(*, sender: str, kind: str, name: str, email: str) -> OutgoingEmail:
    label = "event" if kind == "event" else "house call"
    body = "\n".join([
        f"Hi {name},",
        "",
        f"Thanks for your {label} request! I’ll email you shortly to confirm details.",
        "",
        f"— {BRAND}",
    ])
    return OutgoingEmail(
        to=email,
        sender=sender,
        subject=f"We got your {label} request — {BRAND}",
        body=body,
    )


# --- Confirmations post-paiement (webhook) ---
def order_confirmation(session: Dict[str, Any], *, sender: str, recipient: str) -> OutgoingEmail:
    body = "\n".join([
        "Thank you for your purchase!",
        "",
        "Order Confirmation:",
        f"- Customer: {recipient}",
        f"- Order ID: {_or_placeholder(session.get('id'))}",
        f"- Total: {format_amount(session.get('amount_total'))}",
        "",
        "We’ll begin preparing your nails soon. You’ll receive an update when it’s shipped.",
        "",
        f"Thank you again for shopping at {BRAND} 💅🏽",
    ])
    return OutgoingEmail(
        to=recipient,
        sender=sender,
        subject=f"Order Confirmation - {BRAND}",
        body=body,
    )


def deposit_confirmation(session: Dict[str, Any], *, sender: str, recipient: str) -> OutgoingEmail:
    meta = session.get("metadata") or {}
    guests = meta.get("guestCount") or meta.get("guests")
    body = "\n".join([
        "Thanks for your deposit!",
        "",
        "Details:",
        f"- Guests: {_or_placeholder(guests)}",
        f"- Date/Time: {_or_placeholder(meta.get('date'))} {_or_placeholder(meta.get('startTime'))}",
        f"- Location: {_or_placeholder(meta.get('location'))}",
        f"- Deposit: {format_amount(session.get('amount_total'))}",
        f"- Ref: {_or_placeholder(session.get('id'))}",
        "",
        "I’ll reach out shortly to confirm the rest of your event details. 💅🏽",
    ])
    return OutgoingEmail(
        to=recipient,
        sender=sender,
        subject=f"Deposit Received — {BRAND} Events",
        body=body,
    )
