from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class CartItem(BaseModel):
    # Le front envoie ses propres champs (id, variantes...): on les tolère
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    title: Optional[str] = None
    price: Any = None
    priceCents: Any = None
    quantity: Any = None
    notes: Optional[str] = None
    thumbnail: Optional[str] = None


class CheckoutRequest(BaseModel):
    # null accepté partout: normalisé par le service (items or [], meta or {}, bool(optedIn))
    model_config = ConfigDict(coerce_numbers_to_str=True)

    items: Optional[List[CartItem]] = None
    optedIn: Any = False
    customer_email: Optional[str] = None
    intent: Optional[str] = "order"
    meta: Optional[Dict[str, Any]] = None
    fulfillment: Optional[str] = "shipping"


class CheckoutOut(BaseModel):
    url: str


@dataclass(frozen=True)
class CheckoutSessionSpec:
    """
    Paramètres de session Checkout construits une fois par requête, remis à Stripe, non conservés.
    to_params() produit les kwargs de stripe.checkout.Session.create.
    """
    line_items: List[Dict[str, Any]]
    success_url: str
    cancel_url: str
    customer_email: str
    metadata: Dict[str, str]
    mode: str = "payment"
    payment_method_types: List[str] = field(default_factory=lambda: ["card"])
    shipping_options: Optional[List[Dict[str, Any]]] = None
    shipping_address_collection: Optional[Dict[str, Any]] = None

    @property
    def intent(self) -> str:
        return self.metadata.get("intent", "order")

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "payment_method_types": list(self.payment_method_types),
            "line_items": self.line_items,
            "mode": self.mode,
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
            "customer_email": self.customer_email,
            "metadata": dict(self.metadata),
        }
        if self.shipping_address_collection is not None:
            params["shipping_address_collection"] = self.shipping_address_collection
        if self.shipping_options is not None:
            params["shipping_options"] = self.shipping_options
        return params
