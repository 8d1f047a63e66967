from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class InquiryRequest(BaseModel):
    # Formulaire public: types laxistes, la normalisation est faite par le service
    model_config = ConfigDict(coerce_numbers_to_str=True)

    type: Any = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date: Optional[str] = None
    startTime: Optional[str] = None
    guestCount: Any = None
    location: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Inquiry:
    """Demande normalisée et validée (type, invités bornés, champs requis présents)."""
    kind: str
    name: str
    email: str
    phone: Optional[str]
    date: str
    start_time: Optional[str]
    guests: int
    location: str
    notes: Optional[str]
