"""
Module 'inquiries' (feature-first): demandes de prestation à domicile ou pour événement.
"""

from .models import Inquiry, InquiryRequest
from .service import clamp_guests, normalize_kind, submit_inquiry, validate_inquiry

__all__ = [
    "Inquiry",
    "InquiryRequest",
    "clamp_guests",
    "normalize_kind",
    "submit_inquiry",
    "validate_inquiry",
]
