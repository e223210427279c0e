# offer_api/schemas/__init__.py
"""
Pydantic schemas for request/response validation and serialization.
"""

from offer_api.schemas.common import ErrorResponse
from offer_api.schemas.offer import EnablementResponse, OfferCreate, OfferResponse
from offer_api.schemas.transaction import TransactionIn, TransactionResponse

__all__ = [
    "ErrorResponse",
    "EnablementResponse",
    "OfferCreate",
    "OfferResponse",
    "TransactionIn",
    "TransactionResponse",
]
