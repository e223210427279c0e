# offer_api/models/__init__.py
from offer_api.models.offer import Offer
from offer_api.models.transaction import Transaction

__all__ = [
    "Offer",
    "Transaction",
]
