# offer_api/services/__init__.py
"""
Business logic services: offer storage, eligibility and best-offer selection.
"""

from offer_api.services.eligibility import is_applicable
from offer_api.services.offer_store import OfferStore, get_offer_store
from offer_api.services.selection import rank_applicable_offers, select_best_offer
from offer_api.services.transactions import OfferSelection, apply_best_offer

__all__ = [
    # Storage
    "OfferStore",
    "get_offer_store",
    # Evaluation
    "is_applicable",
    "rank_applicable_offers",
    "select_best_offer",
    # Transactions
    "OfferSelection",
    "apply_best_offer",
]
