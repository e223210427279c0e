# offer_api/services/eligibility.py
from __future__ import annotations

from offer_api.models.offer import Offer
from offer_api.models.transaction import Transaction


def is_applicable(transaction: Transaction, offer: Offer) -> bool:
    # min_milestone is intentionally not checked here
    if transaction.amount < offer.min_amount:
        return False
    if transaction.merchant_category != offer.merchant_category:
        return False
    return offer.is_enabled_for(transaction.customer_id)
