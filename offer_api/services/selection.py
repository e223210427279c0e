# offer_api/services/selection.py
from __future__ import annotations

from typing import Iterable, List, Optional

from offer_api.models.offer import Offer
from offer_api.models.transaction import Transaction
from offer_api.services.eligibility import is_applicable


def _rank_key(offer: Offer):
    # highest outcome first, lowest id breaks ties
    return (-offer.outcome, offer.id)


def rank_applicable_offers(transaction: Transaction, offers: Iterable[Offer]) -> List[Offer]:
    """Return every offer applicable to ``transaction``, winner first."""
    applicable = [offer for offer in offers if is_applicable(transaction, offer)]
    return sorted(applicable, key=_rank_key)


def select_best_offer(transaction: Transaction, offers: Iterable[Offer]) -> Optional[Offer]:
    """Pick the single best applicable offer.

    The winner has the greatest ``outcome``; among equal outcomes the offer
    with the lowest id wins, so the result never depends on iteration order.
    Returns ``None`` when no offer applies, which is a normal outcome rather
    than an error.
    """
    ranked = rank_applicable_offers(transaction, offers)
    return ranked[0] if ranked else None
