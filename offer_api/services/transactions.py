# offer_api/services/transactions.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from offer_api.core.logging import get_structlog_logger
from offer_api.models.offer import Offer
from offer_api.models.transaction import Transaction
from offer_api.services.offer_store import OfferStore
from offer_api.services.selection import rank_applicable_offers, select_best_offer

logger = get_structlog_logger(__name__)


@dataclass(frozen=True)
class OfferSelection:
    transaction: Transaction
    offer: Optional[Offer]
    candidates: List[Offer] = field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.offer is not None


def apply_best_offer(store: OfferStore, transaction: Transaction) -> OfferSelection:
    """Evaluate ``transaction`` against one consistent snapshot of ``store``."""
    snapshot = store.all()
    candidates = rank_applicable_offers(transaction, snapshot)
    best = select_best_offer(transaction, candidates)

    if best is None:
        logger.info(
            "transaction.no_applicable_offer",
            txn_id=transaction.txn_id,
            customer_id=transaction.customer_id,
            merchant_category=transaction.merchant_category,
            amount=transaction.amount,
            offers_considered=len(snapshot),
        )
    else:
        logger.info(
            "transaction.offer_applied",
            txn_id=transaction.txn_id,
            customer_id=transaction.customer_id,
            offer_id=best.id,
            reward_type=best.reward_type,
            outcome=best.outcome,
            candidates=len(candidates),
        )

    return OfferSelection(transaction=transaction, offer=best, candidates=candidates)
