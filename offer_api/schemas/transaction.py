# offer_api/schemas/transaction.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from pydantic import AwareDatetime, Field

from offer_api.models.transaction import Transaction
from offer_api.schemas.common import CamelModel
from offer_api.schemas.offer import OfferResponse


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransactionIn(CamelModel):
    txn_id: str = Field(min_length=1, max_length=128)
    customer_id: str = Field(min_length=1, max_length=128)
    amount: int = Field(ge=0, strict=True, description="Amount in the smallest currency unit")
    merchant_id: str = Field(min_length=1, max_length=128)
    merchant_category: str = Field(min_length=1, max_length=64)
    post_entry_mode: str = Field(default="", max_length=32)
    timestamp: AwareDatetime = Field(default_factory=_utcnow)

    def to_domain(self) -> Transaction:
        return Transaction(
            txn_id=self.txn_id,
            customer_id=self.customer_id,
            amount=self.amount,
            merchant_id=self.merchant_id,
            merchant_category=self.merchant_category,
            post_entry_mode=self.post_entry_mode,
            timestamp=self.timestamp,
        )


class TransactionResponse(CamelModel):
    status: str = "processed"
    txn_id: str
    applied_offer: OfferResponse
    eligible_offer_ids: List[str] = Field(default_factory=list)
