# offer_api/models/transaction.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Transaction:
    txn_id: str
    customer_id: str
    amount: int  # smallest currency unit
    merchant_id: str
    merchant_category: str
    post_entry_mode: str
    timestamp: datetime
