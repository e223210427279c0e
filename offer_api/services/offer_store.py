# offer_api/services/offer_store.py
from __future__ import annotations

import threading
from typing import Dict, List, Optional, Tuple

from offer_api.core.exceptions import OfferNotFoundError
from offer_api.core.logging import get_structlog_logger
from offer_api.models.offer import Offer

logger = get_structlog_logger(__name__)


class OfferStore:
    """In-memory offer registry shared by all request handlers.

    Every read and write goes through ``self._lock``. Callers only ever see
    copies, so a snapshot can be iterated while other threads enable, disable
    or replace offers.
    """

    def __init__(self) -> None:
        self._offers: Dict[str, Offer] = {}
        self._lock = threading.RLock()

    def put(self, offer: Offer) -> Tuple[Offer, bool]:
        """Insert or wholesale-replace ``offer`` under its id.

        Returns a copy of the stored offer and whether an offer with the same
        id was replaced.
        """
        if not offer.id:
            raise ValueError("offer id must be non-empty")

        stored = offer.copy()
        with self._lock:
            replaced = offer.id in self._offers
            self._offers[offer.id] = stored

        logger.info(
            "offer.stored",
            offer_id=offer.id,
            replaced=replaced,
        )
        return stored.copy(), replaced

    def get(self, offer_id: str) -> Optional[Offer]:
        with self._lock:
            offer = self._offers.get(offer_id)
            return offer.copy() if offer is not None else None

    def all(self) -> List[Offer]:
        with self._lock:
            return [self._offers[key].copy() for key in sorted(self._offers)]

    def enable_for(self, offer_id: str, user_id: str) -> Offer:
        with self._lock:
            offer = self._require(offer_id)
            offer.enable_for(user_id)
            return offer.copy()

    def disable_for(self, offer_id: str, user_id: str) -> Offer:
        with self._lock:
            offer = self._require(offer_id)
            offer.disable_for(user_id)
            return offer.copy()

    def clear(self) -> None:
        with self._lock:
            self._offers.clear()

    def _require(self, offer_id: str) -> Offer:
        offer = self._offers.get(offer_id)
        if offer is None:
            raise OfferNotFoundError(offer_id)
        return offer

    def __len__(self) -> int:
        with self._lock:
            return len(self._offers)

    def __contains__(self, offer_id: object) -> bool:
        with self._lock:
            return offer_id in self._offers


_offer_store: Optional[OfferStore] = None
_offer_store_lock = threading.Lock()


def get_offer_store() -> OfferStore:
    """Get or create the process-wide offer store."""
    global _offer_store
    if _offer_store is None:
        with _offer_store_lock:
            if _offer_store is None:
                _offer_store = OfferStore()
    return _offer_store
