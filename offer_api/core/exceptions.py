# offer_api/core/exceptions.py
from __future__ import annotations

from typing import Any, Dict, Optional


class BaseAPIException(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class NotFoundError(BaseAPIException):
    """Resource not found."""
    def __init__(self, message: str = "Resource not found", **kwargs):
        super().__init__(message, status_code=404, **kwargs)


class OfferNotFoundError(NotFoundError):
    """No offer is stored under the requested identifier."""
    def __init__(self, offer_id: str, **kwargs):
        kwargs.setdefault("code", "offer_not_found")
        kwargs.setdefault("details", {"offer_id": offer_id})
        super().__init__(f"Offer '{offer_id}' not found", **kwargs)
        self.offer_id = offer_id


class NoApplicableOfferError(NotFoundError):
    """Raised by the HTTP layer when a transaction matched no offer."""
    def __init__(self, txn_id: str, **kwargs):
        kwargs.setdefault("code", "no_applicable_offer")
        kwargs.setdefault("details", {"txn_id": txn_id})
        super().__init__("No applicable offer found", **kwargs)
        self.txn_id = txn_id
