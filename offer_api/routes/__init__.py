# offer_api/routes/__init__.py
"""
API route handlers organized by domain.
"""

from offer_api.routes.health import router as health_router
from offer_api.routes.offers import router as offers_router
from offer_api.routes.transactions import router as transactions_router

__all__ = [
    "health_router",
    "offers_router",
    "transactions_router",
]
