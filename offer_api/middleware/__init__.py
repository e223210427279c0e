# offer_api/middleware/__init__.py
from offer_api.middleware.logging import LoggingMiddleware
from offer_api.middleware.request_id import RequestIdMiddleware

__all__ = [
    "LoggingMiddleware",
    "RequestIdMiddleware",
]
