# offer_api/__init__.py
"""
Offer selection API: tracks promotional offers and applies the best one to
each incoming purchase transaction.
"""

__version__ = "1.0.0"
