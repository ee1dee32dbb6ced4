"""
Business logic services.
Offer resolution, storage, segment lookup and the cart offer workflow.
"""

from .cart_service import CartOfferService
from .log_service import OperationLogService
from .offer_engine import compute_discount, matching_offers, resolve, select_best_offer
from .offer_store import DuckDBOfferStore, InMemoryOfferStore, OfferStore, create_offer_store
from .segment_resolver import HttpSegmentResolver, SegmentResolver, StaticSegmentResolver

__all__ = [
    "CartOfferService",
    "OperationLogService",
    "compute_discount",
    "matching_offers",
    "resolve",
    "select_best_offer",
    "OfferStore",
    "InMemoryOfferStore",
    "DuckDBOfferStore",
    "create_offer_store",
    "SegmentResolver",
    "StaticSegmentResolver",
    "HttpSegmentResolver",
]
