"""
Cart offer service
Validation boundary between the HTTP layer and the offer resolution engine

Main features:
- Offer registration
- Applying the best offer to a cart

Business rules:
- Negative cart values are rejected, never coerced
- Users without a segment and restaurants without offers are rejected
- No applicable offer leaves the cart value unchanged
"""

from typing import Tuple
from ..core.exceptions import (
    DatabaseError,
    RestaurantNotFoundError,
    UserNotFoundError,
    ValidationError
)
from ..models.offer import AppliedOffer, Offer, OfferCreate
from .log_service import OperationLogService
from .offer_engine import select_best_offer
from .offer_store import OfferStore
from .segment_resolver import SegmentResolver


class CartOfferService:
    """Cart offer service, wired with its collaborators by the app factory"""
    
    def __init__(self, store: OfferStore, segments: SegmentResolver,
                 log_service: OperationLogService = None):
        self.store = store
        self.segments = segments
        self.log_service = log_service
    
    def register_offer(self, offer: OfferCreate) -> Offer:
        stored = self.store.add_offer(offer)
        self._log("offer_register", {
            "offer_id": stored.offer_id,
            "restaurant_id": stored.restaurant_id,
            "offer_type": stored.offer_type.value,
            "offer_value": stored.offer_value,
            "customer_segments": list(stored.customer_segments)
        })
        return stored
    
    def get_offers(self, restaurant_id: int) -> Tuple[Offer, ...]:
        return self.store.get_offers(restaurant_id)
    
    def apply_offer(self, cart_value: int, user_id: int, restaurant_id: int) -> AppliedOffer:
        """
        Apply the best offer of a restaurant to a user's cart
        
        Raises:
            ValidationError: cart_value is negative
            UserNotFoundError: user has no segment
            RestaurantNotFoundError: restaurant has no offers
            SegmentServiceError: segment lookup failed
        """
        if cart_value < 0:
            raise ValidationError(
                "cart_value must not be negative",
                {"cart_value": cart_value}
            )
        
        segment = self.segments.lookup_segment(user_id)
        if segment is None:
            raise UserNotFoundError(user_id)
        
        offers = self.store.get_offers(restaurant_id)
        if not offers:
            raise RestaurantNotFoundError(restaurant_id)
        
        result = select_best_offer(cart_value, segment, offers)
        
        self._log("offer_apply", {
            "user_id": user_id,
            "restaurant_id": restaurant_id,
            "segment": segment,
            "cart_value": cart_value,
            "offer_id": result.offer.offer_id if result.offer else None,
            "discount": result.discount,
            "final_cart_value": result.final_cart_value
        })
        return result
    
    def _log(self, action: str, detail: dict):
        if self.log_service is None:
            return
        try:
            self.log_service.record(action, detail)
        except DatabaseError as e:
            # Operation already applied, report to the console only
            print(f"Failed to log {action} to database: {e.message}")
