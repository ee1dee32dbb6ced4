"""
Offer resolution engine
Pure functions that pick the best offer for a cart

Rules:
- Only offers whose segments include the user's segment are eligible
- FLATX takes offer_value off; PERCENTAGE takes floor(cart * min(value, 100) / 100)
- The offer with the largest discount amount wins, ties go to the first registered
- The cart value never drops below zero
"""

from typing import Iterable, List, Optional
from ..core.exceptions import InvalidOfferError, ValidationError
from ..models.offer import AppliedOffer, Offer, OfferType

MAX_PERCENTAGE = 100


def matching_offers(segment: str, offers: Iterable[Offer]) -> List[Offer]:
    """Offers eligible for the segment, in registration order"""
    return [offer for offer in offers if offer.applies_to(segment)]


def compute_discount(offer: Offer, cart_value: int) -> int:
    """
    Discount amount an offer yields for a cart, before clamping to the cart value
    
    Raises:
        InvalidOfferError: negative offer value or unknown offer type
    """
    if offer.offer_value < 0:
        raise InvalidOfferError(
            f"Offer {offer.offer_id} has negative value {offer.offer_value}",
            offer.offer_id
        )
    
    if offer.offer_type == OfferType.FLATX:
        return offer.offer_value
    if offer.offer_type == OfferType.PERCENTAGE:
        percentage = min(offer.offer_value, MAX_PERCENTAGE)
        return cart_value * percentage // 100
    
    raise InvalidOfferError(
        f"Offer {offer.offer_id} has unsupported type {offer.offer_type}",
        offer.offer_id
    )


def select_best_offer(cart_value: int, segment: str, offers: Iterable[Offer]) -> AppliedOffer:
    """
    Pick the eligible offer with the largest discount and apply it
    
    Args:
        cart_value: cart total, must be >= 0
        segment: customer segment of the user
        offers: the restaurant's offers in registration order
        
    Returns:
        AppliedOffer: the selection; offer is None when nothing matched
    """
    if cart_value < 0:
        raise ValidationError("cart_value must not be negative", {"cart_value": cart_value})
    
    best: Optional[Offer] = None
    best_discount = 0
    for offer in matching_offers(segment, offers):
        discount = compute_discount(offer, cart_value)
        # strict comparison keeps the earliest offer on ties
        if best is None or discount > best_discount:
            best, best_discount = offer, discount
    
    if best is None:
        return AppliedOffer(cart_value=cart_value, discount=0, final_cart_value=cart_value)
    
    taken = min(best_discount, cart_value)
    return AppliedOffer(
        cart_value=cart_value,
        discount=taken,
        final_cart_value=cart_value - taken,
        offer=best
    )


def resolve(cart_value: int, segment: str, offers: Iterable[Offer]) -> int:
    """Discounted cart value for a user segment"""
    return select_best_offer(cart_value, segment, offers).final_cart_value
