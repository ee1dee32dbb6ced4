"""
Offer domain models
"""

from pydantic import BaseModel, Field
from typing import Optional, Tuple
from enum import Enum
from .base import BaseEntity, TimestampMixin


class OfferType(str, Enum):
    """Offer type"""
    FLATX = "FLATX"             # fixed amount off
    PERCENTAGE = "PERCENTAGE"   # percent of the cart value


class OfferCreate(BaseModel):
    """Data needed to register an offer"""
    restaurant_id: int = Field(..., description="Restaurant ID")
    offer_type: OfferType = Field(..., description="Offer type")
    offer_value: int = Field(..., ge=0, description="Flat amount or percentage")
    customer_segments: Tuple[str, ...] = Field(..., min_length=1, description="Eligible segments")


class Offer(BaseEntity, TimestampMixin):
    """Registered offer.

    offer_value is not range-checked here; the resolution engine rejects
    negative values read back from storage.
    """
    offer_id: int = Field(..., description="Offer ID, increases with registration order")
    restaurant_id: int = Field(..., description="Restaurant ID")
    offer_type: OfferType = Field(..., description="Offer type")
    offer_value: int = Field(..., description="Flat amount or percentage")
    customer_segments: Tuple[str, ...] = Field(default_factory=tuple, description="Eligible segments")
    
    def applies_to(self, segment: str) -> bool:
        return segment in self.customer_segments


class AppliedOffer(BaseEntity):
    """Outcome of resolving offers against a cart"""
    cart_value: int = Field(..., description="Cart value before discount")
    discount: int = Field(0, description="Discount actually taken off")
    final_cart_value: int = Field(..., description="Cart value after discount")
    offer: Optional[Offer] = Field(None, description="Selected offer, None when nothing applied")
    
    @property
    def applied(self) -> bool:
        return self.offer is not None
