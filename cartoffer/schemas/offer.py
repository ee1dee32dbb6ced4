"""
Offer and cart request/response schemas
Field names follow the public wire format (snake_case, customer_segment)
"""

from pydantic import BaseModel, Field, StrictInt
from datetime import datetime
from typing import List, Optional
from ..models.offer import Offer, OfferCreate, OfferType

# offers columns are DuckDB INTEGER
MAX_INT32 = 2**31 - 1


class OfferRequest(BaseModel):
    """Offer registration request"""
    restaurant_id: StrictInt = Field(..., ge=1, le=MAX_INT32, description="Restaurant ID")
    offer_type: OfferType = Field(..., description="FLATX or PERCENTAGE")
    offer_value: StrictInt = Field(..., ge=0, le=MAX_INT32, description="Flat amount or percentage")
    customer_segment: List[str] = Field(..., min_length=1, description="Eligible segments")
    
    def to_offer_create(self) -> OfferCreate:
        return OfferCreate(
            restaurant_id=self.restaurant_id,
            offer_type=self.offer_type,
            offer_value=self.offer_value,
            customer_segments=tuple(self.customer_segment)
        )


class ApiResponse(BaseModel):
    """Plain acknowledgement"""
    response_msg: str = Field(..., description="Result message")


class OfferResponse(BaseModel):
    """Registered offer"""
    offer_id: int = Field(..., description="Offer ID")
    restaurant_id: int = Field(..., description="Restaurant ID")
    offer_type: OfferType = Field(..., description="Offer type")
    offer_value: int = Field(..., description="Flat amount or percentage")
    customer_segment: List[str] = Field(..., description="Eligible segments")
    created_at: Optional[datetime] = Field(None, description="Registration time")
    
    @classmethod
    def from_offer(cls, offer: Offer) -> "OfferResponse":
        return cls(
            offer_id=offer.offer_id,
            restaurant_id=offer.restaurant_id,
            offer_type=offer.offer_type,
            offer_value=offer.offer_value,
            customer_segment=list(offer.customer_segments),
            created_at=offer.created_at
        )


class ApplyOfferRequest(BaseModel):
    """Cart offer application request.

    cart_value is not range-checked here so negative values surface as
    VALIDATION_ERROR from the service with the offending value attached.
    """
    cart_value: StrictInt = Field(..., description="Cart value before discount")
    user_id: StrictInt = Field(..., ge=1, le=MAX_INT32, description="User ID")
    restaurant_id: StrictInt = Field(..., ge=1, le=MAX_INT32, description="Restaurant ID")


class ApplyOfferResponse(BaseModel):
    """Cart value after discount"""
    cart_value: int = Field(..., description="Cart value after discount")


class SegmentResponse(BaseModel):
    """User segment"""
    segment: str = Field(..., description="Customer segment label")
