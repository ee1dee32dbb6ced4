"""
Offer registration routes
"""

from fastapi import APIRouter, Depends, Query
from typing import List

from ...core.dependencies import get_cart_service
from ...schemas.common import ErrorResponse
from ...schemas.offer import MAX_INT32, ApiResponse, OfferRequest, OfferResponse
from ...services.cart_service import CartOfferService

router = APIRouter()


@router.post("/offer", response_model=ApiResponse, responses={400: {"model": ErrorResponse}})
def add_offer(req: OfferRequest, service: CartOfferService = Depends(get_cart_service)):
    """Register an offer for a restaurant"""
    service.register_offer(req.to_offer_create())
    return ApiResponse(response_msg="success")


@router.get("/offer", response_model=List[OfferResponse])
def list_offers(
    restaurant_id: int = Query(..., ge=1, le=MAX_INT32, description="Restaurant ID"),
    service: CartOfferService = Depends(get_cart_service)
):
    """Offers of a restaurant in registration order"""
    return [OfferResponse.from_offer(offer) for offer in service.get_offers(restaurant_id)]
