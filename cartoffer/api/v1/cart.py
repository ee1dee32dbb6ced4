"""
Cart routes
"""

from fastapi import APIRouter, Depends

from ...core.dependencies import get_cart_service
from ...schemas.common import ErrorResponse
from ...schemas.offer import ApplyOfferRequest, ApplyOfferResponse
from ...services.cart_service import CartOfferService

router = APIRouter()


@router.post(
    "/cart/apply_offer",
    response_model=ApplyOfferResponse,
    responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}
)
def apply_offer(req: ApplyOfferRequest, service: CartOfferService = Depends(get_cart_service)):
    """Apply the best eligible offer to the cart"""
    result = service.apply_offer(req.cart_value, req.user_id, req.restaurant_id)
    return ApplyOfferResponse(cart_value=result.final_cart_value)
