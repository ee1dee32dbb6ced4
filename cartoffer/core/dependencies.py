"""
FastAPI dependencies
Collaborators are built by create_app and kept on app.state
"""

from typing import Dict
from fastapi import Request

from ..services.cart_service import CartOfferService
from ..services.log_service import OperationLogService


def get_cart_service(request: Request) -> CartOfferService:
    return request.app.state.cart_service


def get_log_service(request: Request) -> OperationLogService:
    return request.app.state.log_service


def get_segment_map(request: Request) -> Dict[int, str]:
    """Mapping served by the mock user segment endpoint"""
    return request.app.state.segment_map
