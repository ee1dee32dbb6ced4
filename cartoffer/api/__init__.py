"""
API routes and endpoints.
"""

from fastapi import APIRouter
from .v1 import cart, logs, offers, segments

api_router = APIRouter()

api_router.include_router(offers.router, tags=["offers"])
api_router.include_router(cart.router, tags=["cart"])
api_router.include_router(segments.router, tags=["segments"])
api_router.include_router(logs.router, tags=["logs"])
