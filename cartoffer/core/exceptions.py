"""
Custom exception classes
Carry an error code and details so the HTTP layer can map them to responses
"""

from typing import Any, Dict, Optional


class BaseApplicationError(Exception):
    """Base application error"""
    
    def __init__(
        self,
        message: str,
        error_code: str = None,
        details: Dict[str, Any] = None
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class DatabaseError(BaseApplicationError):
    """Database failure"""
    
    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(message, "DATABASE_ERROR", details)


class ValidationError(BaseApplicationError):
    """Malformed or out-of-range input"""
    
    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class NotFoundError(BaseApplicationError):
    """Referenced entity does not exist"""
    pass


class UserNotFoundError(NotFoundError):
    """User has no known segment"""
    
    def __init__(self, user_id: int):
        super().__init__(
            f"User {user_id} not found",
            "USER_NOT_FOUND",
            {"user_id": user_id}
        )


class RestaurantNotFoundError(NotFoundError):
    """Restaurant has no registered offers"""
    
    def __init__(self, restaurant_id: int):
        super().__init__(
            f"Restaurant {restaurant_id} not found",
            "RESTAURANT_NOT_FOUND",
            {"restaurant_id": restaurant_id}
        )


class InvalidOfferError(BaseApplicationError):
    """Stored offer data violates the offer invariants"""
    
    def __init__(self, message: str, offer_id: Optional[int] = None):
        super().__init__(message, "INVALID_OFFER", {"offer_id": offer_id})


class SegmentServiceError(BaseApplicationError):
    """Segment lookup service failed or returned garbage"""
    
    def __init__(self, message: str, details: Dict[str, Any] = None):
        super().__init__(message, "SEGMENT_SERVICE_UNAVAILABLE", details)
