"""
Unified error handling
Standard error response format and FastAPI exception handlers

Main features:
- Uniform error body for every failure
- HTTP status mapping by error code
- Unknown errors recorded in the operation log
"""

import traceback
from typing import Dict, Any, Optional
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from .exceptions import BaseApplicationError, DatabaseError


class ErrorResponse:
    """Standard error response"""
    
    def __init__(self, error_code: str, message: str, 
                 details: Optional[Dict[str, Any]] = None,
                 http_status: int = 400):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        self.http_status = http_status
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }
    
    def to_json_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.http_status,
            content=self.to_dict()
        )


class ErrorHandler:
    """Global error handler"""
    
    # Error code -> HTTP status.
    # Unknown users and restaurants are client errors on the cart endpoint,
    # so they map to 400 rather than 404.
    ERROR_CODE_STATUS_MAP = {
        "VALIDATION_ERROR": 400,
        "USER_NOT_FOUND": 400,
        "RESTAURANT_NOT_FOUND": 400,
        "INVALID_OFFER": 500,
        "SEGMENT_SERVICE_UNAVAILABLE": 503,
        "DATABASE_ERROR": 500,
        "INTERNAL_ERROR": 500,
    }
    
    @classmethod
    def handle_application_error(cls, error: BaseApplicationError) -> ErrorResponse:
        http_status = cls.ERROR_CODE_STATUS_MAP.get(error.error_code, 400)
        
        return ErrorResponse(
            error_code=error.error_code,
            message=error.message,
            details=error.details,
            http_status=http_status
        )
    
    @classmethod
    def handle_http_exception(cls, error: HTTPException) -> ErrorResponse:
        return ErrorResponse(
            error_code="HTTP_ERROR",
            message=str(error.detail),
            details={"status_code": error.status_code},
            http_status=error.status_code
        )
    
    @classmethod
    def handle_validation_error(cls, error: Exception) -> ErrorResponse:
        """Request body/query validation failures are client errors"""
        errors = error.errors() if hasattr(error, "errors") else str(error)
        return ErrorResponse(
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            details={"validation_errors": _jsonable_errors(errors)},
            http_status=400
        )
    
    @classmethod
    def handle_unknown_error(cls, error: Exception, request: Request = None) -> ErrorResponse:
        error_details = {
            "type": type(error).__name__,
            "message": str(error),
            "traceback": traceback.format_exc()
        }
        cls._log_system_error(request, error_details)
        
        return ErrorResponse(
            error_code="INTERNAL_ERROR",
            message=str(error) or "Internal server error",
            details={"error_type": type(error).__name__},
            http_status=500
        )
    
    @classmethod
    def _log_system_error(cls, request: Optional[Request], error_details: Dict[str, Any]):
        """Record the failure in the operation log"""
        log_service = getattr(request.app.state, "log_service", None) if request else None
        if log_service is None:
            print(f"Unhandled error: {error_details['type']}: {error_details['message']}")
            return
        try:
            log_service.record("system_error", error_details)
        except DatabaseError:
            # The log itself is unavailable, fall back to the console
            print(f"Failed to log error to database: {error_details}")


def _jsonable_errors(errors):
    if isinstance(errors, str):
        return errors
    return [
        {
            "loc": list(e.get("loc", ())),
            "msg": e.get("msg"),
            "type": e.get("type"),
        }
        for e in errors
    ]


async def application_error_handler(request: Request, exc: BaseApplicationError) -> JSONResponse:
    return ErrorHandler.handle_application_error(exc).to_json_response()


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return ErrorHandler.handle_http_exception(exc).to_json_response()


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return ErrorHandler.handle_validation_error(exc).to_json_response()


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return ErrorHandler.handle_unknown_error(exc, request).to_json_response()


def create_success_response(data: Any = None, message: str = "success") -> Dict[str, Any]:
    response = {
        "success": True,
        "message": message
    }
    
    if data is not None:
        response["data"] = data
    
    return response
