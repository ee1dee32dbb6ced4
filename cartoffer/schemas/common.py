from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response body"""
    success: bool = Field(False, description="Always false")
    error_code: str = Field(description="Error code")
    message: str = Field(description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Extra context")
    
    model_config = {
        "json_schema_extra": {
            "example": {
                "success": False,
                "error_code": "USER_NOT_FOUND",
                "message": "User 999 not found",
                "details": {"user_id": 999}
            }
        }
    }
