"""
Operation log routes
"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from ...core.dependencies import get_log_service
from ...core.error_handler import create_success_response
from ...services.log_service import OperationLogService

router = APIRouter()


@router.get("/logs")
def get_logs(
    action: Optional[str] = Query(None, description="Filter by action"),
    limit: int = Query(50, ge=1, le=500, description="Max entries"),
    log_service: OperationLogService = Depends(get_log_service)
):
    """Recent operation log entries, newest first"""
    logs = log_service.list_logs(action=action, limit=limit)
    return create_success_response({"logs": logs, "total": len(logs)})
