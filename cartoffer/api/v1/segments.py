"""
Mock user segment route
Stands in for the external segment service during local runs and tests
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Dict

from ...core.dependencies import get_segment_map
from ...schemas.offer import SegmentResponse

router = APIRouter()


@router.get("/user_segment", response_model=SegmentResponse)
def get_user_segment(
    user_id: int = Query(..., description="User ID"),
    segment_map: Dict[int, str] = Depends(get_segment_map)
):
    segment = segment_map.get(user_id)
    if segment is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} has no segment")
    return SegmentResponse(segment=segment)
