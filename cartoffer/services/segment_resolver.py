"""
User segment lookup
Maps a user id to a customer segment label ("p1", "p2", ...)

Implementations:
- StaticSegmentResolver: local mapping, used by default and by tests
- HttpSegmentResolver: asks the segment service (mock server) over HTTP
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import requests

from ..core.exceptions import SegmentServiceError


class SegmentResolver(ABC):
    """Segment lookup interface; None means the user is unknown"""
    
    @abstractmethod
    def lookup_segment(self, user_id: int) -> Optional[str]:
        pass
    
    def close(self) -> None:
        """Release held resources"""


class StaticSegmentResolver(SegmentResolver):
    """Segment lookup from an in-process mapping"""
    
    def __init__(self, segments: Dict[int, str]):
        self._segments = dict(segments)
    
    def lookup_segment(self, user_id: int) -> Optional[str]:
        return self._segments.get(user_id)


class HttpSegmentResolver(SegmentResolver):
    """
    Segment lookup against GET {base_url}{path}?user_id=N
    
    200 -> {"segment": "..."}; 404 -> unknown user; anything else is a
    service failure.
    """
    
    def __init__(self, base_url: str, path: str = "/api/v1/user_segment",
                 timeout: float = 5.0, session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.path = path
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
    
    def close(self) -> None:
        """Close the session if this resolver created it"""
        if self._owns_session:
            self.session.close()
    
    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"
    
    def lookup_segment(self, user_id: int) -> Optional[str]:
        try:
            response = self.session.get(
                self.url,
                params={"user_id": user_id},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise SegmentServiceError(
                f"Segment service request failed: {e}",
                {"url": self.url, "user_id": user_id}
            )
        
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise SegmentServiceError(
                f"Segment service returned HTTP {response.status_code}",
                {"url": self.url, "user_id": user_id, "status_code": response.status_code}
            )
        
        try:
            segment = response.json().get("segment")
        except (ValueError, AttributeError):
            segment = None
        if not isinstance(segment, str) or not segment:
            raise SegmentServiceError(
                "Segment service returned a malformed body",
                {"url": self.url, "user_id": user_id}
            )
        return segment
