"""
Operation log service
Records offer registrations, offer applications and system errors in the logs table
"""

import json
from typing import Any, Dict, List, Optional
from ..core.database import DatabaseManager


class OperationLogService:
    """Operation log backed by DuckDB"""
    
    def __init__(self, db: DatabaseManager):
        self.db = db
    
    def record(self, action: str, detail: Dict[str, Any]) -> None:
        self.db.execute_query(
            "INSERT INTO logs(action, detail_json) VALUES (?,?)",
            [action, json.dumps(detail, default=str)]
        )
    
    def list_logs(self, action: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
        """Most recent entries first"""
        if action:
            rows = self.db.execute_query(
                """
                SELECT log_id, action, detail_json, created_at
                FROM logs WHERE action=?
                ORDER BY log_id DESC LIMIT ?
                """,
                [action, limit]
            )
        else:
            rows = self.db.execute_query(
                "SELECT log_id, action, detail_json, created_at FROM logs ORDER BY log_id DESC LIMIT ?",
                [limit]
            )
        
        return [
            {
                "log_id": row[0],
                "action": row[1],
                "detail": json.loads(row[2]) if row[2] else {},
                "created_at": str(row[3])
            }
            for row in rows
        ]
