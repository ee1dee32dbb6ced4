"""
Database connection and management
Wraps a single DuckDB connection behind a lock for the offer store and the operation log
"""

import duckdb
from pathlib import Path
from typing import Optional, Generator
from contextlib import contextmanager
import threading
from .exceptions import DatabaseError

# Table definitions
SCHEMA_SQL = r"""
CREATE SEQUENCE IF NOT EXISTS offers_id_seq;
CREATE TABLE IF NOT EXISTS offers (
  offer_id INTEGER DEFAULT nextval('offers_id_seq') PRIMARY KEY,
  restaurant_id INTEGER NOT NULL,
  offer_type TEXT CHECK(offer_type IN ('FLATX','PERCENTAGE')) NOT NULL,
  offer_value INTEGER NOT NULL,
  customer_segments VARCHAR[] NOT NULL,
  created_at TIMESTAMP DEFAULT now()
);

CREATE INDEX IF NOT EXISTS idx_offers_restaurant ON offers(restaurant_id);

CREATE SEQUENCE IF NOT EXISTS logs_id_seq;
CREATE TABLE IF NOT EXISTS logs (
  log_id INTEGER DEFAULT nextval('logs_id_seq') PRIMARY KEY,
  action TEXT,
  detail_json TEXT,
  created_at TIMESTAMP DEFAULT now()
);

CREATE INDEX IF NOT EXISTS idx_logs_action ON logs(action);
"""


def parse_database_url(db_url: str) -> str:
    """duckdb://<path> -> <path>; anything else is taken as a path"""
    if db_url.startswith("duckdb://"):
        return db_url.replace("duckdb://", "", 1)
    return db_url


class DatabaseManager:
    """Database manager, owns the connection and serialises access to it"""
    
    def __init__(self, database_url: str = "duckdb://:memory:"):
        self._connection: Optional[duckdb.DuckDBPyConnection] = None
        self._lock = threading.RLock()
        self.db_path = parse_database_url(database_url)
    
    @property
    def connection(self) -> duckdb.DuckDBPyConnection:
        with self._lock:
            if self._connection is None:
                try:
                    if self.db_path != ":memory:":
                        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
                    self._connection = duckdb.connect(self.db_path)
                    self._connection.execute(SCHEMA_SQL)
                except (duckdb.Error, OSError) as e:
                    self._connection = None
                    raise DatabaseError(f"Failed to initialize schema: {e}")
            return self._connection
    
    def get_connection(self) -> duckdb.DuckDBPyConnection:
        return self.connection
    
    def init_database(self):
        """Open the connection and create tables"""
        self.get_connection()
    
    @contextmanager
    def transaction(self) -> Generator[duckdb.DuckDBPyConnection, None, None]:
        """Run a block atomically; the lock keeps other threads off the connection"""
        with self._lock:
            conn = self.connection
            try:
                conn.execute("BEGIN")
                yield conn
                conn.execute("COMMIT")
            except duckdb.Error as e:
                try:
                    conn.execute("ROLLBACK")
                except duckdb.Error:
                    pass  # transaction already aborted
                raise DatabaseError(f"Database operation failed: {e}")
            except Exception:
                conn.execute("ROLLBACK")
                raise
    
    def execute_query(self, query: str, params: list = None) -> list:
        """Run a query and return all rows"""
        with self._lock:
            try:
                con = self.get_connection()
                if params:
                    return con.execute(query, params).fetchall()
                return con.execute(query).fetchall()
            except duckdb.Error as e:
                raise DatabaseError(f"Query execution failed: {e}")
    
    def execute_one(self, query: str, params: list = None) -> Optional[tuple]:
        """Run a query and return the first row"""
        with self._lock:
            try:
                con = self.get_connection()
                if params:
                    return con.execute(query, params).fetchone()
                return con.execute(query).fetchone()
            except duckdb.Error as e:
                raise DatabaseError(f"Query execution failed: {e}")
    
    def close(self):
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
