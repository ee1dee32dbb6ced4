"""
Offer storage
Registered offers keyed by restaurant, kept in insertion order

Implementations:
- InMemoryOfferStore: process-lifetime dict of lists
- DuckDBOfferStore: offers table in DuckDB
Both hand out tuples so callers always see a consistent snapshot.
"""

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Tuple
from ..core.database import DatabaseManager
from ..models.offer import Offer, OfferCreate, OfferType


class OfferStore(ABC):
    """Offer store interface"""
    
    @abstractmethod
    def add_offer(self, offer: OfferCreate) -> Offer:
        """Register an offer; later offers sort after earlier ones"""
    
    @abstractmethod
    def get_offers(self, restaurant_id: int) -> Tuple[Offer, ...]:
        """All offers of a restaurant in registration order, possibly empty"""
    
    @abstractmethod
    def list_restaurants(self) -> List[int]:
        """Restaurants that have at least one offer"""
    
    def has_restaurant(self, restaurant_id: int) -> bool:
        return len(self.get_offers(restaurant_id)) > 0


class InMemoryOfferStore(OfferStore):
    """Offer store backed by a dict, guarded by a lock"""
    
    def __init__(self):
        self._offers: Dict[int, List[Offer]] = {}
        self._next_id = 1
        self._lock = threading.Lock()
    
    def add_offer(self, offer: OfferCreate) -> Offer:
        with self._lock:
            stored = Offer(
                offer_id=self._next_id,
                restaurant_id=offer.restaurant_id,
                offer_type=offer.offer_type,
                offer_value=offer.offer_value,
                customer_segments=tuple(offer.customer_segments),
                created_at=datetime.now()
            )
            self._next_id += 1
            self._offers.setdefault(offer.restaurant_id, []).append(stored)
            return stored
    
    def get_offers(self, restaurant_id: int) -> Tuple[Offer, ...]:
        with self._lock:
            return tuple(self._offers.get(restaurant_id, ()))
    
    def list_restaurants(self) -> List[int]:
        with self._lock:
            return sorted(rid for rid, offers in self._offers.items() if offers)


class DuckDBOfferStore(OfferStore):
    """Offer store backed by the DuckDB offers table"""
    
    def __init__(self, db: DatabaseManager):
        self.db = db
    
    def add_offer(self, offer: OfferCreate) -> Offer:
        with self.db.transaction() as conn:
            row = conn.execute(
                """
                INSERT INTO offers(restaurant_id, offer_type, offer_value, customer_segments)
                VALUES (?,?,?,?)
                RETURNING offer_id, restaurant_id, offer_type, offer_value, customer_segments, created_at
                """,
                [
                    offer.restaurant_id,
                    offer.offer_type.value,
                    offer.offer_value,
                    list(offer.customer_segments)
                ]
            ).fetchone()
        return self._row_to_offer(row)
    
    def get_offers(self, restaurant_id: int) -> Tuple[Offer, ...]:
        rows = self.db.execute_query(
            """
            SELECT offer_id, restaurant_id, offer_type, offer_value, customer_segments, created_at
            FROM offers
            WHERE restaurant_id=?
            ORDER BY offer_id
            """,
            [restaurant_id]
        )
        return tuple(self._row_to_offer(row) for row in rows)
    
    def has_restaurant(self, restaurant_id: int) -> bool:
        row = self.db.execute_one(
            "SELECT 1 FROM offers WHERE restaurant_id=? LIMIT 1",
            [restaurant_id]
        )
        return row is not None
    
    def list_restaurants(self) -> List[int]:
        rows = self.db.execute_query(
            "SELECT DISTINCT restaurant_id FROM offers ORDER BY restaurant_id"
        )
        return [row[0] for row in rows]
    
    @staticmethod
    def _row_to_offer(row: tuple) -> Offer:
        return Offer(
            offer_id=row[0],
            restaurant_id=row[1],
            offer_type=OfferType(row[2]),
            offer_value=row[3],
            customer_segments=tuple(row[4] or ()),
            created_at=row[5]
        )


def create_offer_store(backend: str, db: DatabaseManager) -> OfferStore:
    """Build the store named by settings.offer_store"""
    if backend == "duckdb":
        return DuckDBOfferStore(db)
    if backend == "memory":
        return InMemoryOfferStore()
    raise ValueError(f"Unknown offer store backend: {backend}")
