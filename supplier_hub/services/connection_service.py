import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from supplier_hub.core.dates import utc_now
from supplier_hub.models.connection import RestaurantConnection, SyncLog

logger = logging.getLogger(__name__)


class ConnectionService:
    """Restaurants buying from a supplier, plus the sync log"""

    def __init__(self, db: Session, supplier_id: int):
        self.db = db
        self.supplier_id = supplier_id

    def list_connections(self) -> List[RestaurantConnection]:
        return self.db.query(RestaurantConnection).filter(
            RestaurantConnection.supplier_id == self.supplier_id
        ).order_by(RestaurantConnection.created_at.desc(), RestaurantConnection.id.desc()).all()

    def get_connection(self, connection_id: int) -> Optional[RestaurantConnection]:
        return self.db.query(RestaurantConnection).filter(
            RestaurantConnection.id == connection_id,
            RestaurantConnection.supplier_id == self.supplier_id
        ).first()

    def find_by_restaurant(self, restaurant_id: str) -> Optional[RestaurantConnection]:
        return self.db.query(RestaurantConnection).filter(
            RestaurantConnection.supplier_id == self.supplier_id,
            RestaurantConnection.restaurant_id == restaurant_id
        ).first()

    def create_connection(self, data: dict) -> RestaurantConnection:
        existing = self.find_by_restaurant(data["restaurant_id"])
        if existing:
            raise ValueError("Restaurant is already connected to this supplier")

        connection = RestaurantConnection(
            supplier_id=self.supplier_id,
            connection_status="pending",
            connection_date=utc_now(),
            **data
        )
        self.db.add(connection)
        self.db.commit()
        self.db.refresh(connection)
        return connection

    def set_status(self, connection: RestaurantConnection, status: str) -> RestaurantConnection:
        connection.connection_status = status
        self.db.commit()
        self.db.refresh(connection)
        logger.info(f"[Portal] Connection {connection.id} ({connection.restaurant_name}) -> {status}")
        return connection

    def record_order(self, restaurant_id: str, total: float) -> Optional[RestaurantConnection]:
        """Update order count, spend and last order date; caller commits"""
        connection = self.find_by_restaurant(restaurant_id)
        if not connection:
            return None
        connection.total_orders = (connection.total_orders or 0) + 1
        connection.total_spent = (connection.total_spent or 0) + (total or 0)
        connection.last_order_date = utc_now()
        return connection

    def add_sync_log(
        self,
        action: str,
        status: str,
        processed: int,
        succeeded: int,
        failed: int,
        errors: Optional[List[str]] = None,
        restaurant_id: Optional[str] = None,
    ) -> SyncLog:
        log = SyncLog(
            supplier_id=self.supplier_id,
            restaurant_id=restaurant_id,
            action=action,
            status=status,
            items_processed=processed,
            items_succeeded=succeeded,
            items_failed=failed,
            errors=errors or [],
            timestamp=utc_now(),
        )
        self.db.add(log)
        self.db.commit()
        self.db.refresh(log)
        return log

    def get_sync_logs(self, limit: Optional[int] = None) -> List[SyncLog]:
        query = self.db.query(SyncLog).filter(
            SyncLog.supplier_id == self.supplier_id
        ).order_by(SyncLog.timestamp.desc(), SyncLog.id.desc())
        if limit:
            query = query.limit(limit)
        return query.all()
