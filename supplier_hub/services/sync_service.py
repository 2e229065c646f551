import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from supplier_hub.core.dates import utc_now
from supplier_hub.core.errors import GatewayError
from supplier_hub.models.connection import SyncLog
from supplier_hub.services.connection_service import ConnectionService
from supplier_hub.services.product_relay import ProductRelayService
from supplier_hub.services.product_service import ProductService

logger = logging.getLogger(__name__)


class SyncService:
    """Push the supplier's own catalog to the Menu Platform and keep a log of it"""

    def __init__(self, db: Session, supplier_id: int, relay: ProductRelayService):
        self.db = db
        self.supplier_id = supplier_id
        self.relay = relay
        self.connections = ConnectionService(db, supplier_id)

    async def sync_products(
        self,
        restaurant_id: Optional[str] = None,
        product_ids: Optional[List[str]] = None,
    ) -> SyncLog:
        """
        Sync the selected products, or every available one when no ids are given.
        The outcome, success or not, ends up in the sync log.
        """
        products = ProductService(self.db, self.supplier_id).get_products(available_only=product_ids is None)
        if product_ids is not None:
            wanted = set(product_ids)
            products = [p for p in products if p.id in wanted]

        entries = [p.to_catalog_entry() for p in products]

        try:
            await self.relay.push_catalog(str(self.supplier_id), entries, restaurant_id=restaurant_id)
        except GatewayError as e:
            logger.error(f"[Portal] Product sync failed for supplier {self.supplier_id}: {e.message}")
            return self.connections.add_sync_log(
                action="product_sync",
                status="failed",
                processed=len(entries),
                succeeded=0,
                failed=len(entries),
                errors=[e.message],
                restaurant_id=restaurant_id,
            )

        if restaurant_id:
            connection = self.connections.find_by_restaurant(restaurant_id)
            if connection:
                connection.last_sync = utc_now()

        return self.connections.add_sync_log(
            action="product_sync",
            status="success",
            processed=len(entries),
            succeeded=len(entries),
            failed=0,
            restaurant_id=restaurant_id,
        )
