# supplier_hub/services/order_service.py
"""
Purchase orders as seen by the supplier dashboard.

Orders arrive from the relay (``receive_order``) and then move along a
fixed lifecycle:

    draft -> sent -> confirmed -> shipped -> delivered -> invoiced -> paid
    draft | sent | confirmed -> cancelled

Status changes are pushed to the restaurant main system on a best-effort
basis: a failed notification never undoes the change.
"""
import logging
import time
from datetime import timedelta
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from supplier_hub.core.dates import parse_datetime, utc_now, as_utc
from supplier_hub.core.errors import GatewayError
from supplier_hub.models.order import ORDER_STATUSES, PurchaseOrder, PurchaseOrderItem
from supplier_hub.models.supplier import Supplier
from supplier_hub.schemas.relay import SupplierPortalOrder
from supplier_hub.services.connection_service import ConnectionService
from supplier_hub.services.downstream import DownstreamClient

logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS = {
    "draft": {"sent", "cancelled"},
    "sent": {"confirmed", "cancelled"},
    "confirmed": {"shipped", "cancelled"},
    "shipped": {"delivered"},
    "delivered": {"invoiced"},
    "invoiced": {"paid"},
    "paid": set(),
    "cancelled": set(),
}


class InvalidTransition(ValueError):
    pass


def generate_order_number() -> str:
    """PO-YYYY-MM-DD-NNNNNN (last six digits of the epoch milliseconds)"""
    today = utc_now().date().isoformat()
    return f"PO-{today}-{str(int(time.time() * 1000))[-6:]}"


class OrderService:
    def __init__(self, db: Session, supplier: Supplier, main_system: Optional[DownstreamClient] = None):
        self.db = db
        self.supplier = supplier
        self.main_system = main_system

    def list_orders(self, status: Optional[str] = None) -> List[PurchaseOrder]:
        """Newest first"""
        query = self.db.query(PurchaseOrder).filter(PurchaseOrder.supplier_id == self.supplier.id)
        if status:
            query = query.filter(PurchaseOrder.status == status)
        return query.order_by(PurchaseOrder.created_at.desc(), PurchaseOrder.order_number.desc()).all()

    def get_order(self, order_id: str) -> Optional[PurchaseOrder]:
        return self.db.query(PurchaseOrder).filter(
            PurchaseOrder.id == order_id,
            PurchaseOrder.supplier_id == self.supplier.id
        ).first()

    def receive_order(self, incoming: SupplierPortalOrder) -> PurchaseOrder:
        """Persist an order forwarded by the relay and bump the restaurant's totals"""
        order = PurchaseOrder(
            order_number=generate_order_number(),
            external_order_id=incoming.order_id,
            restaurant_id=incoming.restaurant_id,
            supplier_id=self.supplier.id,
            subtotal=incoming.subtotal,
            tax=incoming.tax or 0,
            shipping=incoming.shipping or 0,
            discount=incoming.discount or 0,
            total=incoming.total,
            status=incoming.status if incoming.status in ORDER_STATUSES else "sent",
            order_date=parse_datetime(incoming.order_date) or utc_now(),
            requested_delivery_date=parse_datetime(incoming.requested_delivery_date),
            notes=incoming.notes,
            delivery_address=incoming.delivery_address,
            payment_status="pending",
            created_by=incoming.created_by,
        )
        order.items = [
            PurchaseOrderItem(
                product_id=line.product_id,
                product_name=line.product_name,
                sku=line.sku,
                quantity=line.quantity,
                unit_price=line.unit_price,
                unit=line.unit,
                total=line.total,
                notes=line.notes,
            )
            for line in incoming.items
        ]
        self.db.add(order)

        ConnectionService(self.db, self.supplier.id).record_order(incoming.restaurant_id, incoming.total)

        self.db.commit()
        self.db.refresh(order)

        logger.info(f"[Portal] Order received: {order.order_number} from restaurant {order.restaurant_id}")
        return order

    def change_status(
        self,
        order: PurchaseOrder,
        new_status: str,
        confirmed_delivery_date=None,
        payment_method: Optional[str] = None,
    ) -> PurchaseOrder:
        allowed = ALLOWED_TRANSITIONS.get(order.status)
        if allowed is None:
            raise InvalidTransition(f"Unknown order status: {order.status}")
        if new_status not in allowed:
            raise InvalidTransition(f"Cannot change order status from {order.status} to {new_status}")

        now = utc_now()
        if new_status == "confirmed":
            order.confirmed_delivery_date = confirmed_delivery_date or order.requested_delivery_date
        elif new_status == "delivered":
            order.actual_delivery_date = now
        elif new_status == "invoiced":
            base = as_utc(order.actual_delivery_date) or now
            order.payment_due_date = base + timedelta(days=self.supplier.payment_days or 30)
        elif new_status == "paid":
            order.payment_status = "paid"
            if payment_method:
                order.payment_method = payment_method
        elif new_status == "cancelled":
            order.payment_status = "cancelled"

        order.status = new_status
        self.db.commit()
        self.db.refresh(order)

        logger.info(f"[Portal] Order {order.order_number} -> {new_status}")
        return order

    async def notify_restaurant(self, order: PurchaseOrder) -> bool:
        if self.main_system is None:
            return False
        try:
            await self.main_system.put(
                f"/api/purchase-orders/{order.id}/status",
                json={"status": order.status, "timestamp": utc_now().isoformat()},
            )
        except GatewayError as e:
            logger.warning(f"[Portal] Restaurant not notified of {order.order_number}: {e.message}")
            return False
        return True

    async def update_status(self, order: PurchaseOrder, new_status: str, **kwargs) -> Tuple[PurchaseOrder, bool]:
        order = self.change_status(order, new_status, **kwargs)
        notified = await self.notify_restaurant(order)
        return order, notified
