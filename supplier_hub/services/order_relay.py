# supplier_hub/services/order_relay.py
"""
Order relay: Menu Platform -> Supplier Portal.

Builds the normalized order and backorder records, forwards them, and
projects order lookups onto the public field set.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Optional
from urllib.parse import quote

from supplier_hub.core.envelope import Ok, utc_now_iso
from supplier_hub.schemas.relay import (
    BackorderIntake,
    BackorderLine,
    BackorderNotification,
    OrderIntake,
    PortalOrderLine,
    SupplierPortalOrder,
)
from supplier_hub.services.downstream import DownstreamClient
from supplier_hub.services.validation_service import to_number

logger = logging.getLogger(__name__)

# Fixed business rules (no configuration surface upstream either)
TAX_RATE = Decimal("0.08")
DEFAULT_DISCOUNT = Decimal("0")
CENTS = Decimal("0.01")

DEFAULT_ORDER_STATUS = "sent"
DEFAULT_BACKORDER_REASON = "Insufficient stock"

# (public key, upstream key)
PUBLIC_ORDER_FIELDS = (
    ("id", "id"),
    ("orderNumber", "orderNumber"),
    ("restaurantId", "restaurantId"),
    ("supplierId", "supplierId"),
    ("items", "items"),
    ("subtotal", "subtotal"),
    ("tax", "tax"),
    ("shipping", "shipping"),
    ("discount", "discount"),
    ("total", "total"),
    ("status", "status"),
    ("orderDate", "orderDate"),
    ("requestedDeliveryDate", "requestedDeliveryDate"),
    ("confirmedDeliveryDate", "confirmedDeliveryDate"),
    ("actualDeliveryDate", "actualDeliveryDate"),
    ("notes", "notes"),
    ("deliveryAddress", "deliveryAddress"),
    ("paymentStatus", "paymentStatus"),
    ("paymentDueDate", "paymentDueDate"),
    ("createdAt", "created_at"),
    ("updatedAt", "updated_at"),
)


def to_money(value: Any) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass
class OrderTotals:
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float


def compute_order_totals(lines: Iterable, shipping: Any = 0) -> OrderTotals:
    """
    subtotal = sum(quantity * unit_price), tax = 8% of subtotal,
    total = subtotal + tax + shipping - discount. All amounts in cents.
    """
    subtotal = sum(
        (Decimal(str(line.quantity)) * Decimal(str(line.unit_price)) for line in lines),
        Decimal("0"),
    )
    subtotal = to_money(subtotal)
    tax = to_money(subtotal * TAX_RATE)
    shipping = to_money(shipping or 0)
    discount = DEFAULT_DISCOUNT
    total = to_money(subtotal + tax + shipping - discount)

    return OrderTotals(
        subtotal=float(subtotal),
        tax=float(tax),
        shipping=float(shipping),
        discount=float(discount),
        total=float(total),
    )


def project_order(order: Dict[str, Any]) -> Dict[str, Any]:
    """Hide internal Supplier Portal fields"""
    return {public: order.get(upstream) for public, upstream in PUBLIC_ORDER_FIELDS}


class OrderRelayService:
    def __init__(self, supplier_portal: DownstreamClient):
        self.supplier_portal = supplier_portal

    def build_order(self, intake: OrderIntake) -> SupplierPortalOrder:
        delivery_info = intake.delivery_info or {}
        totals = compute_order_totals(intake.items, to_number(delivery_info.get("shippingCost")) or 0)

        lines = [
            PortalOrderLine(
                product_id=item.product_id,
                product_name=item.product_name,
                sku=item.sku,
                quantity=item.quantity,
                unit_price=item.unit_price,
                unit=item.unit,
                total=float(to_money(Decimal(str(item.quantity)) * Decimal(str(item.unit_price)))),
                notes=item.notes,
            )
            for item in intake.items
        ]

        return SupplierPortalOrder(
            order_id=intake.order_id,
            restaurant_id=intake.restaurant_id,
            supplier_id=intake.supplier_id,
            items=lines,
            subtotal=totals.subtotal,
            tax=totals.tax,
            shipping=totals.shipping,
            discount=totals.discount,
            total=totals.total,
            status=intake.status or DEFAULT_ORDER_STATUS,
            order_date=intake.order_date or utc_now_iso(),
            requested_delivery_date=intake.requested_delivery_date,
            notes=intake.notes,
            delivery_address=delivery_info.get("address") or None,
        )

    async def submit_order(self, intake: OrderIntake) -> Ok:
        order = self.build_order(intake)

        result = await self.supplier_portal.post(
            "/api/orders/receive",
            json=order.to_wire(),
            failure_message="Failed to create order in Supplier Portal",
        )

        logger.info(
            f"[Relay] Order {order.order_id} forwarded: {len(order.items)} items, total={order.total}"
        )

        return Ok(
            data={
                "orderId": order.order_id,
                "restaurantId": order.restaurant_id,
                "supplierId": order.supplier_id,
                "itemsCount": len(order.items),
                "total": order.total,
                "status": order.status,
                "createdAt": utc_now_iso(),
                "supplierPortalResponse": result,
            },
            message="Order sent to supplier successfully",
        )

    def build_backorder(self, intake: BackorderIntake) -> BackorderNotification:
        lines = [
            BackorderLine(
                **item.model_dump(),
                backorder_quantity=item.requested_quantity - item.available_quantity,
            )
            for item in intake.backordered_items
        ]

        return BackorderNotification(
            order_id=intake.order_id,
            restaurant_id=intake.restaurant_id,
            supplier_id=intake.supplier_id,
            backordered_items=lines,
            reason=intake.reason or DEFAULT_BACKORDER_REASON,
            estimated_restock_date=intake.estimated_restock_date,
            notification_date=utc_now_iso(),
        )

    async def notify_backorder(self, intake: BackorderIntake) -> Ok:
        notice = self.build_backorder(intake)
        total_backorder_quantity = sum(line.backorder_quantity for line in notice.backordered_items)

        result = await self.supplier_portal.post(
            "/api/orders/backorder",
            json=notice.to_wire(),
            failure_message="Failed to send backorder notification to Supplier Portal",
        )

        logger.info(
            f"[Relay] Backorder for order {notice.order_id} forwarded: {total_backorder_quantity} units short"
        )

        return Ok(
            data={
                "orderId": notice.order_id,
                "restaurantId": notice.restaurant_id,
                "supplierId": notice.supplier_id,
                "backorderedItemsCount": len(notice.backordered_items),
                "totalBackorderQuantity": total_backorder_quantity,
                "notificationSentAt": utc_now_iso(),
                "supplierPortalResponse": result,
            },
            message="Backorder notification sent to supplier successfully",
        )

    async def get_order(self, order_id: str, supplier_id: str) -> Ok:
        order: Optional[Dict[str, Any]] = await self.supplier_portal.get(
            f"/api/orders/{quote(order_id, safe='')}",
            params={"supplierId": supplier_id},
            failure_message="Failed to fetch order from Supplier Portal",
            not_found_message="Order not found",
        )

        return Ok(
            data=project_order(order or {}),
            message="Order details retrieved successfully",
        )
