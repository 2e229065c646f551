"""
Request validation for the relay endpoints.

Each ``validate_*`` function takes the raw decoded request and either returns
a typed intake model or raises ``PayloadError`` naming the offending field.
Checks run in a fixed order so the first problem found is the one reported.
"""
import math
from typing import Any, Dict, Optional

from supplier_hub.core.errors import PayloadError
from supplier_hub.schemas.relay import (
    AvailabilityPatch,
    BackorderIntake,
    BackorderLineIntake,
    OrderIntake,
    OrderLineIntake,
    ProductSyncIntake,
)


ORDER_ITEM_FIELDS = ("productId", "productName", "quantity", "unitPrice", "unit")
BACKORDER_ITEM_FIELDS = ("productId", "productName", "requestedQuantity", "availableQuantity")
PRODUCT_FIELDS = ("id", "name", "description", "price", "currency", "category", "unit")


# ============================================
# HELPERS
# ============================================

def is_missing(value: Any) -> bool:
    """Absent, null and blank strings all count as missing"""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def to_number(value: Any) -> Optional[float]:
    """Coerce JSON numbers and numeric strings; None when not a finite number"""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def to_int(value: Any, default: int = 0) -> int:
    """Truncating integer coercion with a fallback for non-numeric input"""
    number = to_number(value)
    if number is None:
        return default
    return int(number)


def optional_str(value: Any) -> Optional[str]:
    if is_missing(value):
        return None
    return value if isinstance(value, str) else str(value)


def _ensure_object(body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise PayloadError("Request body must be a JSON object")
    return body


def _require(body: Dict[str, Any], field: str, message: Optional[str] = None) -> str:
    value = body.get(field)
    if is_missing(value):
        raise PayloadError(message or f"{field} is required", field=field)
    return value if isinstance(value, str) else str(value)


def _require_items(body: Dict[str, Any], field: str, allow_empty: bool = False) -> list:
    items = body.get(field)
    if not isinstance(items, list) or (not items and not allow_empty):
        suffix = "" if allow_empty else " and cannot be empty"
        raise PayloadError(f"{field} array is required{suffix}", field=field)
    return items


def _require_item_fields(item: Any, fields, label: str, strict_null: bool = False) -> Dict[str, Any]:
    if not isinstance(item, dict):
        raise PayloadError(f"{label} must be an object")
    for field in fields:
        value = item.get(field)
        missing = value is None if strict_null else is_missing(value)
        if missing:
            raise PayloadError(f"{label} missing required field: {field}", field=field)
    return item


# ============================================
# ORDERS
# ============================================

def validate_order_webhook(body: Any) -> OrderIntake:
    body = _ensure_object(body)

    order_id = _require(body, "orderId")
    restaurant_id = _require(body, "restaurantId")
    supplier_id = _require(body, "supplierId")
    items = _require_items(body, "items")

    lines = []
    for item in items:
        _require_item_fields(item, ORDER_ITEM_FIELDS, "Order item")

        quantity = to_number(item["quantity"])
        if quantity is None or int(quantity) <= 0:
            raise PayloadError("Item quantity must be a positive number", field="quantity")

        unit_price = to_number(item["unitPrice"])
        if unit_price is None or unit_price < 0:
            raise PayloadError("Item unitPrice must be a non-negative number", field="unitPrice")

        lines.append(OrderLineIntake(
            product_id=str(item["productId"]),
            product_name=str(item["productName"]),
            sku=optional_str(item.get("sku")),
            quantity=int(quantity),
            unit_price=unit_price,
            unit=str(item["unit"]),
            notes=optional_str(item.get("notes")),
        ))

    delivery_info = body.get("deliveryInfo")
    if delivery_info is not None:
        if not isinstance(delivery_info, dict):
            raise PayloadError("deliveryInfo must be an object", field="deliveryInfo")
        shipping_cost = delivery_info.get("shippingCost")
        if shipping_cost is not None:
            shipping = to_number(shipping_cost)
            if shipping is None or shipping < 0:
                raise PayloadError(
                    "deliveryInfo.shippingCost must be a non-negative number",
                    field="shippingCost"
                )

    return OrderIntake(
        order_id=order_id,
        restaurant_id=restaurant_id,
        supplier_id=supplier_id,
        items=lines,
        delivery_info=delivery_info,
        status=optional_str(body.get("status")),
        order_date=optional_str(body.get("orderDate")),
        requested_delivery_date=optional_str(body.get("requestedDeliveryDate")),
        notes=optional_str(body.get("notes")),
    )


def validate_backorder(body: Any) -> BackorderIntake:
    body = _ensure_object(body)

    order_id = _require(body, "orderId")
    restaurant_id = _require(body, "restaurantId")
    supplier_id = _require(body, "supplierId")
    items = _require_items(body, "backorderedItems")

    lines = []
    for item in items:
        # zero is a legitimate availableQuantity, only null/absent is missing
        _require_item_fields(item, BACKORDER_ITEM_FIELDS, "Backordered item", strict_null=True)

        requested = to_number(item["requestedQuantity"])
        if requested is None or int(requested) <= 0:
            raise PayloadError("Item requestedQuantity must be a positive number", field="requestedQuantity")

        available = to_number(item["availableQuantity"])
        if available is None or available < 0:
            raise PayloadError("Item availableQuantity must be a non-negative number", field="availableQuantity")

        lines.append(BackorderLineIntake(
            product_id=str(item["productId"]),
            product_name=str(item["productName"]),
            sku=optional_str(item.get("sku")),
            requested_quantity=int(requested),
            available_quantity=int(available),
            unit=optional_str(item.get("unit")),
            unit_price=to_number(item.get("unitPrice")) or 0.0,
            notes=optional_str(item.get("notes")),
        ))

    return BackorderIntake(
        order_id=order_id,
        restaurant_id=restaurant_id,
        supplier_id=supplier_id,
        backordered_items=lines,
        reason=optional_str(body.get("reason")),
        estimated_restock_date=optional_str(body.get("estimatedRestockDate")),
    )


# ============================================
# PRODUCTS
# ============================================

def validate_product_sync(body: Any) -> ProductSyncIntake:
    body = _ensure_object(body)

    supplier_id = _require(body, "supplierId")
    products = _require_items(body, "products", allow_empty=True)

    for product in products:
        _require_item_fields(product, PRODUCT_FIELDS, "Product")
        price = to_number(product["price"])
        if price is None or price < 0:
            raise PayloadError("Product price must be a non-negative number", field="price")

    return ProductSyncIntake(supplier_id=supplier_id, products=products)


def validate_availability(product_id: Optional[str], body: Any) -> AvailabilityPatch:
    body = _ensure_object(body)

    if is_missing(product_id):
        raise PayloadError("Product ID is required", field="id")
    supplier_id = _require(body, "supplierId")

    # a key sent as null is present and gets validated
    has_stock = "stockQuantity" in body
    has_flag = "isAvailable" in body

    if not has_stock and not has_flag:
        raise PayloadError("At least one of stockQuantity or isAvailable must be provided")

    stock = None
    if has_stock:
        number = to_number(body["stockQuantity"])
        if number is None or number < 0:
            raise PayloadError("stockQuantity must be a non-negative number", field="stockQuantity")
        stock = int(number)

    is_available = body.get("isAvailable")
    if has_flag and not isinstance(is_available, bool):
        raise PayloadError("isAvailable must be a boolean", field="isAvailable")

    return AvailabilityPatch(
        product_id=product_id,
        supplier_id=supplier_id,
        stock_quantity=stock,
        is_available=is_available,
    )


# ============================================
# LOOKUPS
# ============================================

def validate_lookup(resource_id: Optional[str], supplier_id: Optional[str], label: str) -> None:
    """``label`` is the resource name used in the message, e.g. "Order" or "Product"."""
    if is_missing(resource_id):
        raise PayloadError(f"{label} ID is required", field="id")
    if is_missing(supplier_id):
        raise PayloadError("supplierId query parameter is required", field="supplierId")
