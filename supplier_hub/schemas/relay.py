# supplier_hub/schemas/relay.py
"""
Payload shapes handled by the relay.

The ``*Intake`` models are what the validators produce from an inbound
request; the remaining models are the normalized bodies forwarded to the
Supplier Portal or the Menu Platform. All of them serialize with camelCase
keys (``model_dump(by_alias=True)``) because both platforms speak camelCase.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# ============================================
# ORDERS (Menu Platform -> Supplier Portal)
# ============================================

class OrderLineIntake(CamelModel):
    product_id: str
    product_name: str
    sku: Optional[str] = None
    quantity: int
    unit_price: float
    unit: str
    notes: Optional[str] = None


class OrderIntake(CamelModel):
    order_id: str
    restaurant_id: str
    supplier_id: str
    items: List[OrderLineIntake]
    delivery_info: Optional[Dict[str, Any]] = None
    status: Optional[str] = None
    order_date: Optional[str] = None
    requested_delivery_date: Optional[str] = None
    notes: Optional[str] = None


class PortalOrderLine(CamelModel):
    product_id: str
    product_name: str
    sku: Optional[str] = None
    quantity: int
    unit_price: float
    unit: str
    total: float
    notes: Optional[str] = None


class SupplierPortalOrder(CamelModel):
    order_id: str
    restaurant_id: str
    supplier_id: str
    items: List[PortalOrderLine]
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float
    status: str = "sent"
    order_date: str
    requested_delivery_date: Optional[str] = None
    notes: Optional[str] = None
    delivery_address: Optional[Any] = None
    payment_status: str = "pending"
    created_by: str = "menu_platform"


# ============================================
# BACKORDERS
# ============================================

class BackorderLineIntake(CamelModel):
    product_id: str
    product_name: str
    sku: Optional[str] = None
    requested_quantity: int
    available_quantity: int
    unit: Optional[str] = None
    unit_price: float = 0.0
    notes: Optional[str] = None


class BackorderIntake(CamelModel):
    order_id: str
    restaurant_id: str
    supplier_id: str
    backordered_items: List[BackorderLineIntake]
    reason: Optional[str] = None
    estimated_restock_date: Optional[str] = None


class BackorderLine(BackorderLineIntake):
    backorder_quantity: int


class BackorderNotification(CamelModel):
    order_id: str
    restaurant_id: str
    supplier_id: str
    backordered_items: List[BackorderLine]
    reason: str = "Insufficient stock"
    estimated_restock_date: Optional[str] = None
    notification_date: str
    priority: str = "normal"


# ============================================
# PRODUCTS (Supplier -> Menu Platform)
# ============================================

class ProductSyncIntake(CamelModel):
    supplier_id: str
    products: List[Dict[str, Any]]


class MenuPlatformProduct(CamelModel):
    id: str
    name: str
    description: str
    price: float
    currency: str
    category: str
    stock: int = 0
    unit: str
    image_url: Optional[str] = None
    is_available: bool = True
    minimum_order_quantity: int = 1
    lead_time_days: int = 0
    brand: Optional[str] = None
    sku: Optional[str] = None


class ProductSyncBatch(CamelModel):
    supplier_id: str
    products: List[MenuPlatformProduct]


class AvailabilityPatch(CamelModel):
    product_id: str
    supplier_id: str
    stock_quantity: Optional[int] = None
    is_available: Optional[bool] = None

    def updates(self) -> Dict[str, Any]:
        """Only the fields the caller actually provided"""
        changes: Dict[str, Any] = {}
        if self.stock_quantity is not None:
            changes["stockQuantity"] = self.stock_quantity
        if self.is_available is not None:
            changes["isAvailable"] = self.is_available
        return changes
