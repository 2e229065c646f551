# supplier_hub/schemas/order.py
from pydantic import BaseModel, validator
from typing import Any, Dict, List, Optional
from datetime import datetime

from supplier_hub.models.order import ORDER_STATUSES


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    sku: Optional[str] = None
    quantity: int
    unit_price: float
    unit: Optional[str] = None
    total: float
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: str
    order_number: str
    external_order_id: Optional[str] = None
    restaurant_id: str
    supplier_id: int
    items: List[OrderItemResponse]
    subtotal: float
    tax: float
    shipping: float
    discount: float
    total: float
    status: str
    order_date: Optional[datetime] = None
    requested_delivery_date: Optional[datetime] = None
    confirmed_delivery_date: Optional[datetime] = None
    actual_delivery_date: Optional[datetime] = None
    notes: Optional[str] = None
    delivery_address: Optional[Any] = None
    payment_status: str
    payment_due_date: Optional[datetime] = None
    payment_method: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OrderStatusUpdate(BaseModel):
    status: str
    confirmed_delivery_date: Optional[datetime] = None
    payment_method: Optional[str] = None

    @validator('status')
    def known_status(cls, v):
        if v not in ORDER_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(ORDER_STATUSES)}")
        return v


class OrderStatusResponse(BaseModel):
    order: OrderResponse
    restaurant_notified: bool


class ReceivedOrderResponse(BaseModel):
    id: str
    order_number: str
    status: str
    total: float


class InvoiceItem(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total: float


class InvoiceResponse(BaseModel):
    id: str
    purchase_order_id: str
    restaurant_id: str
    supplier_id: int
    invoice_number: str
    invoice_date: datetime
    due_date: datetime
    items: List[InvoiceItem]
    subtotal: float
    tax: float
    total: float
    status: str  # pending | paid | overdue
    payment_date: Optional[datetime] = None
    payment_method: Optional[str] = None


class InvoiceListResponse(BaseModel):
    invoices: List[InvoiceResponse]
    totals: Dict[str, float]
