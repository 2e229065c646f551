import uuid

from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from supplier_hub.core.database import Base


ORDER_STATUSES = ("draft", "sent", "confirmed", "shipped", "delivered", "cancelled", "invoiced", "paid")


class PurchaseOrder(Base):
    __tablename__ = "purchase_orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_number = Column(String(40), nullable=False, index=True)
    external_order_id = Column(String(100), nullable=True, index=True)  # orderId from the menu platform
    restaurant_id = Column(String(100), nullable=False, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)

    subtotal = Column(Float, nullable=False, default=0)
    tax = Column(Float, default=0)
    shipping = Column(Float, default=0)
    discount = Column(Float, default=0)
    total = Column(Float, nullable=False, default=0)

    status = Column(String(20), default="sent", index=True)

    order_date = Column(DateTime(timezone=True), nullable=True)
    requested_delivery_date = Column(DateTime(timezone=True), nullable=True)
    confirmed_delivery_date = Column(DateTime(timezone=True), nullable=True)
    actual_delivery_date = Column(DateTime(timezone=True), nullable=True)

    notes = Column(Text)
    delivery_address = Column(JSON, nullable=True)

    payment_status = Column(String(20), default="pending")
    payment_due_date = Column(DateTime(timezone=True), nullable=True)
    payment_method = Column(String(50), nullable=True)

    created_by = Column(String(50), default="menu_platform")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    supplier = relationship("Supplier", back_populates="orders")
    items = relationship("PurchaseOrderItem", back_populates="order", cascade="all, delete-orphan")


class PurchaseOrderItem(Base):
    __tablename__ = "purchase_order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String(36), ForeignKey("purchase_orders.id"), nullable=False)

    product_id = Column(String(100), nullable=False)
    product_name = Column(String(200), nullable=False)
    sku = Column(String(50), nullable=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    unit = Column(String(20), nullable=True)
    total = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)

    order = relationship("PurchaseOrder", back_populates="items")
