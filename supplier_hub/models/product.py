"""
Product catalog entry owned by a supplier
"""
import uuid

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from supplier_hub.core.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)

    # Basic info
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=False, index=True)
    subcategory = Column(String(100), nullable=True)

    # Identification
    sku = Column(String(50), nullable=True)
    barcode = Column(String(50), nullable=True)
    brand = Column(String(100), nullable=True)

    # Pricing
    unit_price = Column(Float, nullable=False)
    currency = Column(String(3), default="USD")
    unit = Column(String(20), nullable=False)  # 'pieces', 'kg', 'cases'...
    minimum_order_quantity = Column(Integer, default=1)

    # Availability
    is_available = Column(Boolean, default=True)
    stock_quantity = Column(Integer, nullable=True)
    lead_time_days = Column(Integer, nullable=True)

    # Details
    specifications = Column(JSON, default=dict)
    images = Column(JSON, default=list)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    supplier = relationship("Supplier", back_populates="products")

    def to_catalog_entry(self) -> dict:
        """Shape expected by the Menu Platform product sync"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description or "",
            "price": self.unit_price,
            "currency": self.currency,
            "category": self.category,
            "stock": self.stock_quantity or 0,
            "unit": self.unit,
            "imageUrl": (self.images or [None])[0],
            "isAvailable": self.is_available,
            "minimumOrderQuantity": self.minimum_order_quantity,
            "leadTimeDays": self.lead_time_days or 0,
            "brand": self.brand,
            "sku": self.sku,
        }
