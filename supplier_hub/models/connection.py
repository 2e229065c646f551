# supplier_hub/models/connection.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from supplier_hub.core.database import Base


class RestaurantConnection(Base):
    """A restaurant from the main system buying from this supplier"""
    __tablename__ = "restaurant_connections"

    id = Column(Integer, primary_key=True, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)
    restaurant_id = Column(String(100), nullable=False, index=True)  # id in the main system

    restaurant_name = Column(String(200), nullable=False)
    restaurant_email = Column(String(200), nullable=True)

    # pending | active | suspended | rejected
    connection_status = Column(String(20), default="pending", index=True)
    connection_date = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    last_order_date = Column(DateTime(timezone=True), nullable=True)

    total_orders = Column(Integer, default=0)
    total_spent = Column(Float, default=0)

    # Sync settings
    auto_sync_products = Column(Boolean, default=True)
    sync_frequency_hours = Column(Integer, default=24)
    last_sync = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    supplier = relationship("Supplier", back_populates="connections")


class SyncLog(Base):
    __tablename__ = "sync_logs"

    id = Column(Integer, primary_key=True, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)
    restaurant_id = Column(String(100), nullable=True)

    action = Column(String(20), nullable=False)  # product_sync | order_sync | customer_sync | full_sync
    status = Column(String(20), nullable=False)  # success | failed | partial

    items_processed = Column(Integer, default=0)
    items_succeeded = Column(Integer, default=0)
    items_failed = Column(Integer, default=0)
    errors = Column(JSON, default=list)

    timestamp = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
