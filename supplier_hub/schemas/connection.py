# supplier_hub/schemas/connection.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class ConnectionCreate(BaseModel):
    restaurant_id: str = Field(..., min_length=1)
    restaurant_name: str = Field(..., min_length=1)
    restaurant_email: Optional[str] = None
    auto_sync_products: bool = True
    sync_frequency_hours: int = Field(24, ge=1)


class ConnectionResponse(BaseModel):
    id: int
    supplier_id: int
    restaurant_id: str
    restaurant_name: str
    restaurant_email: Optional[str] = None
    connection_status: str
    connection_date: Optional[datetime] = None
    last_order_date: Optional[datetime] = None
    total_orders: int
    total_spent: float
    auto_sync_products: bool
    sync_frequency_hours: int
    last_sync: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductSyncRequest(BaseModel):
    restaurant_id: Optional[str] = None
    product_ids: Optional[List[str]] = None  # None = every available product


class SyncLogResponse(BaseModel):
    id: int
    supplier_id: int
    restaurant_id: Optional[str] = None
    action: str
    status: str
    items_processed: int
    items_succeeded: int
    items_failed: int
    errors: List[str] = []
    timestamp: datetime

    class Config:
        from_attributes = True
