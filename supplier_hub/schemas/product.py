# supplier_hub/schemas/product.py
from pydantic import BaseModel, Field, validator
from typing import Dict, List, Optional
from datetime import datetime

from supplier_hub.core.config import settings


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: str
    subcategory: Optional[str] = None
    sku: Optional[str] = None
    barcode: Optional[str] = None
    brand: Optional[str] = None
    unit_price: float = Field(..., ge=0)
    currency: str = settings.DEFAULT_CURRENCY
    unit: str
    minimum_order_quantity: int = Field(1, ge=1)
    is_available: bool = True
    stock_quantity: Optional[int] = Field(None, ge=0)
    lead_time_days: Optional[int] = Field(None, ge=0)
    specifications: Dict[str, str] = {}
    images: List[str] = []


class ProductCreate(ProductBase):

    @validator('name')
    def name_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('Product name cannot be empty')
        return v.strip()

    @validator('currency')
    def currency_code(cls, v):
        if len(v) != 3:
            raise ValueError('Currency must be a 3-letter code')
        return v.upper()


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    sku: Optional[str] = None
    barcode: Optional[str] = None
    brand: Optional[str] = None
    unit_price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = None
    unit: Optional[str] = None
    minimum_order_quantity: Optional[int] = Field(None, ge=1)
    is_available: Optional[bool] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    lead_time_days: Optional[int] = Field(None, ge=0)
    specifications: Optional[Dict[str, str]] = None
    images: Optional[List[str]] = None


class ProductResponse(ProductBase):
    id: str
    supplier_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
