# supplier_hub/schemas/supplier.py
from pydantic import BaseModel, Field, validator
from typing import Any, Dict, List, Optional
from datetime import datetime


PAYMENT_METHODS = ["cash", "bank_transfer", "check", "credit"]


class RegisterRequest(BaseModel):
    # Supplier
    supplier_name: str = Field(..., min_length=2, max_length=200)
    supplier_email: str = Field(..., min_length=5, max_length=200)
    phone: Optional[str] = None

    # Admin user
    name: str = Field(..., min_length=2, max_length=200)
    email: str = Field(..., min_length=5, max_length=200)
    password: str = Field(..., min_length=8, max_length=72)

    @validator('email', 'supplier_email')
    def email_format(cls, v):
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError('Invalid email address')
        return v


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    supplier_id: int
    role: str


class UserResponse(BaseModel):
    id: int
    supplier_id: int
    email: str
    name: str
    role: str
    is_active: bool

    class Config:
        from_attributes = True


class SupplierResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    contact_person: Optional[Dict[str, Any]] = None
    business_info: Optional[Dict[str, Any]] = None
    payment_terms: Optional[Dict[str, Any]] = None
    delivery_info: Optional[Dict[str, Any]] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaymentTerms(BaseModel):
    method: str = "bank_transfer"
    daysNet: int = Field(30, ge=0, le=365)
    discountPercent: Optional[float] = Field(None, ge=0, le=100)
    discountDays: Optional[int] = Field(None, ge=0)

    @validator('method')
    def method_valid(cls, v):
        if v not in PAYMENT_METHODS:
            raise ValueError(f"Payment method must be one of: {', '.join(PAYMENT_METHODS)}")
        return v


class DeliveryInfo(BaseModel):
    minimumOrder: Optional[float] = Field(None, ge=0)
    deliveryFee: Optional[float] = Field(None, ge=0)
    freeDeliveryThreshold: Optional[float] = Field(None, ge=0)
    estimatedDeliveryDays: int = Field(1, ge=0)
    deliveryAreas: List[str] = []


class SupplierUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    contact_person: Optional[Dict[str, Any]] = None
    business_info: Optional[Dict[str, Any]] = None
    payment_terms: Optional[PaymentTerms] = None
    delivery_info: Optional[DeliveryInfo] = None
