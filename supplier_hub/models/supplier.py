"""
Supplier and its dashboard users
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from supplier_hub.core.database import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)

    # Basic info
    name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=False, index=True)
    phone = Column(String(50), nullable=True)

    # {line1, line2, city, state, postalCode, country}
    address = Column(JSON, default=dict)
    # {name, email, phone, position}
    contact_person = Column(JSON, default=dict)
    # {registrationNumber, taxId, website, description, logo}
    business_info = Column(JSON, default=dict)
    # {method: cash|bank_transfer|check|credit, daysNet, discountPercent, discountDays}
    payment_terms = Column(JSON, default=dict)
    # {minimumOrder, deliveryFee, freeDeliveryThreshold, estimatedDeliveryDays, deliveryAreas}
    delivery_info = Column(JSON, default=dict)

    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    users = relationship("SupplierUser", back_populates="supplier", cascade="all, delete-orphan")
    products = relationship("Product", back_populates="supplier", cascade="all, delete-orphan")
    orders = relationship("PurchaseOrder", back_populates="supplier")
    connections = relationship("RestaurantConnection", back_populates="supplier")

    @property
    def payment_days(self) -> int:
        terms = self.payment_terms or {}
        return int(terms.get("daysNet") or 0)

    def __repr__(self):
        return f"<Supplier {self.name}>"


class SupplierUser(Base):
    __tablename__ = "supplier_users"

    id = Column(Integer, primary_key=True, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)

    email = Column(String(200), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False)
    role = Column(String(20), default="staff")  # admin | staff
    password_hash = Column(String(255), nullable=False)

    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    supplier = relationship("Supplier", back_populates="users")
