"""
Export all models
"""
from supplier_hub.models.supplier import Supplier, SupplierUser
from supplier_hub.models.product import Product
from supplier_hub.models.order import PurchaseOrder, PurchaseOrderItem
from supplier_hub.models.connection import RestaurantConnection, SyncLog

__all__ = [
    "Supplier",
    "SupplierUser",
    "Product",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "RestaurantConnection",
    "SyncLog"
]
