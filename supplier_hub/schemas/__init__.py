from .supplier import RegisterRequest, LoginRequest, TokenResponse, UserResponse, SupplierResponse, SupplierUpdate
from .product import ProductCreate, ProductUpdate, ProductResponse
from .order import OrderResponse, OrderStatusUpdate, InvoiceResponse, InvoiceListResponse
from .connection import ConnectionCreate, ConnectionResponse, ProductSyncRequest, SyncLogResponse
from .analytics import SupplierAnalytics
