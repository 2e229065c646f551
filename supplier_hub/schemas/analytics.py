from pydantic import BaseModel
from typing import Dict, List


class MonthlyTrend(BaseModel):
    month: str
    orders: int
    revenue: float


class RankedEntry(BaseModel):
    id: str
    name: str
    orders: int
    revenue: float


class PerformanceMetrics(BaseModel):
    on_time_delivery_rate: float
    order_fulfillment_rate: float


class SupplierAnalytics(BaseModel):
    total_orders: int
    total_revenue: float
    average_order_value: float
    total_customers: int
    monthly_trends: List[MonthlyTrend]
    top_products: List[RankedEntry]
    top_customers: List[RankedEntry]
    orders_by_status: Dict[str, int]
    performance_metrics: PerformanceMetrics
