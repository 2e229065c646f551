# supplier_hub/services/analytics_service.py
"""
Supplier analytics aggregated from orders and restaurant connections.
"""
from collections import Counter, defaultdict
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from supplier_hub.core.dates import as_utc, utc_now
from supplier_hub.models.connection import RestaurantConnection
from supplier_hub.models.order import PurchaseOrder
from supplier_hub.schemas.analytics import MonthlyTrend, PerformanceMetrics, RankedEntry, SupplierAnalytics


TREND_MONTHS = 12
TOP_LIMIT = 10
FULFILLED_STATUSES = ("delivered", "invoiced", "paid")


def last_months(now: datetime, count: int = TREND_MONTHS) -> List[tuple]:
    """(year, month) pairs, oldest first, ending with the current month"""
    months = []
    year, month = now.year, now.month
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def _percent(part: int, whole: int) -> float:
    return round(part * 100.0 / whole, 1) if whole else 0.0


class AnalyticsService:
    def __init__(self, db: Session, supplier_id: int):
        self.db = db
        self.supplier_id = supplier_id

    def compute(self, now: Optional[datetime] = None) -> SupplierAnalytics:
        now = now or utc_now()

        orders = self.db.query(PurchaseOrder).filter(PurchaseOrder.supplier_id == self.supplier_id).all()
        connections = self.db.query(RestaurantConnection).filter(
            RestaurantConnection.supplier_id == self.supplier_id
        ).all()

        total_orders = len(orders)
        total_revenue = round(sum(o.total or 0 for o in orders), 2)
        average_order_value = round(total_revenue / total_orders, 2) if total_orders else 0.0
        total_customers = sum(1 for c in connections if c.connection_status == "active")

        return SupplierAnalytics(
            total_orders=total_orders,
            total_revenue=total_revenue,
            average_order_value=average_order_value,
            total_customers=total_customers,
            monthly_trends=self._monthly_trends(orders, now),
            top_products=self._top_products(orders),
            top_customers=self._top_customers(orders, connections),
            orders_by_status=dict(Counter(o.status for o in orders)),
            performance_metrics=self._performance(orders),
        )

    def _monthly_trends(self, orders: List[PurchaseOrder], now: datetime) -> List[MonthlyTrend]:
        buckets: Dict[tuple, List[PurchaseOrder]] = defaultdict(list)
        for order in orders:
            created = as_utc(order.created_at)
            if created:
                buckets[(created.year, created.month)].append(order)

        trends = []
        for year, month in last_months(now):
            month_orders = buckets.get((year, month), [])
            trends.append(MonthlyTrend(
                month=datetime(year, month, 1).strftime("%b %Y"),
                orders=len(month_orders),
                revenue=round(sum(o.total or 0 for o in month_orders), 2),
            ))
        return trends

    def _top_products(self, orders: List[PurchaseOrder]) -> List[RankedEntry]:
        stats: Dict[str, dict] = {}
        for order in orders:
            for item in order.items:
                entry = stats.setdefault(item.product_id, {"name": item.product_name, "orders": 0, "revenue": 0.0})
                entry["orders"] += item.quantity
                entry["revenue"] += item.total or 0

        ranked = sorted(stats.items(), key=lambda kv: kv[1]["revenue"], reverse=True)[:TOP_LIMIT]
        return [
            RankedEntry(id=pid, name=s["name"], orders=s["orders"], revenue=round(s["revenue"], 2))
            for pid, s in ranked
        ]

    def _top_customers(
        self,
        orders: List[PurchaseOrder],
        connections: List[RestaurantConnection],
    ) -> List[RankedEntry]:
        names = {c.restaurant_id: c.restaurant_name for c in connections}
        stats: Dict[str, dict] = {}
        for order in orders:
            if order.restaurant_id not in names:
                continue
            entry = stats.setdefault(order.restaurant_id, {"orders": 0, "revenue": 0.0})
            entry["orders"] += 1
            entry["revenue"] += order.total or 0

        ranked = sorted(stats.items(), key=lambda kv: kv[1]["revenue"], reverse=True)[:TOP_LIMIT]
        return [
            RankedEntry(id=rid, name=names[rid], orders=s["orders"], revenue=round(s["revenue"], 2))
            for rid, s in ranked
        ]

    def _performance(self, orders: List[PurchaseOrder]) -> PerformanceMetrics:
        # Orders with both dates known
        timed = [
            o for o in orders
            if o.actual_delivery_date is not None and o.requested_delivery_date is not None
        ]
        on_time = sum(
            1 for o in timed
            if as_utc(o.actual_delivery_date).date() <= as_utc(o.requested_delivery_date).date()
        )

        placed = [o for o in orders if o.status not in ("draft", "cancelled")]
        fulfilled = sum(1 for o in placed if o.status in FULFILLED_STATUSES)

        return PerformanceMetrics(
            on_time_delivery_rate=_percent(on_time, len(timed)),
            order_fulfillment_rate=_percent(fulfilled, len(placed)),
        )
