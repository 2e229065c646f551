# supplier_hub/services/invoice_service.py
"""
Invoices are not stored: each delivered, invoiced or paid order yields one.
"""
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from supplier_hub.core.dates import as_utc, utc_now
from supplier_hub.models.order import PurchaseOrder
from supplier_hub.models.supplier import Supplier
from supplier_hub.schemas.order import InvoiceItem, InvoiceResponse


INVOICEABLE_STATUSES = ("delivered", "invoiced", "paid")
DEFAULT_PAYMENT_DAYS = 30


def invoice_number_for(order_number: str) -> str:
    """PO-2024-01-15-123456 -> INV-2024-01-15-123456"""
    return f"INV-{order_number.replace('PO-', '', 1)}"


def invoice_status(order: PurchaseOrder, due_date: datetime, now: datetime) -> str:
    if order.status == "paid":
        return "paid"
    if due_date < now:
        return "overdue"
    return "pending"


class InvoiceService:
    def __init__(self, db: Session, supplier: Supplier):
        self.db = db
        self.supplier = supplier

    @property
    def payment_days(self) -> int:
        return self.supplier.payment_days or DEFAULT_PAYMENT_DAYS

    def build_invoice(self, order: PurchaseOrder, now: Optional[datetime] = None) -> InvoiceResponse:
        now = now or utc_now()
        invoice_date = as_utc(order.actual_delivery_date) or as_utc(order.created_at) or now
        due_date = as_utc(order.payment_due_date) or invoice_date + timedelta(days=self.payment_days)

        return InvoiceResponse(
            id=f"inv_{order.id}",
            purchase_order_id=order.id,
            restaurant_id=order.restaurant_id,
            supplier_id=order.supplier_id,
            invoice_number=invoice_number_for(order.order_number),
            invoice_date=invoice_date,
            due_date=due_date,
            items=[
                InvoiceItem(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total=item.total,
                )
                for item in order.items
            ],
            subtotal=order.subtotal,
            tax=order.tax,
            total=order.total,
            status=invoice_status(order, due_date, now),
            payment_date=as_utc(order.updated_at) if order.status == "paid" else None,
            payment_method=order.payment_method,
        )

    def list_invoices(self, status: Optional[str] = None, now: Optional[datetime] = None) -> List[InvoiceResponse]:
        orders = self.db.query(PurchaseOrder).filter(
            PurchaseOrder.supplier_id == self.supplier.id,
            PurchaseOrder.status.in_(INVOICEABLE_STATUSES)
        ).order_by(PurchaseOrder.created_at.desc()).all()

        invoices = [self.build_invoice(order, now) for order in orders]
        if status:
            invoices = [inv for inv in invoices if inv.status == status]
        return invoices

    @staticmethod
    def totals(invoices: List[InvoiceResponse]) -> Dict[str, float]:
        result = {"pending": 0.0, "paid": 0.0, "overdue": 0.0}
        for invoice in invoices:
            result[invoice.status] = round(result.get(invoice.status, 0.0) + invoice.total, 2)
        return result
