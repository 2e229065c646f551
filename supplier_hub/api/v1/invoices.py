from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from supplier_hub.api.dependencies import get_current_user
from supplier_hub.core.database import get_db
from supplier_hub.models.supplier import SupplierUser
from supplier_hub.schemas.order import InvoiceListResponse
from supplier_hub.services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    """Invoices derived from delivered, invoiced and paid orders"""
    service = InvoiceService(db, current_user.supplier)
    invoices = service.list_invoices(status=status)
    return InvoiceListResponse(invoices=invoices, totals=service.totals(invoices))
