from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from supplier_hub.api.dependencies import get_current_user, get_product_relay
from supplier_hub.core.database import get_db
from supplier_hub.models.supplier import SupplierUser
from supplier_hub.schemas.connection import ProductSyncRequest, SyncLogResponse
from supplier_hub.services.connection_service import ConnectionService
from supplier_hub.services.product_relay import ProductRelayService
from supplier_hub.services.sync_service import SyncService

router = APIRouter(prefix="/sync", tags=["sync"])


@router.post("/products", response_model=SyncLogResponse)
async def sync_products(
    data: ProductSyncRequest,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user),
    relay: ProductRelayService = Depends(get_product_relay)
):
    """
    Push the catalog to the Menu Platform.

    A platform failure is not an HTTP error here: the returned sync log
    has status "failed" and the reason in ``errors``.
    """
    service = SyncService(db, current_user.supplier_id, relay)
    return await service.sync_products(
        restaurant_id=data.restaurant_id,
        product_ids=data.product_ids,
    )


@router.get("/logs", response_model=List[SyncLogResponse])
async def sync_logs(
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    return ConnectionService(db, current_user.supplier_id).get_sync_logs(limit=limit)
