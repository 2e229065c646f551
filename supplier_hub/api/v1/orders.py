"""
Purchase orders for the supplier dashboard, plus the inbound hook the
relay forwards new orders to.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from supplier_hub.api.dependencies import get_current_user, get_main_system, require_api_key
from supplier_hub.core.database import get_db
from supplier_hub.models.supplier import Supplier, SupplierUser
from supplier_hub.schemas.order import (
    OrderResponse,
    OrderStatusResponse,
    OrderStatusUpdate,
    ReceivedOrderResponse,
)
from supplier_hub.schemas.relay import SupplierPortalOrder
from supplier_hub.services.downstream import DownstreamClient
from supplier_hub.services.order_service import InvalidTransition, OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    return OrderService(db, current_user.supplier).list_orders(status=status)


@router.post(
    "/receive",
    response_model=ReceivedOrderResponse,
    status_code=201,
    dependencies=[Depends(require_api_key)]
)
async def receive_order(
    incoming: SupplierPortalOrder,
    db: Session = Depends(get_db)
):
    """Order forwarded by the relay; authenticated with the relay API key"""
    supplier = None
    if incoming.supplier_id.isdigit():
        supplier = db.query(Supplier).filter(Supplier.id == int(incoming.supplier_id)).first()
    if not supplier:
        raise HTTPException(404, detail="Supplier not found")

    order = OrderService(db, supplier).receive_order(incoming)
    return ReceivedOrderResponse(
        id=order.id,
        order_number=order.order_number,
        status=order.status,
        total=order.total,
    )


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user)
):
    order = OrderService(db, current_user.supplier).get_order(order_id)
    if not order:
        raise HTTPException(404, detail="Order not found")
    return order


@router.patch("/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(
    order_id: str,
    data: OrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: SupplierUser = Depends(get_current_user),
    main_system: DownstreamClient = Depends(get_main_system)
):
    """
    Move the order along its lifecycle and tell the restaurant about it.
    The restaurant notification is best-effort; see ``restaurant_notified``.
    """
    service = OrderService(db, current_user.supplier, main_system=main_system)

    order = service.get_order(order_id)
    if not order:
        raise HTTPException(404, detail="Order not found")

    try:
        order, notified = await service.update_status(
            order,
            data.status,
            confirmed_delivery_date=data.confirmed_delivery_date,
            payment_method=data.payment_method,
        )
    except InvalidTransition as e:
        raise HTTPException(400, detail=str(e))

    return OrderStatusResponse(
        order=OrderResponse.model_validate(order),
        restaurant_notified=notified,
    )
