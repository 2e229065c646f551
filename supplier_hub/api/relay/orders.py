# supplier_hub/api/relay/orders.py
"""
Relay endpoints: Menu Platform -> Supplier Portal orders
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends

from supplier_hub.api.dependencies import get_order_relay, json_body, require_api_key
from supplier_hub.api.relay import paths  # noqa: F401  registers order_ref
from supplier_hub.core.envelope import render
from supplier_hub.services.order_relay import OrderRelayService
from supplier_hub.services.validation_service import (
    validate_backorder,
    validate_lookup,
    validate_order_webhook,
)

router = APIRouter(
    prefix="/orders",
    tags=["relay orders"],
    dependencies=[Depends(require_api_key)]
)


@router.post("/webhook")
async def order_webhook(
    body: Any = Depends(json_body),
    relay: OrderRelayService = Depends(get_order_relay)
):
    """New order from the Menu Platform, forwarded to the Supplier Portal"""
    intake = validate_order_webhook(body)
    return render(await relay.submit_order(intake))


@router.post("/backorder")
async def order_backorder(
    body: Any = Depends(json_body),
    relay: OrderRelayService = Depends(get_order_relay)
):
    """Unavailable or backordered items for an existing order"""
    intake = validate_backorder(body)
    return render(await relay.notify_backorder(intake))


@router.get("/{order_id:order_ref}")
async def get_order(
    order_id: str,
    supplierId: Optional[str] = None,
    relay: OrderRelayService = Depends(get_order_relay)
):
    """Order details from the Supplier Portal"""
    validate_lookup(order_id, supplierId, "Order")
    return render(await relay.get_order(order_id, supplierId))
