# supplier_hub/api/relay/products.py
"""
Relay endpoints: Supplier -> Menu Platform products
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends

from supplier_hub.api.dependencies import get_product_relay, json_body, require_api_key
from supplier_hub.api.relay import paths  # noqa: F401  registers product_ref
from supplier_hub.core.envelope import render
from supplier_hub.services.product_relay import ProductRelayService
from supplier_hub.services.validation_service import (
    validate_availability,
    validate_lookup,
    validate_product_sync,
)

router = APIRouter(
    prefix="/products",
    tags=["relay products"],
    dependencies=[Depends(require_api_key)]
)


@router.post("/sync")
async def sync_products(
    body: Any = Depends(json_body),
    relay: ProductRelayService = Depends(get_product_relay)
):
    """Push the supplier's full catalog to the Menu Platform"""
    intake = validate_product_sync(body)
    return render(await relay.sync_products(intake))


@router.patch("/{product_id:product_ref}/availability")
async def update_availability(
    product_id: str,
    body: Any = Depends(json_body),
    relay: ProductRelayService = Depends(get_product_relay)
):
    """Stock quantity and/or availability flag for one product"""
    patch = validate_availability(product_id, body)
    return render(await relay.update_availability(patch))


@router.get("/{product_id:product_ref}")
async def get_product(
    product_id: str,
    supplierId: Optional[str] = None,
    relay: ProductRelayService = Depends(get_product_relay)
):
    validate_lookup(product_id, supplierId, "Product")
    return render(await relay.get_product(product_id, supplierId))
