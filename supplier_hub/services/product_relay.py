# supplier_hub/services/product_relay.py
"""
Product relay: Supplier -> Menu Platform catalog sync and availability
updates, plus product lookups against the Supplier Portal.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

from supplier_hub.core.envelope import Ok, utc_now_iso
from supplier_hub.schemas.relay import (
    AvailabilityPatch,
    MenuPlatformProduct,
    ProductSyncBatch,
    ProductSyncIntake,
)
from supplier_hub.services.downstream import DownstreamClient
from supplier_hub.services.validation_service import optional_str, to_int, to_number

logger = logging.getLogger(__name__)


def remap_product(product: Dict[str, Any]) -> MenuPlatformProduct:
    """Supplier catalog entry -> Menu Platform schema"""
    return MenuPlatformProduct(
        id=str(product["id"]),
        name=str(product["name"]),
        description=str(product["description"]),
        price=to_number(product.get("price")) or 0.0,
        currency=str(product["currency"]),
        category=str(product["category"]),
        stock=to_int(product.get("stock"), 0),
        unit=str(product["unit"]),
        image_url=optional_str(product.get("imageUrl")),
        is_available=product.get("isAvailable") is not False,
        minimum_order_quantity=to_int(product.get("minimumOrderQuantity"), 0) or 1,
        lead_time_days=to_int(product.get("leadTimeDays"), 0),
        brand=optional_str(product.get("brand")),
        sku=optional_str(product.get("sku")),
    )


def project_product(product: Dict[str, Any]) -> Dict[str, Any]:
    """Supplier Portal product -> public lookup shape (internal fields dropped)"""
    images = product.get("images") or []
    return {
        "id": product.get("id"),
        "name": product.get("name"),
        "description": product.get("description"),
        "price": product.get("unitPrice"),
        "currency": product.get("currency"),
        "category": product.get("category"),
        "subcategory": product.get("subcategory"),
        "stock": product.get("stockQuantity"),
        "unit": product.get("unit"),
        "imageUrl": images[0] if isinstance(images, list) and images else None,
        "isAvailable": product.get("isAvailable"),
        "minimumOrderQuantity": product.get("minimumOrderQuantity"),
        "leadTimeDays": product.get("leadTimeDays"),
        "brand": product.get("brand"),
        "sku": product.get("sku"),
        "specifications": product.get("specifications"),
        "supplierId": product.get("supplierId"),
        "updatedAt": product.get("updated_at"),
    }


class ProductRelayService:
    def __init__(self, menu_platform: DownstreamClient, supplier_portal: DownstreamClient):
        self.menu_platform = menu_platform
        self.supplier_portal = supplier_portal

    def build_batch(self, supplier_id: str, products: Iterable[Dict[str, Any]]) -> ProductSyncBatch:
        return ProductSyncBatch(
            supplier_id=supplier_id,
            products=[remap_product(p) for p in products],
        )

    async def push_catalog(
        self,
        supplier_id: str,
        products: List[Dict[str, Any]],
        restaurant_id: Optional[str] = None,
    ) -> Any:
        """Forward one batch to the Menu Platform; returns its decoded answer"""
        payload = self.build_batch(supplier_id, products).to_wire()
        if restaurant_id:
            payload["restaurantId"] = restaurant_id

        result = await self.menu_platform.post(
            "/api/suppliers/products/sync",
            json=payload,
            failure_message="Failed to sync products to Menu Platform",
        )
        logger.info(f"[Relay] Synced {len(products)} products for supplier {supplier_id}")
        return result

    async def sync_products(self, intake: ProductSyncIntake) -> Ok:
        result = await self.push_catalog(intake.supplier_id, intake.products)

        return Ok(
            data={
                "supplierId": intake.supplier_id,
                "productsCount": len(intake.products),
                "syncedAt": utc_now_iso(),
                "menuPlatformResponse": result,
            },
            message="Products synced successfully to Menu Platform",
        )

    async def update_availability(self, patch: AvailabilityPatch) -> Ok:
        updates = patch.updates()
        updated_at = utc_now_iso()

        result = await self.menu_platform.patch(
            f"/api/suppliers/products/{quote(patch.product_id, safe='')}/availability",
            json={"supplierId": patch.supplier_id, **updates, "updatedAt": updated_at},
            failure_message="Failed to update product availability on Menu Platform",
        )

        logger.info(f"[Relay] Availability of product {patch.product_id} updated: {updates}")

        return Ok(
            data={
                "productId": patch.product_id,
                "supplierId": patch.supplier_id,
                "updates": updates,
                "updatedAt": updated_at,
                "menuPlatformResponse": result,
            },
            message="Product availability updated successfully",
        )

    async def get_product(self, product_id: str, supplier_id: str) -> Ok:
        product = await self.supplier_portal.get(
            f"/api/products/{quote(product_id, safe='')}",
            params={"supplierId": supplier_id},
            failure_message="Failed to fetch product from Supplier Portal",
            not_found_message="Product not found",
        )

        return Ok(
            data=project_product(product or {}),
            message="Product details retrieved successfully",
        )
