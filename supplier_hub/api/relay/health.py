# supplier_hub/api/relay/health.py
"""
Health check for the integration API. Never calls the downstream platforms.
"""
from fastapi import APIRouter, Depends

from supplier_hub.core.config import Settings, get_settings
from supplier_hub.core.envelope import Ok, render, utc_now_iso

router = APIRouter(tags=["health"])

ENDPOINTS = {
    "POST /api/products/sync": "Supplier → Menu Platform product sync",
    "PATCH /api/products/:id/availability": "Supplier → Menu Platform availability update",
    "POST /api/orders/webhook": "Menu Platform → Supplier order creation",
    "POST /api/orders/backorder": "Menu Platform → Supplier backorder notification",
    "GET /api/products/:id": "Fetch product details",
    "GET /api/orders/:orderId": "Fetch order details",
    "GET /api/health": "Health check",
}


def build_health(settings: Settings) -> Ok:
    missing = settings.missing_env_vars
    health_status = "degraded" if missing else "healthy"

    data = {
        "service": settings.APP_NAME,
        "status": health_status,
        "timestamp": utc_now_iso(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "configuration": {
            "supplierPortalUrl": settings.SUPPLIER_PORTAL_URL,
            "menuPlatformUrl": settings.MENU_PLATFORM_URL,
            "apiKeyConfigured": bool(settings.API_KEY),
            "missingEnvVars": missing or None,
        },
        "endpoints": ENDPOINTS,
    }

    return Ok(
        data=data,
        message=f"Integration API is {health_status}",
        status=200 if health_status == "healthy" else 503,
    )


@router.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    """Liveness + configuration echo"""
    return render(build_health(settings))
