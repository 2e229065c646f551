"""
FastAPI dependencies: configuration, HTTP clients, relay services and
the two authentication schemes (relay API key, portal JWT).
"""
from typing import Any, Optional

import httpx
from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from supplier_hub.core.config import Settings, get_settings
from supplier_hub.core.database import get_db
from supplier_hub.core.errors import PayloadError
from supplier_hub.core.security import verify_api_key
from supplier_hub.models.supplier import SupplierUser
from supplier_hub.services.auth_service import AuthService
from supplier_hub.services.downstream import (
    DownstreamClient,
    main_system_client,
    menu_platform_client,
    supplier_portal_client,
)
from supplier_hub.services.order_relay import OrderRelayService
from supplier_hub.services.product_relay import ProductRelayService


bearer_scheme = HTTPBearer(auto_error=False)


# ============================================
# HTTP CLIENTS
# ============================================

def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared client created in the app lifespan"""
    return request.app.state.http_client


def get_supplier_portal(
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
) -> DownstreamClient:
    return supplier_portal_client(http, settings)


def get_menu_platform(
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
) -> DownstreamClient:
    return menu_platform_client(http, settings)


def get_main_system(
    http: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings)
) -> DownstreamClient:
    return main_system_client(http, settings)


def get_order_relay(
    supplier_portal: DownstreamClient = Depends(get_supplier_portal)
) -> OrderRelayService:
    return OrderRelayService(supplier_portal)


def get_product_relay(
    menu_platform: DownstreamClient = Depends(get_menu_platform),
    supplier_portal: DownstreamClient = Depends(get_supplier_portal)
) -> ProductRelayService:
    return ProductRelayService(menu_platform, supplier_portal)


# ============================================
# RELAY AUTH + BODY
# ============================================

def require_api_key(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings)
) -> None:
    verify_api_key(authorization, settings)


async def json_body(request: Request) -> Any:
    """Decoded JSON body; malformed JSON is a 400, not a 500"""
    raw = await request.body()
    if not raw:
        return {}
    try:
        return await request.json()
    except ValueError:
        raise PayloadError("Request body must be valid JSON")


# ============================================
# PORTAL AUTH
# ============================================

def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> SupplierUser:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )

    user = AuthService(db, settings).get_current_user(credentials.credentials)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token"
        )
    return user


def require_admin(current_user: SupplierUser = Depends(get_current_user)) -> SupplierUser:
    """Only supplier admins can change settings"""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only supplier admins can perform this action"
        )
    return current_user
