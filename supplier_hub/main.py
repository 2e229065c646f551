"""
Supplier Hub - integration relay between the Menu Platform and the Supplier Portal
Main Application Entry Point
"""
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Match

from supplier_hub.core.config import settings
from supplier_hub.core.database import init_db
from supplier_hub.core.envelope import Fail, create_response, render
from supplier_hub.core.errors import ErrorKind, RelayError
from supplier_hub.core.logging_setup import setup_logging

from dotenv import load_dotenv
load_dotenv()


# ========================================
# ROUTER IMPORTS
# ========================================
from supplier_hub.api.relay import health, orders as relay_orders, products as relay_products
from supplier_hub.api.v1 import (
    analytics,
    auth,
    connections,
    invoices,
    orders,
    products,
    supplier,
    sync,
)

logger = logging.getLogger(__name__)

ALLOWED_HEADERS = "Content-Type, Authorization"

HTTP_ERROR_KINDS = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.UNAUTHORIZED,
    404: ErrorKind.NOT_FOUND,
    405: ErrorKind.METHOD_NOT_ALLOWED,
    502: ErrorKind.GATEWAY,
}


# ========================================
# LIFESPAN EVENT
# ========================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown"""
    setup_logging(settings)
    init_db()

    app.state.http_client = httpx.AsyncClient(timeout=settings.DOWNSTREAM_TIMEOUT_SECONDS)

    missing = settings.missing_env_vars
    if missing:
        logger.warning(f"[Relay] Missing environment variables: {', '.join(missing)}")
    logger.info(f"[Relay] {settings.APP_NAME} {settings.VERSION} started ({settings.ENVIRONMENT})")

    yield

    await app.state.http_client.aclose()
    logger.info("[Relay] Server stopped")


# ========================================
# APP
# ========================================
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan
)


# ========================================
# MIDDLEWARE - CORS + OPTIONS
# ========================================
def allowed_methods(request: Request) -> str:
    """Methods registered for the request path, always ending with OPTIONS"""
    methods = set()
    for route in app.router.routes:
        route_methods = getattr(route, "methods", None)
        if not route_methods:
            continue
        match, _ = route.matches(request.scope)
        if match != Match.NONE:
            methods.update(route_methods)
    methods.discard("HEAD")
    methods.discard("OPTIONS")
    return ", ".join(sorted(methods) + ["OPTIONS"])


@app.middleware("http")
async def cors_and_errors(request: Request, call_next):
    cors_headers = {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": allowed_methods(request),
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }

    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers)

    try:
        response = await call_next(request)
    except Exception as e:
        logger.exception(f"[Relay] Unhandled error on {request.method} {request.url.path}: {e}")
        response = render(Fail(ErrorKind.INTERNAL, "Internal server error"))

    response.headers.update(cors_headers)
    return response


# ========================================
# EXCEPTION HANDLERS
# ========================================
@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    if exc.status_code >= 500:
        logger.error(f"[Relay] {request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return render(Fail.from_error(exc))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    kind = HTTP_ERROR_KINDS.get(exc.status_code)
    if kind is not None:
        return render(Fail(kind, message))
    # 403 and friends keep their own status
    return JSONResponse(
        status_code=exc.status_code,
        content=create_response(exc.status_code, message=message),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = "body"
    message = "Invalid request"
    if errors:
        loc = [str(part) for part in errors[0].get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[-1] if loc else field
        message = f"{field}: {errors[0].get('msg', 'invalid value')}"
    return render(Fail(ErrorKind.VALIDATION, message, data={"field": field}))


# ========================================
# ROUTERS
# ========================================
app.include_router(relay_orders.router, prefix=settings.API_PREFIX)
app.include_router(relay_products.router, prefix=settings.API_PREFIX)
app.include_router(health.router, prefix=settings.API_PREFIX)
app.include_router(health.router)

app.include_router(auth.router, prefix=settings.API_V1_STR)
app.include_router(supplier.router, prefix=settings.API_V1_STR)
app.include_router(products.router, prefix=settings.API_V1_STR)
app.include_router(orders.router, prefix=settings.API_V1_STR)
app.include_router(invoices.router, prefix=settings.API_V1_STR)
app.include_router(connections.router, prefix=settings.API_V1_STR)
app.include_router(sync.router, prefix=settings.API_V1_STR)
app.include_router(analytics.router, prefix=settings.API_V1_STR)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("supplier_hub.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
