"""
FastAPI Application Entry Point

Cafe Waiter Order Taking API backed by a single JSON document store.

Endpoints:
    - GET /api/tables: List tables
    - GET /api/tables/{id}: Table details and its active order
    - GET /api/food-items: List the menu
    - POST /api/orders: Place an order at a table
    - GET /api/orders: List orders
    - GET /api/orders/{id}: Get an order
    - PATCH /api/orders/{id}: Update one order item's status
    - POST /api/bills: Bill an order and free its table
    - GET /api/bills/{id}: Get a bill
    - GET /health: System health check

Every failure is answered with HTTP 500 and a generic message; the cause
is only logged.

Author: Cafe API Maintainers
Version: 1.0.0
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cafe_api.core.config import get_settings, setup_logging
from cafe_api.database import init_db
from cafe_api.models import Bill, FoodItem, Order, OrderStatus, Table, TableStatus
from cafe_api.schemas import (
    BillCreate,
    ErrorResponse,
    HealthResponse,
    OrderCreate,
    OrderItemStatusUpdate,
    TableDetailsResponse,
)
from cafe_api.services import OrderService, get_order_service
from cafe_api.services.seed import default_document

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    init_db(default_document() if settings.seed_on_startup else None)
    logger.info(f"✅ Store ready: {settings.database_path}")

    service = get_order_service()
    logger.info(f"✅ Tax rate: {service.tax_rate:.0%}")
    logger.info(f"✅ Bill ledger: {'enabled' if service.ledger else 'disabled'}")

    logger.info("=" * 60)
    logger.info("✅ Application ready!")
    logger.info("=" * 60)

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Backend API for a café waiter order taking app.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def failure_response(message: str, exc: Optional[Exception] = None) -> JSONResponse:
    """Generic 500 response; the exception text is only shown in debug mode."""
    detail = str(exc) if exc is not None and get_settings().debug else None
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=message, detail=detail).model_dump(exclude_none=True),
    )


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    return {
        "message": f"☕ {settings.cafe_name} | {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "docs": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    service: OrderService = Depends(get_order_service),
) -> HealthResponse:
    """Verify the document store is readable."""
    store_status = "healthy"
    try:
        service.store.counts()
    except Exception as e:
        store_status = f"unhealthy: {str(e)}"
        logger.error(f"Store health check failed: {e}")

    return HealthResponse(
        status="OK" if store_status == "healthy" else "degraded",
        store=store_status,
        timestamp=datetime.now(timezone.utc),
    )


# =============================================================================
# TABLE ENDPOINTS
# =============================================================================

@app.get(
    "/api/tables",
    response_model=List[Table],
    responses={500: {"model": ErrorResponse}},
    tags=["Tables"],
    summary="Get all tables",
)
async def list_tables(
    status: Optional[TableStatus] = Query(None),
    service: OrderService = Depends(get_order_service),
):
    try:
        return service.list_tables(status)
    except Exception as e:
        logger.exception(f"Error fetching tables: {e}")
        return failure_response("Failed to fetch tables", e)


@app.get(
    "/api/tables/{table_id}",
    response_model=TableDetailsResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Tables"],
    summary="Get table details and current order",
)
async def get_table(
    table_id: int,
    service: OrderService = Depends(get_order_service),
):
    try:
        return service.get_table_details(table_id)
    except Exception as e:
        logger.exception(f"Error fetching table #{table_id}: {e}")
        return failure_response("Failed to fetch table details", e)


# =============================================================================
# MENU ENDPOINTS
# =============================================================================

@app.get(
    "/api/food-items",
    response_model=List[FoodItem],
    responses={500: {"model": ErrorResponse}},
    tags=["Food Items"],
    summary="Get all food items",
)
async def list_food_items(
    category: Optional[str] = Query(None),
    service: OrderService = Depends(get_order_service),
):
    try:
        return service.list_food_items(category)
    except Exception as e:
        logger.exception(f"Error fetching food items: {e}")
        return failure_response("Failed to fetch food items", e)


# =============================================================================
# ORDER ENDPOINTS
# =============================================================================

@app.post(
    "/api/orders",
    status_code=201,
    response_model=Order,
    responses={500: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Place a new order",
)
async def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service),
):
    logger.info(f"Placing order at table #{order_data.table_id}")

    try:
        return service.place_order(order_data)
    except Exception as e:
        logger.exception(f"Error creating order: {e}")
        return failure_response("Failed to create order", e)


@app.get(
    "/api/orders",
    response_model=List[Order],
    responses={500: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="List orders",
)
async def list_orders(
    table_id: Optional[int] = Query(None, alias="tableId"),
    status: Optional[OrderStatus] = Query(None),
    service: OrderService = Depends(get_order_service),
):
    try:
        return service.list_orders(table_id=table_id, status=status)
    except Exception as e:
        logger.exception(f"Error fetching orders: {e}")
        return failure_response("Failed to fetch orders", e)


@app.get(
    "/api/orders/{order_id}",
    response_model=Order,
    responses={500: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Get order details",
)
async def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service),
):
    try:
        return service.get_order(order_id)
    except Exception as e:
        logger.exception(f"Error fetching order #{order_id}: {e}")
        return failure_response("Failed to fetch order", e)


@app.patch(
    "/api/orders/{order_id}",
    response_model=Order,
    responses={500: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Update order item status",
)
async def update_order(
    order_id: int,
    update: OrderItemStatusUpdate,
    service: OrderService = Depends(get_order_service),
):
    try:
        return service.update_item_status(order_id, update.item_id, update.status)
    except Exception as e:
        logger.exception(f"Error updating order #{order_id}: {e}")
        return failure_response("Failed to update order", e)


# =============================================================================
# BILL ENDPOINTS
# =============================================================================

@app.post(
    "/api/bills",
    status_code=201,
    response_model=Bill,
    responses={500: {"model": ErrorResponse}},
    tags=["Bills"],
    summary="Create a bill",
)
async def create_bill(
    bill_data: BillCreate,
    service: OrderService = Depends(get_order_service),
):
    logger.info(f"Billing order #{bill_data.order_id}")

    try:
        return service.create_bill(bill_data)
    except Exception as e:
        logger.exception(f"Error creating bill: {e}")
        return failure_response("Failed to create bill", e)


@app.get(
    "/api/bills/{bill_id}",
    response_model=Bill,
    responses={500: {"model": ErrorResponse}},
    tags=["Bills"],
    summary="Get a bill",
)
async def get_bill(
    bill_id: int,
    service: OrderService = Depends(get_order_service),
):
    try:
        return service.get_bill(bill_id)
    except Exception as e:
        logger.exception(f"Error fetching bill #{bill_id}: {e}")
        return failure_response("Failed to fetch bill", e)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and path ids get the same generic 500."""
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return failure_response("Invalid request", exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")
    return failure_response("Internal Server Error", exc)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cafe_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
