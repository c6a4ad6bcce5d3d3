"""
Pydantic Schemas for Request/Response Validation

Request bodies accept camelCase keys (as sent by the waiter app) or their
snake_case names. Responses reuse the stored record models from
``cafe_api.models``.

Author: Cafe API Maintainers
Version: 1.0.0
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cafe_api.models import Order, OrderItemStatus, Table


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class OrderItemCreate(CamelModel):
    """Single menu item in a new order."""
    food_item_id: int = Field(..., examples=[3])
    quantity: int = Field(..., ge=1, examples=[2])


class OrderCreate(CamelModel):
    """Request schema for placing a new order at a table."""
    table_id: int = Field(..., examples=[1])
    items: List[OrderItemCreate] = Field(..., min_length=1)


class OrderItemStatusUpdate(CamelModel):
    """Request schema for moving one order item through the kitchen."""
    item_id: int = Field(..., examples=[1721324424000])
    status: OrderItemStatus = Field(..., examples=["preparing"])


class BillCreate(CamelModel):
    """Request schema for billing an order."""
    order_id: int = Field(..., examples=[1])
    customer_name: Optional[str] = Field(None, examples=["Jane Doe"])
    customer_phone: Optional[str] = Field(None, examples=["555-123-4567"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class TableDetailsResponse(CamelModel):
    """A table together with its active order, if any."""
    table: Table
    current_order: Optional[Order] = None


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    store: str
    timestamp: datetime
