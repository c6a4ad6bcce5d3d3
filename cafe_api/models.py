"""
Stored Record Models

Pydantic models for the records kept in the JSON document store:
- Tables and their occupancy
- Food menu items
- Orders with per-item kitchen status
- Bills

Field names are snake_case in Python and camelCase in the store and
on the wire (``table_id`` <-> ``tableId``).

Author: Cafe API Maintainers
Version: 1.0.0
"""

import enum
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TableStatus(str, enum.Enum):
    """Table occupancy."""
    AVAILABLE = "available"
    OCCUPIED = "occupied"


class OrderStatus(str, enum.Enum):
    """Order lifecycle: active until its bill is created."""
    ACTIVE = "active"
    COMPLETED = "completed"


class OrderItemStatus(str, enum.Enum):
    """Kitchen status of a single ordered item."""
    ORDERED = "ordered"
    PREPARING = "preparing"
    SERVED = "served"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """Base for every stored record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_document(self, **kwargs: Any) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape kept in the store."""
        return self.model_dump(by_alias=True, mode="json", **kwargs)


class Table(Record):
    id: int
    name: str
    status: TableStatus = TableStatus.AVAILABLE

    def __repr__(self):
        return f"<Table #{self.id} - {self.name} - {self.status.value}>"


class FoodItem(Record):
    id: int
    name: str
    category: str
    price: float = Field(..., ge=0)
    description: Optional[str] = None


class OrderItem(Record):
    """A food item on an order, with name and price copied at order time."""
    id: int
    food_item_id: int
    food_item_name: str
    quantity: int = Field(..., ge=1)
    price: float
    status: OrderItemStatus = OrderItemStatus.ORDERED


class Order(Record):
    id: Optional[int] = None  # assigned by the store on insert
    table_id: int
    items: List[OrderItem] = Field(default_factory=list)
    status: OrderStatus = OrderStatus.ACTIVE
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == OrderStatus.ACTIVE

    def __repr__(self):
        return f"<Order #{self.id} - table {self.table_id} - {self.status.value}>"


class BillItem(Record):
    food_item_name: str
    quantity: int
    price: float
    total: float


class Bill(Record):
    id: Optional[int] = None  # assigned by the store on insert
    order_id: int
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    items: List[BillItem] = Field(default_factory=list)
    subtotal: float
    tax: float
    total: float
    created_at: datetime = Field(default_factory=utcnow)

    def __repr__(self):
        return f"<Bill #{self.id} - order {self.order_id} - {self.total:.2f}>"
