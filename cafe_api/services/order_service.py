"""
Order Service

All café operations on top of the document store:
    - list_tables / get_table_details: floor overview for the waiter
    - list_food_items: the menu
    - place_order: new order at a table, table becomes occupied
    - update_item_status: move one item through the kitchen
    - create_bill: price the order, complete it and free the table

State transitions:
    Table      available -> occupied (order placed) -> available (bill created)
    Order      active -> completed (bill created)
    OrderItem  ordered / preparing / served, set freely by the client

Each step is its own store write. Nothing is rolled back if a later
step fails.

Author: Cafe API Maintainers
Version: 1.0.0
"""

import logging
import time
from typing import Optional

from cafe_api.core.exceptions import (
    OrderNotActiveError,
    RecordNotFoundError,
    TableOccupiedError,
)
from cafe_api.database import DocumentStore
from cafe_api.models import (
    Bill,
    FoodItem,
    Order,
    OrderItem,
    OrderItemStatus,
    OrderStatus,
    Table,
    TableStatus,
)
from cafe_api.schemas import BillCreate, OrderCreate, TableDetailsResponse
from cafe_api.services.billing import DEFAULT_TAX_RATE, build_bill_items, calculate_bill_totals
from cafe_api.services.excel_manager import BillLedger

logger = logging.getLogger(__name__)


class OrderService:
    """
    Table, menu, order and bill operations for the waiter app.

    Attributes:
        store: JSON document store holding every collection
        tax_rate: Flat tax rate applied when billing
        ledger: Optional Excel ledger every new bill is appended to

    Example:
        >>> service = OrderService(get_store())
        >>> order = service.place_order(OrderCreate(table_id=1, items=[...]))
        >>> bill = service.create_bill(BillCreate(order_id=order.id))
    """

    def __init__(
        self,
        store: DocumentStore,
        tax_rate: float = DEFAULT_TAX_RATE,
        ledger: Optional[BillLedger] = None,
    ):
        self.store = store
        self.tax_rate = tax_rate
        self.ledger = ledger

    # =========================================================================
    # TABLES
    # =========================================================================

    def list_tables(self, status: Optional[TableStatus] = None) -> list[Table]:
        filters = {"status": status.value} if status else {}
        return [Table.model_validate(t) for t in self.store.query("tables", **filters)]

    def get_table(self, table_id: int) -> Table:
        return Table.model_validate(self.store.get("tables", table_id))

    def get_table_details(self, table_id: int) -> TableDetailsResponse:
        """Table plus its active order (``None`` when the table is free)."""
        table = self.get_table(table_id)
        return TableDetailsResponse(
            table=table,
            current_order=self._active_order_for(table.id),
        )

    def _active_order_for(self, table_id: int) -> Optional[Order]:
        active = self.store.query("orders", tableId=table_id, status=OrderStatus.ACTIVE.value)
        if len(active) > 1:
            logger.warning(
                f"Table #{table_id} has {len(active)} active orders: "
                f"{[o['id'] for o in active]}"
            )
        return Order.model_validate(active[0]) if active else None

    # =========================================================================
    # MENU
    # =========================================================================

    def list_food_items(self, category: Optional[str] = None) -> list[FoodItem]:
        filters = {"category": category} if category else {}
        return [FoodItem.model_validate(f) for f in self.store.query("foodItems", **filters)]

    # =========================================================================
    # ORDERS
    # =========================================================================

    def list_orders(
        self,
        table_id: Optional[int] = None,
        status: Optional[OrderStatus] = None,
    ) -> list[Order]:
        filters = {}
        if table_id is not None:
            filters["tableId"] = table_id
        if status:
            filters["status"] = status.value
        return [Order.model_validate(o) for o in self.store.query("orders", **filters)]

    def get_order(self, order_id: int) -> Order:
        return Order.model_validate(self.store.get("orders", order_id))

    def place_order(self, order_data: OrderCreate) -> Order:
        """
        Place a new order at a table and mark the table occupied.

        Every requested food item is resolved against the menu before
        anything is written, so an unknown item leaves the store untouched.

        Raises:
            RecordNotFoundError: Unknown table or food item
            TableOccupiedError: The table already has an active order
        """
        table = self.get_table(order_data.table_id)

        current = self._active_order_for(table.id)
        if current is not None:
            raise TableOccupiedError(table.id, current.id)

        menu = {f.id: f for f in self.list_food_items()}

        # Item ids come from a millisecond clock, one per line
        next_item_id = int(time.time() * 1000)
        order_items = []
        for requested in order_data.items:
            food_item = menu.get(requested.food_item_id)
            if food_item is None:
                raise RecordNotFoundError("foodItems", requested.food_item_id)

            order_items.append(
                OrderItem(
                    id=next_item_id,
                    food_item_id=food_item.id,
                    food_item_name=food_item.name,
                    quantity=requested.quantity,
                    price=food_item.price,
                    status=OrderItemStatus.ORDERED,
                )
            )
            next_item_id += 1

        new_order = Order(table_id=table.id, items=order_items)
        created = self.store.insert("orders", new_order.to_document(exclude={"id"}))

        self.store.patch("tables", table.id, {"status": TableStatus.OCCUPIED.value})

        logger.info(
            f"Order #{created['id']} placed at {table.name} "
            f"({len(order_items)} items)"
        )
        return Order.model_validate(created)

    def update_item_status(
        self,
        order_id: int,
        item_id: int,
        status: OrderItemStatus,
    ) -> Order:
        """
        Set the kitchen status of one item on an order.

        Any status may follow any other. An unknown ``item_id`` leaves the
        order as it was.
        """
        order = self.get_order(order_id)

        item = next((i for i in order.items if i.id == item_id), None)
        if item is None:
            logger.warning(f"Order #{order_id} has no item {item_id}; nothing updated")
            return order

        previous = item.status
        item.status = status
        updated = self.store.replace("orders", order_id, order.to_document())

        logger.info(
            f"Order #{order_id} item {item_id} ({item.food_item_name}): "
            f"{previous.value} -> {status.value}"
        )
        return Order.model_validate(updated)

    # =========================================================================
    # BILLS
    # =========================================================================

    def get_bill(self, bill_id: int) -> Bill:
        return Bill.model_validate(self.store.get("bills", bill_id))

    def create_bill(self, bill_data: BillCreate) -> Bill:
        """
        Bill an active order, complete it, and free its table.

        Raises:
            RecordNotFoundError: Unknown order
            OrderNotActiveError: The order was already billed
        """
        order = self.get_order(bill_data.order_id)
        if not order.is_active:
            raise OrderNotActiveError(order.id, order.status.value)

        items = build_bill_items(order.items)
        totals = calculate_bill_totals(items, self.tax_rate)

        new_bill = Bill(
            order_id=order.id,
            customer_name=bill_data.customer_name,
            customer_phone=bill_data.customer_phone,
            items=items,
            **totals,
        )
        created = self.store.insert("bills", new_bill.to_document(exclude={"id"}))

        self.store.patch("orders", order.id, {"status": OrderStatus.COMPLETED.value})
        self.store.patch("tables", order.table_id, {"status": TableStatus.AVAILABLE.value})

        logger.info(
            f"Bill #{created['id']} for order #{order.id}: "
            f"subtotal={totals['subtotal']:.2f} tax={totals['tax']:.2f} "
            f"total={totals['total']:.2f}"
        )

        if self.ledger is not None:
            result = self.ledger.export_bill(created, table_id=order.table_id)
            if not result["success"]:
                logger.warning(f"Bill #{created['id']} not exported: {result['message']}")

        return Bill.model_validate(created)
