"""
Bill Arithmetic

Turns an order's items into bill lines and computes subtotal, flat-rate
tax and total. Amounts are worked out in Decimal and each is rounded to
cents half-up, so a half cent of tax always rounds in the café's favour.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from cafe_api.models import BillItem, OrderItem

DEFAULT_TAX_RATE = 0.10

CENTS = Decimal("0.01")


def to_cents(amount: Decimal) -> float:
    """Round an amount to two decimals, halves away from zero."""
    return float(amount.quantize(CENTS, rounding=ROUND_HALF_UP))


def _line_amount(quantity: int, price: float) -> Decimal:
    return Decimal(str(price)) * quantity


def build_bill_items(order_items: Iterable[OrderItem]) -> list[BillItem]:
    """One bill line per order item, priced at the order-time price."""
    return [
        BillItem(
            food_item_name=item.food_item_name,
            quantity=item.quantity,
            price=item.price,
            total=to_cents(_line_amount(item.quantity, item.price)),
        )
        for item in order_items
    ]


def calculate_bill_totals(
    items: Iterable[BillItem],
    tax_rate: float = DEFAULT_TAX_RATE,
) -> dict[str, float]:
    """Calculate bill subtotal, tax, and total."""
    subtotal = sum(
        (_line_amount(item.quantity, item.price) for item in items),
        Decimal("0"),
    )
    tax = subtotal * Decimal(str(tax_rate))
    total = subtotal + tax

    return {
        "subtotal": to_cents(subtotal),
        "tax": to_cents(tax),
        "total": to_cents(total),
    }
