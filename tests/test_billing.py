import pytest

from cafe_api.models import OrderItem
from cafe_api.services.billing import build_bill_items, calculate_bill_totals


def _lines(*pairs):
    return build_bill_items(
        OrderItem(id=n, food_item_id=n, food_item_name="Item", quantity=quantity, price=price)
        for n, (quantity, price) in enumerate(pairs, start=1)
    )


def test_build_bill_items_copies_order_lines():
    order_items = [
        OrderItem(id=10, food_item_id=1, food_item_name="Espresso", quantity=2, price=2.5),
        OrderItem(id=11, food_item_id=3, food_item_name="Avocado Toast", quantity=1, price=9.5,
                  status="served"),
    ]

    lines = build_bill_items(order_items)

    assert [(l.food_item_name, l.quantity, l.price, l.total) for l in lines] == [
        ("Espresso", 2, 2.5, 5.0),
        ("Avocado Toast", 1, 9.5, 9.5),
    ]


def test_line_total_is_rounded_to_cents():
    [line] = _lines((3, 0.1))

    assert line.total == 0.3


def test_totals_for_known_order():
    totals = calculate_bill_totals(_lines((2, 2.5), (1, 9.5)))

    assert totals == {"subtotal": 14.5, "tax": 1.45, "total": 15.95}


def test_totals_for_empty_order():
    totals = calculate_bill_totals([])

    assert totals == {"subtotal": 0, "tax": 0, "total": 0}


def test_custom_tax_rate():
    totals = calculate_bill_totals(_lines((4, 2.5)), tax_rate=0.2)

    assert totals == {"subtotal": 10.0, "tax": 2.0, "total": 12.0}


@pytest.mark.parametrize("quantity, price, expected", [
    (5, 0.25, {"subtotal": 1.25, "tax": 0.13, "total": 1.38}),
    (1, 6.25, {"subtotal": 6.25, "tax": 0.63, "total": 6.88}),
    (1, 3.75, {"subtotal": 3.75, "tax": 0.38, "total": 4.13}),
])
def test_half_cent_tax_rounds_up(quantity, price, expected):
    assert calculate_bill_totals(_lines((quantity, price))) == expected


def test_large_quantities():
    totals = calculate_bill_totals(_lines((150, 2.5)))

    assert totals == {"subtotal": 375.0, "tax": 37.5, "total": 412.5}


@pytest.mark.parametrize("quantity", [1, 2, 3, 7, 12, 100])
@pytest.mark.parametrize("price", [0.25, 0.99, 2.5, 3.75, 4.2, 6.25, 11.95, 18.0])
def test_total_is_subtotal_plus_tax(quantity, price):
    totals = calculate_bill_totals(_lines((quantity, price), (1, 2.5)))

    assert totals["subtotal"] == pytest.approx(quantity * price + 2.5, abs=1e-9)
    assert totals["tax"] == pytest.approx(totals["subtotal"] * 0.10, abs=0.005 + 1e-9)
    assert totals["total"] == pytest.approx(totals["subtotal"] + totals["tax"], abs=1e-9)
