import json

import pytest

from cafe_api.services.excel_manager import BillLedger

BILL = {
    "id": 1,
    "orderId": 4,
    "customerName": "Jane Doe",
    "customerPhone": "555-0100",
    "items": [
        {"foodItemName": "Espresso", "quantity": 2, "price": 2.5, "total": 5.0},
        {"foodItemName": "Avocado Toast", "quantity": 1, "price": 9.5, "total": 9.5},
    ],
    "subtotal": 14.5,
    "tax": 1.45,
    "total": 15.95,
    "createdAt": "2025-07-18T17:40:24.000000Z",
}


@pytest.fixture
def ledger(tmp_path):
    return BillLedger(tmp_path / "exports" / "bills.xlsx", lock_timeout=5)


def test_export_bill_appends_row(ledger):
    result = ledger.export_bill(BILL, table_id=2)

    assert result["success"]
    assert result["bill_id"] == 1
    assert result["exported_at"]

    rows = ledger.get_all_bills()
    assert len(rows) == 1
    row = rows[0]
    assert row["order_id"] == 4
    assert row["table_id"] == 2
    assert row["item_count"] == 3
    assert row["total"] == pytest.approx(15.95)
    assert json.loads(row["items"])[0]["foodItemName"] == "Espresso"


def test_export_keeps_previous_rows(ledger):
    ledger.export_bill(BILL, table_id=2)
    ledger.export_bill({**BILL, "id": 2, "orderId": 5}, table_id=1)

    assert [r["bill_id"] for r in ledger.get_all_bills()] == [1, 2]


def test_get_all_bills_without_ledger(ledger):
    assert ledger.get_all_bills() == []


def test_clear_all(ledger):
    ledger.export_bill(BILL)

    assert ledger.clear_all()
    assert not ledger.file_path.exists()
    assert ledger.get_all_bills() == []
