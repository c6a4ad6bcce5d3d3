import pytest


def _place_order(client, table_id=1, items=None):
    items = items or [{"foodItemId": 1, "quantity": 2}, {"foodItemId": 3, "quantity": 1}]
    return client.post("/api/orders", json={"tableId": table_id, "items": items})


def test_root(client):
    from cafe_api.main import settings

    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"
    assert settings.cafe_name in response.json()["message"]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "OK"
    assert response.json()["store"] == "healthy"


def test_list_tables(client):
    response = client.get("/api/tables")

    assert response.status_code == 200
    assert response.json() == [
        {"id": 1, "name": "Table 1", "status": "available"},
        {"id": 2, "name": "Table 2", "status": "available"},
        {"id": 3, "name": "Patio", "status": "available"},
    ]


def test_list_tables_by_status(client):
    _place_order(client, table_id=3)

    response = client.get("/api/tables", params={"status": "occupied"})

    assert [t["id"] for t in response.json()] == [3]


def test_table_details_without_order(client):
    response = client.get("/api/tables/2")

    assert response.status_code == 200
    assert response.json() == {
        "table": {"id": 2, "name": "Table 2", "status": "available"},
        "currentOrder": None,
    }


def test_table_details_with_order(client):
    order = _place_order(client).json()

    body = client.get("/api/tables/1").json()

    assert body["table"]["status"] == "occupied"
    assert body["currentOrder"] == order


def test_list_food_items(client):
    response = client.get("/api/food-items")

    assert response.status_code == 200
    assert response.json()[0] == {
        "id": 1,
        "name": "Espresso",
        "category": "Coffee",
        "price": 2.5,
        "description": "Single shot",
    }
    assert [f["name"] for f in client.get("/api/food-items", params={"category": "Breakfast"}).json()] == [
        "Avocado Toast"
    ]


def test_place_order(client):
    response = _place_order(client)

    assert response.status_code == 201
    body = response.json()
    assert body["id"] == 1
    assert body["tableId"] == 1
    assert body["status"] == "active"
    assert "createdAt" in body
    assert [
        (i["foodItemId"], i["foodItemName"], i["quantity"], i["price"], i["status"])
        for i in body["items"]
    ] == [
        (1, "Espresso", 2, 2.5, "ordered"),
        (3, "Avocado Toast", 1, 9.5, "ordered"),
    ]
    assert client.get("/api/tables/1").json()["table"]["status"] == "occupied"


def test_get_order(client):
    order = _place_order(client).json()

    response = client.get(f"/api/orders/{order['id']}")

    assert response.status_code == 200
    assert response.json() == order


def test_list_orders(client):
    _place_order(client, table_id=1)
    _place_order(client, table_id=2)

    assert len(client.get("/api/orders").json()) == 2
    assert [o["tableId"] for o in client.get("/api/orders", params={"tableId": 2}).json()] == [2]


def test_patch_item_status(client):
    order = _place_order(client).json()
    item_id = order["items"][1]["id"]

    response = client.patch(f"/api/orders/{order['id']}", json={"itemId": item_id, "status": "preparing"})

    assert response.status_code == 200
    assert [i["status"] for i in response.json()["items"]] == ["ordered", "preparing"]

    response = client.patch(f"/api/orders/{order['id']}", json={"itemId": item_id, "status": "served"})
    assert response.json()["items"][1]["status"] == "served"
    assert client.get(f"/api/orders/{order['id']}").json()["items"][1]["status"] == "served"


def test_create_bill(client):
    order = _place_order(client).json()

    response = client.post(
        "/api/bills",
        json={"orderId": order["id"], "customerName": "Jane Doe", "customerPhone": "555-0100"},
    )

    assert response.status_code == 201
    bill = response.json()
    assert bill["orderId"] == order["id"]
    assert bill["customerName"] == "Jane Doe"
    assert bill["customerPhone"] == "555-0100"
    assert bill["items"] == [
        {"foodItemName": "Espresso", "quantity": 2, "price": 2.5, "total": 5.0},
        {"foodItemName": "Avocado Toast", "quantity": 1, "price": 9.5, "total": 9.5},
    ]
    assert (bill["subtotal"], bill["tax"], bill["total"]) == (14.5, 1.45, 15.95)
    assert "createdAt" in bill

    assert client.get(f"/api/orders/{order['id']}").json()["status"] == "completed"
    assert client.get("/api/tables/1").json() == {
        "table": {"id": 1, "name": "Table 1", "status": "available"},
        "currentOrder": None,
    }
    assert client.get(f"/api/bills/{bill['id']}").json() == bill


@pytest.mark.parametrize("method, path, body, message", [
    ("get", "/api/tables/99", None, "Failed to fetch table details"),
    ("get", "/api/orders/99", None, "Failed to fetch order"),
    ("get", "/api/bills/99", None, "Failed to fetch bill"),
    ("patch", "/api/orders/99", {"itemId": 1, "status": "served"}, "Failed to update order"),
    ("post", "/api/bills", {"orderId": 99}, "Failed to create bill"),
    ("post", "/api/orders", {"tableId": 99, "items": [{"foodItemId": 1, "quantity": 1}]},
     "Failed to create order"),
    ("post", "/api/orders", {"tableId": 1, "items": [{"foodItemId": 99, "quantity": 1}]},
     "Failed to create order"),
])
def test_failures_are_generic_500(client, method, path, body, message):
    kwargs = {"json": body} if body is not None else {}

    response = getattr(client, method)(path, **kwargs)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": message}


def test_second_order_on_occupied_table_fails(client):
    _place_order(client)

    response = _place_order(client, items=[{"foodItemId": 2, "quantity": 1}])

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to create order"
    assert len(client.get("/api/orders").json()) == 1


def test_billing_twice_fails(client):
    order = _place_order(client).json()
    assert client.post("/api/bills", json={"orderId": order["id"]}).status_code == 201

    response = client.post("/api/bills", json={"orderId": order["id"]})

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to create bill"


@pytest.mark.parametrize("method, path, body", [
    ("get", "/api/tables/abc", None),
    ("post", "/api/orders", {"tableId": 1, "items": []}),
    ("post", "/api/orders", {"items": [{"foodItemId": 1, "quantity": 1}]}),
    ("patch", "/api/orders/1", {"itemId": 1, "status": "eaten"}),
    ("get", "/api/tables?status=reserved", None),
])
def test_invalid_requests_are_generic_500(client, method, path, body):
    kwargs = {"json": body} if body is not None else {}

    response = getattr(client, method)(path, **kwargs)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Invalid request"}


def test_debug_mode_adds_detail(client, monkeypatch):
    from cafe_api.core.config import get_settings

    monkeypatch.setenv("DEBUG", "true")
    get_settings.cache_clear()
    try:
        response = client.get("/api/orders/99")
    finally:
        monkeypatch.delenv("DEBUG")
        get_settings.cache_clear()

    assert response.status_code == 500
    assert response.json()["detail"] == "orders #99 not found"


def test_large_quantity_order_is_billed(client):
    response = _place_order(client, items=[{"foodItemId": 1, "quantity": 100}])
    assert response.status_code == 201
    order = response.json()

    bill = client.post("/api/bills", json={"orderId": order["id"]}).json()

    assert (bill["subtotal"], bill["tax"], bill["total"]) == (250.0, 25.0, 275.0)


def test_half_cent_tax_rounds_up(client):
    order = _place_order(client, items=[{"foodItemId": 2, "quantity": 1}]).json()

    bill = client.post("/api/bills", json={"orderId": order["id"]}).json()

    assert (bill["subtotal"], bill["tax"], bill["total"]) == (3.25, 0.33, 3.58)


def test_long_customer_details_are_kept(client):
    order = _place_order(client).json()
    name = "Jane " * 40

    response = client.post(
        "/api/bills",
        json={"orderId": order["id"], "customerName": name, "customerPhone": "+1 (555) 010-0100 ext. 4242"},
    )

    assert response.status_code == 201
    assert response.json()["customerName"] == name
