from online_store.domain import order_status


def _create_user(client, email="jan@example.com"):
    resp = client.post(
        "/users",
        json={
            "first_name": "Jan",
            "last_name": "Kowalski",
            "email": email,
            "password": "secret123",
        },
    )
    assert resp.status_code == 201
    return resp.json()


def _create_product(client, admin_headers, name="Widget", price="5.00", stock=10):
    resp = client.post(
        "/products",
        json={"name": name, "price": price, "stock_quantity": stock},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    return resp.json()


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_product_endpoints(client, admin_headers, user_headers):
    product = _create_product(client, admin_headers, "Kettle", "19.99", 4)

    assert client.get(f"/products/{product['id']}").json()["name"] == "Kettle"
    assert [p["id"] for p in client.get("/products/search", params={"term": "kett"}).json()] == [product["id"]]
    assert client.get("/products", params={"in_stock": True, "sort_by": "price"}).status_code == 200

    resp = client.put(f"/products/{product['id']}", json={"stock_quantity": 0}, headers=admin_headers)
    assert resp.json()["stock_quantity"] == 0
    assert resp.json()["price"] == "19.99"

    assert client.get("/products/999").status_code == 404
    assert client.delete(f"/products/{product['id']}", headers=user_headers).status_code == 403
    assert client.delete(f"/products/{product['id']}", headers=admin_headers).status_code == 204
    assert client.delete(f"/products/{product['id']}", headers=admin_headers).status_code == 404


def test_create_product_sets_location(client, admin_headers):
    resp = client.post(
        "/products",
        json={"name": "Lamp", "price": "10.00"},
        headers=admin_headers,
    )

    assert resp.status_code == 201
    assert resp.headers["location"] == f"/products/{resp.json()['id']}"


def test_request_validation_reports_fields(client, admin_headers):
    resp = client.post(
        "/products",
        json={"name": "ab", "price": "-1"},
        headers=admin_headers,
    )

    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert "name" in errors
    assert "price" in errors


def test_missing_identity_is_unauthorized(client):
    assert client.post("/products", json={"name": "Lamp", "price": "1.00"}).status_code == 401
    assert client.get("/carts/1").status_code == 401


def test_admin_by_configured_email(client):
    headers = {"X-User-Email": "boss@example.com", "X-User-Role": "user"}

    assert client.get("/admin/orders/stats", headers=headers).status_code == 200


def test_order_flow_over_http(client, admin_headers, user_headers, comment_store):
    user = _create_user(client)
    product = _create_product(client, admin_headers, stock=10)

    cart = client.get(f"/carts/{user['id']}", headers=user_headers).json()
    resp = client.post(
        "/carts/items",
        json={"cart_id": cart["id"], "product_id": product["id"], "quantity": 3},
        headers=user_headers,
    )
    assert resp.status_code == 201

    resp = client.post(f"/orders/cart/{cart['id']}/checkout", headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == order_status.PENDING
    assert resp.json()["total_amount"] == "15.00"
    assert client.get(f"/products/{product['id']}").json()["stock_quantity"] == 7

    resp = client.put(
        f"/admin/orders/{cart['id']}/reject",
        json={"comment": "oos"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == order_status.REJECTED
    assert client.get(f"/products/{product['id']}").json()["stock_quantity"] == 10

    with_comment = client.get(f"/admin/orders/{cart['id']}/with-comment", headers=admin_headers)
    assert with_comment.json()["admin_comment"] == "oos"

    # decyzja po reject
    resp = client.put(f"/admin/orders/{cart['id']}/approve", headers=admin_headers)
    assert resp.status_code == 400


def test_checkout_empty_cart_over_http(client, user_headers):
    user = _create_user(client)
    cart = client.get(f"/carts/{user['id']}", headers=user_headers).json()

    resp = client.post(f"/orders/cart/{cart['id']}/checkout", headers=user_headers)

    assert resp.status_code == 400
    assert client.get(f"/orders/{cart['id']}", headers=user_headers).status_code == 404


def test_lock_contention_returns_conflict(client, admin_headers, user_headers, lock_service):
    user = _create_user(client)
    product = _create_product(client, admin_headers)
    cart = client.get(f"/carts/{user['id']}", headers=user_headers).json()
    client.post(
        "/carts/items",
        json={"cart_id": cart["id"], "product_id": product["id"], "quantity": 1},
        headers=user_headers,
    )
    lock_service.acquire_cart_lock(cart["id"])

    resp = client.post(f"/orders/cart/{cart['id']}/checkout", headers=user_headers)

    assert resp.status_code == 409


def test_stats_endpoint(client, admin_headers, user_headers):
    product = _create_product(client, admin_headers, price="5.00", stock=10)
    for email, quantity in (("a@example.com", 3), ("b@example.com", 1)):
        user = _create_user(client, email)
        cart = client.get(f"/carts/{user['id']}", headers=user_headers).json()
        client.post(
            "/carts/items",
            json={"cart_id": cart["id"], "product_id": product["id"], "quantity": quantity},
            headers=user_headers,
        )
        client.post(f"/orders/cart/{cart['id']}/checkout", headers=user_headers)
        if quantity == 3:
            client.put(f"/admin/orders/{cart['id']}/approve", headers=admin_headers)

    resp = client.get("/admin/orders/stats", headers=admin_headers)

    assert resp.json() == {"total_orders": 2, "pending_orders": 1, "total_revenue": "15.00"}
    assert client.get("/admin/orders/stats", headers=user_headers).status_code == 403


def test_cart_item_endpoints(client, admin_headers, user_headers):
    user = _create_user(client)
    product = _create_product(client, admin_headers)
    cart = client.get(f"/carts/{user['id']}", headers=user_headers).json()
    item = client.post(
        "/carts/items",
        json={"cart_id": cart["id"], "product_id": product["id"], "quantity": 1},
        headers=user_headers,
    ).json()

    assert client.get(f"/carts/items/{item['id']}", headers=user_headers).json()["quantity"] == 1

    resp = client.put("/carts/items", json={"id": item["id"], "quantity": 2}, headers=user_headers)
    assert resp.json()["total_price"] == "10.00"

    resp = client.post(
        "/carts/items",
        json={"cart_id": cart["id"], "product_id": product["id"], "quantity": 0},
        headers=user_headers,
    )
    assert resp.status_code == 400

    assert client.delete(f"/carts/items/{item['id']}", headers=user_headers).status_code == 204
    assert client.delete(f"/carts/items/{item['id']}", headers=user_headers).status_code == 404
    assert client.delete(f"/carts/{user['id']}/clear", headers=user_headers).status_code == 404


def test_user_endpoints(client, admin_headers, user_headers):
    user = _create_user(client, "jan@example.com")

    dup = client.post(
        "/users",
        json={"first_name": "J", "last_name": "K", "email": "jan@example.com", "password": "secret123"},
    )
    assert dup.status_code == 409
    assert "password" not in client.get(f"/users/{user['id']}", headers=user_headers).json()

    assert client.get("/users", headers=user_headers).status_code == 403
    assert len(client.get("/users", headers=admin_headers).json()) == 1
    found = client.get("/users/email", params={"email": "jan@example.com"}, headers=admin_headers)
    assert found.json()["id"] == user["id"]
    assert client.get("/users/is-admin/boss@example.com", headers=admin_headers).json() is True
    assert len(client.get(f"/users/{user['id']}/carts", headers=user_headers).json()) == 1

    resp = client.put(f"/users/{user['id']}", json={"phone": "123456"}, headers=user_headers)
    assert resp.json()["phone"] == "123456"

    assert client.delete(f"/users/{user['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"/users/{user['id']}", headers=user_headers).status_code == 404


def test_payment_and_delivery_endpoints(client, admin_headers, user_headers):
    user = _create_user(client)
    product = _create_product(client, admin_headers)
    cart = client.get(f"/carts/{user['id']}", headers=user_headers).json()
    client.post(
        "/carts/items",
        json={"cart_id": cart["id"], "product_id": product["id"], "quantity": 1},
        headers=user_headers,
    )
    client.post(f"/orders/cart/{cart['id']}/checkout", headers=user_headers)

    payment = {"order_id": cart["id"], "status": "Paid", "amount": "5.00"}
    first = client.post("/payments", json=payment, headers=user_headers)
    assert first.status_code == 201
    assert first.json()["order_id"] == cart["id"]
    assert client.post("/payments", json=payment, headers=user_headers).status_code == 409

    delivery = client.post(
        "/deliveries",
        json={"order_id": cart["id"], "status": "Scheduled", "delivery_date": "2026-05-01T12:00:00"},
        headers=user_headers,
    )
    assert delivery.status_code == 201
    assert delivery.json()["order_id"] == cart["id"]
    assert client.delete(f"/deliveries/{delivery.json()['id']}", headers=user_headers).status_code == 204


def test_order_view_includes_admin_comment(client, admin_headers, user_headers):
    user = _create_user(client)
    product = _create_product(client, admin_headers)
    cart = client.get(f"/carts/{user['id']}", headers=user_headers).json()
    client.post(
        "/carts/items",
        json={"cart_id": cart["id"], "product_id": product["id"], "quantity": 1},
        headers=user_headers,
    )
    client.post(f"/orders/cart/{cart['id']}/checkout", headers=user_headers)

    assert client.get(f"/orders/{cart['id']}", headers=user_headers).json()["admin_comment"] is None

    client.put(f"/admin/orders/{cart['id']}/reject", json={"comment": "oos"}, headers=admin_headers)

    body = client.get(f"/orders/{cart['id']}", headers=user_headers).json()
    assert body["status"] == order_status.REJECTED
    assert body["admin_comment"] == "oos"
    assert client.get("/orders", headers=admin_headers).json()[0]["admin_comment"] == "oos"
