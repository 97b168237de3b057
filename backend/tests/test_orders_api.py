from models.log import Log


def _order(user_id, order_type="shipping", total=20.0):
    return {
        "user_id": str(user_id),
        "products": [{"product_id": "1", "quantity": 2, "price": 10.0}],
        "total_price": total,
        "order_type": order_type,
    }


def test_place_order_clears_cart(client, make_user, make_product, auth_header):
    user = make_user()
    product = make_product(price=10.0)
    header = auth_header(user)
    client.post(f"/api/carts/{user.id}/items", headers=header,
                json={"product_id": str(product.id), "quantity": 2})

    res = client.post("/api/orders", headers=header, json=_order(user.id, "Shipping"))

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Order created successfully and cart cleared"
    assert body["data"]["order_type"] == "shipping"
    assert body["data"]["status"] == "pending"
    assert body["data"]["user_id"] == str(user.id)

    cart = client.get(f"/api/carts/{user.id}", headers=header).json()["data"]
    assert cart["items"] == []
    assert cart["total_price"] == 0.0


def test_place_order_without_cart(client, make_user, auth_header):
    user = make_user()
    res = client.post("/api/orders", headers=auth_header(user), json=_order(user.id, "pickup"))

    assert res.status_code == 201
    assert res.json()["message"] == "Order created successfully (no cart to clear)"


def test_invalid_order_type(client, make_user, auth_header):
    user = make_user()
    header = auth_header(user)

    res = client.post("/api/orders", headers=header, json=_order(user.id, "overnight"))

    assert res.status_code == 400
    assert res.json()["message"] == "order_type must be 'shipping' or 'pickup'"
    assert client.get("/api/orders", headers=header).json()["data"] == []


def test_order_for_someone_else_is_forbidden(client, make_user, auth_header):
    user = make_user()
    other = make_user()
    res = client.post("/api/orders", headers=auth_header(user), json=_order(other.id))
    assert res.status_code == 403


def test_orders_are_listed_per_user_and_fully_for_admin(client, make_user, auth_header):
    alice = make_user()
    bob = make_user()
    admin = make_user(role="admin")
    client.post("/api/orders", headers=auth_header(alice), json=_order(alice.id))
    client.post("/api/orders", headers=auth_header(bob), json=_order(bob.id))

    mine = client.get("/api/orders", headers=auth_header(alice)).json()["data"]
    assert [o["user_id"] for o in mine] == [str(alice.id)]

    everything = client.get("/api/orders", headers=auth_header(admin)).json()["data"]
    assert len(everything) == 2

    bobs_order = client.get("/api/orders", headers=auth_header(bob)).json()["data"][0]
    assert client.get(f"/api/orders/{bobs_order['id']}", headers=auth_header(alice)).status_code == 403
    assert client.get(f"/api/orders/{bobs_order['id']}", headers=auth_header(bob)).status_code == 200


def test_admin_patches_and_deletes_orders(client, make_user, auth_header):
    user = make_user()
    admin = make_user(role="admin")
    order_id = client.post("/api/orders", headers=auth_header(user), json=_order(user.id)).json()["data"]["id"]

    assert client.put(f"/api/orders/{order_id}", headers=auth_header(user), json={"status": "paid"}).status_code == 403

    res = client.put(f"/api/orders/{order_id}", headers=auth_header(admin), json={})
    assert res.status_code == 400
    assert res.json()["message"] == "No update fields provided"

    res = client.put(f"/api/orders/{order_id}", headers=auth_header(admin),
                     json={"status": "shipped", "order_type": "PICKUP"})
    assert res.status_code == 200

    order = client.get(f"/api/orders/{order_id}", headers=auth_header(user)).json()["data"]
    assert order["status"] == "shipped"
    assert order["order_type"] == "pickup"

    assert client.delete(f"/api/orders/{order_id}", headers=auth_header(admin)).status_code == 200
    assert client.get(f"/api/orders/{order_id}", headers=auth_header(admin)).status_code == 404
    assert client.get("/api/orders/abc", headers=auth_header(admin)).status_code == 400


def test_order_is_reported_created_when_audit_table_is_gone(client, engine, make_user, make_product, auth_header):
    user = make_user()
    product = make_product(price=10.0)
    header = auth_header(user)
    client.post(f"/api/carts/{user.id}/items", headers=header,
                json={"product_id": str(product.id), "quantity": 2})
    Log.__table__.drop(engine)

    res = client.post("/api/orders", headers=header, json=_order(user.id))

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Order created successfully and cart cleared"
    assert body["data"]["user_id"] == str(user.id)
    assert body["data"]["total_price"] == 20.0

    orders = client.get("/api/orders", headers=header).json()["data"]
    assert [o["id"] for o in orders] == [body["data"]["id"]]


def test_order_user_id_is_parsed_before_ownership_check(client, make_user, auth_header):
    user = make_user()
    header = auth_header(user)

    res = client.post("/api/orders", headers=header, json=_order(f"0{user.id}"))
    assert res.status_code == 201
    assert res.json()["data"]["user_id"] == str(user.id)

    res = client.post("/api/orders", headers=header, json=_order("abc"))
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Invalid user ID", "data": None}
