from storefront.db.seed import DEMO_BEARER_TOKEN

AUTH = {"Authorization": f"Bearer {DEMO_BEARER_TOKEN}"}


def _guest_cart_with(api, *lines):
    cart = api.get("/api/cart").json()["data"]
    for product_id, qty in lines:
        r = api.post(
            f"/api/cart/{cart['id']}/items",
            params={"guestToken": cart["guestToken"]},
            json={"productId": product_id, "quantity": qty},
        )
        assert r.status_code == 200
    return cart


def test_orders_require_bearer(api):
    cart = _guest_cart_with(api, ("p-tomato-seed", 1))
    r = api.post("/api/orders", json={"cartId": cart["id"]})
    assert r.status_code == 401
    assert r.json() == {"success": False, "message": "Authentication required"}


def test_addresses_require_bearer(api):
    assert api.get("/api/address").status_code == 401
    body = api.get("/api/address", headers=AUTH).json()
    assert body["success"] is True
    home = next(a for a in body["data"] if a["isDefault"])
    assert home["fullName"] == "Demo Customer"
    assert home["postalCode"] == "3143614361"


def test_checkout_success_and_no_duplicate(api):
    cart = _guest_cart_with(api, ("p-organic-fertilizer", 2), ("p-wheat-seed", 1))

    r = api.post("/api/orders", json={"cartId": cart["id"]}, headers=AUTH)
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["data"]["total"] == 758500
    assert body["data"]["orderNumber"].startswith("ORD-")

    # same cart again -> refused, no second order
    r2 = api.post("/api/orders", json={"cartId": cart["id"]}, headers=AUTH)
    assert r2.status_code == 409
    assert r2.json()["message"] == "Cart already checked out"


def test_empty_cart_cannot_be_ordered(api):
    cart = _guest_cart_with(api)
    r = api.post("/api/orders", json={"cartId": cart["id"]}, headers=AUTH)
    assert r.status_code == 400
    assert r.json()["message"] == "Cart is empty"


def test_bad_quantity_is_rejected(api):
    cart = _guest_cart_with(api, ("p-tomato-seed", 1))
    item_id = api.get("/api/cart", params={"guestToken": cart["guestToken"]}).json()["data"]["items"][0]["id"]
    r = api.put(
        f"/api/cart/items/{item_id}",
        params={"guestToken": cart["guestToken"]},
        json={"quantity": 0},
    )
    assert r.status_code == 400
    assert r.json()["success"] is False
