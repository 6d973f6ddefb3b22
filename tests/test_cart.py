import pytest

CART_URL = "/api/cart"
MUG = "9b2e5c1a-3d4f-4a6b-8c7d-0e1f2a3b4c01"
SHIRT = "9b2e5c1a-3d4f-4a6b-8c7d-0e1f2a3b4c02"
SHIRT_L = "9b2e5c1a-3d4f-4a6b-8c7d-0e1f2a3b4c03"
MISSING = "00000000-0000-4000-8000-000000000000"


@pytest.fixture
def catalog(fake_supabase):
    fake_supabase.tables["products"] = [
        {"id": MUG, "name": "Mug", "price": "12.50", "stock": 3},
        {"id": SHIRT, "name": "Shirt", "price": "20.00", "stock": 0},
    ]
    fake_supabase.tables["variants"] = [
        {"id": SHIRT_L, "product_id": SHIRT, "name": "L", "price": "22.00", "stock": 5},
    ]


def _cart_row(item_id, user_id, quantity, product, variant=None, added_at="2026-01-01T00:00:00Z"):
    return {
        "id": item_id,
        "user_id": user_id,
        "product_id": product["id"],
        "variant_id": variant["id"] if variant else None,
        "quantity": quantity,
        "added_at": added_at,
        "products": product,
        "variants": variant,
    }


def test_cart_totals_use_variant_price_when_present(client, buyer, fake_supabase):
    fake_supabase.tables["cart_items"] = [
        _cart_row("c1", buyer["id"], 2, {"id": MUG, "price": "12.50"}),
        _cart_row("c2", buyer["id"], 1, {"id": SHIRT, "price": "20.00"},
                  {"id": SHIRT_L, "price": "22.00"}, added_at="2026-02-01T00:00:00Z"),
        _cart_row("c3", "someone-else", 9, {"id": MUG, "price": "12.50"}),
    ]
    resp = client.get(CART_URL, headers=buyer["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert [item["id"] for item in body["items"]] == ["c2", "c1"]
    assert body["total"] == "47.00"
    assert body["itemCount"] == 3


def test_empty_cart(client, buyer):
    resp = client.get(CART_URL, headers=buyer["headers"])
    assert resp.json() == {"items": [], "total": "0.00", "itemCount": 0}


def test_cart_is_buyer_only(client, seller):
    assert client.get(CART_URL).status_code == 401
    assert client.get(CART_URL, headers=seller["headers"]).status_code == 403


def test_add_creates_then_increments(client, buyer, catalog, fake_supabase):
    resp = client.post(CART_URL, json={"productId": MUG}, headers=buyer["headers"])
    assert resp.status_code == 201
    assert resp.json()["quantity"] == 1

    resp = client.post(CART_URL, json={"productId": MUG, "quantity": 2}, headers=buyer["headers"])
    assert resp.status_code == 200
    assert resp.json()["quantity"] == 3
    assert len(fake_supabase.tables["cart_items"]) == 1


def test_variant_line_is_separate_from_product_line(client, buyer, catalog, fake_supabase):
    resp = client.post(CART_URL, json={"productId": SHIRT, "variantId": SHIRT_L}, headers=buyer["headers"])
    assert resp.status_code == 201
    assert resp.json()["variant_id"] == SHIRT_L


@pytest.mark.parametrize("payload, status, detail", [
    ({"productId": MISSING}, 404, "Product not found"),
    ({"productId": "not-a-uuid"}, 404, "Product not found"),
    ({"productId": SHIRT, "variantId": MISSING}, 404, "Variant not found"),
    ({"productId": MUG, "variantId": SHIRT_L}, 404, "Variant not found"),
    ({"productId": MUG, "quantity": 4}, 400, "Insufficient stock"),
    ({"productId": SHIRT}, 400, "Insufficient stock"),
    ({"productId": SHIRT, "variantId": SHIRT_L, "quantity": 6}, 400, "Insufficient stock for variant"),
])
def test_add_rejections(client, buyer, catalog, fake_supabase, payload, status, detail):
    resp = client.post(CART_URL, json=payload, headers=buyer["headers"])
    assert resp.status_code == status
    assert resp.json()["detail"] == detail
    assert fake_supabase.tables.get("cart_items", []) == []


def test_add_rejects_non_positive_quantity(client, buyer, catalog):
    resp = client.post(CART_URL, json={"productId": MUG, "quantity": 0}, headers=buyer["headers"])
    assert resp.status_code == 400
    assert [e["field"] for e in resp.json()["errors"]] == ["quantity"]


@pytest.fixture
def line(client, buyer, catalog):
    return client.post(CART_URL, json={"productId": MUG}, headers=buyer["headers"]).json()


def test_update_quantity(client, buyer, line):
    resp = client.patch(f"{CART_URL}/{line['id']}", json={"quantity": 3}, headers=buyer["headers"])
    assert resp.status_code == 200
    assert resp.json()["quantity"] == 3


def test_update_beyond_stock_is_rejected(client, buyer, line, fake_supabase):
    resp = client.patch(f"{CART_URL}/{line['id']}", json={"quantity": 4}, headers=buyer["headers"])
    assert resp.status_code == 400
    assert fake_supabase.tables["cart_items"][0]["quantity"] == 1


def test_other_buyers_line_is_forbidden(client, line, create_user):
    other = create_user(role="BUYER")
    url = f"{CART_URL}/{line['id']}"
    assert client.patch(url, json={"quantity": 2}, headers=other["headers"]).status_code == 403
    assert client.delete(url, headers=other["headers"]).status_code == 403


@pytest.mark.parametrize("item_id", [MISSING, "not-a-uuid"])
def test_missing_line_is_not_found(client, buyer, item_id):
    url = f"{CART_URL}/{item_id}"
    assert client.patch(url, json={"quantity": 2}, headers=buyer["headers"]).status_code == 404
    assert client.delete(url, headers=buyer["headers"]).status_code == 404


def test_remove_line(client, buyer, line, fake_supabase):
    resp = client.delete(f"{CART_URL}/{line['id']}", headers=buyer["headers"])
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert fake_supabase.tables["cart_items"] == []


def test_cart_store_failure_is_generic_500(client, buyer, fake_supabase):
    fake_supabase.fail_on = "cart_items"
    resp = client.get(CART_URL, headers=buyer["headers"])
    assert resp.status_code == 500
    assert "connection refused" not in resp.text
