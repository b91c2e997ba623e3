import pytest
from fastapi.testclient import TestClient

from shopcenter.api import create_app
from shopcenter.utils.settings import ConfigError
from tests.factories import FakeGenerator, make_product, make_user

ADDRESS = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "address": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "US",
}


def as_user(user):
    return {"X-User-Id": user.id}


@pytest.fixture
def customer(app_db):
    return make_user(app_db, "cust-1")


@pytest.fixture
def admin(app_db):
    return make_user(app_db, "admin-1", role="admin")


def test_create_app_requires_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with pytest.raises(ConfigError):
        create_app()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_user_upsert_and_me(client):
    resp = client.post("/users/", json={"id": "idp-42", "email": "a@example.com", "first_name": "Ada"})
    assert resp.status_code == 200
    assert resp.json()["role"] == "customer"

    client.post("/users/", json={"id": "idp-42", "email": "a@example.com", "first_name": "Augusta"})
    me = client.get("/users/me", headers={"X-User-Id": "idp-42"}).json()
    assert me["first_name"] == "Augusta"


def test_identity_is_required(client):
    assert client.get("/cart/").status_code == 401
    assert client.get("/cart/", headers={"X-User-Id": "ghost"}).status_code == 401


def test_admin_routes_reject_customers(client, customer):
    assert client.get("/admin/stats", headers=as_user(customer)).status_code == 403
    payload = {"name": "Lamp", "slug": "lamp", "price": "30.00"}
    assert client.post("/products/", json=payload, headers=as_user(customer)).status_code == 403


def test_product_listing_over_http(client, app_db):
    make_product(app_db, "Kettle", price="20.00", brand="Acme")
    make_product(app_db, "Mug", price="5.00")
    make_product(app_db, "Old", price="7.00", is_active=False)

    resp = client.get("/products/", params={"sort_by": "price", "sort_order": "desc", "limit": 1})
    body = resp.json()

    assert resp.status_code == 200
    assert body["total"] == 2
    assert [p["name"] for p in body["products"]] == ["Kettle"]
    assert body["products"][0]["price"] == "20.00"

    assert client.get("/products/", params={"min_price": -1}).status_code == 422
    assert client.get("/products/slug/missing").status_code == 404


def test_admin_product_crud_and_unfiltered_listing(client, admin):
    created = client.post(
        "/products/",
        json={"name": "Lamp", "slug": "lamp", "price": "30.00", "is_active": False},
        headers=as_user(admin),
    )
    assert created.status_code == 201
    product_id = created.json()["id"]

    assert client.get("/products/").json()["total"] == 0
    assert client.get("/admin/products", headers=as_user(admin)).json()["total"] == 1

    updated = client.put(f"/products/{product_id}", json={"is_active": True}, headers=as_user(admin))
    assert updated.json()["is_active"] is True

    duplicate = client.post(
        "/products/", json={"name": "Lamp 2", "slug": "lamp", "price": "1.00"}, headers=as_user(admin)
    )
    assert duplicate.status_code == 409

    assert client.delete(f"/products/{product_id}", headers=as_user(admin)).status_code == 204
    assert client.get(f"/products/{product_id}").status_code == 404


def test_cart_checkout_and_order_lifecycle(client, app_db, customer, admin):
    kettle = make_product(app_db, "Kettle", price="15.00", stock=5)
    headers = as_user(customer)

    client.post("/cart/", json={"product_id": kettle.id, "quantity": 1}, headers=headers)
    cart = client.post("/cart/", json={"product_id": kettle.id, "quantity": 1}, headers=headers).json()
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 2
    assert cart["total"] == "32.40"

    placed = client.post(
        "/orders/",
        json={"shipping_address": ADDRESS, "payment_method": "card"},
        headers=headers,
    )
    assert placed.status_code == 201
    order = placed.json()
    assert order["total"] == "32.40"
    assert order["billing_address"] == ADDRESS
    assert order["items"][0]["price"] == "15.00"

    assert client.get("/cart/", headers=headers).json()["items"] == []
    assert client.post(
        "/orders/", json={"shipping_address": ADDRESS, "payment_method": "card"}, headers=headers
    ).status_code == 400

    mine = client.get("/orders/", headers=headers).json()
    assert mine["total"] == 1

    status_url = f"/orders/{order['id']}/status"
    assert client.put(status_url, json={"status": "shipped"}, headers=headers).status_code == 403
    assert client.put(status_url, json={"status": "shipped"}, headers=as_user(admin)).json()["status"] == "shipped"
    assert client.put(status_url, json={"status": "pending"}, headers=as_user(admin)).status_code == 409
    assert client.put(status_url, json={"status": "lost"}, headers=as_user(admin)).status_code == 422

    client.put(f"/orders/{order['id']}/payment", json={"payment_status": "paid"}, headers=as_user(admin))
    stats = client.get("/admin/stats", headers=as_user(admin)).json()
    assert stats["total_sales"] == "32.40"
    assert stats["total_orders"] == 1
    assert stats["top_products"][0]["sold_count"] == 2


def test_orders_are_private(client, app_db, customer):
    other = make_user(app_db, "cust-2")
    product = make_product(app_db, stock=5)
    client.post("/cart/", json={"product_id": product.id}, headers=as_user(other))
    order = client.post(
        "/orders/", json={"shipping_address": ADDRESS, "payment_method": "card"}, headers=as_user(other)
    ).json()

    assert client.get(f"/orders/{order['id']}", headers=as_user(customer)).status_code == 403
    assert client.get("/orders/", headers=as_user(customer)).json()["total"] == 0
    assert client.get("/orders/9999", headers=as_user(customer)).status_code == 404


def test_reviews_and_wishlist_over_http(client, app_db, customer):
    product = make_product(app_db)
    headers = as_user(customer)

    review = client.post(f"/products/{product.id}/reviews/", json={"rating": 4, "title": "Nice"}, headers=headers)
    assert review.status_code == 201
    assert review.json()["user"]["id"] == customer.id
    assert client.post(f"/products/{product.id}/reviews/", json={"rating": 9}, headers=headers).status_code == 422
    assert len(client.get(f"/products/{product.id}/reviews/").json()) == 1

    client.post("/wishlist/", json={"product_id": product.id}, headers=headers)
    wishlist = client.post("/wishlist/", json={"product_id": product.id}, headers=headers).json()
    assert len(wishlist) == 1
    assert client.delete(f"/wishlist/{product.id}", headers=headers).status_code == 204
    assert client.delete(f"/wishlist/{product.id}", headers=headers).status_code == 404


def test_assistant_endpoints(client, app_db, generator):
    make_product(app_db, "Kettle")

    chat = client.post("/assistant/chat", json={"message": "hi", "history": [{"role": "user", "content": "yo"}]})
    assert chat.json() == {"response": generator.reply}

    recs = client.post("/assistant/recommendations", json={"query": "kettle"}).json()
    assert [p["name"] for p in recs] == ["Kettle"]


def test_assistant_degrades_when_generator_fails(settings):
    app = create_app(settings, generator=FakeGenerator(error=TimeoutError("slow")))

    resp = TestClient(app).post("/assistant/chat", json={"message": "hi"})

    assert resp.status_code == 200
    assert resp.json()["response"].startswith("I'm having trouble")
