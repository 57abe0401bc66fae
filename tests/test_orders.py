import re
from decimal import Decimal
from unittest import mock

from fastapi.testclient import TestClient

from storefront.data.models import (
    AnalyticsEventModel,
    CartItemModel,
    OrderModel,
    ProductModel,
    ProductVariantModel,
    UserModel,
)
from storefront.repos.analytics_repo import AnalyticsRepo
from storefront.services.auth_service import create_token, hash_password
from storefront.services.notification_service import NotificationService
from storefront.utils.settings import AUTH_COOKIE_NAME


def _checkout(client, address="1 Main St"):
    return client.post("/api/orders", json={"shipping_address": address})


def test_checkout_with_percentage_discount(user_client, product, make_discount, db):
    make_discount(discount_value=Decimal("10"))
    user_client.post("/api/cart", json={"product_id": product.id, "quantity": 2})

    r = _checkout(user_client)
    assert r.status_code == 201
    order = r.json()["order"]

    assert Decimal(order["subtotal"]) == Decimal("2000.00")
    assert Decimal(order["discount_applied"]) == Decimal("200.00")
    assert Decimal(order["total_amount"]) == Decimal("1800.00")
    assert order["status"] == "pending"
    assert order["payment_method"] == "cash_on_delivery"
    assert re.fullmatch(r"NC-[0-9A-Z]+-[0-9A-Z]{4}", order["order_number"])

    assert len(order["items"]) == 1
    assert order["items"][0]["quantity"] == 2
    assert Decimal(order["items"][0]["price_at_purchase"]) == Decimal("1000.00")

    db.expire_all()
    assert db.get(ProductModel, product.id).stock_quantity == 3
    assert db.query(CartItemModel).count() == 0


def test_checkout_totals_match_frozen_item_prices(user_client, product):
    medium, xl = product.variants
    user_client.post("/api/cart", json={"product_id": product.id, "variant_id": medium.id, "quantity": 2})
    user_client.post("/api/cart", json={"product_id": product.id, "variant_id": xl.id})

    order = _checkout(user_client).json()["order"]

    items_total = sum(Decimal(i["price_at_purchase"]) * i["quantity"] for i in order["items"])
    assert items_total == Decimal(order["subtotal"]) == Decimal("3100.00")
    assert Decimal(order["discount_applied"]) == Decimal("0")
    assert Decimal(order["total_amount"]) == Decimal("3100.00")


def test_checkout_decrements_variant_stock(user_client, product, db):
    medium = product.variants[0]
    user_client.post("/api/cart", json={"product_id": product.id, "variant_id": medium.id, "quantity": 2})

    assert _checkout(user_client).status_code == 201

    db.expire_all()
    assert db.get(ProductVariantModel, medium.id).stock_quantity == 1
    assert db.get(ProductModel, product.id).stock_quantity == 3


def test_checkout_with_empty_cart(user_client):
    r = _checkout(user_client)
    assert r.status_code == 400
    assert r.json()["detail"] == "Cart is empty"


def test_checkout_requires_address(user_client, product):
    user_client.post("/api/cart", json={"product_id": product.id})
    assert user_client.post("/api/orders", json={"shipping_address": ""}).status_code == 400


def test_insufficient_stock_rolls_everything_back(user_client, product, db):
    user_client.post("/api/cart", json={"product_id": product.id, "quantity": 6})

    r = _checkout(user_client)
    assert r.status_code == 409

    db.expire_all()
    assert db.query(OrderModel).count() == 0
    assert db.get(ProductModel, product.id).stock_quantity == 5
    assert user_client.get("/api/cart").json()["items"][0]["quantity"] == 6


def test_variant_shortage_keeps_product_stock(user_client, product, db):
    xl = product.variants[1]
    user_client.post("/api/cart", json={"product_id": product.id, "variant_id": xl.id, "quantity": 2})

    assert _checkout(user_client).status_code == 409

    db.expire_all()
    assert db.get(ProductModel, product.id).stock_quantity == 5
    assert db.get(ProductVariantModel, xl.id).stock_quantity == 1
    assert db.query(OrderModel).count() == 0


def test_notification_failure_does_not_fail_checkout(user_client, product):
    user_client.post("/api/cart", json={"product_id": product.id})
    with mock.patch.object(
        NotificationService, "send_order_notification", side_effect=ConnectionError("broker down")
    ):
        r = _checkout(user_client)
    assert r.status_code == 201


def test_checkout_writes_purchase_event_per_line(user_client, product, db):
    medium, xl = product.variants
    user_client.post("/api/cart", json={"product_id": product.id, "variant_id": medium.id, "quantity": 2})
    user_client.post("/api/cart", json={"product_id": product.id, "variant_id": xl.id})

    order = _checkout(user_client).json()["order"]

    events = db.query(AnalyticsEventModel).filter_by(event_type="purchase").order_by(AnalyticsEventModel.id).all()
    assert len(events) == 2
    assert all(e.product_id == product.id for e in events)
    assert sorted(e.event_data["quantity"] for e in events) == [1, 2]
    assert {e.event_data["order_id"] for e in events} == {order["id"]}


def test_analytics_failure_does_not_fail_checkout(user_client, product, db):
    user_client.post("/api/cart", json={"product_id": product.id})
    with mock.patch.object(AnalyticsRepo, "add_event", side_effect=RuntimeError("analytics down")):
        r = _checkout(user_client)
    assert r.status_code == 201

    db.expire_all()
    assert db.query(OrderModel).count() == 1
    assert db.query(AnalyticsEventModel).filter_by(event_type="purchase").count() == 0


def test_list_and_get_own_orders(user_client, admin_client, product):
    user_client.post("/api/cart", json={"product_id": product.id})
    order = _checkout(user_client).json()["order"]

    r = user_client.get("/api/orders")
    assert r.status_code == 200
    body = r.json()
    assert [o["id"] for o in body["orders"]] == [order["id"]]
    assert body["pagination"]["total"] == 1
    assert body["orders"][0]["customer_email"] is None

    assert user_client.get(f"/api/orders/{order['order_number']}").json()["order"]["id"] == order["id"]
    assert user_client.get(f"/api/orders/{order['id']}").status_code == 200

    # admin sees everything, with customer details
    r = admin_client.get("/api/orders", params={"status": "pending"})
    assert r.json()["orders"][0]["customer_email"] == "customer@example.com"


def test_other_users_order_is_not_found(app, user_client, product, db):
    user_client.post("/api/cart", json={"product_id": product.id})
    order = _checkout(user_client).json()["order"]

    other_user = UserModel(email="other@example.com", password_hash=hash_password("secret123"), name="Other")
    db.add(other_user)
    db.commit()
    other = TestClient(app)
    other.cookies.set(AUTH_COOKIE_NAME, create_token(other_user.id))

    assert other.get(f"/api/orders/{order['id']}").status_code == 404
    assert other.get(f"/api/orders/{order['order_number']}").status_code == 404
    assert other.get("/api/orders").json()["orders"] == []



def test_admin_updates_status(user_client, admin_client, product, db):
    user_client.post("/api/cart", json={"product_id": product.id})
    order = _checkout(user_client).json()["order"]

    r = admin_client.put(f"/api/orders/{order['id']}", json={"status": "shipped"})
    assert r.status_code == 200
    assert r.json()["order"]["status"] == "shipped"

    r = admin_client.put(f"/api/orders/{order['id']}", json={"status": "bogus"})
    assert r.status_code == 400

    db.expire_all()
    assert db.get(OrderModel, order["id"]).status == "shipped"

    assert admin_client.put("/api/orders/9999", json={"status": "shipped"}).status_code == 404


def test_customer_cannot_update_status(user_client, product):
    user_client.post("/api/cart", json={"product_id": product.id})
    order = _checkout(user_client).json()["order"]
    assert user_client.put(f"/api/orders/{order['id']}", json={"status": "cancelled"}).status_code == 401


def test_invalid_status_filter(user_client):
    assert user_client.get("/api/orders", params={"status": "lost"}).status_code == 400
