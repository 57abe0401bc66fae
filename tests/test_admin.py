from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.exc import OperationalError

from storefront.data.database import get_db
from storefront.data.models import DiscountModel
from storefront.tasks import expire


def test_analytics_overview(user_client, admin_client, product):
    user_client.get(f"/api/products/{product.slug}")
    user_client.post("/api/cart", json={"product_id": product.id, "quantity": 2})
    order = user_client.post("/api/orders", json={"shipping_address": "1 Main St"}).json()["order"]
    admin_client.put(f"/api/orders/{order['id']}", json={"status": "confirmed"})

    r = admin_client.get("/api/analytics")
    assert r.status_code == 200
    body = r.json()

    assert body["overview"]["total_users"] == 1
    assert body["overview"]["total_orders"] == 1
    assert body["overview"]["total_products"] == 1
    assert body["overview"]["views_today"] == 1
    assert Decimal(body["overview"]["total_revenue"]) == Decimal("2000.00")
    assert body["orders_by_status"] == [{"status": "confirmed", "count": 1}]
    assert body["recent_orders"][0]["customer_name"] == "Test User"


def test_analytics_is_admin_only(user_client):
    assert user_client.get("/api/analytics").status_code == 401


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "ok"}


def test_health_reports_database_outage(app, client):
    class BrokenSession:
        def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    app.dependency_overrides[get_db] = lambda: BrokenSession()
    r = client.get("/health")
    assert r.status_code == 503
    assert r.json() == {"status": "degraded", "database": "unavailable"}


def test_expire_task_uses_its_own_session(monkeypatch, db, session_factory, make_discount):
    expired = make_discount(end_date=datetime.now(timezone.utc) - timedelta(days=1))
    monkeypatch.setattr(expire, "SessionLocal", session_factory)

    assert expire.expire_discounts_task.apply().get() == 1

    db.expire_all()
    assert db.get(DiscountModel, expired.id).is_active is False
