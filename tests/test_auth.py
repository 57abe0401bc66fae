from datetime import datetime, timedelta, timezone
from decimal import Decimal

import jwt

from storefront.services.auth_service import create_token, verify_token
from storefront.utils.settings import AUTH_COOKIE_NAME, JWT_ALGORITHM, JWT_SECRET


def test_signup_sets_cookie_and_me_returns_user(client):
    r = client.post(
        "/api/auth/signup",
        json={"email": "New@Example.com", "password": "secret123", "name": "New"},
    )
    assert r.status_code == 200
    assert r.json()["user"]["email"] == "new@example.com"
    assert r.json()["user"]["role"] == "customer"
    assert "password_hash" not in r.json()["user"]
    assert AUTH_COOKIE_NAME in r.cookies

    r = client.get("/api/auth/me")
    assert r.json()["user"]["name"] == "New"


def test_signup_rejects_duplicate_and_short_password(client, user):
    r = client.post(
        "/api/auth/signup",
        json={"email": "customer@example.com", "password": "secret123", "name": "Dup"},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Email already registered"

    r = client.post("/api/auth/signup", json={"email": "x@example.com", "password": "123", "name": "X"})
    assert r.status_code == 400


def test_signin(client, user):
    r = client.post("/api/auth/signin", json={"email": "CUSTOMER@example.com", "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["user"]["id"] == user.id

    r = client.post("/api/auth/signin", json={"email": "customer@example.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid email or password"

    r = client.post("/api/auth/signin", json={"email": "nobody@example.com", "password": "secret123"})
    assert r.status_code == 401


def test_signout_clears_session(client, user):
    client.post("/api/auth/signin", json={"email": "customer@example.com", "password": "secret123"})
    assert client.get("/api/auth/me").json()["user"] is not None

    r = client.post("/api/auth/signout")
    assert r.json() == {"success": True}
    assert client.get("/api/auth/me").json()["user"] is None


def test_bearer_header_is_accepted(client, user):
    r = client.get("/api/cart", headers={"Authorization": f"Bearer {create_token(user.id)}"})
    assert r.status_code == 200


def test_bad_tokens_mean_no_session(client, user):
    expired = jwt.encode(
        {"userId": str(user.id), "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        JWT_SECRET,
        algorithm=JWT_ALGORITHM,
    )
    forged = jwt.encode({"userId": str(user.id)}, "not-the-secret", algorithm=JWT_ALGORITHM)

    for token in (expired, forged, "garbage"):
        r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert r.json()["user"] is None
    assert verify_token(forged) is None


def test_profile_update(user_client):
    r = user_client.put("/api/users/profile", json={"city": "Warsaw", "phone": "123"})
    assert r.status_code == 200
    assert r.json()["user"]["city"] == "Warsaw"
    assert user_client.get("/api/users/profile").json()["user"]["phone"] == "123"


def test_admin_user_management(admin_client, admin, user):
    r = admin_client.get("/api/users", params={"role": "customer"})
    assert [u["id"] for u in r.json()["users"]] == [user.id]
    assert r.json()["pagination"]["total"] == 1

    r = admin_client.put(f"/api/users/{user.id}", json={"role": "admin"})
    assert r.json()["user"]["role"] == "admin"

    assert admin_client.delete(f"/api/users/{admin.id}").status_code == 400
    assert admin_client.delete(f"/api/users/{user.id}").json() == {"success": True}
    assert admin_client.get(f"/api/users/{user.id}").status_code == 404


def test_customer_cannot_manage_users(user_client):
    assert user_client.get("/api/users").status_code == 401


def test_profile_null_clears_optional_fields(user_client):
    user_client.put("/api/users/profile", json={"city": "Warsaw", "phone": "123"})

    r = user_client.put("/api/users/profile", json={"phone": None, "name": None})
    body = r.json()["user"]
    assert body["phone"] is None
    assert body["city"] == "Warsaw"
    assert body["name"] == "Test User"


def test_admin_user_search(admin_client, admin, user):
    by_name = admin_client.get("/api/users", params={"search": "test us"}).json()
    assert [u["email"] for u in by_name["users"]] == ["customer@example.com"]
    assert by_name["pagination"]["total"] == 1

    by_email = admin_client.get("/api/users", params={"search": "ADMIN@"}).json()["users"]
    assert [u["id"] for u in by_email] == [admin.id]

    assert admin_client.get("/api/users", params={"search": "nobody"}).json()["users"] == []


def test_admin_user_list_has_order_totals(admin_client, admin, user_client, user, product):
    user_client.post("/api/cart", json={"product_id": product.id, "quantity": 2})
    user_client.post("/api/orders", json={"shipping_address": "1 Main St"})
    user_client.post("/api/cart", json={"product_id": product.id})
    user_client.post("/api/orders", json={"shipping_address": "1 Main St"})

    users = {u["id"]: u for u in admin_client.get("/api/users").json()["users"]}
    assert users[user.id]["order_count"] == 2
    assert Decimal(users[user.id]["total_spent"]) == Decimal("3000.00")
    assert users[admin.id]["order_count"] == 0
    assert Decimal(users[admin.id]["total_spent"]) == Decimal("0")
