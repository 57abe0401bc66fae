def test_wishlist_add_is_idempotent(user_client, product):
    assert user_client.post("/api/wishlist", json={"product_id": product.id}).json() == {"success": True}
    assert user_client.post("/api/wishlist", json={"product_id": product.id}).status_code == 200

    body = user_client.get("/api/wishlist").json()
    assert len(body["items"]) == 1
    assert body["items"][0]["slug"] == "classic-tee"
    assert body["items"][0]["category_name"] == "Apparel"
    assert body["pagination"]["total"] == 1


def test_wishlist_unknown_product(user_client):
    assert user_client.post("/api/wishlist", json={"product_id": 999}).status_code == 404


def test_wishlist_remove_by_product_and_by_id(user_client, product):
    user_client.post("/api/wishlist", json={"product_id": product.id})
    assert user_client.delete("/api/wishlist", params={"product_id": product.id}).json() == {"success": True}
    assert user_client.get("/api/wishlist").json()["items"] == []

    user_client.post("/api/wishlist", json={"product_id": product.id})
    item_id = user_client.get("/api/wishlist").json()["items"][0]["id"]
    assert user_client.delete(f"/api/wishlist/{item_id}").status_code == 200
    assert user_client.delete(f"/api/wishlist/{item_id}").status_code == 404


def test_wishlist_remove_requires_product_id(user_client):
    assert user_client.delete("/api/wishlist").status_code == 400


def test_wishlist_requires_session(client):
    assert client.get("/api/wishlist").status_code == 401
