from decimal import Decimal

import pytest

from storefront.data.models import BannerModel, BundleModel, ProductModel


def _brand(**overrides):
    payload = {"name": "Northcoast", "slug": "northcoast", "contact_email": "hello@northcoast.com"}
    payload.update(overrides)
    return payload


@pytest.fixture
def cap(db, category):
    cap = ProductModel(
        category_id=category.id,
        name="Logo Cap",
        slug="logo-cap",
        original_price=Decimal("600.00"),
        current_price=Decimal("500.00"),
        stock_quantity=10,
    )
    db.add(cap)
    db.commit()
    db.refresh(cap)
    return cap


# brands

def test_brand_crud(client, admin_client):
    r = admin_client.post("/api/brands", json=_brand())
    assert r.status_code == 201
    brand = r.json()["brand"]
    assert brand["is_active"] is True
    assert brand["is_featured"] is False

    assert admin_client.post("/api/brands", json=_brand(name="Copy")).status_code == 409

    r = admin_client.put(f"/api/brands/{brand['id']}", json={"website_url": "https://northcoast.example"})
    assert r.json()["brand"]["website_url"] == "https://northcoast.example"

    r = admin_client.put(f"/api/brands/{brand['id']}", json={"website_url": None, "name": None})
    assert r.json()["brand"]["website_url"] is None
    assert r.json()["brand"]["name"] == "Northcoast"

    assert client.get(f"/api/brands/{brand['id']}").json()["brand"]["slug"] == "northcoast"
    assert admin_client.delete(f"/api/brands/{brand['id']}").json() == {"success": True}
    assert client.get(f"/api/brands/{brand['id']}").status_code == 404


def test_brands_listed_featured_first_then_by_name(client, admin_client):
    admin_client.post("/api/brands", json=_brand(name="Zeta", slug="zeta"))
    admin_client.post("/api/brands", json=_brand(name="Alpha", slug="alpha"))
    admin_client.post("/api/brands", json=_brand(name="Mid", slug="mid", is_featured=True))

    names = [b["name"] for b in client.get("/api/brands").json()["brands"]]
    assert names == ["Mid", "Alpha", "Zeta"]


def test_deleting_brand_keeps_products(client, admin_client, product):
    brand = admin_client.post("/api/brands", json=_brand()).json()["brand"]
    admin_client.put(f"/api/products/{product.id}", json={"brand_id": brand["id"]})

    admin_client.delete(f"/api/brands/{brand['id']}")
    body = client.get(f"/api/products/{product.id}").json()["product"]
    assert body["brand_id"] is None


def test_brand_writes_require_admin(user_client):
    assert user_client.post("/api/brands", json=_brand()).status_code == 401
    assert user_client.delete("/api/brands/1").status_code == 401


# bundles

def _bundle(product, cap, **overrides):
    payload = {
        "name": "Weekend Set",
        "slug": "weekend-set",
        "bundle_price": "2200.00",
        "items": [{"product_id": product.id, "quantity": 2}, {"product_id": cap.id}],
    }
    payload.update(overrides)
    return payload


def test_create_bundle_with_items(client, admin_client, product, cap):
    r = admin_client.post("/api/bundles", json=_bundle(product, cap))
    assert r.status_code == 201
    bundle = r.json()["bundle"]
    assert [(i["product_name"], i["quantity"]) for i in bundle["items"]] == [("Classic Tee", 2), ("Logo Cap", 1)]
    # 2 x 1000.00 + 1 x 500.00
    assert Decimal(bundle["original_price"]) == Decimal("2500.00")
    assert Decimal(bundle["bundle_price"]) == Decimal("2200.00")

    by_slug = client.get("/api/bundles/weekend-set").json()["bundle"]
    assert by_slug["id"] == bundle["id"]
    assert client.get(f"/api/bundles/{bundle['id']}").status_code == 200
    assert client.get("/api/bundles/missing").status_code == 404


def test_bundle_original_price_follows_live_prices(client, admin_client, db, product, cap):
    bundle = admin_client.post("/api/bundles", json=_bundle(product, cap)).json()["bundle"]

    db.get(ProductModel, cap.id).current_price = Decimal("400.00")
    db.commit()

    body = client.get(f"/api/bundles/{bundle['id']}").json()["bundle"]
    assert Decimal(body["original_price"]) == Decimal("2400.00")


def test_bundle_rejects_unknown_or_repeated_products(admin_client, product, cap):
    payload = _bundle(product, cap, items=[{"product_id": 999}])
    assert admin_client.post("/api/bundles", json=payload).status_code == 404

    payload = _bundle(product, cap, items=[{"product_id": cap.id}, {"product_id": cap.id, "quantity": 3}])
    assert admin_client.post("/api/bundles", json=payload).status_code == 400

    admin_client.post("/api/bundles", json=_bundle(product, cap))
    assert admin_client.post("/api/bundles", json=_bundle(product, cap)).status_code == 409


def test_public_listing_shows_active_bundles_only(client, admin_client, product, cap):
    admin_client.post("/api/bundles", json=_bundle(product, cap))
    hidden = admin_client.post(
        "/api/bundles", json=_bundle(product, cap, name="Old Set", slug="old-set", is_active=False)
    ).json()["bundle"]

    assert [b["slug"] for b in client.get("/api/bundles").json()["bundles"]] == ["weekend-set"]
    # a direct lookup still works
    assert client.get(f"/api/bundles/{hidden['id']}").json()["bundle"]["is_active"] is False


def test_update_and_delete_bundle(admin_client, db, product, cap):
    bundle = admin_client.post("/api/bundles", json=_bundle(product, cap)).json()["bundle"]

    r = admin_client.put(f"/api/bundles/{bundle['id']}", json={"bundle_price": "2000.00", "description": "Two tees"})
    body = r.json()["bundle"]
    assert Decimal(body["bundle_price"]) == Decimal("2000.00")
    assert body["description"] == "Two tees"
    assert len(body["items"]) == 2

    assert admin_client.put("/api/bundles/999", json={"name": "X"}).status_code == 404
    assert admin_client.delete(f"/api/bundles/{bundle['id']}").json() == {"success": True}
    db.expire_all()
    assert db.query(BundleModel).count() == 0


def test_add_item_upserts_quantity(client, admin_client, product, cap):
    bundle = admin_client.post("/api/bundles", json=_bundle(product, cap, items=[])).json()["bundle"]
    assert bundle["items"] == []
    assert Decimal(bundle["original_price"]) == Decimal("0")

    r = admin_client.post(f"/api/bundles/{bundle['id']}/items", json={"product_id": cap.id, "quantity": 2})
    assert r.status_code == 200
    item = r.json()["item"]
    assert item["product_name"] == "Logo Cap"
    assert Decimal(item["product_price"]) == Decimal("500.00")

    again = admin_client.post(f"/api/bundles/{bundle['id']}/items", json={"product_id": cap.id, "quantity": 5})
    assert again.json()["item"]["id"] == item["id"]
    assert again.json()["item"]["quantity"] == 5

    body = client.get(f"/api/bundles/{bundle['id']}").json()["bundle"]
    assert [(i["product_id"], i["quantity"]) for i in body["items"]] == [(cap.id, 5)]

    assert admin_client.post(f"/api/bundles/{bundle['id']}/items", json={"product_id": 999}).status_code == 404
    assert admin_client.post("/api/bundles/999/items", json={"product_id": cap.id}).status_code == 404


def test_remove_item(client, admin_client, product, cap):
    bundle = admin_client.post("/api/bundles", json=_bundle(product, cap)).json()["bundle"]
    other = admin_client.post(
        "/api/bundles", json=_bundle(product, cap, name="Other", slug="other")
    ).json()["bundle"]
    tee_item = bundle["items"][0]

    # item of another bundle
    assert admin_client.delete(f"/api/bundles/{other['id']}/items/{tee_item['id']}").status_code == 404

    assert admin_client.delete(f"/api/bundles/{bundle['id']}/items/{tee_item['id']}").json() == {"success": True}
    body = client.get(f"/api/bundles/{bundle['id']}").json()["bundle"]
    assert [i["product_id"] for i in body["items"]] == [cap.id]
    assert Decimal(body["original_price"]) == Decimal("500.00")


def test_bundle_writes_require_admin(user_client, product, cap):
    assert user_client.post("/api/bundles", json=_bundle(product, cap)).status_code == 401
    assert user_client.post("/api/bundles/1/items", json={"product_id": cap.id}).status_code == 401


# banners

def _banner(**overrides):
    payload = {"title": "Summer", "image_url": "/images/summer.jpg"}
    payload.update(overrides)
    return payload


def test_banners_sorted_and_filtered(client, admin_client):
    admin_client.post("/api/banners", json=_banner(title="Third", sort_order=3))
    admin_client.post("/api/banners", json=_banner(title="First", sort_order=1))
    admin_client.post("/api/banners", json=_banner(title="Off", sort_order=0, is_active=False))
    admin_client.post("/api/banners", json=_banner(title="Second", sort_order=1))

    titles = [b["title"] for b in client.get("/api/banners").json()["banners"]]
    assert titles == ["Off", "First", "Second", "Third"]

    active = [b["title"] for b in client.get("/api/banners", params={"active": "true"}).json()["banners"]]
    assert active == ["First", "Second", "Third"]


def test_banner_crud(client, admin_client, db):
    assert admin_client.post("/api/banners", json={"title": "No image"}).status_code == 400

    r = admin_client.post("/api/banners", json=_banner(link_url="/products?new=true"))
    assert r.status_code == 201
    banner = r.json()["banner"]
    assert banner["sort_order"] == 0

    r = admin_client.put(f"/api/banners/{banner['id']}", json={"link_url": None, "sort_order": 4, "image_url": None})
    body = r.json()["banner"]
    assert body["link_url"] is None
    assert body["sort_order"] == 4
    assert body["image_url"] == "/images/summer.jpg"

    assert client.get(f"/api/banners/{banner['id']}").json()["banner"]["title"] == "Summer"
    assert admin_client.delete(f"/api/banners/{banner['id']}").json() == {"success": True}
    assert client.get(f"/api/banners/{banner['id']}").status_code == 404
    assert db.query(BannerModel).count() == 0


def test_banner_writes_require_admin(user_client):
    assert user_client.post("/api/banners", json=_banner()).status_code == 401


def test_deleting_product_drops_it_from_bundles(client, admin_client, product, cap):
    bundle = admin_client.post("/api/bundles", json=_bundle(product, cap)).json()["bundle"]

    assert admin_client.delete(f"/api/products/{cap.id}").status_code == 200
    body = client.get(f"/api/bundles/{bundle['id']}").json()["bundle"]
    assert [i["product_id"] for i in body["items"]] == [product.id]
