"""HTTP tests for the admin back-office and the public catalog."""

import inspect
import uuid
from decimal import Decimal

import pytest

from storefront.api.routers import admin as admin_router
from helpers import ADMIN_HEADERS

PERSONAL = {"first_name": "Olena", "last_name": "Shevchenko", "email": "olena@ukr.net", "phone": "0501234567"}


@pytest.fixture
def admin(client):
    client.headers.update(ADMIN_HEADERS)
    return client


def place_order(client, product_id, personal=PERSONAL):
    session_id = client.post("/carts/").json()["session_id"]
    client.post(f"/carts/{session_id}/items", json={"product_id": str(product_id), "quantity": 1})
    client.post(f"/carts/{session_id}/checkout/personal", json=personal)
    client.post(f"/carts/{session_id}/checkout/delivery", json={"method": "selfpickup", "city": "Kyiv"})
    resp = client.post(f"/carts/{session_id}/checkout/payment", json={"payment": {"method": "cash"}})
    assert resp.status_code == 201
    return resp.json()


class TestAdminAccess:
    def test_missing_token(self, client):
        assert client.post("/admin/categories", json={"name": "Cakes"}).status_code == 403

    def test_wrong_token(self, client):
        resp = client.get("/admin/orders", headers={"X-Admin-Token": "guess"})
        assert resp.status_code == 403


class TestCategories:
    def test_create_and_read(self, admin):
        resp = admin.post("/admin/categories", json={"name": "Cakes", "description": "Layer cakes"})
        assert resp.status_code == 201
        category_id = resp.json()["id"]

        assert admin.get(f"/categories/{category_id}").json()["name"] == "Cakes"
        assert [c["name"] for c in admin.get("/categories").json()] == ["Cakes"]

    def test_duplicate_name(self, admin, cookies):
        assert admin.post("/admin/categories", json={"name": "Cookies"}).status_code == 400

    def test_rename(self, admin, cookies):
        category_id = cookies["category"].id

        resp = admin.patch(f"/admin/categories/{category_id}", json={"name": "Biscuits"})

        assert resp.status_code == 200
        assert resp.json()["name"] == "Biscuits"
        assert resp.json()["description"] == "Butter cookies"

    def test_update_missing(self, admin):
        assert admin.patch(f"/admin/categories/{uuid.uuid4()}", json={"name": "X"}).status_code == 404

    def test_image_upload_and_delete(self, admin, storage, cookies):
        category_id = cookies["category"].id

        resp = admin.post(
            f"/admin/categories/{category_id}/image",
            files={"file": ("cookie tray.png", b"png-bytes", "image/png")},
        )

        assert resp.status_code == 200
        url = resp.json()["url"]
        bucket, path, data, content_type = storage.uploaded[0]
        assert bucket == "categories"
        assert path.endswith("-cookie-tray.png")
        assert data == b"png-bytes"
        assert content_type == "image/png"
        assert admin.get(f"/categories/{category_id}").json()["image"] == url

        assert admin.delete(f"/admin/categories/{category_id}").status_code == 204
        assert storage.removed == [("categories", [path])]
        assert admin.get(f"/categories/{category_id}").status_code == 404


class TestProducts:
    def test_create_in_category(self, admin, cookies):
        category_id = str(cookies["category"].id)

        resp = admin.post(
            "/admin/products",
            json={"name": "Cookie C", "price": "12.50", "category_id": category_id, "article_number": "CK-3"},
        )

        assert resp.status_code == 201
        assert Decimal(resp.json()["price"]) == Decimal("12.50")
        names = [p["name"] for p in admin.get(f"/categories/{category_id}/products").json()]
        assert names == ["Cookie A", "Cookie B", "Cookie C"]

    def test_unknown_category(self, admin):
        resp = admin.post("/admin/products", json={"name": "Lost", "price": "1.00", "category_id": str(uuid.uuid4())})
        assert resp.status_code == 400

    def test_negative_price(self, admin):
        assert admin.post("/admin/products", json={"name": "Free money", "price": "-1"}).status_code == 422

    def test_update_price(self, admin, cookies):
        resp = admin.patch(f"/admin/products/{cookies['a'].id}", json={"price": "55.00", "in_stock": False})

        assert resp.status_code == 200
        body = admin.get(f"/products/{cookies['a'].id}").json()
        assert Decimal(body["price"]) == Decimal("55.00")
        assert body["in_stock"] is False

    def test_first_upload_is_main_image(self, admin, storage, cookies):
        product_id = cookies["a"].id

        main = admin.post(f"/admin/products/{product_id}/images", files={"file": ("front.png", b"1", "image/png")})
        extra = admin.post(f"/admin/products/{product_id}/images", files={"file": ("side.png", b"2", "image/png")})

        body = admin.get(f"/products/{product_id}").json()
        assert body["image"] == main.json()["url"]
        assert body["additional_images"] == [extra.json()["url"]]
        assert [u[0] for u in storage.uploaded] == ["products", "products"]

    def test_delete_removes_all_images(self, admin, storage, cookies):
        product_id = cookies["b"].id
        admin.post(f"/admin/products/{product_id}/images", files={"file": ("front.png", b"1", "image/png")})
        admin.post(f"/admin/products/{product_id}/images", files={"file": ("side.png", b"2", "image/png")})

        assert admin.delete(f"/admin/products/{product_id}").status_code == 204

        assert len(storage.removed) == 1
        bucket, paths = storage.removed[0]
        assert bucket == "products"
        assert len(paths) == 2
        assert admin.get(f"/products/{product_id}").status_code == 404

    def test_delete_missing(self, admin):
        assert admin.delete(f"/admin/products/{uuid.uuid4()}").status_code == 404

    def test_public_listing_filter(self, admin, cookies):
        admin.post("/admin/products", json={"name": "Loose candy", "price": "3.00"})

        assert len(admin.get("/products").json()) == 3
        assert len(admin.get(f"/products?category_id={cookies['category'].id}").json()) == 2


class TestExplicitNulls:
    @pytest.mark.parametrize(
        "field",
        ["name", "price", "in_stock", "additional_images"],
    )
    def test_product_required_field(self, admin, cookies, field):
        resp = admin.patch(f"/admin/products/{cookies['a'].id}", json={field: None})

        assert resp.status_code == 422
        assert Decimal(admin.get(f"/products/{cookies['a'].id}").json()["price"]) == Decimal("50.00")

    def test_product_nullable_field_can_be_cleared(self, admin, cookies):
        admin.patch(f"/admin/products/{cookies['a'].id}", json={"description": "Crunchy"})

        resp = admin.patch(f"/admin/products/{cookies['a'].id}", json={"description": None})

        assert resp.status_code == 200
        assert resp.json()["description"] is None

    def test_category_name(self, admin, cookies):
        resp = admin.patch(f"/admin/categories/{cookies['category'].id}", json={"name": None})
        assert resp.status_code == 422

    @pytest.mark.parametrize("field", ["title", "content", "date"])
    def test_news_required_field(self, admin, field):
        news_id = admin.post("/admin/news", json={"title": "Easter menu", "content": "Paska"}).json()["id"]

        resp = admin.patch(f"/admin/news/{news_id}", json={field: None})

        assert resp.status_code == 422
        assert admin.get(f"/news/{news_id}").json()["title"] == "Easter menu"


class TestProductDetails:
    DETAILS = {
        "weight": "250 g",
        "calories": 450,
        "proteins": 6.5,
        "fats": 21.0,
        "carbs": 58.3,
        "packaging": "Cardboard box",
        "expiration_days": 90,
        "pieces_in_package": 12,
        "storage_conditions": "Dry place, below +25C",
        "ingredients": "Wheat flour, sugar, butter, eggs",
        "manufacturer": "Kyiv Sweets",
    }

    def test_create_with_details(self, admin):
        resp = admin.post("/admin/products", json={"name": "Butter cookies", "price": "80.00", "details": self.DETAILS})

        assert resp.status_code == 201
        body = admin.get(f"/products/{resp.json()['id']}").json()
        assert body["details"] == self.DETAILS

    def test_product_without_details(self, admin, cookies):
        assert admin.get(f"/products/{cookies['a'].id}").json()["details"] is None

    def test_update_replaces_details(self, admin, cookies):
        product_id = cookies["a"].id
        admin.patch(f"/admin/products/{product_id}", json={"details": self.DETAILS})

        resp = admin.patch(f"/admin/products/{product_id}", json={"details": {"weight": "300 g"}})

        details = resp.json()["details"]
        assert details["weight"] == "300 g"
        assert details["calories"] is None

    def test_clear_details(self, admin, cookies):
        product_id = cookies["a"].id
        admin.patch(f"/admin/products/{product_id}", json={"details": self.DETAILS})

        resp = admin.patch(f"/admin/products/{product_id}", json={"details": None})

        assert resp.json()["details"] is None

    def test_negative_nutrition_values(self, admin):
        resp = admin.post(
            "/admin/products",
            json={"name": "Odd", "price": "1.00", "details": {"calories": -10}},
        )
        assert resp.status_code == 422


class TestUploadEndpoints:
    @pytest.mark.parametrize(
        "endpoint",
        [admin_router.upload_category_image, admin_router.upload_product_image, admin_router.upload_news_image],
    )
    def test_run_in_threadpool(self, endpoint):
        # blokujace wywolania storage nie moga trafic na petle zdarzen
        assert not inspect.iscoroutinefunction(endpoint)


class TestNews:
    def test_crud(self, admin, storage):
        resp = admin.post("/admin/news", json={"title": "Easter menu", "content": "Paska is back"})
        assert resp.status_code == 201
        news_id = resp.json()["id"]

        admin.patch(f"/admin/news/{news_id}", json={"summary": "Seasonal"})
        image = admin.post(f"/admin/news/{news_id}/image", files={"file": ("paska.jpg", b"jpg", "image/jpeg")})

        body = admin.get(f"/news/{news_id}").json()
        assert body["summary"] == "Seasonal"
        assert body["image"] == image.json()["url"]
        assert storage.uploaded[0][0] == "news"

        assert admin.delete(f"/admin/news/{news_id}").status_code == 204
        assert storage.removed[0][0] == "news"
        assert admin.get(f"/news/{news_id}").status_code == 404

    def test_newest_first(self, admin):
        admin.post("/admin/news", json={"title": "Old", "content": "a", "date": "2024-01-01T10:00:00Z"})
        admin.post("/admin/news", json={"title": "New", "content": "b", "date": "2024-06-01T10:00:00Z"})

        assert [n["title"] for n in admin.get("/news").json()] == ["New", "Old"]

    def test_external_image_is_not_removed(self, admin, storage):
        news_id = admin.post(
            "/admin/news",
            json={"title": "Promo", "content": "c", "image": "https://placehold.co/600x400"},
        ).json()["id"]

        assert admin.delete(f"/admin/news/{news_id}").status_code == 204
        assert storage.removed == []


class TestOrderManagement:
    def test_list_and_filter(self, admin, cookies):
        first = place_order(admin, cookies["a"].id)
        place_order(admin, cookies["b"].id, {**PERSONAL, "first_name": "Taras", "email": "taras@ukr.net"})

        assert len(admin.get("/admin/orders").json()) == 2

        found = admin.get("/admin/orders", params={"search": "olena"}).json()
        assert [o["id"] for o in found] == [first["id"]]

        admin.patch(f"/admin/orders/{first['id']}/status", json={"status": "completed"})
        completed = admin.get("/admin/orders", params={"status": "completed"}).json()
        assert [o["id"] for o in completed] == [first["id"]]

    def test_update_status(self, admin, cookies):
        order = place_order(admin, cookies["a"].id)

        resp = admin.patch(f"/admin/orders/{order['id']}/status", json={"status": "processing"})

        assert resp.status_code == 200
        assert resp.json()["status"] == "processing"
        assert admin.get(f"/orders/{order['id']}").json()["status"] == "processing"

    def test_unknown_status(self, admin, cookies):
        order = place_order(admin, cookies["a"].id)

        resp = admin.patch(f"/admin/orders/{order['id']}/status", json={"status": "shipped"})

        assert resp.status_code == 422

    def test_missing_order(self, admin):
        resp = admin.patch(f"/admin/orders/{uuid.uuid4()}/status", json={"status": "completed"})
        assert resp.status_code == 404
