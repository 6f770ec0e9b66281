import mongomock
import pytest
from pymongo.errors import PyMongoError

import media
from errors import UpstreamError

MISSING_ID = "0123456789abcdef01234567"


def test_create_box_returns_id_and_fields(client):
    res = client.post("/api/box", json={"name": "Ghee Box", "description": "Festive box", "price": 499})
    assert res.status_code == 201
    data = res.json()["data"]
    assert len(data["id"]) == 24
    assert data["name"] == "Ghee Box"
    assert data["price"] == 499
    assert data["type"] == "none"


@pytest.mark.parametrize("price", [-5, 0])
def test_create_box_rejects_non_positive_price(client, mock_db, price):
    res = client.post("/api/box", json={"name": "Ghee Box", "description": "Festive box", "price": price})
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["error"] == "ValidationError"
    assert any(e["field"] == "price" for e in body["errors"])
    assert mock_db["box"].count_documents({}) == 0


def test_create_product_requires_text_fields(client):
    res = client.post("/api/product", json={"pricing": [{"quantity": 1, "unit": "kg", "price": 500}]})
    assert res.status_code == 400
    fields = {e["field"] for e in res.json()["errors"]}
    assert {"name", "description"} <= fields


def test_create_product_rejects_unknown_unit(client):
    res = client.post("/api/product", json={
        "name": "Peda", "description": "Mathura style",
        "pricing": [{"quantity": 1, "unit": "litre", "price": 300}],
    })
    assert res.status_code == 400


def test_create_namkeen_rejects_empty_pricing(client):
    res = client.post("/api/namkeen", json={"name": "Bhujia", "description": "Spicy", "pricing": []})
    assert res.status_code == 400


def test_create_relocates_base64_image(client, uploads):
    res = client.post("/api/box", json={
        "name": "Dry Fruit Box", "description": "Assorted", "price": 999,
        "imageBase64": "data:image/png;base64,iVBORw0KGgo=",
    })
    assert res.status_code == 201
    assert uploads["uploaded"] == [("data:image/png;base64,iVBORw0KGgo=", "boxes")]
    assert res.json()["data"]["image"].startswith("https://res.cloudinary.com/")
    assert "imageBase64" not in res.json()["data"]


def test_failed_upload_aborts_write(client, mock_db, monkeypatch):
    def broken_upload(data_uri, folder):
        raise UpstreamError("Image upload failed")

    monkeypatch.setattr(media, "upload_image", broken_upload)
    res = client.post("/api/box", json={
        "name": "Dry Fruit Box", "description": "Assorted", "price": 999,
        "imageBase64": "data:image/png;base64,iVBORw0KGgo=",
    })
    assert res.status_code == 500
    assert res.json()["error"] == "UpstreamError"
    assert mock_db["box"].count_documents({}) == 0


def test_list_filters_by_placement(client, make_product):
    make_product(name="Kaju Katli")
    client.post("/api/product", json={
        "name": "Rasgulla", "description": "Spongy", "type": "popular",
        "pricing": [{"quantity": 1, "unit": "kg", "price": 400}],
    })
    all_items = client.get("/api/product").json()["data"]
    popular = client.get("/api/product", params={"type": "popular"}).json()["data"]
    assert len(all_items) == 2
    assert [p["name"] for p in popular] == ["Rasgulla"]


def test_get_by_id(client, make_product):
    product = make_product()
    res = client.get(f"/api/product/{product['id']}")
    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Kaju Katli"


@pytest.mark.parametrize("bad_id", ["abc", "zz3456789abcdef012345678", "0123456789abcdef0123456"])
def test_malformed_id_is_rejected(client, bad_id):
    res = client.get(f"/api/product/{bad_id}")
    assert res.status_code == 400
    assert res.json()["error"] == "InvalidIdentifier"


def test_get_missing_is_not_found(client):
    res = client.get(f"/api/namkeen/{MISSING_ID}")
    assert res.status_code == 404
    assert res.json()["error"] == "NotFound"


def test_partial_update_only_touches_supplied_fields(client, make_product):
    product = make_product()
    res = client.put(f"/api/product/{product['id']}", json={"description": ""})
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["description"] == ""
    assert data["name"] == product["name"]
    assert data["pricing"] == product["pricing"]
    assert data["image"] == product["image"]


def test_update_ignores_explicit_null(client, make_product):
    product = make_product()
    res = client.put(f"/api/product/{product['id']}", json={"name": None, "type": "latest"})
    data = res.json()["data"]
    assert data["name"] == product["name"]
    assert data["type"] == "latest"


def test_update_rejects_empty_pricing(client, make_product):
    product = make_product()
    res = client.put(f"/api/product/{product['id']}", json={"pricing": []})
    assert res.status_code == 400


def test_update_rejects_non_positive_box_price(client, make_product):
    box = make_product(kind="box")
    res = client.put(f"/api/box/{box['id']}", json={"price": 0})
    assert res.status_code == 400


def test_update_keeps_plain_image_url(client, make_product, uploads):
    box = make_product(kind="box")
    res = client.put(f"/api/box/{box['id']}", json={"image": "https://cdn.example.com/new.png"})
    assert res.json()["data"]["image"] == "https://cdn.example.com/new.png"
    assert uploads["uploaded"] == []


def test_update_missing_is_not_found(client, uploads):
    res = client.put(f"/api/box/{MISSING_ID}", json={
        "price": 10, "imageBase64": "data:image/png;base64,AAAA",
    })
    assert res.status_code == 404
    assert uploads["uploaded"] == []


def test_delete_releases_image(client, mock_db, make_product, uploads):
    product = make_product()
    res = client.delete("/api/product", params={"id": product["id"]})
    assert res.status_code == 200
    assert mock_db["product"].count_documents({}) == 0
    assert uploads["released"] == [(product["image"], "products")]


def test_delete_missing_is_not_found(client):
    res = client.delete("/api/box", params={"id": MISSING_ID})
    assert res.status_code == 404


def test_delete_without_id_is_rejected(client):
    res = client.delete("/api/namkeen")
    assert res.status_code == 400


def test_release_failure_is_swallowed(monkeypatch):
    def boom(public_id):
        raise RuntimeError("cloudinary down")

    monkeypatch.setattr(media.cloudinary.uploader, "destroy", boom)
    media.release_image("https://res.cloudinary.com/demo/image/upload/v1/boxes/abc.png", "boxes")


def test_public_id_from_url():
    url = "https://res.cloudinary.com/demo/image/upload/v1712/products/kaju.jpg"
    assert media.public_id_from_url(url, "products") == "products/kaju"


def test_image_released_only_after_delete(client, mock_db, make_product, monkeypatch):
    product = make_product()
    seen = []
    monkeypatch.setattr(media, "release_image", lambda url, folder: seen.append(mock_db["product"].count_documents({})))
    client.delete("/api/product", params={"id": product["id"]})
    assert seen == [0]


def test_failed_delete_keeps_image(client, mock_db, make_product, uploads, monkeypatch):
    product = make_product()

    def broken_delete(self, *args, **kwargs):
        raise PyMongoError("connection reset")

    monkeypatch.setattr(mongomock.Collection, "find_one_and_delete", broken_delete)
    res = client.delete("/api/product", params={"id": product["id"]})
    assert res.status_code == 500
    assert uploads["released"] == []
    assert mock_db["product"].count_documents({}) == 1
