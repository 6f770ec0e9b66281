import mongomock
import pytest
from fastapi.testclient import TestClient

import database
import main
import media


@pytest.fixture
def mock_db(monkeypatch):
    test_db = mongomock.MongoClient()["storefront_test"]
    database.ensure_indexes(test_db)
    monkeypatch.setattr(database, "db", test_db)
    return test_db


@pytest.fixture
def uploads(monkeypatch):
    """Record image uploads/releases instead of calling Cloudinary."""
    calls = {"uploaded": [], "released": []}

    def fake_upload(data_uri, folder):
        calls["uploaded"].append((data_uri, folder))
        return f"https://res.cloudinary.com/demo/image/upload/v1/{folder}/img{len(calls['uploaded'])}.png"

    def fake_release(url, folder):
        calls["released"].append((url, folder))

    monkeypatch.setattr(media, "upload_image", fake_upload)
    monkeypatch.setattr(media, "release_image", fake_release)
    return calls


@pytest.fixture
def client(mock_db, uploads):
    return TestClient(main.app)


@pytest.fixture
def auth_headers():
    def make(user_id="user-1", email="asha@gmail.com"):
        token = main.create_token({"id": user_id, "email": email})
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def make_product(client):
    def make(name="Kaju Katli", tiers=None, kind="product"):
        if kind == "box":
            body = {"name": name, "description": "Festive box", "price": 499}
        else:
            body = {
                "name": name,
                "description": "Fresh every morning",
                "image": "https://cdn.example.com/katli.png",
                "pricing": tiers or [
                    {"quantity": 250, "unit": "gm", "price": 200},
                    {"quantity": 1, "unit": "kg", "price": 750},
                ],
            }
        res = client.post(f"/api/{kind}", json=body)
        assert res.status_code == 201, res.text
        return res.json()["data"]
    return make
