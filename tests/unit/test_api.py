"""
Tests for the HTTP API (health and recommend routes).

The catalog and resolver dependencies are overridden, so no file or
network access happens.
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.routes import recommend as recommend_routes
from api.routes.recommend import get_catalog, get_resolver, reset_catalog_cache
from catalog.loader import CatalogLoadError
from intent.resolver import IntentResolver


GREEDY = {"epsilon": 0, "jitter": 0, "seed": 1}


@pytest.fixture
def app(streetwear_catalog):
    app = create_app()
    app.dependency_overrides[get_catalog] = lambda: streetwear_catalog
    app.dependency_overrides[get_resolver] = lambda: IntentResolver()
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "outfit-recommender"
        assert "intent_planner" in data

    def test_live(self, client):
        assert client.get("/live").json() == {"status": "alive"}

    def test_request_id_headers(self, client):
        response = client.get("/live", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
        assert "X-Response-Time" in response.headers


class TestRecommend:

    def test_recommend(self, client):
        response = client.post("/api/recommend", json={
            "prompt": "baggy black streetwear fit", "gender_pref": "men", **GREEDY,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["intent"]["outfit_mode"] == "outfit"
        assert data["candidates_per_role"] == {"top": 1, "bottom": 1, "shoes": 1}
        assert [item["id"] for item in data["outfits"][0]["items"]] == ["hoodie", "cargos", "sneaker"]

    def test_pool_size(self, client):
        response = client.post("/api/recommend", json={
            "prompt": "streetwear fit", "pool_size": 3, **GREEDY,
        })

        assert response.status_code == 200
        assert len(response.json()["outfits"]) == 3

    def test_nothing_to_build(self, app, streetwear_catalog):
        tops = [it for it in streetwear_catalog if it.category.value == "top"]
        app.dependency_overrides[get_catalog] = lambda: tops

        with TestClient(app) as client:
            response = client.post("/api/recommend", json={"prompt": "streetwear fit"})

        assert response.status_code == 404

    @pytest.mark.parametrize("body", [
        {"prompt": ""},
        {"prompt": "fit", "gender_pref": "kids"},
        {"prompt": "fit", "epsilon": 0.9},
        {"prompt": "fit", "pool_size": 0},
        {},
    ])
    def test_validation(self, client, body):
        assert client.post("/api/recommend", json=body).status_code == 422


class TestCatalogDependency:

    @pytest.fixture(autouse=True)
    def _reset(self):
        reset_catalog_cache()
        yield
        reset_catalog_cache()

    def test_unavailable_catalog_is_503(self, monkeypatch):
        def broken(path):
            raise CatalogLoadError("missing")

        monkeypatch.setattr(recommend_routes, "load_catalog", broken)
        app = create_app()
        app.dependency_overrides[get_resolver] = lambda: IntentResolver()

        with TestClient(app) as client:
            response = client.post("/api/recommend", json={"prompt": "fit"})

        assert response.status_code == 503

    def test_catalog_loaded_once(self, monkeypatch, streetwear_catalog):
        calls = []

        def fake_load(path):
            calls.append(path)
            return streetwear_catalog

        monkeypatch.setattr(recommend_routes, "load_catalog", fake_load)

        assert get_catalog() is streetwear_catalog
        assert get_catalog() is streetwear_catalog
        assert len(calls) == 1
