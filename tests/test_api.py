"""Tests for the HTTP endpoints."""

import httpx
import pytest
from sqlalchemy import select

from app.api.deps import enforce_rate_limit
from app.api.v1 import suggest
from app.database import get_db
from app.main import app
from app.models.term import SearchTerm
from app.services.exceptions import StoreUnavailable


@pytest.fixture
async def api(db):
    async def _get_db():
        yield db

    async def _no_limit():
        return None

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[enforce_rate_limit] = _no_limit
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


async def test_search_returns_ranked_suggestions(api, seed):
    await seed({"java": 50, "javascript": 80, "js": 30})
    resp = await api.get("/api/v1/search", params={"q": " Java ", "limit": 10})
    assert resp.status_code == 200
    body = resp.json()
    assert body["query"] == "java"
    assert [s["term"] for s in body["suggestions"]] == ["javascript", "java"]
    assert set(body["suggestions"][0]) == {"term", "popularity", "description", "image_src"}
    assert "X-Request-ID" in resp.headers


async def test_search_bad_limit_uses_default(api, seed):
    await seed({f"term {i:02d}": i for i in range(15)})
    resp = await api.get("/api/v1/search", params={"q": "term", "limit": "lots"})
    assert resp.status_code == 200
    assert len(resp.json()["suggestions"]) == 10


async def test_search_without_query_samples(api, seed):
    await seed({"a": 1, "b": 2, "c": 3})
    resp = await api.get("/api/v1/search", params={"limit": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert body["query"] == ""
    assert len(body["suggestions"]) == 2


async def test_search_store_failure(api, monkeypatch):
    async def broken(*args, **kwargs):
        raise StoreUnavailable("Failed to fetch suggestions")

    monkeypatch.setattr(suggest, "search_terms", broken)
    resp = await api.get("/api/v1/search", params={"q": "java"})
    assert resp.status_code == 500
    assert resp.json() == {"suggestions": [], "error": "Failed to fetch suggestions"}


async def test_record_popularity(api, db, seed):
    await seed({"java": 50})
    resp = await api.post("/api/v1/search/popularity", json={"term": "java"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    result = await db.execute(select(SearchTerm.popularity).where(SearchTerm.term == "java"))
    assert result.scalar_one() == 51


@pytest.mark.parametrize("body", [{}, {"term": ""}, {"term": "   "}, {"term": 5}])
async def test_record_popularity_requires_term(api, body):
    resp = await api.post("/api/v1/search/popularity", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Term is required"}


async def test_record_popularity_invalid_json(api):
    resp = await api.post(
        "/api/v1/search/popularity",
        content=b"not json",
        headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400


async def test_record_popularity_wrong_method(api):
    resp = await api.get("/api/v1/search/popularity")
    assert resp.status_code == 405


async def test_record_popularity_store_failure(api, monkeypatch):
    async def broken(*args, **kwargs):
        raise StoreUnavailable("Failed to update popularity")

    monkeypatch.setattr(suggest, "record_selection", broken)
    resp = await api.post("/api/v1/search/popularity", json={"term": "java"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to update popularity"}


async def test_record_popularity_form_encoded(api, db, seed):
    await seed({"java": 50})
    resp = await api.post("/api/v1/search/popularity", data={"term": "java"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    result = await db.execute(select(SearchTerm.popularity).where(SearchTerm.term == "java"))
    assert result.scalar_one() == 51


async def test_record_popularity_form_without_term(api):
    resp = await api.post("/api/v1/search/popularity", data={"other": "x"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Term is required"}


async def test_search_long_query_keeps_response_shape(api, seed):
    await seed({"java": 50})
    resp = await api.get("/api/v1/search", params={"q": "j" * 1000})
    assert resp.status_code == 200
    assert resp.json() == {"suggestions": [], "query": "j" * 1000}
