"""
Article endpoint tests: full CRUD lifecycle over HTTP, error payloads,
soft deletion, and diagnostic response headers.

Each test creates the categories and articles it needs through the API.
"""
import pytest
from httpx import AsyncClient

BASE = "/api/v1/articles"


async def _category(client: AsyncClient, name: str = "Snacks") -> str:
    resp = await client.post("/api/v1/categories", json={"name": name})
    assert resp.status_code == 201
    return resp.json()["_id"]


async def _article(client: AsyncClient, category_id: str, **fields) -> dict:
    payload = {"name": "Cheese sandwich", "categoryId": category_id, **fields}
    resp = await client.post(BASE, json=payload)
    assert resp.status_code == 201
    return resp.json()


# ---------------------------------------------------------------------------
# Infrastructure / health
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_diagnostic_headers(async_client: AsyncClient):
    resp = await async_client.get(BASE)
    assert "x-response-time-ms" in resp.headers
    assert int(resp.headers["x-query-count"]) >= 1


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_article_defaults(async_client: AsyncClient):
    category_id = await _category(async_client)
    article = await _article(async_client, category_id)

    assert len(article["_id"]) == 24
    assert article["name"] == "Cheese sandwich"
    assert article["categoryId"] == category_id
    assert article["text"] is None
    assert article["description"] is None
    assert article["isDeleted"] is False
    assert article["createdAt"] == article["updatedAt"]
    assert set(article) == {
        "_id", "categoryId", "name", "text", "description",
        "isDeleted", "createdAt", "updatedAt",
    }


@pytest.mark.asyncio
async def test_create_article_drops_unknown_fields(async_client: AsyncClient):
    category_id = await _category(async_client)
    article = await _article(
        async_client, category_id, text="Bread", isDeleted=True, _id="f" * 24, rating=5
    )
    assert article["text"] == "Bread"
    assert article["isDeleted"] is False
    assert article["_id"] != "f" * 24
    assert "rating" not in article


@pytest.mark.asyncio
async def test_create_article_unknown_category(async_client: AsyncClient, missing_id: str):
    resp = await async_client.post(BASE, json={"name": "Cheese sandwich", "categoryId": missing_id})
    assert resp.status_code == 404
    assert resp.json() == [{"param": "categoryId", "message": "category not found"}]


@pytest.mark.asyncio
async def test_create_article_invalid_payload(async_client: AsyncClient):
    resp = await async_client.post(BASE, json={"name": "", "categoryId": "bad-id"})
    assert resp.status_code == 400
    assert resp.json() == [
        {"param": "name", "message": "Name is required"},
        {"param": "categoryId", "message": "Valid category id required"},
    ]


@pytest.mark.asyncio
async def test_create_article_non_object_body(async_client: AsyncClient):
    resp = await async_client.post(BASE, json=["not", "an", "object"])
    assert resp.status_code == 400
    assert all({"param", "message"} <= set(item) for item in resp.json())


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_article(async_client: AsyncClient):
    category_id = await _category(async_client)
    article = await _article(async_client, category_id, description="Quick lunch")

    resp = await async_client.get(f"{BASE}/{article['_id']}")
    assert resp.status_code == 200
    assert resp.json()["description"] == "Quick lunch"


@pytest.mark.asyncio
async def test_get_article_invalid_and_missing_id(async_client: AsyncClient, missing_id: str):
    resp = await async_client.get(f"{BASE}/nope")
    assert resp.status_code == 400
    assert resp.json() == [{"param": "_id", "message": "Valid id required"}]

    resp = await async_client.get(f"{BASE}/{missing_id}")
    assert resp.status_code == 404
    assert resp.json() == [{"param": "_id", "message": "article not found"}]


@pytest.mark.asyncio
async def test_list_articles(async_client: AsyncClient):
    assert (await async_client.get(BASE)).json() == []

    category_id = await _category(async_client)
    first = await _article(async_client, category_id, name="Burger")
    second = await _article(async_client, category_id, name="Hot dog")

    resp = await async_client.get(BASE)
    assert resp.status_code == 200
    assert [a["_id"] for a in resp.json()] == [first["_id"], second["_id"]]


@pytest.mark.asyncio
async def test_list_articles_by_category(async_client: AsyncClient, missing_id: str):
    snacks = await _category(async_client, "Snacks")
    drinks = await _category(async_client, "Drinks")
    burger = await _article(async_client, snacks, name="Burger")
    await _article(async_client, drinks, name="Tea")

    resp = await async_client.get(f"{BASE}/category/{snacks}")
    assert resp.status_code == 200
    assert [a["_id"] for a in resp.json()] == [burger["_id"]]

    resp = await async_client.get(f"{BASE}/category/{missing_id}")
    assert resp.status_code == 404
    assert resp.json() == [{"param": "_id", "message": "category not found"}]


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_article_partial(async_client: AsyncClient):
    category_id = await _category(async_client)
    article = await _article(async_client, category_id, text="Bread and cheese")

    resp = await async_client.put(f"{BASE}/{article['_id']}", json={"name": "Hot dog"})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["name"] == "Hot dog"
    assert updated["text"] == "Bread and cheese"
    assert updated["categoryId"] == category_id
    assert updated["updatedAt"] > updated["createdAt"]


@pytest.mark.asyncio
async def test_update_article_move_category(async_client: AsyncClient):
    snacks = await _category(async_client, "Snacks")
    lunch = await _category(async_client, "Lunch")
    article = await _article(async_client, snacks)

    resp = await async_client.put(f"{BASE}/{article['_id']}", json={"categoryId": lunch})
    assert resp.status_code == 200
    assert resp.json()["categoryId"] == lunch


@pytest.mark.asyncio
async def test_update_article_empty_name_rejected(async_client: AsyncClient):
    category_id = await _category(async_client)
    article = await _article(async_client, category_id)

    resp = await async_client.put(f"{BASE}/{article['_id']}", json={"name": ""})
    assert resp.status_code == 400
    assert resp.json() == [{"param": "name", "message": "Name is required"}]

    unchanged = (await async_client.get(f"{BASE}/{article['_id']}")).json()
    assert unchanged == article


@pytest.mark.asyncio
async def test_update_article_unknown_category(async_client: AsyncClient, missing_id: str):
    category_id = await _category(async_client)
    article = await _article(async_client, category_id)

    resp = await async_client.put(f"{BASE}/{article['_id']}", json={"categoryId": missing_id})
    assert resp.status_code == 404
    assert resp.json() == [{"param": "categoryId", "message": "category not found"}]


@pytest.mark.asyncio
async def test_update_article_can_null_optional_fields(async_client: AsyncClient):
    category_id = await _category(async_client)
    article = await _article(async_client, category_id, text="Some text")

    resp = await async_client.put(f"{BASE}/{article['_id']}", json={"text": None})
    assert resp.status_code == 200
    assert resp.json()["text"] is None


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_article(async_client: AsyncClient):
    category_id = await _category(async_client)
    article = await _article(async_client, category_id)

    resp = await async_client.delete(f"{BASE}/{article['_id']}")
    assert resp.status_code == 200
    assert resp.json()["isDeleted"] is True

    assert (await async_client.get(f"{BASE}/{article['_id']}")).status_code == 404
    assert (await async_client.get(BASE)).json() == []
    assert (await async_client.get(f"{BASE}/category/{category_id}")).json() == []

    resp = await async_client.delete(f"{BASE}/{article['_id']}")
    assert resp.status_code == 404
    assert resp.json() == [{"param": "_id", "message": "article not found"}]

    resp = await async_client.put(f"{BASE}/{article['_id']}", json={"name": "Back"})
    assert resp.status_code == 404
