"""
RecipeBox Backend — HTTP API Tests
====================================

What:  End-to-end request/response behaviour through the FastAPI app.
How:   httpx AsyncClient over ASGITransport; each request gets a session on
       the per-test in-memory database (see conftest.test_client).

What we test:
    ✅ Status codes for every route and every mapped failure
    ✅ camelCase payload shapes and the uniform error body
    ✅ Unexpected exceptions become an opaque 500
"""

import logging
import uuid
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from recipebox.exceptions import StoreUnavailableError


async def _register(client, email="ada@example.com", password="secret", full_name="Ada Lovelace"):
    response = await client.post(
        "/register", json={"fullName": full_name, "email": email, "password": password}
    )
    assert response.status_code == 201
    return response.json()["userId"]


async def _publish(client, **body):
    response = await client.post("/api/published", json=body)
    assert response.status_code == 201
    return response.json()


class TestAuthRoutes:

    @pytest.mark.asyncio
    async def test_register_returns_201_and_id(self, test_client):
        response = await test_client.post(
            "/register", json={"fullName": "Ada Lovelace", "email": "ada@example.com", "password": "pw"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Registration successful"
        uuid.UUID(body["userId"])

    @pytest.mark.asyncio
    async def test_register_duplicate_email_returns_400(self, test_client):
        await _register(test_client)

        response = await test_client.post(
            "/register", json={"fullName": "Imposter", "email": "ada@example.com", "password": "pw"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "duplicate_email"
        assert body["message"] == "Email already registered"
        assert "request_id" in body

    @pytest.mark.asyncio
    async def test_register_missing_fields_returns_422(self, test_client):
        response = await test_client.post("/register", json={"email": "ada@example.com"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_login_success(self, test_client):
        user_id = await _register(test_client, password="secret")

        response = await test_client.post(
            "/login", json={"email": "ada@example.com", "password": "secret"}
        )

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"userId", "username", "email"}
        assert body["userId"] == user_id
        assert body["username"].startswith("adalovelace")

    @pytest.mark.asyncio
    async def test_login_failures_return_401(self, test_client):
        await _register(test_client, password="secret")

        wrong = await test_client.post("/login", json={"email": "ada@example.com", "password": "nope"})
        unknown = await test_client.post("/login", json={"email": "who@example.com", "password": "nope"})

        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json()["message"] == unknown.json()["message"] == "Invalid Credentials"

    @pytest.mark.asyncio
    async def test_login_empty_password_returns_401(self, test_client):
        await _register(test_client, password="secret")

        response = await test_client.post("/login", json={"email": "ada@example.com", "password": ""})

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_credentials"


class TestRecipeRoutes:

    @pytest.mark.asyncio
    async def test_publish_and_fetch(self, test_client):
        owner = str(uuid.uuid4())
        created = await _publish(
            test_client, userId=owner, title="Pancakes", cookTime="25 mins", servings=4
        )

        response = await test_client.get(f"/api/recipes/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == owner
        assert body["title"] == "Pancakes"
        assert body["cookTime"] == "25 mins"
        assert body["extra"] == {"servings": 4}
        assert body["likes"] == 0
        assert body["trendScore"] == 0.0

    @pytest.mark.asyncio
    async def test_get_recipe_not_found(self, test_client):
        response = await test_client.get(f"/api/recipes/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_get_recipe_malformed_id(self, test_client):
        response = await test_client.get("/api/recipes/not-a-uuid")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_published_by_owner(self, test_client):
        owner = str(uuid.uuid4())
        await _publish(test_client, userId=owner, title="Mine")
        await _publish(test_client, userId=str(uuid.uuid4()), title="Theirs")

        response = await test_client.get("/api/published", params={"userId": owner})

        assert response.status_code == 200
        assert [recipe["title"] for recipe in response.json()] == ["Mine"]

    @pytest.mark.asyncio
    async def test_list_published_unknown_owner_is_empty(self, test_client):
        response = await test_client.get("/api/published", params={"userId": str(uuid.uuid4())})
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_published_without_owner_returns_422(self, test_client):
        response = await test_client.get("/api/published")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_published_documents_422(self, test_client):
        schema = (await test_client.get("/openapi.json")).json()

        responses = schema["paths"]["/api/published"]["get"]["responses"]

        assert responses["422"]["description"] == "userId missing or not a valid UUID"

    @pytest.mark.asyncio
    async def test_update_published_merges(self, test_client):
        created = await _publish(test_client, title="Curry", description="Spicy", servings=2)

        response = await test_client.put(
            f"/api/published/{created['id']}", json={"title": "Fish Curry", "origin": "IN"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Fish Curry"
        assert body["description"] == "Spicy"
        assert body["extra"] == {"servings": 2, "origin": "IN"}

    @pytest.mark.asyncio
    async def test_update_published_not_found(self, test_client):
        response = await test_client.put(f"/api/published/{uuid.uuid4()}", json={"title": "X"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_trending(self, test_client):
        for title, score, likes in [("a", 5, 10), ("b", 5, 20), ("c", 3, 1), ("d", 1, 1), ("e", 0, 1)]:
            await _publish(test_client, title=title, trendScore=score, likes=likes)

        response = await test_client.get("/api/trending", params={"limit": 3})

        assert response.status_code == 200
        assert [recipe["title"] for recipe in response.json()] == ["b", "a", "c"]

    @pytest.mark.asyncio
    async def test_trending_rejects_bad_limit(self, test_client):
        response = await test_client.get("/api/trending", params={"limit": 0})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_dishes(self, test_client):
        response = await test_client.get("/api/dishes")

        assert response.status_code == 200
        body = response.json()
        assert len(body["allTimeBest"]) == 6
        assert len(body["todaySpecials"]) == 6
        assert body["allTimeBest"][1] == {
            "title": "Pizza Margherita", "time": "30 mins", "likes": 450, "image": "/dish8.jpg",
        }


class TestUserRoutes:

    @pytest.mark.asyncio
    async def test_save_and_list(self, test_client):
        user_id = await _register(test_client)
        recipe = await _publish(test_client, title="Pancakes")

        first = await test_client.post(f"/api/saved/{user_id}", json={"recipeId": recipe["id"]})
        second = await test_client.post(f"/api/saved/{user_id}", json={"recipeId": recipe["id"]})

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json() == [recipe["id"]]

        listed = await test_client.get(f"/api/saved/{user_id}")
        assert listed.status_code == 200
        assert [r["id"] for r in listed.json()] == [recipe["id"]]

    @pytest.mark.asyncio
    async def test_saved_dangling_id_is_omitted(self, test_client):
        user_id = await _register(test_client)
        dangling = str(uuid.uuid4())

        saved = await test_client.post(f"/api/saved/{user_id}", json={"recipeId": dangling})
        listed = await test_client.get(f"/api/saved/{user_id}")

        assert saved.json() == [dangling]
        assert listed.status_code == 200
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_saved_unknown_user(self, test_client):
        missing = uuid.uuid4()

        listed = await test_client.get(f"/api/saved/{missing}")
        saved = await test_client.post(f"/api/saved/{missing}", json={"recipeId": str(uuid.uuid4())})

        assert listed.status_code == saved.status_code == 404

    @pytest.mark.asyncio
    async def test_update_profile(self, test_client):
        user_id = await _register(test_client)

        response = await test_client.put(f"/api/users/{user_id}", json={"fullName": "X"})

        assert response.status_code == 200
        body = response.json()
        assert body["fullName"] == "X"
        assert body["email"] == "ada@example.com"
        assert body["savedRecipes"] == []
        assert "passwordHash" not in body and "password_hash" not in body

    @pytest.mark.asyncio
    async def test_update_profile_email_conflict(self, test_client, caplog):
        await _register(test_client, email="ada@example.com")
        grace = await _register(test_client, email="grace@example.com", full_name="Grace Hopper")

        with caplog.at_level(logging.WARNING, logger="recipebox.main"):
            response = await test_client.put(f"/api/users/{grace}", json={"email": "ada@example.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "duplicate_email"
        assert any("Email conflict" in record.getMessage() for record in caplog.records)

    @pytest.mark.asyncio
    async def test_update_profile_not_found(self, test_client):
        response = await test_client.put(f"/api/users/{uuid.uuid4()}", json={"fullName": "X"})
        assert response.status_code == 404


class TestServiceRoutes:

    @pytest.mark.asyncio
    async def test_home(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert "RecipeBox" in response.text

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/api/dishes", headers={"X-Request-ID": "abc12345"})
        assert response.headers["X-Request-ID"] == "abc12345"


class TestErrorShaping:

    @pytest.mark.asyncio
    async def test_store_unavailable_returns_503(self, test_client):
        with patch(
            "recipebox.routes.recipes.ranking_service.trending",
            AsyncMock(side_effect=StoreUnavailableError(context={"operation": "trending"})),
        ):
            response = await test_client.get("/api/trending")

        assert response.status_code == 503
        body = response.json()
        assert body["error"] == "store_unavailable"
        assert "operation" not in str(body)

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_opaque_500(self, session_factory):
        from recipebox.database import get_db_session
        from recipebox.main import app

        async def override_session():
            async with session_factory() as session:
                yield session

        app.dependency_overrides[get_db_session] = override_session
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        try:
            with patch(
                "recipebox.routes.recipes.recipe_service.get_recipe",
                AsyncMock(side_effect=RuntimeError("secret internals")),
            ):
                async with AsyncClient(transport=transport, base_url="http://test") as client:
                    response = await client.get(f"/api/recipes/{uuid.uuid4()}")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert "secret internals" not in response.text
