"""
RecipeBox Backend — Recipe Service Tests
==========================================

What:  Publish, fetch, merge-update and owner listing, plus the payload
       split between known fields and the extension map.
"""

import uuid

import pytest

from recipebox.exceptions import NotFoundError
from recipebox.schemas.recipe import RecipePayload
from recipebox.services.recipe_service import RecipeService


class TestRecipePayload:

    def test_unknown_fields_go_to_extension(self):
        payload = RecipePayload.model_validate(
            {"title": "Soup", "servings": 4, "tags": ["warm"], "extra": {"source": "grandma"}}
        )

        known, extension = payload.split()

        assert known == {"title": "Soup"}
        assert extension == {"servings": 4, "tags": ["warm"], "source": "grandma"}

    def test_camel_case_known_fields(self):
        user_id = uuid.uuid4()
        payload = RecipePayload.model_validate(
            {"userId": str(user_id), "trendScore": 2.5, "cookTime": "10 mins"}
        )

        known, extension = payload.split()

        assert known == {"user_id": user_id, "trend_score": 2.5, "cook_time": "10 mins"}
        assert extension == {}

    def test_absent_fields_are_not_included(self):
        known, extension = RecipePayload.model_validate({}).split()
        assert known == {}
        assert extension == {}

    def test_server_managed_keys_are_dropped(self):
        payload = RecipePayload.model_validate(
            {"id": str(uuid.uuid4()), "createdAt": "2024-01-01T00:00:00", "title": "Soup"}
        )

        known, extension = payload.split()

        assert known == {"title": "Soup"}
        assert extension == {}


class TestRecipeService:

    def setup_method(self):
        self.service = RecipeService()

    @pytest.mark.asyncio
    async def test_create_and_get(self, db_session):
        owner = uuid.uuid4()
        created = await self.service.create_recipe(
            db_session,
            RecipePayload.model_validate(
                {"userId": str(owner), "title": "Pancakes", "ingredients": ["flour", "milk"], "servings": 2}
            ),
        )

        fetched = await self.service.get_recipe(db_session, created.id)

        assert fetched.id == created.id
        assert fetched.user_id == owner
        assert fetched.title == "Pancakes"
        assert fetched.ingredients == ["flour", "milk"]
        assert fetched.extra == {"servings": 2}
        assert fetched.likes == 0
        assert fetched.trend_score == 0.0

    @pytest.mark.asyncio
    async def test_create_accepts_empty_payload(self, db_session):
        created = await self.service.create_recipe(db_session, RecipePayload())
        assert created.id is not None
        assert created.title is None

    @pytest.mark.asyncio
    async def test_create_does_not_validate_owner(self, db_session):
        orphan_owner = uuid.uuid4()
        created = await self.service.create_recipe(
            db_session, RecipePayload(user_id=orphan_owner, title="Orphan")
        )
        assert created.user_id == orphan_owner

    @pytest.mark.asyncio
    async def test_get_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.get_recipe(db_session, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, db_session, make_recipe):
        recipe = await make_recipe(
            title="Curry", description="Spicy", likes=3, extra={"servings": 2, "origin": "IN"}
        )

        updated = await self.service.update_recipe(
            db_session,
            recipe.id,
            RecipePayload.model_validate({"title": "Fish Curry", "servings": 4}),
        )

        assert updated.title == "Fish Curry"
        assert updated.description == "Spicy"
        assert updated.likes == 3
        assert updated.extra == {"servings": 4, "origin": "IN"}

    @pytest.mark.asyncio
    async def test_update_engagement_signals(self, db_session, make_recipe):
        recipe = await make_recipe(title="Sorbet")

        updated = await self.service.update_recipe(
            db_session, recipe.id, RecipePayload.model_validate({"likes": 140, "trendScore": 9})
        )

        assert updated.likes == 140
        assert updated.trend_score == 9.0
        assert updated.title == "Sorbet"

    @pytest.mark.asyncio
    async def test_update_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_recipe(db_session, uuid.uuid4(), RecipePayload(title="X"))

    @pytest.mark.asyncio
    async def test_list_by_owner(self, db_session, make_recipe):
        owner, other = uuid.uuid4(), uuid.uuid4()
        mine = {
            (await make_recipe(user_id=owner, title="A")).id,
            (await make_recipe(user_id=owner, title="B")).id,
        }
        await make_recipe(user_id=other, title="C")

        result = await self.service.list_by_owner(db_session, owner)

        assert {recipe.id for recipe in result} == mine

    @pytest.mark.asyncio
    async def test_list_by_owner_empty(self, db_session, make_recipe):
        await make_recipe(user_id=uuid.uuid4(), title="Someone else's")

        assert await self.service.list_by_owner(db_session, uuid.uuid4()) == []
