"""
RecipeBox Backend — Recipe Service (Recipe Store)
===================================================

What:  Publish, update, fetch and list-by-owner operations for recipes.
Who:   Called by the recipes route handlers and by BookmarkService.

Payload handling:
    The payload is stored as sent: no field is required, and user_id is not
    checked against the users table. Known fields map to columns; everything
    else is merged into the recipe's `extra` map (see schemas/recipe.py).

Update semantics:
    Merge, not replace. Fields absent from the body keep their stored value;
    `extra` is merged key by key.
"""

import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recipebox.exceptions import NotFoundError, StoreUnavailableError
from recipebox.models.recipe import Recipe
from recipebox.schemas.recipe import RecipePayload, RecipeResponse

logger = logging.getLogger(__name__)


class RecipeService:
    """Business logic layer for published recipes."""

    async def create_recipe(self, db: AsyncSession, payload: RecipePayload) -> RecipeResponse:
        """
        Store the payload as a new recipe with a fresh id.

        Raises:
            StoreUnavailableError: the database failed
        """
        known, extension = payload.split()
        recipe = Recipe(**known, extra=extension)
        try:
            db.add(recipe)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error publishing recipe: %s", str(e), exc_info=True)
            raise StoreUnavailableError(context={"operation": "create_recipe", "error_type": type(e).__name__})

        logger.info("Recipe published: %s (user_id=%s)", recipe.id, recipe.user_id)
        return RecipeResponse.model_validate(recipe)

    async def get_recipe_record(self, db: AsyncSession, recipe_id: uuid.UUID) -> Recipe:
        try:
            recipe = await db.get(Recipe, recipe_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching recipe %s: %s", recipe_id, str(e))
            raise StoreUnavailableError(context={"recipe_id": str(recipe_id)})

        if recipe is None:
            raise NotFoundError(resource="recipe", resource_id=str(recipe_id))
        return recipe

    async def get_recipe(self, db: AsyncSession, recipe_id: uuid.UUID) -> RecipeResponse:
        """
        Raises:
            NotFoundError: no recipe with this id (→ 404)
        """
        recipe = await self.get_recipe_record(db, recipe_id)
        return RecipeResponse.model_validate(recipe)

    async def update_recipe(
        self,
        db: AsyncSession,
        recipe_id: uuid.UUID,
        payload: RecipePayload,
    ) -> RecipeResponse:
        """
        Apply the fields present in `payload` to an existing recipe.

        Raises:
            NotFoundError: no recipe with this id
            StoreUnavailableError: the database failed
        """
        recipe = await self.get_recipe_record(db, recipe_id)
        known, extension = payload.split()

        for name, value in known.items():
            setattr(recipe, name, value)
        if extension:
            # New dict so the JSON column registers as modified
            recipe.extra = {**(recipe.extra or {}), **extension}

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating recipe %s: %s", recipe_id, str(e), exc_info=True)
            raise StoreUnavailableError(context={"operation": "update_recipe", "recipe_id": str(recipe_id)})

        logger.info("Recipe %s updated: %s", recipe.id, sorted([*known, *extension]))
        return RecipeResponse.model_validate(recipe)

    async def list_by_owner(self, db: AsyncSession, user_id: uuid.UUID) -> List[RecipeResponse]:
        """
        All recipes published by `user_id`, in store order. An unknown user
        simply yields an empty list.
        """
        try:
            result = await db.execute(select(Recipe).where(Recipe.user_id == user_id))
            recipes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing recipes of %s: %s", user_id, str(e))
            raise StoreUnavailableError(context={"user_id": str(user_id)})

        return [RecipeResponse.model_validate(recipe) for recipe in recipes]


# ── Singleton Instance ────────────────────────────────────────────────────
recipe_service = RecipeService()
