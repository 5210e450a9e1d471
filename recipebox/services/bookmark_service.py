"""
RecipeBox Backend — Bookmark Service (Saved Recipes)
======================================================

What:  Reads and extends a user's set of saved recipes.
Who:   Called by the saved route handlers.

Relation model:
    Each bookmark is a row in saved_recipes; the unique (user_id, recipe_id)
    constraint makes the set duplicate-free at the store level. Adding uses
    INSERT ... ON CONFLICT DO NOTHING on PostgreSQL and SQLite, so two
    concurrent saves of the same recipe produce one row.

    recipe_id is not validated on add. On read the bookmarks are joined to
    recipes, and ids without a matching recipe are dropped from the result
    without error.
"""

import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recipebox.exceptions import StoreUnavailableError
from recipebox.models.recipe import Recipe
from recipebox.models.user import SavedRecipe
from recipebox.schemas.recipe import RecipeResponse
from recipebox.services.user_service import user_service

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class BookmarkService:
    """Business logic layer for the user → saved recipe relation."""

    async def list_saved(self, db: AsyncSession, user_id: uuid.UUID) -> List[RecipeResponse]:
        """
        The user's saved recipes that still exist, in the order they were saved.

        Raises:
            NotFoundError: no user with this id
            StoreUnavailableError: the database failed
        """
        await user_service.get_user_record(db, user_id)

        try:
            result = await db.execute(
                select(Recipe)
                .join(SavedRecipe, SavedRecipe.recipe_id == Recipe.id)
                .where(SavedRecipe.user_id == user_id)
                .order_by(SavedRecipe.id)
            )
            recipes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing saved recipes of %s: %s", user_id, str(e))
            raise StoreUnavailableError(context={"user_id": str(user_id)})

        return [RecipeResponse.model_validate(recipe) for recipe in recipes]

    async def add_saved(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        recipe_id: uuid.UUID,
    ) -> List[uuid.UUID]:
        """
        Add `recipe_id` to the user's saved set and return the updated sequence.
        Saving an id that is already present changes nothing.

        Raises:
            NotFoundError: no user with this id
            StoreUnavailableError: the database failed
        """
        await user_service.get_user_record(db, user_id)

        saved = await user_service.saved_recipe_ids(db, user_id)
        if recipe_id in saved:
            return saved

        try:
            await self._insert_once(db, user_id, recipe_id)
        except SQLAlchemyError as e:
            logger.error(
                "Database error saving recipe %s for %s: %s", recipe_id, user_id, str(e),
                exc_info=True,
            )
            raise StoreUnavailableError(context={"operation": "add_saved", "user_id": str(user_id)})

        logger.info("User %s saved recipe %s", user_id, recipe_id)
        return await user_service.saved_recipe_ids(db, user_id)

    async def _insert_once(self, db: AsyncSession, user_id: uuid.UUID, recipe_id: uuid.UUID) -> None:
        """Insert the bookmark row unless the (user, recipe) pair already exists."""
        insert = _UPSERT_DIALECTS[db.get_bind().dialect.name]
        await db.execute(
            insert(SavedRecipe)
            .values(user_id=user_id, recipe_id=recipe_id)
            .on_conflict_do_nothing(index_elements=["user_id", "recipe_id"])
        )


# ── Singleton Instance ────────────────────────────────────────────────────
bookmark_service = BookmarkService()
