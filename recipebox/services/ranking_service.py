"""
RecipeBox Backend — Ranking Service (Trending)
================================================

What:  Orders recipes for the trending view.
How:   ORDER BY trend_score DESC, likes DESC LIMIT :limit, computed on every
       call. Ties on both keys keep whatever order the database returns.

Query plan:
    Served by idx_recipes_trending (trend_score DESC, likes DESC), so the
    database reads only the first `limit` index entries.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recipebox.config import settings
from recipebox.exceptions import StoreUnavailableError
from recipebox.models.recipe import Recipe
from recipebox.schemas.recipe import RecipeResponse

logger = logging.getLogger(__name__)


class RankingService:
    async def trending(
        self,
        db: AsyncSession,
        limit: int = settings.trending_default_limit,
    ) -> List[RecipeResponse]:
        """
        Top `limit` recipes by (trend_score desc, likes desc). Read-only.

        Raises:
            StoreUnavailableError: the database failed
        """
        try:
            result = await db.execute(
                select(Recipe)
                .order_by(Recipe.trend_score.desc(), Recipe.likes.desc())
                .limit(limit)
            )
            recipes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error computing trending recipes: %s", str(e), exc_info=True)
            raise StoreUnavailableError(context={"operation": "trending"})

        return [RecipeResponse.model_validate(recipe) for recipe in recipes]


ranking_service = RankingService()
