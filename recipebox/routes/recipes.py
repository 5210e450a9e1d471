"""
RecipeBox Backend — Recipe Route Handlers
===========================================

What:  Recipe lookup, publishing, owner listing and the trending view.

Routes:
    GET  /api/recipes/{recipe_id}      → RecipeService.get_recipe
    GET  /api/published?userId=…       → RecipeService.list_by_owner
    POST /api/published                → RecipeService.create_recipe (201)
    PUT  /api/published/{recipe_id}    → RecipeService.update_recipe
    GET  /api/trending?limit=…         → RankingService.trending
    GET  /api/dishes                   → static sample catalogue

Malformed UUIDs in the path or query are rejected by FastAPI with 422.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from recipebox.config import settings
from recipebox.database import get_db_session
from recipebox.sample_data import SAMPLE_DISHES
from recipebox.schemas.common import ErrorResponse
from recipebox.schemas.recipe import DishesResponse, RecipePayload, RecipeResponse
from recipebox.services.ranking_service import ranking_service
from recipebox.services.recipe_service import recipe_service

router = APIRouter(prefix="/api", tags=["Recipes"])


@router.get(
    "/recipes/{recipe_id}",
    response_model=RecipeResponse,
    responses={404: {"description": "Recipe not found", "model": ErrorResponse}},
    summary="Get a single recipe by ID",
)
async def get_recipe(
    recipe_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> RecipeResponse:
    return await recipe_service.get_recipe(db, recipe_id)


@router.get(
    "/published",
    response_model=List[RecipeResponse],
    responses={422: {"description": "userId missing or not a valid UUID"}},
    summary="List recipes published by a user",
)
async def list_published(
    user_id: uuid.UUID = Query(alias="userId", description="Publishing user's id"),
    db: AsyncSession = Depends(get_db_session),
) -> List[RecipeResponse]:
    return await recipe_service.list_by_owner(db, user_id)


@router.post(
    "/published",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Publish a new recipe",
    description=(
        "Stores the payload as a new recipe. Known fields map to columns; any "
        "other top-level fields are kept in the recipe's `extra` map."
    ),
)
async def publish_recipe(
    payload: RecipePayload,
    db: AsyncSession = Depends(get_db_session),
) -> RecipeResponse:
    return await recipe_service.create_recipe(db, payload)


@router.put(
    "/published/{recipe_id}",
    response_model=RecipeResponse,
    responses={404: {"description": "Recipe not found", "model": ErrorResponse}},
    summary="Update a published recipe (merge)",
)
async def update_published(
    recipe_id: uuid.UUID,
    payload: RecipePayload,
    db: AsyncSession = Depends(get_db_session),
) -> RecipeResponse:
    return await recipe_service.update_recipe(db, recipe_id, payload)


@router.get(
    "/trending",
    response_model=List[RecipeResponse],
    summary="Trending recipes",
    description="Recipes ordered by trend score, then likes, both descending.",
)
async def trending(
    limit: int = Query(
        default=settings.trending_default_limit,
        ge=1,
        le=settings.trending_max_limit,
        description="Maximum number of recipes returned",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[RecipeResponse]:
    return await ranking_service.trending(db, limit=limit)


@router.get(
    "/dishes",
    response_model=DishesResponse,
    summary="Static showcase dishes",
)
async def dishes() -> DishesResponse:
    return SAMPLE_DISHES
