"""
RecipeBox Backend — User and Saved-Recipe Route Handlers
==========================================================

Routes:
    PUT  /api/users/{user_id}    → UserService.update_profile
    GET  /api/saved/{user_id}    → BookmarkService.list_saved
    POST /api/saved/{user_id}    → BookmarkService.add_saved

There is no ownership check: any caller may act on any user id.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from recipebox.database import get_db_session
from recipebox.schemas.common import ErrorResponse
from recipebox.schemas.recipe import RecipeResponse
from recipebox.schemas.user import SaveRecipeRequest, UserResponse, UserUpdate
from recipebox.services.bookmark_service import bookmark_service
from recipebox.services.user_service import user_service

router = APIRouter(prefix="/api", tags=["Users"])

_USER_NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}


@router.put(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={
        **_USER_NOT_FOUND,
        400: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Update profile fields (merge)",
)
async def update_profile(
    user_id: uuid.UUID,
    changes: UserUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.update_profile(db, user_id, changes)


@router.get(
    "/saved/{user_id}",
    response_model=List[RecipeResponse],
    responses=_USER_NOT_FOUND,
    summary="List a user's saved recipes",
    description="Saved ids that no longer resolve to a recipe are omitted.",
)
async def list_saved(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> List[RecipeResponse]:
    return await bookmark_service.list_saved(db, user_id)


@router.post(
    "/saved/{user_id}",
    response_model=List[uuid.UUID],
    responses=_USER_NOT_FOUND,
    summary="Save a recipe for a user",
    description="Idempotent: saving an already saved recipe returns the list unchanged.",
)
async def add_saved(
    user_id: uuid.UUID,
    body: SaveRecipeRequest,
    db: AsyncSession = Depends(get_db_session),
) -> List[uuid.UUID]:
    return await bookmark_service.add_saved(db, user_id, body.recipe_id)
