"""
RecipeBox Backend — Auth Route Handlers
=========================================

What:  POST /register and POST /login.
How:   Validates the body, delegates to UserService, returns the result.
       Failures are raised as exceptions and shaped by the global handlers
       (DuplicateEmailError → 400, InvalidCredentialsError → 401).

No session or token is issued: a successful login only returns the
identity projection {userId, username, email}.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from recipebox.database import get_db_session
from recipebox.schemas.common import ErrorResponse
from recipebox.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from recipebox.services.user_service import user_service

router = APIRouter(tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Verify email and password",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await user_service.login(db, email=body.email, raw_password=body.password)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Email already registered", "model": ErrorResponse}},
    summary="Create an account",
)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> RegisterResponse:
    """
    Creates the user with a derived username and an empty saved-recipe list.
    The username is not returned here; it is part of the login response.
    """
    user_id = await user_service.register(
        db,
        full_name=body.full_name,
        email=body.email,
        raw_password=body.password,
    )
    return RegisterResponse(user_id=user_id)
