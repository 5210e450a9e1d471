"""
RecipeBox Backend — User Service (Identity Store)
===================================================

What:  Registration, login, profile lookup and profile update.
Who:   Called by the auth and users route handlers, and by BookmarkService
       for user lookups.

Identity rules:
    - Email is the login key and is unique at the moment of creation. The
      pre-insert lookup is backed by the unique index on users.email, so a
      concurrent registration that slips past the lookup still fails with
      DuplicateEmailError at flush time.
    - username = full name lowercased with all whitespace removed, plus a
      random decimal suffix in [0, 1000). It is not checked against existing
      usernames and may collide.
    - Passwords are hashed with bcrypt (see services/security.py); the
      plaintext is never stored or logged.
    - Login failures are indistinguishable: unknown email and wrong password
      both raise InvalidCredentialsError after a full hash verification.

Error Handling Strategy:
    Domain errors (NotFoundError, DuplicateEmailError, InvalidCredentialsError)
    propagate unchanged. Any other SQLAlchemyError is wrapped in
    StoreUnavailableError so internal details never reach the client.
"""

import logging
import random
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recipebox.config import settings
from recipebox.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
    RecipeBoxError,
    StoreUnavailableError,
)
from recipebox.models.user import SavedRecipe, User
from recipebox.schemas.user import LoginResponse, UserResponse, UserUpdate
from recipebox.services.security import (
    dummy_verify_async,
    hash_password_async,
    verify_password_async,
)

logger = logging.getLogger(__name__)


def derive_username(full_name: str) -> str:
    """
    Build a handle from a display name: "Ada Lovelace" → "adalovelace417".

    The suffix is pseudo-random, so two users with the same name may get the
    same username.
    """
    base = "".join(full_name.lower().split())
    return f"{base}{random.randrange(settings.username_suffix_max)}"


class UserService:
    """
    Business logic layer for user accounts.

    Responsibilities:
        - register(): create a user with a derived username and hashed password
        - login(): verify credentials, return the identity projection
        - get_user(): single user retrieval with not-found handling
        - update_profile(): merge-update of profile fields
    """

    async def register(
        self,
        db: AsyncSession,
        full_name: str,
        email: str,
        raw_password: str,
    ) -> uuid.UUID:
        """
        Create a new user and return its id.

        Raises:
            DuplicateEmailError: a user with this email already exists
            StoreUnavailableError: the database failed
        """
        try:
            existing = await db.execute(select(User.id).where(User.email == email))
            if existing.scalar_one_or_none() is not None:
                raise DuplicateEmailError(email=email)

            user = User(
                username=derive_username(full_name),
                full_name=full_name,
                email=email,
                password_hash=await hash_password_async(raw_password),
            )
            db.add(user)
            try:
                await db.flush()
            except IntegrityError:
                # A concurrent registration claimed the email after our lookup
                await db.rollback()
                raise DuplicateEmailError(email=email)

            logger.info("User registered: %s (username=%s)", user.id, user.username)
            return user.id

        except RecipeBoxError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error registering user: %s", str(e), exc_info=True)
            raise StoreUnavailableError(context={"operation": "register", "error_type": type(e).__name__})

    async def login(self, db: AsyncSession, email: str, raw_password: str) -> LoginResponse:
        """
        Verify credentials and return {userId, username, email}.

        Raises:
            InvalidCredentialsError: unknown email or wrong password
            StoreUnavailableError: the database failed
        """
        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise StoreUnavailableError(context={"operation": "login", "error_type": type(e).__name__})

        if user is None:
            await dummy_verify_async()
            logger.warning("Failed login: no account for the supplied email")
            raise InvalidCredentialsError()

        if not await verify_password_async(raw_password, user.password_hash):
            logger.warning("Failed login: wrong password for user %s", user.id)
            raise InvalidCredentialsError()

        return LoginResponse(user_id=user.id, username=user.username, email=user.email)

    async def get_user_record(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        """
        Fetch the User row or raise NotFoundError.

        Shared with BookmarkService, which mutates the saved set through the
        user record.
        """
        try:
            user = await db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise StoreUnavailableError(context={"user_id": str(user_id)})

        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        return user

    async def saved_recipe_ids(self, db: AsyncSession, user_id: uuid.UUID) -> List[uuid.UUID]:
        """The user's savedRecipes sequence, in the order the ids were saved."""
        try:
            result = await db.execute(
                select(SavedRecipe.recipe_id)
                .where(SavedRecipe.user_id == user_id)
                .order_by(SavedRecipe.id)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error reading saved recipes of %s: %s", user_id, str(e))
            raise StoreUnavailableError(context={"user_id": str(user_id)})

    async def get_user(self, db: AsyncSession, user_id: uuid.UUID) -> UserResponse:
        """
        Raises:
            NotFoundError: no user with this id (→ 404)
        """
        user = await self.get_user_record(db, user_id)
        return await self._to_response(db, user)

    async def update_profile(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        changes: UserUpdate,
    ) -> UserResponse:
        """
        Replace the profile fields present in `changes`; leave the rest alone.

        Raises:
            NotFoundError: no user with this id
            DuplicateEmailError: the new email belongs to another user
            StoreUnavailableError: the database failed
        """
        user = await self.get_user_record(db, user_id)
        fields = changes.model_dump(exclude_unset=True, exclude_none=True)

        try:
            new_email = fields.get("email")
            if new_email is not None and new_email != user.email:
                taken = await db.execute(
                    select(User.id).where(User.email == new_email, User.id != user.id)
                )
                if taken.scalar_one_or_none() is not None:
                    raise DuplicateEmailError(email=new_email)

            for name, value in fields.items():
                setattr(user, name, value)

            try:
                await db.flush()
            except IntegrityError:
                await db.rollback()
                raise DuplicateEmailError(email=new_email)

            if fields:
                logger.info("Profile updated for user %s: %s", user.id, sorted(fields))
            return await self._to_response(db, user)

        except RecipeBoxError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating user %s: %s", user_id, str(e), exc_info=True)
            raise StoreUnavailableError(context={"operation": "update_profile", "user_id": str(user_id)})

    async def _to_response(self, db: AsyncSession, user: User) -> UserResponse:
        return UserResponse(
            user_id=user.id,
            username=user.username,
            full_name=user.full_name,
            email=user.email,
            saved_recipes=await self.saved_recipe_ids(db, user.id),
            created_at=user.created_at,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
