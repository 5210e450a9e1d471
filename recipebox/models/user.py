"""
RecipeBox Backend — User and SavedRecipe SQLAlchemy Models
============================================================

What:  ORM models for the `users` and `saved_recipes` tables.
Who:   Used by UserService and BookmarkService; read by Alembic.

Table Design:
    users
        - id: UUID, generated in Python at creation, never reused
        - email: unique index; the uniqueness check at registration is backed
          by this constraint
        - username: derived from the full name plus a random suffix; NOT unique
        - password_hash: bcrypt hash produced by passlib; never leaves the
          identity service

    saved_recipes
        - One row per (user, recipe) bookmark. The integer primary key is
          monotonic and defines the order of a user's savedRecipes sequence.
        - UNIQUE(user_id, recipe_id) is the store-level set-membership
          guarantee that keeps bookmarks duplicate-free under concurrency.
        - recipe_id has no foreign key: a bookmark may outlive (or predate)
          the recipe it names, and reads filter such dangling ids out.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from recipebox.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    A registered account.

    Lifecycle:
        1. Created by registration with an empty bookmark set
        2. full_name / email changed by profile update
        3. Never deleted
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="System-generated identifier",
    )

    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        comment="Login key; compared exactly (not case-normalized)",
    )

    username: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Handle derived from full name + random suffix; not unique",
    )

    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Free-form display name",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Salted bcrypt hash; plaintext is never stored",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"


class SavedRecipe(Base):
    """A single bookmark: `user_id` saved `recipe_id`."""

    __tablename__ = "saved_recipes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Monotonic; orders a user's saved recipes",
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    recipe_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        comment="Recipe reference; may dangle",
    )

    saved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="uq_saved_recipes_user_recipe"),
    )

    def __repr__(self) -> str:
        return f"<SavedRecipe(user_id={self.user_id}, recipe_id={self.recipe_id})>"
