"""
RecipeBox Backend — Recipe SQLAlchemy Model
=============================================

What:  ORM model representing the `recipes` table.
Who:   Used by RecipeService, BookmarkService and RankingService.

Table Design:
    - user_id: the publishing User. Plain UUID column without a foreign key;
      the value is taken from the request and an orphaned reference is allowed.
    - Known content fields (title, description, ingredients, instructions,
      cook_time, image) are optional; nothing is required beyond an id.
    - extra: JSON map holding every field the API does not know about.
    - likes / trend_score: engagement signals written by clients; only read
      here as ranking keys.

    Composite index (trend_score DESC, likes DESC) serves the trending query.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, Float, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from recipebox.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Recipe(Base):
    """
    A published recipe.

    Lifecycle:
        1. Created by publish with whatever payload the client sent
        2. Updated in place (merge semantics) by the update operation
        3. Never deleted
    """

    __tablename__ = "recipes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        nullable=True,
        comment="Publishing user; not validated against users",
    )

    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ingredients: Mapped[Optional[List[Any]]] = mapped_column(JSON, nullable=True)
    instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cook_time: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    trend_score: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        server_default=text("0"),
    )

    extra: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Opaque fields outside the known recipe schema",
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

    __table_args__ = (
        Index("idx_recipes_trending", trend_score.desc(), likes.desc()),
        Index("idx_recipes_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title='{self.title}', user_id={self.user_id})>"
