"""
RecipeBox Backend — Recipe Request/Response Schemas
=====================================================

What:  Contracts for publishing, updating and reading recipes, plus the
       static dish catalogue.

Known fields + extension map:
    A recipe payload is a set of known, typed fields plus any number of
    fields the API does not model. Unknown top-level fields are kept by
    pydantic (`extra="allow"`) and folded, together with an explicit
    `extra` object, into the stored `extra` map.

    Only fields actually present in the request body are applied, which is
    what gives update its merge semantics:
        PUT {"title": "Soup"}      → title replaced, everything else kept
        PUT {"servings": 4}        → extra["servings"] = 4, other extras kept
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ConfigDict, Field

from recipebox.schemas.common import ApiModel

KNOWN_RECIPE_FIELDS = (
    "user_id",
    "title",
    "description",
    "ingredients",
    "instructions",
    "cook_time",
    "image",
    "likes",
    "trend_score",
)

# Server-managed keys a client may echo back; never stored in `extra`
RESERVED_KEYS = frozenset({"id", "_id", "createdAt", "created_at", "updatedAt", "updated_at"})


class RecipePayload(ApiModel):
    """Body of POST /api/published and PUT /api/published/{id}."""

    user_id: Optional[uuid.UUID] = Field(default=None, description="Publishing user")
    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    ingredients: Optional[List[Any]] = None
    instructions: Optional[str] = None
    cook_time: Optional[str] = Field(default=None, max_length=64)
    image: Optional[str] = Field(default=None, max_length=1024)
    likes: int = Field(default=0, ge=0)
    trend_score: float = Field(default=0.0)
    extra: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="allow")

    def split(self) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """
        Separate the fields present in the body into known column values and
        extension entries. Defaults for absent fields are never included.
        """
        known = {
            name: getattr(self, name)
            for name in KNOWN_RECIPE_FIELDS
            if name in self.model_fields_set
        }
        extension: Dict[str, Any] = {}
        if "extra" in self.model_fields_set:
            extension.update(self.extra)
        extension.update(self.model_extra or {})
        for key in RESERVED_KEYS:
            extension.pop(key, None)
        return known, extension


class RecipeResponse(ApiModel):
    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[List[Any]] = None
    instructions: Optional[str] = None
    cook_time: Optional[str] = None
    image: Optional[str] = None
    likes: int = 0
    trend_score: float = 0.0
    extra: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class Dish(ApiModel):
    title: str
    time: str
    likes: int
    image: str

    model_config = ConfigDict(frozen=True)


class DishesResponse(ApiModel):
    all_time_best: Tuple[Dish, ...]
    today_specials: Tuple[Dish, ...]

    model_config = ConfigDict(frozen=True)
