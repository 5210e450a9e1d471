"""
RecipeBox Backend — Identity Request/Response Schemas
=======================================================

What:  Contracts for registration, login, profile update and saved recipes.
Who:   Used by the auth, users and saved route modules.

Security:
    No response model has a password or hash field, so neither can be
    serialized by accident.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from recipebox.schemas.common import ApiModel


# ══════════════════════════════════════════════════════════════════════════
# Requests
# ══════════════════════════════════════════════════════════════════════════


class RegisterRequest(ApiModel):
    full_name: str = Field(min_length=1, max_length=255, description="Display name")
    email: str = Field(min_length=1, max_length=320, description="Login email (unique)")
    password: str = Field(min_length=1, description="Plaintext password; hashed before storage")


class LoginRequest(ApiModel):
    """An empty password is accepted here and fails verification like any wrong one."""
    email: str
    password: str


class UserUpdate(ApiModel):
    """
    Partial profile update. Only fields present in the body are applied;
    unknown fields (including username and password) are ignored.
    """
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, min_length=1, max_length=320)

    model_config = ConfigDict(extra="ignore")


class SaveRecipeRequest(ApiModel):
    recipe_id: uuid.UUID = Field(description="Recipe to add to the saved set")


# ══════════════════════════════════════════════════════════════════════════
# Responses
# ══════════════════════════════════════════════════════════════════════════


class RegisterResponse(ApiModel):
    message: str = Field(default="Registration successful")
    user_id: uuid.UUID


class LoginResponse(ApiModel):
    """Minimal identity projection returned by a successful login."""
    user_id: uuid.UUID
    username: str
    email: str


class UserResponse(ApiModel):
    user_id: uuid.UUID
    username: str
    full_name: str
    email: str
    saved_recipes: List[uuid.UUID] = Field(
        default_factory=list,
        description="Saved recipe ids in the order they were saved",
    )
    created_at: datetime
