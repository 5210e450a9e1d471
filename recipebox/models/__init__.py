"""ORM models. Importing this package registers every table on Base.metadata."""

from recipebox.models.recipe import Recipe
from recipebox.models.user import SavedRecipe, User

__all__ = ["Recipe", "SavedRecipe", "User"]
