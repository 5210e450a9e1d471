"""Create users, saved_recipes and recipes tables

Revision ID: 001
Revises: None
Create Date: 2024-05-01 00:00:00.000000+00:00

What:  Initial schema for accounts, bookmarks and published recipes.
       Column rationale is documented in recipebox/models/.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False, comment="System-generated identifier"),
        sa.Column(
            "email",
            sa.String(320),
            nullable=False,
            comment="Login key; compared exactly (not case-normalized)",
        ),
        sa.Column(
            "username",
            sa.String(255),
            nullable=False,
            comment="Handle derived from full name + random suffix; not unique",
        ),
        sa.Column("full_name", sa.String(255), nullable=False, comment="Free-form display name"),
        sa.Column(
            "password_hash",
            sa.String(255),
            nullable=False,
            comment="Salted bcrypt hash; plaintext is never stored",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    # Bookmark relation; UNIQUE(user_id, recipe_id) keeps each user's set
    # duplicate-free and is the conflict target of the save upsert
    op.create_table(
        "saved_recipes",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Monotonic; orders a user's saved recipes",
        ),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("recipe_id", sa.Uuid(), nullable=False, comment="Recipe reference; may dangle"),
        sa.Column(
            "saved_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "recipe_id", name="uq_saved_recipes_user_recipe"),
    )

    op.create_table(
        "recipes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "user_id",
            sa.Uuid(),
            nullable=True,
            comment="Publishing user; not validated against users",
        ),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("ingredients", sa.JSON(), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("cook_time", sa.String(64), nullable=True),
        sa.Column("image", sa.String(1024), nullable=True),
        sa.Column("likes", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("trend_score", sa.Float(), server_default=sa.text("0"), nullable=False),
        sa.Column(
            "extra",
            sa.JSON(),
            nullable=False,
            comment="Opaque fields outside the known recipe schema",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Serves ORDER BY trend_score DESC, likes DESC LIMIT n
    op.create_index(
        "idx_recipes_trending",
        "recipes",
        [sa.text("trend_score DESC"), sa.text("likes DESC")],
    )
    op.create_index("idx_recipes_user_id", "recipes", ["user_id"])


def downgrade() -> None:
    """Drop all tables. WARNING: all account and recipe data is lost."""
    op.drop_index("idx_recipes_user_id", table_name="recipes")
    op.drop_index("idx_recipes_trending", table_name="recipes")
    op.drop_table("recipes")
    op.drop_table("saved_recipes")
    op.drop_table("users")
