"""create categories and articles

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _resource_columns() -> list:
    return [
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
    ]


def upgrade() -> None:
    op.create_table(
        "categories",
        *_resource_columns(),
        sa.Column("name", sa.String(length=300), nullable=False),
        sa.Column("parent", sa.String(length=24), nullable=True),
    )
    op.create_index("ix_categories_is_deleted", "categories", ["is_deleted"])
    op.create_index("ix_categories_parent_is_deleted", "categories", ["parent", "is_deleted"])

    op.create_table(
        "articles",
        *_resource_columns(),
        sa.Column("category_id", sa.String(length=24), nullable=False),
        sa.Column("name", sa.String(length=300), nullable=False),
        sa.Column("text", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
    )
    op.create_index("ix_articles_is_deleted", "articles", ["is_deleted"])
    op.create_index(
        "ix_articles_category_id_is_deleted", "articles", ["category_id", "is_deleted"]
    )


def downgrade() -> None:
    op.drop_index("ix_articles_category_id_is_deleted", table_name="articles")
    op.drop_index("ix_articles_is_deleted", table_name="articles")
    op.drop_table("articles")
    op.drop_index("ix_categories_parent_is_deleted", table_name="categories")
    op.drop_index("ix_categories_is_deleted", table_name="categories")
    op.drop_table("categories")
