from __future__ import annotations

import os
import time
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

OBJECT_ID_LENGTH = 24


def new_object_id() -> str:
    """
    Return a fresh 24-hex-character identifier: a 4-byte big-endian
    seconds timestamp followed by 8 random bytes.
    """
    return f"{int(time.time()) & 0xFFFFFFFF:08x}{os.urandom(8).hex()}"


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes, also on backends that drop the offset."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


# ---------------------------------------------------------------------------
# Columns shared by every resource kind
# ---------------------------------------------------------------------------
class ResourceMixin:
    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=new_object_id
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    # Soft-delete marker; only ever flips from False to True.
    is_deleted: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False, index=True
    )


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------
class Category(ResourceMixin, Base):
    __tablename__ = "categories"

    __table_args__ = (
        # Children of a node (tree walk, re-parenting)
        Index("ix_categories_parent_is_deleted", "parent", "is_deleted"),
    )

    name: Mapped[str] = mapped_column(String(300), nullable=False)
    # No foreign key: the reference is checked by the validator.
    parent: Mapped[Optional[str]] = mapped_column(String(OBJECT_ID_LENGTH), nullable=True)


# ---------------------------------------------------------------------------
# Article
# ---------------------------------------------------------------------------
class Article(ResourceMixin, Base):
    __tablename__ = "articles"

    __table_args__ = (
        # Articles of a category (listing and cascades)
        Index("ix_articles_category_id_is_deleted", "category_id", "is_deleted"),
    )

    category_id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), nullable=False)
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    text: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)
