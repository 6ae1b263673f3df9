"""
Per-request wiring of stores, models, validators and actions.

Every object built here is stateless apart from its ``ResourceKind``
configuration and the request's session, so a fresh set is assembled
for each request.  Tests override ``get_db`` / ``get_read_db`` and get
the whole graph bound to the test database.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db, get_read_db
from app.resources import ARTICLE, CATEGORY
from app.services.actions import ResourceAction
from app.services.resource_model import HierarchicalResourceModel, ResourceReadModel
from app.store import DocumentStore
from app.validation.validator import ResourceValidator


class Resources:
    """
    Write models, read models, validators and actions for every kind,
    bound to one write session and one read session.
    """

    def __init__(self, db: AsyncSession, read_db: AsyncSession) -> None:
        self.category_write = HierarchicalResourceModel(CATEGORY, DocumentStore(db, CATEGORY.model))
        self.article_write = HierarchicalResourceModel(ARTICLE, DocumentStore(db, ARTICLE.model))
        self.category_read = ResourceReadModel(CATEGORY, DocumentStore(read_db, CATEGORY.model))
        self.article_read = ResourceReadModel(ARTICLE, DocumentStore(read_db, ARTICLE.model))

        lookups = {"category": self.category_write, "article": self.article_write}
        self.category_validator = ResourceValidator(CATEGORY, self.category_write, lookups)
        self.article_validator = ResourceValidator(ARTICLE, self.article_write, lookups)

        self.category_action = ResourceAction(
            self.category_write, self.category_read, dependents=[self.article_write]
        )
        self.article_action = ResourceAction(self.article_write, self.article_read)


def get_resources(
    db: AsyncSession = Depends(get_db),
    read_db: AsyncSession = Depends(get_read_db),
) -> Resources:
    return Resources(db, read_db)
