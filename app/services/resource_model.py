"""
Generic soft-delete resource models.

Design notes
------------
- One engine serves every resource kind; per-kind behaviour comes from
  the injected ``ResourceKind`` (whitelist, relation attribute).
- Every query ANDs ``is_deleted=False``.  A soft-deleted row is treated
  exactly like a missing one; nothing here can flip the flag back.
- "Not found" is ``None`` at this layer.  Raising is left to the
  validator above it, and storage errors propagate untouched.
- Cascade operations are single bulk UPDATEs with no per-row validation.
  A failure part-way leaves whatever the request transaction already
  applied; there is no compensation step.
"""
import logging
from datetime import datetime, timedelta, timezone

from app.resources import ResourceKind
from app.store import DocumentStore

logger = logging.getLogger(__name__)

_last_timestamp: datetime | None = None


def timestamp() -> datetime:
    """
    Return the current UTC time, nudged forward by a microsecond when the
    wall clock has not advanced since the previous call.
    """
    global _last_timestamp
    now = datetime.now(timezone.utc)
    if _last_timestamp is not None and now <= _last_timestamp:
        now = _last_timestamp + timedelta(microseconds=1)
    _last_timestamp = now
    return now


class ResourceWriteModel:
    """Source-of-truth CRUD over a single resource kind."""

    def __init__(self, kind: ResourceKind, store: DocumentStore) -> None:
        self.kind = kind
        self.store = store

    @property
    def params(self) -> tuple[str, ...]:
        return self.kind.params

    async def create(self, body: dict):
        now = timestamp()
        data = self.kind.pick(body)
        data.update(created_at=now, updated_at=now, is_deleted=False)
        resource = await self.store.insert_row(data)
        logger.info("Created %s %s", self.kind.name, resource.id)
        return resource

    async def find_by_id(self, _id: str):
        return await self.store.find_row({"id": _id, "is_deleted": False})

    async def update(self, _id: str, body: dict):
        data = {"updated_at": timestamp()}
        data.update(self.kind.pick(body))
        resource = await self.store.update_row({"id": _id, "is_deleted": False}, data)
        if resource is not None:
            logger.info("Updated %s %s", self.kind.name, _id)
        return resource

    async def delete(self, _id: str):
        resource = await self.store.update_row(
            {"id": _id, "is_deleted": False},
            {"updated_at": timestamp(), "is_deleted": True},
        )
        if resource is not None:
            logger.info("Soft-deleted %s %s", self.kind.name, _id)
        return resource

    async def find_all(self) -> list:
        return await self.store.find_rows({"is_deleted": False})


class HierarchicalResourceModel(ResourceWriteModel):
    """
    Write model for kinds that hang off a category; adds the bulk
    operations invoked by category lifecycle changes.
    """

    def __init__(self, kind: ResourceKind, store: DocumentStore) -> None:
        if kind.relation is None:
            raise ValueError(f"{kind.name} has no category relation")
        super().__init__(kind, store)

    @property
    def relation(self) -> str:
        return self.kind.relation

    async def find_by_category_id(self, category_id: str) -> list:
        return await self.store.find_rows({self.relation: category_id, "is_deleted": False})

    async def update_category_id(self, category_id: str, new_category_id: str | None) -> int:
        count = await self.store.update_rows(
            {self.relation: category_id, "is_deleted": False},
            {self.relation: new_category_id, "updated_at": timestamp()},
        )
        logger.info(
            "Moved %d %s row(s) from category %s to %s",
            count, self.kind.name, category_id, new_category_id,
        )
        return count

    async def delete_by_category_id(self, category_id: str) -> int:
        count = await self.store.update_rows(
            {self.relation: category_id, "is_deleted": False},
            {"updated_at": timestamp(), "is_deleted": True},
        )
        logger.info(
            "Soft-deleted %d %s row(s) of category %s", count, self.kind.name, category_id
        )
        return count


class ResourceReadModel:
    """
    Lookups against the read-side projection.  Results may lag behind the
    write model.
    """

    def __init__(self, kind: ResourceKind, store: DocumentStore) -> None:
        self.kind = kind
        self.store = store

    async def find_by_id(self, _id: str):
        return await self.store.find_row({"id": _id, "is_deleted": False})

    async def find_all(self) -> list:
        return await self.store.find_rows({"is_deleted": False})

    async def find_by_category_id(self, category_id: str) -> list:
        if self.kind.relation is None:
            raise ValueError(f"{self.kind.name} has no category relation")
        return await self.store.find_rows({self.kind.relation: category_id, "is_deleted": False})
