"""
Action layer: orchestrates the write model (source of truth) and the
read model (possibly stale projection) for one resource kind.

Mutations always go through the write model first and then reach
``sync_read_model``.  Propagating changes into the read-side projection
is not implemented: the hook only logs, and the read accessors serve
whatever the read database currently holds.
"""
import logging
from typing import Optional, Sequence

from app.services.resource_model import (
    HierarchicalResourceModel,
    ResourceReadModel,
    ResourceWriteModel,
)

logger = logging.getLogger(__name__)


class ResourceAction:
    def __init__(
        self,
        write: ResourceWriteModel,
        read: ResourceReadModel,
        dependents: Sequence[HierarchicalResourceModel] = (),
    ) -> None:
        self.write = write
        self.read = read
        # Child kinds whose relation field points at this kind.
        self.dependents = tuple(dependents)

    @property
    def entity(self) -> str:
        return self.write.kind.name

    async def sync_read_model(self, event: str, resource) -> None:
        """Extension point for pushing a committed change to the read side."""
        if resource is not None:
            logger.debug("Read projection not updated for %s %s %s", event, self.entity, resource.id)

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    async def create(self, body: dict):
        resource = await self.write.create(body)
        await self.sync_read_model("create", resource)
        return resource

    async def update(self, _id: str, body: dict):
        resource = await self.write.update(_id, body)
        await self.sync_read_model("update", resource)
        return resource

    async def delete(self, _id: str, move_to: Optional[str] = None):
        """
        Soft-delete *_id*.  Rows of dependent kinds are soft-deleted with
        it, or re-pointed at *move_to* when one is given.
        """
        resource = await self.write.delete(_id)
        if resource is None:
            return None

        for dependent in self.dependents:
            if move_to is None:
                await dependent.delete_by_category_id(_id)
            else:
                await dependent.update_category_id(_id, move_to)

        await self.sync_read_model("delete", resource)
        return resource

    async def move_children(self, _id: str, new_id: str) -> int:
        """Re-point every dependent row from *_id* to *new_id*."""
        moved = 0
        for dependent in self.dependents:
            moved += await dependent.update_category_id(_id, new_id)
        return moved

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    def get_all(self):
        return self.write.find_all()

    def get_all_read(self):
        return self.read.find_all()

    def get_one(self, _id: str):
        return self.write.find_by_id(_id)

    def get_one_read(self, _id: str):
        return self.read.find_by_id(_id)

    def get_by_category(self, category_id: str):
        if not isinstance(self.write, HierarchicalResourceModel):
            raise TypeError(f"{self.entity} is not grouped by category")
        return self.write.find_by_category_id(category_id)

    def get_by_category_read(self, category_id: str):
        return self.read.find_by_category_id(category_id)
