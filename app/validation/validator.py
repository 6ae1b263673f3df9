"""
Per-kind request validation: schema checks followed by relational
integrity checks.

Every public coroutine either returns the data the action layer needs or
raises a ``ResourceError``.  Schema failures are collected in one batch
and raised before any lookup runs; lookups then stop at the first
missing resource.
"""
from typing import Mapping, Optional

from app.errors import FieldError, NotFoundError, ValidationError
from app.resources import ResourceKind
from app.services.resource_model import ResourceWriteModel
from app.validation.engine import RuleSpec, check

_ID_SCHEMA = {"_id": {"is_valid_id": RuleSpec("_id", "Valid id required")}}


class ResourceValidator:
    def __init__(
        self,
        kind: ResourceKind,
        model: ResourceWriteModel,
        lookups: Optional[Mapping[str, ResourceWriteModel]] = None,
    ) -> None:
        self.kind = kind
        self.model = model
        # Write models of the kinds this kind's fields may reference.
        self.lookups = dict(lookups or {})
        self.lookups.setdefault(kind.name, model)

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    async def require_existing(
        self,
        _id: str,
        kind_name: str,
        lookup: Optional[ResourceWriteModel] = None,
        param: str = "_id",
    ):
        """Return the non-deleted resource *_id* or raise ``NotFoundError``."""
        model = lookup if lookup is not None else self.model
        resource = await model.find_by_id(_id)
        if resource is None:
            raise NotFoundError([FieldError(param, f"{kind_name} not found")])
        return resource

    def validate_incoming(self, data: Mapping, schema) -> None:
        errors = check(data, schema)
        if errors:
            raise ValidationError(errors)

    async def _require_references(self, data: dict) -> None:
        for name, value in data.items():
            spec = self.kind.spec(name)
            if spec.references is None or value is None:
                continue
            await self.require_existing(
                value, spec.references, self.lookups[spec.references], param=spec.param
            )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create(self, body: dict) -> dict:
        data = self.kind.pick(body)
        self.validate_incoming(data, self.kind.schema_for(data, partial=False))
        await self._require_references(data)
        return data

    async def get_one(self, _id: str):
        self.validate_incoming({"_id": _id}, _ID_SCHEMA)
        return await self.require_existing(_id, self.kind.name)

    async def update(self, _id: str, body: dict) -> dict:
        data = self.kind.pick(body)
        schema = dict(_ID_SCHEMA)
        schema.update(self.kind.schema_for(data, partial=True))
        self.validate_incoming({"_id": _id, **data}, schema)

        await self.require_existing(_id, self.kind.name)

        # A tree node may not point at itself.
        relation = self.kind.relation
        if relation is not None and data.get(relation) == _id:
            spec = self.kind.spec(relation)
            if spec.references == self.kind.name:
                message = f"{self.kind.name.capitalize()} can not be its own parent"
                raise ValidationError([FieldError(spec.param, message)])

        await self._require_references(data)
        return data

    async def delete(self, _id: str) -> str:
        self.validate_incoming({"_id": _id}, _ID_SCHEMA)
        await self.require_existing(_id, self.kind.name)
        return _id

    async def move_target(self, _id: str, target: str, param: str = "moveTo") -> tuple[str, str]:
        """
        Validate moving everything under category *_id* to *target*;
        both must be distinct existing categories.
        """
        self.validate_incoming(
            {"_id": _id, "move_to": target},
            {
                **_ID_SCHEMA,
                "move_to": {"is_valid_id": RuleSpec(param, "Valid category id required")},
            },
        )
        if target == _id:
            raise ValidationError(
                [FieldError(param, "Target category must differ from the source category")]
            )
        await self.require_existing(_id, self.kind.name)
        await self.require_existing(target, self.kind.name, param=param)
        return _id, target
