"""
Resource kinds as data.

A ``ResourceKind`` carries everything the generic write model, validator
and action layer need to know about one document kind: its ORM model,
its whitelisted fields with their validation rules, and (for kinds that
live under a category) the attribute that points at the parent category.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from app.database import Base
from app.models import Article, Category
from app.validation.engine import RuleSpec, Schema


@dataclass(frozen=True)
class FieldSpec:
    name: str
    param: str
    rules: tuple[tuple[str, str], ...] = ()
    required: bool = False
    nullable: bool = True
    # Kind name the value must reference (checked for existence).
    references: Optional[str] = None

    def schema(self) -> dict[str, RuleSpec]:
        return {rule_name: RuleSpec(self.param, message) for rule_name, message in self.rules}


@dataclass(frozen=True)
class ResourceKind:
    name: str
    model: type[Base]
    fields: tuple[FieldSpec, ...]
    relation: Optional[str] = None
    _by_name: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_name", {f.name: f for f in self.fields})

    @property
    def params(self) -> tuple[str, ...]:
        """Whitelisted attribute names accepted from client payloads."""
        return tuple(f.name for f in self.fields)

    def spec(self, name: str) -> FieldSpec:
        return self._by_name[name]

    def pick(self, body: dict) -> dict:
        """Project *body* onto the whitelist, dropping unknown keys."""
        return {key: value for key, value in body.items() if key in self._by_name}

    def schema_for(self, body: dict, *, partial: bool) -> Schema:
        """
        Build the rule schema for *body*.

        Required fields are always checked unless *partial*; supplied
        fields are always checked; nullable fields holding None skip
        their rules.
        """
        schema: dict = {}
        for spec in self.fields:
            present = spec.name in body
            if not present and (partial or not spec.required):
                continue
            if present and spec.nullable and body[spec.name] is None:
                continue
            if spec.rules:
                schema[spec.name] = spec.schema()
        return schema


CATEGORY = ResourceKind(
    name="category",
    model=Category,
    fields=(
        FieldSpec("name", "name", (("not_empty", "Name is required"),), required=True, nullable=False),
        FieldSpec(
            "parent",
            "parent",
            (("is_valid_id", "Valid parent id required"),),
            references="category",
        ),
    ),
    relation="parent",
)

ARTICLE = ResourceKind(
    name="article",
    model=Article,
    fields=(
        FieldSpec("name", "name", (("not_empty", "Name is required"),), required=True, nullable=False),
        FieldSpec(
            "category_id",
            "categoryId",
            (("is_valid_id", "Valid category id required"),),
            required=True,
            nullable=False,
            references="category",
        ),
        FieldSpec("text", "text", (("is_string", "Text must be a string or null"),)),
        FieldSpec("description", "description", (("is_string", "Description must be a string or null"),)),
    ),
    relation="category_id",
)

KINDS = {kind.name: kind for kind in (CATEGORY, ARTICLE)}
