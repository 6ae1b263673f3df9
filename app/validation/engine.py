"""
Declarative rule checker.

A schema maps a field name to the rules that field must satisfy; every
rule carries the ``param`` and ``message`` reported when it fails::

    schema = {
        "name": {"not_empty": RuleSpec("name", "Name is required")},
        "category_id": {"is_valid_id": RuleSpec("categoryId", "Valid category id required")},
    }
    errors = check({"name": ""}, schema)

``check`` evaluates every rule and never raises for bad data; the caller
decides what an empty or non-empty result means.
"""
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from app.errors import FieldError

_OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")

RULES: dict[str, Callable[[Any], bool]] = {}


@dataclass(frozen=True)
class RuleSpec:
    param: str
    message: str


Schema = Mapping[str, Mapping[str, RuleSpec]]


def rule(name: str):
    """Register a predicate under *name* so schemas can refer to it."""

    def decorator(func: Callable[[Any], bool]) -> Callable[[Any], bool]:
        RULES[name] = func
        return func

    return decorator


@rule("not_empty")
def not_empty(value: Any) -> bool:
    return isinstance(value, str) and value != ""


@rule("is_valid_id")
def is_valid_id(value: Any) -> bool:
    return isinstance(value, str) and _OBJECT_ID_RE.match(value) is not None


@rule("is_string")
def is_string(value: Any) -> bool:
    return isinstance(value, str)


def check(data: Mapping[str, Any], schema: Schema) -> list[FieldError]:
    """
    Return every failing rule of *schema* against *data*, in schema
    declaration order.  Missing fields are checked as ``None``.
    """
    errors: list[FieldError] = []
    for field, rules in schema.items():
        value = data.get(field)
        for rule_name, spec in rules.items():
            if not RULES[rule_name](value):
                errors.append(FieldError(spec.param, spec.message))
    return errors
