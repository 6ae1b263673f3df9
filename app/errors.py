"""
Client-facing error taxonomy.

Validation and integrity failures are raised as ``ResourceError``
subclasses carrying an ordered list of ``FieldError`` items; the HTTP
layer renders them as ``[{"param": ..., "message": ...}, ...]``.
Storage failures are SQLAlchemy's own exceptions and are not wrapped.
"""
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class FieldError:
    param: str
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


class ResourceError(Exception):
    status_code: int = 400

    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__("; ".join(f"{e.param}: {e.message}" for e in errors))
        self.errors = list(errors)

    def to_list(self) -> list[dict]:
        return [e.to_dict() for e in self.errors]


class ValidationError(ResourceError):
    """One or more shape problems in client input."""

    status_code = 400


class NotFoundError(ResourceError):
    """A referenced resource is missing or soft-deleted."""

    status_code = 404
