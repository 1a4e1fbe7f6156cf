from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

T = TypeVar("T")

# A pydantic model class, or any type a TypeAdapter understands (TypedDict, dataclass, list[int], ...).
Schema: TypeAlias = Any

FieldErrors: TypeAlias = dict[str, list[str]]

# Key for errors about the payload as a whole (wrong top-level type, model validators).
ROOT_KEY = "__root__"


@dataclass(frozen=True, slots=True)
class ValidationSuccess(Generic[T]):
    data: T

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    field_errors: FieldErrors

    @property
    def success(self) -> bool:
        return False


def _field_path(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) if loc else ROOT_KEY


def flatten_errors(exc: ValidationError) -> FieldErrors:
    """Group pydantic error messages by field path, keeping pydantic's wording.

    Example:
        {"age": ["Input should be a valid integer, unable to parse string as an integer"]}
    """

    out: FieldErrors = {}
    for err in exc.errors():
        out.setdefault(_field_path(tuple(err["loc"])), []).append(err["msg"])
    return out


class PayloadValidator:
    """Validator compiled once for a schema and reused for every payload.

    Pydantic model classes validate through `model_validate`; any other schema
    is wrapped in a `TypeAdapter` here, so schemas need not be hashable.
    """

    __slots__ = ("schema", "_validate")

    def __init__(self, schema: Schema) -> None:
        self.schema = schema
        if isinstance(schema, type) and issubclass(schema, BaseModel):
            self._validate = schema.model_validate
        else:
            self._validate = TypeAdapter(schema).validate_python

    def __repr__(self) -> str:
        return f"PayloadValidator(schema={self.schema!r})"

    def validate(self, payload: Any) -> ValidationSuccess[Any] | ValidationFailure:
        """Validate `payload` without raising for invalid input."""

        try:
            data = self._validate(payload)
        except ValidationError as e:
            return ValidationFailure(field_errors=flatten_errors(e))
        return ValidationSuccess(data=data)


def validate(schema: Schema, payload: Any) -> ValidationSuccess[Any] | ValidationFailure:
    """One-off validation; actions keep a `PayloadValidator` built at definition time."""

    return PayloadValidator(schema).validate(payload)
