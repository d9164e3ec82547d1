"""Payload validation for book writes.

The accepted shapes live in ``SCHEMAS``, one pydantic model per kind of
write. ``validate_book`` is the only interpreter of that table and never
raises: callers get a ``ValidationResult`` and decide the HTTP status.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

Kind = Literal["create", "update"]

# signed 32-bit INTEGER columns
INT_MAX = 2**31 - 1
INT_MIN = -(2**31)


class _BookFields(BaseModel):
    model_config = ConfigDict(strict=True, extra="forbid")

    amazon_url: str
    author: str
    language: str
    pages: int = Field(gt=0, le=INT_MAX)
    publisher: str
    title: str
    year: int = Field(ge=INT_MIN, le=INT_MAX)


class BookCreate(_BookFields):
    isbn: str


class BookUpdate(_BookFields):
    # isbn is the primary key, so any isbn key on an update is an extra input
    pass


SCHEMAS: dict[str, type[BaseModel]] = {
    "create": BookCreate,
    "update": BookUpdate,
}


class ValidationResult(BaseModel):
    valid: bool
    data: dict[str, Any] | None = None
    errors: list[str] = []


def _format_error(err: dict[str, Any]) -> str:
    field = ".".join(str(part) for part in err["loc"]) or "body"
    if err["type"] == "extra_forbidden":
        return f"{field}: field is not allowed"
    return f"{field}: {err['msg']}"


def validate_book(payload: Any, kind: Kind) -> ValidationResult:
    """Check ``payload`` against the schema registered for ``kind``.

    On success ``data`` is ``payload`` itself, untouched. On failure
    ``errors`` holds one message per violated constraint.
    """
    schema = SCHEMAS[kind]
    try:
        schema.model_validate(payload)
    except ValidationError as exc:
        return ValidationResult(valid=False, errors=[_format_error(err) for err in exc.errors()])
    return ValidationResult(valid=True, data=payload)
