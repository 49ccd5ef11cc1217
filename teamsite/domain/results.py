"""
Unified operation result shared by every service.

Services never raise past their own boundary. They return a ServiceResult
and the HTTP layer maps `ServiceError.kind` to a status code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import ValidationError as PydanticValidationError

ErrorKind = Literal[
    "validation",
    "not_found",
    "conflict",
    "store",
    "storage",
    "email",
    "rate_limited",
]


@dataclass(frozen=True)
class ServiceError:
    """Error with a stable code and an actionable message."""

    kind: ErrorKind
    code: str
    message: str
    field: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "code": self.code,
            "field": self.field,
            "message": self.message,
        }


@dataclass(frozen=True)
class ServiceResult:
    """Outcome of a service operation."""

    success: bool
    id: str | None = None
    data: Any = None
    errors: list[ServiceError] = field(default_factory=list)

    @classmethod
    def ok(cls, *, id: str | None = None, data: Any = None) -> ServiceResult:
        return cls(success=True, id=id, data=data)

    @classmethod
    def fail(cls, *errors: ServiceError) -> ServiceResult:
        return cls(success=False, errors=list(errors))

    @property
    def error(self) -> ServiceError | None:
        """First error, if any."""
        return self.errors[0] if self.errors else None


def validation_error(code: str, message: str, field: str | None = None) -> ServiceError:
    return ServiceError(kind="validation", code=code, message=message, field=field)


def errors_from_pydantic(exc: PydanticValidationError) -> list[ServiceError]:
    """Map a pydantic ValidationError to field-specific validation errors."""
    errors: list[ServiceError] = []
    for error in exc.errors():
        loc = error.get("loc", ())
        field_name = ".".join(str(part) for part in loc) if loc else "_schema"
        error_type = error.get("type", "unknown")
        code = "invalid_value"
        if "missing" in error_type:
            code = "required"
        elif error_type.endswith(("_type", "_parsing")):
            code = "invalid_type"
        elif "too_short" in error_type:
            code = "too_short"
        elif "pattern" in error_type:
            code = "invalid_format"

        msg = error.get("msg", "Invalid value")
        errors.append(validation_error(code, f"Field '{field_name}': {msg}", field_name))
    return errors
