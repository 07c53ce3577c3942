"""
Application error taxonomy.

Routes never build error responses by hand for these cases: the handlers
registered in app.main translate each class into its HTTP status.
"""

from typing import Dict, List, Optional


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self):
        return self.message


class ValidationError(AppError):
    """
    Input rejected before persistence.

    Carries field-level detail as a list of {"field": ..., "message": ...}.
    """

    status_code = 422

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(f"{field}: {message}", [{"field": field, "message": message}])

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        """Build from a pydantic.ValidationError, keeping one entry per field."""
        errors = []
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            errors.append({"field": ".".join(loc) or "__root__", "message": err.get("msg", "invalid")})
        fields = ", ".join(e["field"] for e in errors)
        return cls(f"Invalid input: {fields}", errors)

    def to_detail(self):
        return self.errors or [{"field": "__root__", "message": self.message}]


class TransitionNotAllowedError(ValidationError):
    """Status change rejected by the configured allow-list."""


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, kind: str, object_id: str):
        super().__init__(f"{kind} {object_id} not found")
        self.kind = kind
        self.object_id = object_id


class ConflictError(AppError):
    status_code = 409


class AuthError(AppError):
    status_code = 401


class DependencyError(AppError):
    """A remote collaborator (document store, mail transport, bucket) failed."""

    status_code = 503
