"""Application error taxonomy.

Every error carries its HTTP status and renders to the JSON envelope
``{"error": <message>, ...}`` returned by the exception handlers in
``app.main``.
"""

from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base class for errors reported to API callers."""

    status_code = 500

    def __init__(self, message: str, **extra: Any):
        self.message = message
        self.extra = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        body.update({k: v for k, v in self.extra.items() if v is not None})
        return body


class ValidationError(AppError):
    """A request field is missing, mistyped or out of range."""

    status_code = 400

    def __init__(self, message: str, details: Any = None, **extra: Any):
        super().__init__(message, details=details, **extra)


class MissingParameters(ValidationError):
    """Neither a range keyword nor a complete from/to pair was supplied."""

    def __init__(self, examples: Optional[List[Dict[str, str]]] = None):
        super().__init__("Missing range or from/to parameters", examples=examples)


class InvalidRange(ValidationError):
    """The range keyword is not one of the supported periods."""

    def __init__(self, value: str, allowed: List[str]):
        self.value = value
        self.allowed = allowed
        super().__init__("Invalid range value", allowed=allowed)


class ConflictingParameters(ValidationError):
    """A range keyword was combined with an explicit from/to."""

    def __init__(self):
        super().__init__("Use either range or from/to, not both")


class NotFound(AppError):
    status_code = 404


class UpstreamStoreError(AppError):
    """The database call failed."""

    def __init__(self, details: str):
        super().__init__("Database error", details=details)


class UpstreamModelError(AppError):
    """The LLM provider call failed."""

    def __init__(self, details: str):
        super().__init__("Model error", details=details)


class UpstreamTimeoutError(AppError):
    """A database or LLM call exceeded its time budget."""

    status_code = 504

    def __init__(self, service: str, details: str = ""):
        self.service = service
        super().__init__(f"{service} request timed out", details=details or None)


def schema_error_details(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce Pydantic error entries to JSON-safe ``{field, message}`` pairs."""
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in errors
    ]
