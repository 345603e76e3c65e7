# poster_app/core/errors.py
"""
Exception classes raised by the poster workflows.

Every error carries a machine-readable `code` and a `details` dict so the
API layer can render it with `to_dict()` without interpreting it.
"""
from typing import Any


class PosterError(Exception):
    """Base exception class for poster errors"""

    code = "POSTER_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to the error payload returned to clients"""
        return {
            "code": self.code,
            "message": str(self),
            "details": self.details,
        }


class ValidationError(PosterError):
    """Raised when the submitted form is missing fields or has malformed values"""

    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[dict[str, str]]):
        fields = ", ".join(e["field"] for e in errors)
        super().__init__(f"Invalid form submission: {fields}", {"errors": errors})
        self.errors = errors


class UpstreamError(PosterError):
    """Raised when the remote image service rejects or fails a call"""

    code = "UPSTREAM_ERROR"

    def __init__(self, operation: str, upstream: Any):
        details = {"operation": operation, "upstream": str(upstream)}
        if isinstance(upstream, Exception):
            details["error_type"] = type(upstream).__name__
            # HTTP status, when the failing client attached one
            http_code = getattr(upstream, "http_code", None)
            if http_code is not None:
                details["http_code"] = http_code
        super().__init__(f"Image service {operation} failed", details)
        self.operation = operation


class CleanupError(PosterError):
    """Raised when a best-effort delete after a successful upload fails"""

    code = "CLEANUP_ERROR"

    def __init__(self, public_id: str, cause: Exception):
        super().__init__(
            f"Could not delete intermediate asset '{public_id}'",
            {"public_id": public_id, "cause": str(cause)},
        )
        self.public_id = public_id


class ConfigurationError(PosterError):
    """Raised when local settings make a workflow impossible before any remote call"""

    code = "CONFIGURATION_ERROR"
