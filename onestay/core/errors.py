"""
Domain errors.

Every error a request can end with is one of these. Each carries the HTTP
status and a stable error code; the API layer maps them to JSON responses
in a single exception handler, so services and the auth gate never build
HTTP responses themselves.
"""

from __future__ import annotations

from typing import Any


class OneStayError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    default_detail: str = "An unexpected error occurred"

    def __init__(self, detail: str | None = None, **extra: Any):
        self.detail = detail or self.default_detail
        self.extra = extra
        super().__init__(self.detail)


# =============================================================================
# Authentication
# =============================================================================


class MissingToken(OneStayError):
    """No usable credential in either accepted header."""

    status_code = 401
    error_code = "MISSING_TOKEN"
    default_detail = "Missing authentication token"


class InvalidToken(OneStayError):
    """Bad signature, malformed structure or expired token.

    The outward message is the same for every cause.
    """

    status_code = 401
    error_code = "INVALID_TOKEN"
    default_detail = "Invalid or expired token"


class InvalidCredentials(OneStayError):
    """Login failed: unknown email or wrong password."""

    status_code = 401
    error_code = "INVALID_CREDENTIALS"
    default_detail = "Incorrect email or password"


class RoleMissing(OneStayError):
    """The authenticated context carries no usable role claim."""

    status_code = 401
    error_code = "ROLE_MISSING"
    default_detail = "Role not found in authentication context"


# =============================================================================
# Authorization
# =============================================================================


class Forbidden(OneStayError):
    """Authenticated but not allowed (tier or ownership)."""

    status_code = 403
    error_code = "FORBIDDEN"
    default_detail = "Access denied"


# =============================================================================
# Resources
# =============================================================================


class NotFound(OneStayError):
    status_code = 404
    error_code = "NOT_FOUND"
    default_detail = "Resource not found"

    @classmethod
    def for_resource(cls, resource: str) -> NotFound:
        return cls(f"{resource} not found")


class DuplicateName(OneStayError):
    """A uniqueness constraint (email, slug, per-owner name) was violated."""

    status_code = 409
    error_code = "DUPLICATE_NAME"
    default_detail = "A resource with this name already exists"


class BadRequest(OneStayError):
    status_code = 400
    error_code = "BAD_REQUEST"
    default_detail = "Invalid request"


class SlugAllocationError(OneStayError):
    """The slug allocator gave up after its attempt ceiling."""

    status_code = 500
    error_code = "SLUG_ALLOCATION_FAILED"
    default_detail = "Could not allocate a unique slug"


# =============================================================================
# Startup
# =============================================================================


class ConfigurationError(Exception):
    """Fatal misconfiguration detected at startup."""
    pass
