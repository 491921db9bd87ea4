"""Domain exceptions for the Zenith API.

Services raise these; handlers registered in ``zenith.main`` turn them into
JSON responses with the matching HTTP status code.

    ZenithError (base)              → 500
    ├── ValidationError             → 400
    ├── AuthenticationError         → 401
    ├── PermissionDeniedError       → 403
    ├── NotFoundError               → 404
    └── ConflictError               → 409
        └── InvalidTransitionError  → 409
"""

from typing import Any, Dict, Optional


class ZenithError(Exception):
    """Base exception for all Zenith application errors."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        # Logged, never returned to the client
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ZenithError):
    """Client input broke a business rule the client can fix."""

    status_code = 400
    error_code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(ZenithError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    error_code = "not_authenticated"

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message=message)


class PermissionDeniedError(ZenithError):
    """Authenticated, but not allowed to perform the action."""

    status_code = 403
    error_code = "permission_denied"

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(message=message)


class NotFoundError(ZenithError):
    """A requested resource does not exist (or is hidden from the caller)."""

    status_code = 404
    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(ZenithError):
    """The request conflicts with the current state of a resource."""

    status_code = 409
    error_code = "conflict"


class InvalidTransitionError(ConflictError):
    """A status change that the workflow does not allow."""

    error_code = "invalid_transition"

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(
            message=f"Cannot change {entity} status from '{current}' to '{target}'",
            context={"entity": entity, "current": current, "target": target},
        )
        self.current = current
        self.target = target
