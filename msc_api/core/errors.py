"""
errors.py

Typed error hierarchy shared by services and routers.

Every failure a service can report is one of these exceptions. Each one
carries an ErrorKind, and the HTTP status is derived from the kind, so
callers branch on the type (or on .kind) instead of on message text.

Related files:
- msc_api.main      : exception handlers rendering the JSON envelope
- msc_api.services.*: raise these errors

"""

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "VALIDATION"
    AUTHENTICATION = "AUTHENTICATION"
    AUTHORIZATION = "AUTHORIZATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INTERNAL: 500,
}


class AppError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(AppError):
    """Missing or malformed input. `errors` maps field name -> message."""

    kind = ErrorKind.VALIDATION
    default_message = "Validation failed"

    def __init__(self, errors: dict[str, str] | None = None, message: str | None = None):
        super().__init__(message)
        self.errors = errors or {}


class AuthenticationError(AppError):
    kind = ErrorKind.AUTHENTICATION
    default_message = "Not authenticated"


class AuthorizationError(AppError):
    kind = ErrorKind.AUTHORIZATION
    default_message = "Insufficient privileges"


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    kind = ErrorKind.CONFLICT
    default_message = "Conflict"


class InternalError(AppError):
    kind = ErrorKind.INTERNAL


class DuplicateCredentialError(ConflictError):
    default_message = "Username or email already exists"


class AlreadyRegisteredError(ConflictError):
    default_message = "Student is already registered for this event"
