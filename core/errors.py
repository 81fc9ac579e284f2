# core/errors.py
"""
Service error taxonomy.

Every failure the API reports maps to one of these kinds. Each kind has a
default message; callers may pass a more specific one, which must only
describe the request (never SQL, stack traces or credentials).
"""
from fastapi import status


class ServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    code: str = "internal_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthenticated(ServiceError):
    """Missing, malformed, expired or forged session token, or bad credentials."""
    code = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"


class Forbidden(ServiceError):
    """Wrong role, or an account suspended at request time."""
    code = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class DuplicateAccount(ServiceError):
    code = "duplicate_account"
    status_code = status.HTTP_409_CONFLICT
    message = "An account with this email already exists"


class NotFound(ServiceError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class InvalidTransition(ServiceError):
    """Order is already in a terminal state."""
    code = "invalid_transition"
    status_code = status.HTTP_409_CONFLICT
    message = "Order is no longer pending"


class InvalidInput(ServiceError):
    code = "invalid_input"
    status_code = 422
    message = "Invalid input"


class StoreUnavailable(ServiceError):
    code = "store_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Storage is temporarily unavailable"
