"""
Domain errors raised by the services layer

Each error carries a code, a user-safe message, the HTTP status it maps to
and optional field-level messages for the form that was submitted.
"""
from enum import Enum
from typing import Dict, List, Optional


class ErrorCode(Enum):
    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INSUFFICIENT_SEATS = "INSUFFICIENT_SEATS"
    NOT_ELIGIBLE = "NOT_ELIGIBLE"
    ALREADY_REVIEWED = "ALREADY_REVIEWED"
    FORBIDDEN = "FORBIDDEN"


class DomainError(Exception):
    """Base domain error with code and user-safe message"""

    code = ErrorCode.VALIDATION_FAILED
    status_code = 400

    def __init__(self, message: str, errors: Optional[Dict[str, List[str]]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors = errors or {}

    def to_dict(self) -> dict:
        body = {"detail": self.message, "code": self.code.value}
        if self.errors:
            body["errors"] = self.errors
        return body

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationFailed(DomainError):
    code = ErrorCode.VALIDATION_FAILED
    status_code = 422

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, {field: [message]})


class NotFound(DomainError):
    """Missing resource, or one the caller does not own"""
    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, resource: str) -> None:
        super().__init__(f"{resource} not found")


class DuplicateEmail(DomainError):
    code = ErrorCode.DUPLICATE_EMAIL
    status_code = 409

    def __init__(self) -> None:
        message = "This email is already registered."
        super().__init__(message, {"email": [message]})


class InvalidCredentials(DomainError):
    code = ErrorCode.INVALID_CREDENTIALS
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")


class InsufficientSeats(DomainError):
    code = ErrorCode.INSUFFICIENT_SEATS
    status_code = 409

    def __init__(self, available: int) -> None:
        message = f"Only {max(available, 0)} seats available."
        super().__init__(message, {"quantity": [message]})
        self.available = max(available, 0)


class NotEligible(DomainError):
    code = ErrorCode.NOT_ELIGIBLE
    status_code = 403

    def __init__(self) -> None:
        super().__init__("You can only review events you have booked.")


class AlreadyReviewed(DomainError):
    code = ErrorCode.ALREADY_REVIEWED
    status_code = 409

    def __init__(self) -> None:
        super().__init__("You have already reviewed this event.")


class Forbidden(DomainError):
    code = ErrorCode.FORBIDDEN
    status_code = 403


class GateRedirect(Exception):
    """
    Raised by the authorization gates
    Not an error page: the app answers with a 303 redirect to location
    """

    def __init__(self, location: str) -> None:
        super().__init__(location)
        self.location = location
