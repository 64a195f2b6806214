"""Domain error codes for the directory module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    AUTH_MISSING = "AUTH_MISSING"
    AUTH_INVALID = "AUTH_INVALID"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_FIELD = "INVALID_FIELD"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    NO_SEARCH_RESULTS = "NO_SEARCH_RESULTS"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    IDENTITY_UNAVAILABLE = "IDENTITY_UNAVAILABLE"
    MAIL_UNAVAILABLE = "MAIL_UNAVAILABLE"
    INTERNAL = "INTERNAL"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class AuthError(DomainError):
    """Raised when a request does not carry a usable credential."""


class AuthMissingError(AuthError):
    """Raised when the Authorization header is absent or not a bearer token."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.AUTH_MISSING,
            message="Unauthorized: No token provided",
        )


class AuthInvalidError(AuthError):
    """Raised when the identity provider rejects the token."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.AUTH_INVALID,
            message="Unauthorized: Invalid token",
        )


class ValidationError(DomainError):
    """Raised when input fails a domain rule."""


class MissingFieldError(ValidationError):
    """Raised when a required field is absent or blank."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(code=ErrorCode.MISSING_FIELD, message=message)
        self.fields = fields


class InvalidFieldError(ValidationError):
    """Raised when a field is present but malformed, e.g. too long."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_FIELD, message=message)
        self.field = field


class InvalidEventIdError(ValidationError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class UserNotFoundError(NotFoundError):
    """Raised when the caller has no user record."""

    def __init__(self, subject_id: str) -> None:
        super().__init__(code=ErrorCode.USER_NOT_FOUND, message="User not found.")
        self.subject_id = subject_id


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found.")
        self.event_id = event_id


class NoSearchResultsError(NotFoundError):
    """Raised when a title search matches nothing."""

    def __init__(self, query: str) -> None:
        super().__init__(
            code=ErrorCode.NO_SEARCH_RESULTS,
            message="No events found for this search.",
        )
        self.query = query


class TransientError(DomainError):
    """Raised when an external collaborator is unreachable."""


class StoreUnavailableError(TransientError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Internal server error",
        )


class IdentityProviderUnavailableError(TransientError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.IDENTITY_UNAVAILABLE,
            message="Internal server error",
        )


class MailUnavailableError(TransientError):
    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.MAIL_UNAVAILABLE, message=reason)
