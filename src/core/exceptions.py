"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    PROFILE_REQUIRED = "PROFILE_REQUIRED"
    PROVIDER_ROLE_REQUIRED = "PROVIDER_ROLE_REQUIRED"

    # Authorization errors (403; NOT_OWNER is 401 outside review deletion)
    FORBIDDEN = "FORBIDDEN"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"
    NOT_OWNER = "NOT_OWNER"

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    SERVICE_NOT_FOUND = "SERVICE_NOT_FOUND"
    REVIEW_NOT_FOUND = "REVIEW_NOT_FOUND"
    MESSAGE_NOT_FOUND = "MESSAGE_NOT_FOUND"
    NOTIFICATION_NOT_FOUND = "NOTIFICATION_NOT_FOUND"

    # Validation / invalid operation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_OPERATION = "INVALID_OPERATION"
    SELF_REVIEW = "SELF_REVIEW"
    SELF_MESSAGE = "SELF_MESSAGE"
    ADMIN_PROFILE_PROTECTED = "ADMIN_PROFILE_PROTECTED"

    # Conflict errors (409)
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    PROFILE_EXISTS = "PROFILE_EXISTS"
    USERNAME_TAKEN = "USERNAME_TAKEN"
    DUPLICATE_SERVICE = "DUPLICATE_SERVICE"
    DUPLICATE_REVIEW = "DUPLICATE_REVIEW"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    USERNAME_COOLDOWN = "USERNAME_COOLDOWN"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authenticated, but not the owner or role the operation requires."""

    def __init__(
        self,
        message: str = "Access denied",
        error_code: ErrorCode = ErrorCode.FORBIDDEN,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=403,
        )


class NotPermittedError(AppException):
    """The caller may not act on this resource or in this role.

    Answered with 401 like other credential failures; only review deletion
    and the admin gate use 403.
    """

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.NOT_OWNER) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class NotFoundError(AppException):
    """Base class for missing entities."""

    def __init__(self, error_code: ErrorCode, entity: str, entity_id: Any) -> None:
        super().__init__(
            error_code=error_code,
            message=f"{entity} not found: {entity_id}",
            status_code=404,
            details={f"{entity.lower()}_id": str(entity_id)},
        )


class ProfileNotFoundError(NotFoundError):
    """Profile not found."""

    def __init__(self, profile_id: Any) -> None:
        super().__init__(ErrorCode.PROFILE_NOT_FOUND, "Profile", profile_id)


class ServiceNotFoundError(NotFoundError):
    """Service not found."""

    def __init__(self, service_id: Any) -> None:
        super().__init__(ErrorCode.SERVICE_NOT_FOUND, "Service", service_id)


class ReviewNotFoundError(NotFoundError):
    """Review not found."""

    def __init__(self, review_id: Any) -> None:
        super().__init__(ErrorCode.REVIEW_NOT_FOUND, "Review", review_id)


class MessageNotFoundError(NotFoundError):
    """Message not found."""

    def __init__(self, message_id: Any) -> None:
        super().__init__(ErrorCode.MESSAGE_NOT_FOUND, "Message", message_id)


class NotificationNotFoundError(NotFoundError):
    """Notification not found."""

    def __init__(self, notification_id: Any) -> None:
        super().__init__(ErrorCode.NOTIFICATION_NOT_FOUND, "Notification", notification_id)


class ConflictError(AppException):
    """A uniqueness rule would be violated."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.DUPLICATE_ENTRY,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=409,
            details=details,
        )


class DuplicateEntryError(ConflictError):
    """The store rejected a write because of a unique constraint.

    Raised by repositories; ``constraint_detail`` holds the driver message so
    services can tell which constraint fired.
    """

    def __init__(self, entity: str, constraint_detail: str = "") -> None:
        self.entity = entity
        self.constraint_detail = constraint_detail
        super().__init__(message=f"Duplicate {entity}")


class ProfileAlreadyExistsError(ConflictError):
    """The identity already owns a profile."""

    def __init__(self) -> None:
        super().__init__(
            message="Profile already exists",
            error_code=ErrorCode.PROFILE_EXISTS,
        )


class UsernameTakenError(ConflictError):
    """Username already used by another profile."""

    def __init__(self, username: str) -> None:
        super().__init__(
            message="Username already taken",
            error_code=ErrorCode.USERNAME_TAKEN,
            details={"username": username},
        )


class DuplicateServiceError(ConflictError):
    """The provider already offers a service with this name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message="A service with this name already exists",
            error_code=ErrorCode.DUPLICATE_SERVICE,
            details={"name": name},
        )


class DuplicateReviewError(ConflictError):
    """The client already reviewed this provider."""

    def __init__(self, provider_id: int) -> None:
        super().__init__(
            message="You have already reviewed this provider",
            error_code=ErrorCode.DUPLICATE_REVIEW,
            details={"provider_id": provider_id},
        )


class InvalidOperationError(AppException):
    """The request is well-formed but semantically disallowed."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INVALID_OPERATION,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=400,
        )


class SelfReviewError(InvalidOperationError):
    """A profile tried to review itself."""

    def __init__(self) -> None:
        super().__init__("Cannot review yourself", ErrorCode.SELF_REVIEW)


class SelfMessageError(InvalidOperationError):
    """A profile tried to message itself."""

    def __init__(self) -> None:
        super().__init__("Cannot send a message to yourself", ErrorCode.SELF_MESSAGE)


class AdminProfileProtectedError(InvalidOperationError):
    """Admin profiles cannot be deleted."""

    def __init__(self) -> None:
        super().__init__("Cannot delete admin account", ErrorCode.ADMIN_PROFILE_PROTECTED)


class RateLimitedError(AppException):
    """A cooldown is in effect."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.RATE_LIMIT_EXCEEDED,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=429,
            details=details,
        )


class UsernameCooldownError(RateLimitedError):
    """Username was changed too recently."""

    def __init__(self, days_left: int) -> None:
        plural = "" if days_left == 1 else "s"
        super().__init__(
            message=f"You can change your username again in {days_left} day{plural}",
            error_code=ErrorCode.USERNAME_COOLDOWN,
            details={"days_left": days_left},
        )
        self.days_left = days_left
