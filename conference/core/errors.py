"""Typed application errors. Services raise these; main.py maps them to the response envelope."""


class AppError(Exception):
    """Base class for errors that are reported to the caller."""

    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None, error: str | None = None) -> None:
        self.message = message or self.default_message
        self.error = error
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 422
    default_message = "Validation failed"


class AuthenticationFailure(AppError):
    """Bad credential, or a missing, invalid, expired or wrong-domain token."""

    status_code = 401
    default_message = "Invalid or expired token"


class AuthorizationFailure(AppError):
    """Valid token whose role is not allowed on the route."""

    status_code = 403
    default_message = "Access denied"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class Conflict(AppError):
    status_code = 409
    default_message = "Conflict"


class DuplicateRegistration(Conflict):
    """The account already owns a participant record."""

    default_message = "Participant already registered"


class DuplicateAccount(Conflict):
    default_message = "Account with this email already exists"


class InvalidTransition(Conflict):
    """Requested payment or review status change is not in the transition table."""

    default_message = "Status transition not allowed"
