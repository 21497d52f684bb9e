"""Domain errors raised by GuestGate services.

The HTTP layer maps each error to a status code in
``infrastructure/api/app.py``. Messages are safe to show to end users and
never reveal which access codes exist.
"""


class GuestGateError(Exception):
    """Base class for all domain errors."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidAccessCodeError(GuestGateError):
    """The submitted access code matches no role."""

    status_code = 400
    error = "Invalid Access Code"

    def __init__(self, message: str = "The access code is invalid.") -> None:
        super().__init__(message)


class RoleAlreadyAssignedError(GuestGateError):
    """The user already holds a role."""

    status_code = 409
    error = "Conflict"

    def __init__(self, user_id: str | None = None) -> None:
        self.user_id = user_id
        super().__init__("This account already has a role.")


class AccessDeniedError(GuestGateError):
    """The caller is not allowed to perform the operation."""

    status_code = 403
    error = "Forbidden"

    def __init__(self, table: str, operation: str) -> None:
        self.table = table
        self.operation = operation
        super().__init__(f"Not allowed to {operation} {table}.")


class StoreUnavailableError(GuestGateError):
    """The database failed in a way the caller may retry."""

    status_code = 503
    error = "Service Unavailable"

    def __init__(self, message: str = "The data store is unavailable. Please try again.") -> None:
        super().__init__(message)


class NotFoundError(GuestGateError):
    """A referenced row does not exist."""

    status_code = 404
    error = "Not Found"

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} '{identifier}' not found.")


class ValidationFailedError(GuestGateError):
    """Input was rejected by a domain rule."""

    status_code = 400
    error = "Validation Error"


class BootstrapAlreadyDoneError(GuestGateError):
    """An admin exists, so the one-time admin grant is closed."""

    status_code = 409
    error = "Conflict"

    def __init__(self) -> None:
        super().__init__("An admin already exists.")


class IdentityAlreadyExistsError(GuestGateError):
    """An identity with the email already exists."""

    status_code = 409
    error = "Conflict"

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("An account with this email already exists.")


class InvalidCredentialsError(GuestGateError):
    """Email and password do not match an active identity."""

    status_code = 401
    error = "Authentication Error"

    def __init__(self) -> None:
        super().__init__("Invalid email or password.")
