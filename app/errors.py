"""Domain and API error classes.

Every error the services or dependencies raise derives from APIError, so a
single exception handler can render it into the response envelope.
"""


class APIError(Exception):
    """Base class for API errors.

    Attributes:
        message: Human-readable message, surfaced verbatim to the client.
        status_code: HTTP status code to return.
        errors: Optional list of ``{"field", "message"}`` items.
    """

    status_code = 500

    def __init__(self, message: str, errors: list[dict] | None = None) -> None:
        self.message = message
        self.errors = errors
        super().__init__(message)


class ValidationError(APIError):
    """Field validation failed (400)."""

    status_code = 400

    def __init__(self, errors: list[dict], message: str = "validation failed") -> None:
        super().__init__(message, errors)


class InvalidIDError(APIError):
    status_code = 400

    def __init__(self, message: str = "invalid task ID") -> None:
        super().__init__(message)


class InvalidDueDateError(APIError):
    status_code = 400

    def __init__(self, message: str = "due date must be in the future") -> None:
        super().__init__(message)


class ConflictError(APIError):
    """Duplicate resource.

    Surfaced as 400 rather than 409 to stay compatible with existing clients.
    """

    status_code = 400


class EmailExistsError(ConflictError):
    def __init__(self, message: str = "email already exists") -> None:
        super().__init__(message)


class AuthenticationError(APIError):
    """Missing, invalid or expired credentials (401)."""

    status_code = 401

    def __init__(self, message: str = "authentication required") -> None:
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Login failure.

    The same message is used whether the email is unknown or the password is
    wrong, so callers cannot tell which accounts exist.
    """

    def __init__(self) -> None:
        super().__init__("invalid email or password")


class AuthorizationError(APIError):
    """Authenticated but not allowed (403)."""

    status_code = 403


class CSRFError(AuthorizationError):
    pass


class NotFoundError(APIError):
    status_code = 404

    def __init__(self, message: str = "task not found") -> None:
        super().__init__(message)


class InternalError(APIError):
    """Unexpected server error (500). Details are logged, never returned."""

    status_code = 500

    def __init__(self, message: str = "internal server error") -> None:
        super().__init__(message)
