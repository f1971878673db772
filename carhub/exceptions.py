"""Domain errors raised by services and mapped to HTTP responses in main."""


class ServiceError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code = 500
    default_detail = "Server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(ServiceError):
    """Missing or malformed input."""

    status_code = 400
    default_detail = "Invalid input"


class DuplicateUsername(ValidationError):
    """Another account already has this username."""

    default_detail = "Username already exists"


class DuplicateEmail(ValidationError):
    """Another account already has this email."""

    default_detail = "Email already exists"


class AuthenticationFailure(ServiceError):
    """The caller could not be identified."""

    status_code = 401
    default_detail = "Invalid authentication credentials"


class TokenInvalid(AuthenticationFailure):
    """The token is malformed, tampered with or badly signed."""

    default_detail = "Invalid token"


class TokenExpired(AuthenticationFailure):
    """The token was valid but its expiry has passed."""

    default_detail = "Token has expired"


class AuthorizationFailure(ServiceError):
    """The caller is identified but does not own the resource."""

    status_code = 403
    default_detail = "Unauthorized"


class NotFound(ServiceError):
    """The requested resource does not exist."""

    status_code = 404
    default_detail = "Not found"


class InternalFailure(ServiceError):
    """An unexpected store or server error; details stay in the log."""

    status_code = 500
    default_detail = "Server error"
