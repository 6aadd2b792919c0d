"""Domain exceptions mapped to HTTP responses by the app's exception handlers."""


class ServiceError(Exception):
    """Base for errors raised by services; carries a client-safe message and status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Missing or malformed input."""

    status_code = 400


class UnauthorizedError(ServiceError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class InvalidTokenError(UnauthorizedError):
    """Bearer token failed signature, structure or expiry checks."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class ForbiddenError(ServiceError):
    """Authenticated but not entitled to the action or resource."""

    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    """A unique field (email, group name, group membership) is already taken."""

    status_code = 409


class InternalError(ServiceError):
    """Unexpected store or directory failure. The message is shown to clients as-is."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)


class DirectoryError(InternalError):
    """The user directory could not complete a request."""

    def __init__(self, message: str = "User directory unavailable") -> None:
        super().__init__(message)
