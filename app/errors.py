"""
Error taxonomy shared by the services and mapped to HTTP responses in main.py.
"""


class ApiError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    """Malformed or missing input."""
    status_code = 400


class AuthError(ApiError):
    """Missing, malformed, invalid or expired token, or bad credentials."""
    status_code = 401


class ConflictError(ApiError):
    """A uniqueness constraint would be violated."""
    status_code = 400


class NotFoundError(ApiError):
    """The requested entity does not exist."""
    status_code = 404


class InternalError(ApiError):
    """Unexpected persistence or runtime failure."""
    status_code = 500
