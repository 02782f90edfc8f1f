"""
Exception classes for Trailblazer.

Every error carries the HTTP status it maps to, so the API layer can render
the uniform ``{"error": {"message", "status"}}`` envelope without a lookup
table.
"""


class TrailblazerError(Exception):
    """Base exception for all Trailblazer errors."""

    status = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str = None, status: int = None, context: dict = None):
        """
        Initialize exception with message and optional context.

        Args:
            message: Error message (falls back to the class default)
            status: HTTP status code override
            context: Optional dictionary with additional error context
        """
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        self.context = context or {}

    def to_dict(self) -> dict:
        return {"error": {"message": self.message, "status": self.status}}


class BadRequestError(TrailblazerError):
    """Missing or invalid input."""
    status = 400
    default_message = "Bad Request"


class InvalidInputError(BadRequestError):
    """Input that cannot be turned into a query, e.g. an empty partial update."""
    default_message = "No data provided for update"


class DuplicateNameError(BadRequestError):
    """A uniqueness check failed (trip name per user, username)."""
    default_message = "Duplicate name"


class UnauthorizedError(TrailblazerError):
    """Bad credentials, or a missing/invalid token on a protected route."""
    status = 401
    default_message = "Unauthorized"


class NotFoundError(TrailblazerError):
    """A keyed lookup matched nothing."""
    status = 404
    default_message = "Not Found"


# External API errors. The "safe" adapter calls convert these into
# placeholder payloads; only the direct lookups let them through.

class ExternalServiceError(TrailblazerError):
    """Base exception for third-party API failures."""
    status = 502
    default_message = "External service unavailable"


class RateLimitError(ExternalServiceError):
    """Exception for API rate limiting or exhausted quota."""
    status = 503

    def __init__(self, message: str = None, retry_after: int = None, context: dict = None):
        """
        Initialize rate limit error.

        Args:
            message: Error message
            retry_after: Seconds to wait before retrying, when the upstream says
            context: Additional error context
        """
        super().__init__(message, context=context)
        self.retry_after = retry_after


class ConfigurationError(ExternalServiceError):
    """A credential the adapter needs is not configured."""
    status = 503
