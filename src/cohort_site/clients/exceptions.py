"""Exceptions raised by the outbound HTTP clients.

The content and mailing-list clients raise these; the content service
absorbs them at the boundary and degrades to an empty result.
"""


class ClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConfigurationError(ClientError):
    """Raised when the identifiers a client needs are not configured."""

    pass


class ConnectionError(ClientError):
    """Raised when the remote endpoint cannot be reached."""

    pass


class APIError(ClientError):
    """Raised when the remote endpoint answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int, body: str = "", *args, **kwargs):
        self.status_code = status_code
        self.body = body
        super().__init__(message, *args, **kwargs)


class RateLimitError(APIError):
    """Raised on a 429 response."""

    def __init__(self, message: str = "Rate limit exceeded", body: str = ""):
        super().__init__(message, status_code=429, body=body)


class NotFoundError(APIError):
    """Raised on a 404 response (unknown project or dataset)."""

    def __init__(self, message: str = "Resource not found", body: str = ""):
        super().__init__(message, status_code=404, body=body)


class ValidationError(ClientError):
    """Raised when a response body is not the shape the client expects."""

    def __init__(self, message: str, errors: list | None = None, *args, **kwargs):
        self.errors = errors or []
        super().__init__(message, *args, **kwargs)
