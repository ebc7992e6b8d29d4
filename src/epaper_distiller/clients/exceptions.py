"""Errors raised while talking to the ePaper site.

Every error here aborts the conversion of an issue. Pictures that cannot
be retrieved are not errors; they are returned as empty payloads.
"""


class ClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConnectionError(ClientError):
    """Raised when the site cannot be reached."""


class APIError(ClientError):
    """Raised when the site answers with a non-2xx status.

    Attributes:
        status_code: HTTP status of the answer
        url: Requested URL, when known
    """

    def __init__(self, message: str, status_code: int, url: str | None = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class RateLimitError(APIError):
    """Raised on 429 answers."""

    def __init__(self, url: str | None = None):
        message = f"Rate limit exceeded: {url}" if url else "Rate limit exceeded"
        super().__init__(message, status_code=429, url=url)


class NotFoundError(APIError):
    """Raised on 404 answers."""

    def __init__(self, url: str | None = None):
        message = f"Resource not found: {url}" if url else "Resource not found"
        super().__init__(message, status_code=404, url=url)


class ValidationError(ClientError):
    """Raised when an answer cannot be decoded into a record."""

    def __init__(self, message: str, errors: list | None = None):
        self.errors = errors or []
        super().__init__(message)


class AuthenticationError(ClientError):
    """Raised when the login is rejected."""


class UnknownEditionError(ClientError):
    """Raised when an edition is neither a known code nor a known title."""

    def __init__(self, edition: str):
        self.edition = edition
        super().__init__(f"There is no edition {edition!r}")


class IssueUnavailableError(ClientError):
    """Raised when an issue was neither subscribed nor bought."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"{title} was neither subscribed nor bought")
