"""Search error types."""


class SearchError(Exception):
    """Base class for failures raised while searching."""


class BotDetectedError(SearchError):
    """Raised when the first results page is an anti-bot challenge."""

    def __init__(self, message: str = "Anti-bot detection triggered on first request. Try again later.") -> None:
        super().__init__(message)


class HttpError(SearchError):
    """Raised on a non-success HTTP status."""

    def __init__(self, status: int, status_text: str = "") -> None:
        self.status = status
        self.status_text = status_text
        super().__init__(f"HTTP {status} {status_text}".rstrip())


class RequestError(SearchError):
    """Raised when a request fails before any HTTP status is received."""


class SearchCancelledError(SearchError):
    """Raised when a search is cancelled through its token."""

    def __init__(self, message: str = "The operation was aborted.") -> None:
        super().__init__(message)
