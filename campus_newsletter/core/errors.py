"""Exception types raised by the newsletter compiler."""
from typing import Optional


class NewsletterError(Exception):
    """Base class for all newsletter compiler errors."""
    pass


class InvalidWindowError(NewsletterError, ValueError):
    """A week selector could not be interpreted."""
    pass


class ApiError(NewsletterError):
    """A call to the remote Campus Life API failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(ApiError):
    """The remote API rejected our credentials (HTTP 401)."""
    pass


class DataFetchError(NewsletterError):
    """Events or organizers could not be loaded; no bundle was built."""
    pass


class SinkError(NewsletterError):
    """An output sink (clipboard, preview mail) could not deliver a document."""
    pass
