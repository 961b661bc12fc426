"""Exception hierarchy for contentful-kit.

All errors raised by the library derive from :class:`ContentfulError`:

- ``InvalidArgumentError``: a required identifier or locale is missing.
  Raised locally, before any request is sent.
- ``RemoteError`` and its subclasses: the API answered with a non-success
  status. ``ConflictError`` is the version precondition mismatch (409).
- ``TransportError``: the request never produced an HTTP response.
- ``ProcessingTimeoutError``: asset processing did not finish in time.
"""

from typing import Any


class ContentfulError(Exception):
    """Base exception for all contentful-kit errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidArgumentError(ContentfulError, ValueError):
    """A required argument was missing or empty."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        super().__init__(message or f"The {argument} must be set.")
        self.argument = argument


class FormatError(ContentfulError):
    """The API returned a body that could not be parsed."""


class RemoteError(ContentfulError):
    """The API returned a non-success status code.

    Attributes:
        status_code: HTTP status code of the response
        request_id: Value of the ``X-Contentful-Request-Id`` header, if any
        method: HTTP method of the failed request
        url: URL of the failed request
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        details: dict[str, Any] | None = None,
        request_id: str | None = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code
        self.request_id = request_id
        self.method = method
        self.url = url


class ValidationError(RemoteError):
    """The request payload was rejected (400/422)."""


class AuthenticationError(RemoteError):
    """The management token was missing or invalid (401)."""


class AuthorizationError(RemoteError):
    """The token lacks permission for the resource (403)."""


class NotFoundError(RemoteError):
    """The resource does not exist (404)."""


class ConflictError(RemoteError):
    """The supplied version does not match the current resource version (409)."""


class RateLimitError(RemoteError):
    """Too many requests (429).

    Attributes:
        retry_after: Seconds to wait as announced by the server, if any
    """

    def __init__(self, message: str, *, retry_after: int | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(RemoteError):
    """The API failed to handle the request (5xx)."""


class TransportError(ContentfulError):
    """The request failed below the HTTP layer."""


class ConnectionError(TransportError):  # noqa: A001
    """The API host could not be reached."""


class TimeoutError(TransportError):  # noqa: A001
    """The request did not complete within the configured timeout."""


class ProcessingTimeoutError(ContentfulError):
    """Asset processing did not finish before the delay ceiling.

    The whole upload/process sequence must be restarted; there is no
    resumable handle.
    """

    def __init__(self, max_delay: int, asset_id: str | None = None, locale: str | None = None) -> None:
        super().__init__(
            "The processing of the asset did not finish in a timely manner. "
            f"Max delay of {max_delay} reached.",
            details={"asset_id": asset_id, "locale": locale, "max_delay": max_delay},
        )
        self.max_delay = max_delay
        self.asset_id = asset_id
        self.locale = locale
