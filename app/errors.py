"""Exception hierarchy shared by the catalog client and the favorites store."""

from __future__ import annotations


class MovieFinderError(Exception):
    """Base class for application errors."""


class FetchFailed(MovieFinderError):
    """A catalog request did not produce a usable payload."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


class NetworkFailure(FetchFailed):
    """The request never produced an HTTP response."""


class HttpError(FetchFailed):
    """The catalog answered with a non-success status code."""


class DecodeFailure(FetchFailed):
    """The response body was not the JSON document we expected."""


class NotFound(FetchFailed):
    """No movie matches the requested identifier."""


class StorageFailure(MovieFinderError):
    """Reading from or writing to durable storage failed."""
