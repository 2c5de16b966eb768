"""Error types raised by the GitHub provider."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime
from typing import Any


class GitProviderError(Exception):
    """Base class of every error raised by this package."""

    default_message = "git provider error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class NotFoundError(GitProviderError):
    """The requested resource does not exist."""

    default_message = "the requested resource was not found"


class AlreadyExistsError(GitProviderError):
    """The resource to create exists already."""

    default_message = "the resource already exists"


class InvalidServerDataError(GitProviderError):
    """The server returned data that could not be used."""

    default_message = "the server returned invalid data"


class NoProviderSupportError(GitProviderError):
    """The operation is not supported by this provider."""

    default_message = "no provider support for this operation"


class DomainUnsupportedError(GitProviderError):
    """The domain of a reference is not served by this client."""

    default_message = "the given domain is not supported by this client"


class InvalidArgumentError(GitProviderError):
    """An argument had an invalid value."""

    default_message = "invalid argument"


class DestructiveCallDisallowedError(GitProviderError):
    """A destructive call was made without enabling destructive calls."""

    default_message = "destructive API calls are not allowed by this client"


class UnexpectedEventError(GitProviderError):
    """Something happened that should never happen."""

    default_message = "an unexpected event occurred"


class MissingHeaderError(GitProviderError):
    """An expected response header was absent."""

    default_message = "the response is missing an expected header"


class FieldRequiredError(GitProviderError):
    """A required field was not set."""

    def __init__(self, field: str = "") -> None:
        self.field = field
        super().__init__(f"{field}: field is required" if field else "field is required")


class ValidationError(GitProviderError):
    """A field held an invalid value."""

    def __init__(
        self,
        field: str,
        value: Any = None,
        message: str = "invalid field value",
        cause: BaseException | None = None,
    ) -> None:
        self.field = field
        self.value = value
        self.message = message
        super().__init__(f"{field}: {message}")
        self.__cause__ = cause


class HTTPError(GitProviderError):
    """A generic error returned by the provider's HTTP API."""

    def __init__(
        self,
        *,
        error_message: str = "",
        message: str = "",
        documentation_url: str = "",
        status_code: int | None = None,
        response: Any = None,
    ) -> None:
        self.error_message = error_message
        self.message = message
        self.documentation_url = documentation_url
        self.status_code = status_code
        self.response = response
        super().__init__(error_message or message or "HTTP error")


class RateLimitError(HTTPError):
    """The API rate limit was exceeded."""

    def __init__(
        self,
        *,
        limit: int = 0,
        remaining: int = 0,
        reset: datetime | None = None,
        **http: Any,
    ) -> None:
        self.limit = limit
        self.remaining = remaining
        self.reset = reset
        super().__init__(**http)


class InvalidCredentialsError(HTTPError):
    """The credentials were rejected by the server."""


class APIErrorResponse(GitProviderError):
    """A non-successful response of the GitHub REST API."""

    def __init__(
        self,
        status_code: int,
        message: str = "",
        *,
        method: str = "GET",
        url: str = "",
        errors: Any = (),
        documentation_url: str = "",
        response: Any = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.method = method
        self.url = url
        self.errors = list(errors)
        self.documentation_url = documentation_url
        self.response = response
        super().__init__(f"{method} {url}: {status_code} {message} {self.errors}")


class APIRateLimitError(GitProviderError):
    """A rate-limit response of the GitHub REST API."""

    def __init__(
        self,
        status_code: int = 403,
        message: str = "",
        *,
        method: str = "GET",
        url: str = "",
        limit: int = 0,
        remaining: int = 0,
        reset: datetime | None = None,
        response: Any = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.method = method
        self.url = url
        self.limit = limit
        self.remaining = remaining
        self.reset = reset
        self.response = response
        super().__init__(
            f"{method} {url}: {status_code} {message} "
            f"[rate limit {limit}, remaining {remaining}, reset {reset}]"
        )


def _walk(err: BaseException) -> Iterator[BaseException]:
    stack: list[BaseException] = [err]
    seen: set[int] = set()
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        if isinstance(current, MultiError):
            stack.extend(current.errors)
        if current.__cause__ is not None:
            stack.append(current.__cause__)


class MultiError(GitProviderError):
    """Several errors reported together; query it with contains()."""

    def __init__(self, *errors: BaseException) -> None:
        self.errors = tuple(errors)
        if len(self.errors) == 1:
            text = str(self.errors[0])
        else:
            text = "multiple errors occurred: " + "; ".join(str(e) for e in self.errors)
        super().__init__(text or "multiple errors occurred")

    def contains(self, kind: type[BaseException] | BaseException) -> bool:
        """Tell whether this error or any error it holds matches kind.

        kind is either an exception class or an exception instance.
        """
        for err in _walk(self):
            if isinstance(kind, type):
                if isinstance(err, kind):
                    return True
            elif err is kind:
                return True
        return False