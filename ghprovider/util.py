"""Shared helpers: reference validation, error translation and pagination."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import (
    AlreadyExistsError,
    APIErrorResponse,
    APIRateLimitError,
    DomainUnsupportedError,
    FieldRequiredError,
    HTTPError,
    InvalidArgumentError,
    InvalidCredentialsError,
    InvalidServerDataError,
    MultiError,
    NoProviderSupportError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from .models import IdentityType

ALREADY_EXISTS_MAGIC_STRING = "name already exists on this account"
RATE_LIMIT_DOC_URL = "https://developer.github.com/v3/#rate-limiting"


@dataclass
class ClientContext:
    """State shared by every sub-client of one client."""

    api: Any
    domain: str
    destructive_actions: bool = False


@dataclass
class Validator:
    """Collects field errors of one named structure."""

    name: str
    errors: list[Exception] = field(default_factory=list)

    def _path(self, fields: tuple[str, ...]) -> str:
        return ".".join((self.name, *fields))

    def required(self, *args: str) -> None:
        self.errors.append(FieldRequiredError(self._path(args)))

    def append(self, error: BaseException | None, value: Any, *args: str) -> None:
        if error is None:
            return
        self.errors.append(
            ValidationError(self._path(args), value=value, message=str(error), cause=error)
        )

    def error(self) -> MultiError | None:
        return MultiError(*self.errors) if self.errors else None


@dataclass
class ListOptions:
    page: int = 0
    per_page: int = 0


@dataclass
class PageResponse:
    items: list[Any] = field(default_factory=list)
    next_page: int = 0


def _validate_targets(name: str, fields: Mapping[str, Any]) -> None:
    validator = Validator(name)
    for field_name, value in fields.items():
        if not value:
            validator.required(field_name)
    err = validator.error()
    if err is not None:
        raise err


def validate_user_repository_ref(ref: Any, expected_domain: str) -> None:
    _validate_targets(
        "UserRepositoryRef",
        {"Domain": ref.domain, "UserLogin": ref.user_login, "RepositoryName": ref.repository_name},
    )
    validate_identity_fields(ref, expected_domain)


def validate_org_repository_ref(ref: Any, expected_domain: str) -> None:
    _validate_targets(
        "OrgRepositoryRef",
        {
            "Domain": ref.domain,
            "Organization": ref.organization,
            "RepositoryName": ref.repository_name,
        },
    )
    validate_identity_fields(ref, expected_domain)


def validate_organization_ref(ref: Any, expected_domain: str) -> None:
    _validate_targets("OrganizationRef", {"Domain": ref.domain, "Organization": ref.organization})
    validate_identity_fields(ref, expected_domain)


def validate_user_ref(ref: Any, expected_domain: str) -> None:
    _validate_targets("UserRef", {"Domain": ref.domain, "UserLogin": ref.user_login})
    validate_identity_fields(ref, expected_domain)


def validate_identity_fields(ref: Any, expected_domain: str) -> None:
    """Check that the reference's domain is ours and its identity type is supported."""
    if ref.domain != expected_domain:
        raise DomainUnsupportedError(f'domain "{ref.domain}" not supported by this client')
    identity_type = ref.identity_type()
    if identity_type in (IdentityType.ORGANIZATION, IdentityType.USER):
        return
    if identity_type == IdentityType.SUBORGANIZATION:
        raise NoProviderSupportError("github doesn't support sub-organizations")
    raise InvalidArgumentError(f"invalid identity type: {identity_type}")


def handle_http_error(err: BaseException | None) -> BaseException | None:
    """Translate a raw API error into a MultiError that also holds a typed error.

    Unknown errors are returned unchanged.
    """
    if err is None:
        return None
    if isinstance(err, APIRateLimitError):
        return MultiError(
            err,
            RateLimitError(
                status_code=err.status_code,
                response=err.response,
                error_message=str(err),
                message=err.message,
                documentation_url=RATE_LIMIT_DOC_URL,
                limit=err.limit,
                remaining=err.remaining,
                reset=err.reset,
            ),
        )
    if isinstance(err, APIErrorResponse):
        http = {
            "status_code": err.status_code,
            "response": err.response,
            "error_message": str(err),
            "message": err.message,
            "documentation_url": err.documentation_url,
        }
        if err.status_code in (401, 403):
            return MultiError(err, InvalidCredentialsError(**http))
        if err.status_code == 404:
            return MultiError(err, NotFoundError())
        if any(
            isinstance(item, Mapping) and item.get("message") == ALREADY_EXISTS_MAGIC_STRING
            for item in err.errors
        ):
            return MultiError(err, AlreadyExistsError())
        return MultiError(err, HTTPError(**http))
    return err


def all_pages(options: ListOptions, fn: Callable[[], PageResponse]) -> list[Any]:
    """Call fn once per page, advancing options.page, and return all items.

    API errors raised by fn are translated with handle_http_error.
    """
    items: list[Any] = []
    while True:
        try:
            response = fn()
        except (APIErrorResponse, APIRateLimitError) as err:
            raise handle_http_error(err) from err
        items.extend(response.items)
        if not response.next_page:
            return items
        options.page = response.next_page


def validate_api_object(name: str, fn: Callable[[Validator], None]) -> None:
    """Run fn with a fresh Validator and raise if it recorded errors.

    The raised MultiError also marks the data as invalid server data.
    """
    validator = Validator(name)
    fn(validator)
    err = validator.error()
    if err is not None:
        raise MultiError(err, InvalidServerDataError())