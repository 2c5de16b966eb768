from datetime import datetime, timezone

import pytest

from ghprovider.errors import (
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
from ghprovider.models import (
    OrganizationRef,
    OrgRepositoryRef,
    UserRef,
    UserRepositoryRef,
)
from ghprovider.util import (
    ALREADY_EXISTS_MAGIC_STRING,
    RATE_LIMIT_DOC_URL,
    ListOptions,
    PageResponse,
    Validator,
    all_pages,
    handle_http_error,
    validate_api_object,
    validate_identity_fields,
    validate_org_repository_ref,
    validate_organization_ref,
    validate_user_ref,
    validate_user_repository_ref,
)


def new_gh_error():
    return APIErrorResponse(404, method="GET", url="")


def test_validate_api_object_no_error():
    seen = []
    result = validate_api_object("Foo", lambda v: seen.append(v.name))
    assert result is None
    assert seen == ["Foo"]


def test_validate_api_object_one_error():
    with pytest.raises(MultiError) as info:
        validate_api_object("Foo", lambda v: v.required("FieldBar"))
    err = info.value
    assert err.contains(InvalidServerDataError)
    assert err.contains(MultiError)
    assert err.contains(FieldRequiredError)


def test_validator_paths_and_append():
    validator = Validator("GitHub.Repository")
    assert validator.error() is None
    validator.append(None, "x", "Visibility")
    assert validator.error() is None
    cause = InvalidArgumentError("bad")
    validator.append(cause, "x", "Visibility")
    validator.required("Name")
    err = validator.error()
    assert err.contains(cause)
    assert [e.field for e in err.errors] == [
        "GitHub.Repository.Visibility",
        "GitHub.Repository.Name",
    ]
    assert isinstance(err.errors[0], ValidationError)
    assert err.errors[0].value == "x"


def _pages_one(_i):
    return PageResponse(next_page=0)


def _pages_two(i):
    if i == 1:
        return PageResponse(next_page=2)
    return PageResponse(next_page=0)


def _pages_error_at_second(i):
    if i == 1:
        return PageResponse(next_page=2)
    if i == 2:
        raise new_gh_error()
    if i == 3:
        return PageResponse(next_page=4)
    return PageResponse(next_page=0)


@pytest.mark.parametrize(
    ("fn", "expected_calls", "expected_errs"),
    [
        (_pages_one, 1, []),
        (_pages_two, 2, []),
        (_pages_error_at_second, 2, [MultiError, NotFoundError, APIErrorResponse]),
    ],
    ids=["one page only, no error", "two pages, no error", "four pages, error at second"],
)
def test_all_pages(fn, expected_calls, expected_errs):
    options = ListOptions()
    # Page indexes are 1-based, and omitting the page is the same as page=1.
    options.page = 1
    calls = 0

    def page_fn():
        nonlocal calls
        calls += 1
        assert options.page == calls
        return fn(calls)

    if expected_errs:
        with pytest.raises(MultiError) as info:
            all_pages(options, page_fn)
        for kind in expected_errs:
            assert info.value.contains(kind)
    else:
        assert all_pages(options, page_fn) == []
    assert calls == expected_calls


def test_all_pages_collects_items_in_order():
    pages = {1: PageResponse(["a", "b"], 2), 2: PageResponse(["c"], 0)}
    options = ListOptions(page=1)
    assert all_pages(options, lambda: pages[options.page]) == ["a", "b", "c"]
    assert options.page == 2


def test_handle_http_error_none():
    assert handle_http_error(None) is None


def test_handle_http_error_passes_unknown_errors():
    err = RuntimeError("boom")
    assert handle_http_error(err) is err


@pytest.mark.parametrize("status", [401, 403])
def test_handle_http_error_invalid_credentials(status):
    raw = APIErrorResponse(status, "Bad credentials")
    err = handle_http_error(raw)
    assert err.contains(InvalidCredentialsError)
    assert err.contains(raw)
    typed = next(e for e in err.errors if isinstance(e, InvalidCredentialsError))
    assert typed.status_code == status
    assert typed.message == "Bad credentials"
    assert typed.error_message == str(raw)


def test_handle_http_error_not_found():
    raw = new_gh_error()
    err = handle_http_error(raw)
    assert err.contains(NotFoundError)
    assert err.contains(raw)


def test_handle_http_error_already_exists():
    raw = APIErrorResponse(422, "Repository creation failed.", errors=[{"message": ALREADY_EXISTS_MAGIC_STRING}])
    err = handle_http_error(raw)
    assert err.contains(AlreadyExistsError)
    assert not err.contains(NotFoundError)


def test_handle_http_error_generic_http_error():
    raw = APIErrorResponse(500, "Server Error", documentation_url="https://example.com/docs")
    err = handle_http_error(raw)
    typed = next(e for e in err.errors if isinstance(e, HTTPError))
    assert typed.status_code == 500
    assert typed.documentation_url == "https://example.com/docs"
    assert not err.contains(AlreadyExistsError)


def test_handle_http_error_rate_limit():
    reset = datetime(2021, 1, 1, tzinfo=timezone.utc)
    raw = APIRateLimitError(403, "API rate limit exceeded", limit=60, remaining=0, reset=reset)
    err = handle_http_error(raw)
    typed = next(e for e in err.errors if isinstance(e, RateLimitError))
    assert typed.documentation_url == RATE_LIMIT_DOC_URL
    assert (typed.limit, typed.remaining, typed.reset) == (60, 0, reset)
    assert not err.contains(InvalidCredentialsError)


def test_validate_identity_fields_accepts_org_and_user():
    assert validate_identity_fields(OrganizationRef("github.com", "fluxcd"), "github.com") is None
    assert validate_identity_fields(UserRef("github.com", "someone"), "github.com") is None


def test_validate_identity_fields_wrong_domain():
    with pytest.raises(DomainUnsupportedError) as info:
        validate_identity_fields(OrganizationRef("gitlab.com", "fluxcd"), "github.com")
    assert "gitlab.com" in str(info.value)


def test_validate_identity_fields_suborganization():
    with pytest.raises(NoProviderSupportError):
        validate_identity_fields(OrganizationRef("github.com", "fluxcd", ("sub",)), "github.com")


class _OddRef:
    domain = "github.com"

    def identity_type(self):
        return "galaxy"


def test_validate_identity_fields_invalid_type():
    with pytest.raises(InvalidArgumentError):
        validate_identity_fields(_OddRef(), "github.com")


def test_validate_organization_ref_requires_fields():
    with pytest.raises(MultiError) as info:
        validate_organization_ref(OrganizationRef("", ""), "github.com")
    assert info.value.contains(FieldRequiredError)
    assert len(info.value.errors) == 2


def test_validate_org_repository_ref():
    ref = OrgRepositoryRef("github.com", "fluxcd", "flux")
    assert validate_org_repository_ref(ref, "github.com") is None
    with pytest.raises(MultiError) as info:
        validate_org_repository_ref(OrgRepositoryRef("github.com", "fluxcd", ""), "github.com")
    assert [e.field for e in info.value.errors] == ["OrgRepositoryRef.RepositoryName"]


def test_validate_user_ref_and_user_repository_ref():
    with pytest.raises(MultiError) as info:
        validate_user_ref(UserRef("github.com", ""), "github.com")
    assert [e.field for e in info.value.errors] == ["UserRef.UserLogin"]
    with pytest.raises(DomainUnsupportedError):
        validate_user_repository_ref(UserRepositoryRef("example.com", "someone", "repo"), "github.com")