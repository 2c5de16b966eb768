from datetime import datetime, timezone

import pytest

from ghprovider.errors import (
    APIErrorResponse,
    APIRateLimitError,
    AlreadyExistsError,
    FieldRequiredError,
    GitProviderError,
    HTTPError,
    InvalidCredentialsError,
    InvalidServerDataError,
    MultiError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)


def test_multi_error_contains_classes():
    err = MultiError(NotFoundError(), FieldRequiredError("Foo.Bar"))
    assert err.contains(NotFoundError)
    assert err.contains(FieldRequiredError)
    assert err.contains(MultiError)
    assert not err.contains(AlreadyExistsError)


def test_multi_error_contains_nested():
    inner = MultiError(FieldRequiredError("Foo.Bar"))
    outer = MultiError(inner, InvalidServerDataError())
    assert outer.contains(FieldRequiredError)
    assert outer.contains(InvalidServerDataError)
    assert outer.contains(inner)


def test_multi_error_contains_instance_identity():
    original = NotFoundError()
    err = MultiError(original)
    assert err.contains(original)
    assert not err.contains(NotFoundError())


def test_multi_error_follows_cause_chain():
    cause = AlreadyExistsError()
    err = MultiError(ValidationError("Foo.Visibility", "bad", cause=cause))
    assert err.contains(AlreadyExistsError)
    assert err.contains(cause)


def test_multi_error_message_includes_members():
    first = NotFoundError("first problem")
    second = AlreadyExistsError("second problem")
    err = MultiError(first, second)
    assert str(first) in str(err)
    assert str(second) in str(err)
    assert err.errors == (first, second)


def test_multi_error_single_member_message():
    only = NotFoundError("only problem")
    assert str(MultiError(only)) == str(only)


def test_http_error_message_and_fields():
    err = HTTPError(
        error_message="GET /x: 500",
        message="boom",
        documentation_url="https://example.com/docs",
        status_code=500,
    )
    assert str(err) == "GET /x: 500"
    assert err.message == "boom"
    assert err.documentation_url == "https://example.com/docs"
    assert err.status_code == 500


def test_rate_limit_error_is_http_error_with_limits():
    reset = datetime(2021, 1, 1, tzinfo=timezone.utc)
    err = RateLimitError(limit=60, remaining=0, reset=reset, error_message="limited")
    assert isinstance(err, HTTPError)
    assert (err.limit, err.remaining, err.reset) == (60, 0, reset)
    assert str(err) == "limited"


def test_invalid_credentials_error_is_http_error_with_status():
    err = InvalidCredentialsError(error_message="denied", status_code=401)
    assert isinstance(err, HTTPError)
    assert err.status_code == 401
    assert str(err) == "denied"


def test_api_error_response_message_holds_details():
    err = APIErrorResponse(404, "Not Found", method="GET", url="https://example.com/repos/a/b")
    assert err.status_code == 404
    assert "Not Found" in str(err)
    assert "https://example.com/repos/a/b" in str(err)
    assert err.errors == []


def test_api_rate_limit_error_fields():
    err = APIRateLimitError(403, "API rate limit exceeded", limit=5000, remaining=0)
    assert err.limit == 5000
    assert err.remaining == 0
    assert "API rate limit exceeded" in str(err)


def test_field_required_error_keeps_field():
    err = FieldRequiredError("Foo.Bar")
    assert err.field == "Foo.Bar"
    assert "Foo.Bar" in str(err)


def test_every_error_is_a_git_provider_error():
    err = MultiError(NotFoundError())
    assert isinstance(err, GitProviderError)
    assert err.contains(NotFoundError)
    assert isinstance(NotFoundError(), GitProviderError)
    assert isinstance(FieldRequiredError("Foo.Bar"), GitProviderError)