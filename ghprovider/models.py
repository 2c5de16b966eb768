"""References, information records and light resources of the GitHub provider."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, TypeVar

from .errors import (
    FieldRequiredError,
    InvalidServerDataError,
    MultiError,
    ValidationError,
)

DEFAULT_BRANCH = "main"


class IdentityType(str, Enum):
    ORGANIZATION = "organization"
    SUBORGANIZATION = "suborganization"
    USER = "user"


class RepositoryVisibility(str, Enum):
    PUBLIC = "public"
    INTERNAL = "internal"
    PRIVATE = "private"


class RepositoryPermission(str, Enum):
    PULL = "pull"
    TRIAGE = "triage"
    PUSH = "push"
    MAINTAIN = "maintain"
    ADMIN = "admin"


class LicenseTemplate(str, Enum):
    APACHE2 = "apache-2.0"
    MIT = "mit"
    GPL3 = "gpl-3.0"


class TokenPermission(IntEnum):
    RW_REPOSITORY = 1


def _raise_collected(errors: list[Exception]) -> None:
    if errors:
        raise MultiError(*errors)


@dataclass(frozen=True)
class OrganizationRef:
    """Points to an organization, optionally to one of its sub-organizations."""

    domain: str
    organization: str
    sub_organizations: tuple[str, ...] = ()

    def identity(self) -> str:
        return "/".join((self.organization, *self.sub_organizations))

    def identity_type(self) -> IdentityType:
        if self.sub_organizations:
            return IdentityType.SUBORGANIZATION
        return IdentityType.ORGANIZATION


@dataclass(frozen=True)
class UserRef:
    """Points to a user account."""

    domain: str
    user_login: str

    def identity(self) -> str:
        return self.user_login

    def identity_type(self) -> IdentityType:
        return IdentityType.USER


@dataclass(frozen=True)
class OrgRepositoryRef:
    """Points to a repository owned by an organization."""

    domain: str
    organization: str
    repository_name: str
    sub_organizations: tuple[str, ...] = ()

    def identity(self) -> str:
        return "/".join((self.organization, *self.sub_organizations))

    def identity_type(self) -> IdentityType:
        if self.sub_organizations:
            return IdentityType.SUBORGANIZATION
        return IdentityType.ORGANIZATION

    def repository(self) -> str:
        return self.repository_name


@dataclass(frozen=True)
class UserRepositoryRef:
    """Points to a repository owned by a user."""

    domain: str
    user_login: str
    repository_name: str

    def identity(self) -> str:
        return self.user_login

    def identity_type(self) -> IdentityType:
        return IdentityType.USER

    def repository(self) -> str:
        return self.repository_name


@dataclass(frozen=True)
class OrganizationInfo:
    name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class TeamInfo:
    name: str
    members: tuple[str, ...] = ()


def validate_repository_visibility(visibility: Any) -> RepositoryVisibility:
    """Return the visibility as an enum member, or raise ValidationError."""
    try:
        return RepositoryVisibility(visibility)
    except ValueError as err:
        raise ValidationError(
            "RepositoryVisibility",
            value=visibility,
            message=f"{visibility!r} is not a valid repository visibility",
            cause=err,
        ) from None


@dataclass(frozen=True)
class RepositoryInfo:
    description: str | None = None
    default_branch: str | None = None
    visibility: RepositoryVisibility | None = None

    def validate(self) -> None:
        if self.visibility is not None:
            validate_repository_visibility(self.visibility)

    def with_defaults(self) -> RepositoryInfo:
        return dataclasses.replace(
            self,
            visibility=RepositoryVisibility.PRIVATE if self.visibility is None else self.visibility,
            default_branch=DEFAULT_BRANCH if self.default_branch is None else self.default_branch,
        )


@dataclass(frozen=True)
class DeployKeyInfo:
    name: str = ""
    key: bytes = b""
    read_only: bool | None = None

    def validate(self) -> None:
        errors: list[Exception] = []
        if not self.name:
            errors.append(FieldRequiredError("DeployKeyInfo.Name"))
        if not self.key:
            errors.append(FieldRequiredError("DeployKeyInfo.Key"))
        _raise_collected(errors)

    def with_defaults(self) -> DeployKeyInfo:
        if self.read_only is None:
            return dataclasses.replace(self, read_only=True)
        return self


@dataclass(frozen=True)
class TeamAccessInfo:
    name: str = ""
    permission: RepositoryPermission | None = None

    def validate(self) -> None:
        errors: list[Exception] = []
        if not self.name:
            errors.append(FieldRequiredError("TeamAccessInfo.Name"))
        if self.permission is not None:
            try:
                RepositoryPermission(self.permission)
            except ValueError:
                errors.append(
                    ValidationError(
                        "TeamAccessInfo.Permission",
                        value=self.permission,
                        message=f"{self.permission!r} is not a valid repository permission",
                    )
                )
        _raise_collected(errors)

    def with_defaults(self) -> TeamAccessInfo:
        if self.permission is None:
            return dataclasses.replace(self, permission=RepositoryPermission.PULL)
        return self


_Info = TypeVar("_Info", RepositoryInfo, DeployKeyInfo, TeamAccessInfo)


def validate_and_default(info: _Info) -> _Info:
    """Fill in the defaults of info, validate the result and return it."""
    defaulted = info.with_defaults()
    defaulted.validate()
    return defaulted


@dataclass(frozen=True)
class CommitInfo:
    sha: str
    tree_sha: str
    author: str
    message: str
    created_at: datetime


@dataclass(frozen=True)
class CommitFile:
    path: str | None = None
    content: str | None = None


@dataclass(frozen=True)
class PullRequestInfo:
    web_url: str = ""


@dataclass(frozen=True)
class RepositoryCreateOptions:
    auto_init: bool | None = None
    license_template: LicenseTemplate | None = None


def _parse_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def commit_from_api(api_obj: dict[str, Any]) -> CommitInfo:
    """Build a CommitInfo from a git commit object of the API."""
    try:
        author = api_obj["author"]
        return CommitInfo(
            sha=api_obj["sha"],
            tree_sha=api_obj["tree"]["sha"],
            author=author["name"],
            message=api_obj["message"],
            created_at=_parse_time(author["date"]),
        )
    except (KeyError, TypeError, ValueError) as err:
        raise InvalidServerDataError(f"incomplete commit object: {err!r}") from err


def pull_request_from_api(api_obj: dict[str, Any]) -> PullRequestInfo:
    """Build a PullRequestInfo from a pull request object of the API."""
    return PullRequestInfo(web_url=api_obj.get("html_url") or "")


@dataclass
class Commit:
    """A commit of a repository, backed by the API object."""

    api_object: dict[str, Any]
    client: Any = field(default=None, repr=False, compare=False)

    def get(self) -> CommitInfo:
        return commit_from_api(self.api_object)


@dataclass
class PullRequest:
    """A pull request, backed by the API object."""

    api_object: dict[str, Any]
    context: Any = field(default=None, repr=False, compare=False)

    def get(self) -> PullRequestInfo:
        return pull_request_from_api(self.api_object)