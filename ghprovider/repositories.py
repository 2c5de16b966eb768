"""Repositories owned by users and organizations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .branches import BranchClient, PullRequestClient
from .commits import CommitClient
from .deploykeys import DeployKeyClient
from .errors import GitProviderError, MultiError, NotFoundError
from .models import (
    OrgRepositoryRef,
    RepositoryCreateOptions,
    RepositoryInfo,
    validate_repository_visibility,
)
from .teamaccess import TeamAccessClient
from .util import ClientContext

# Fields that make up the desired state of a repository in create and update
# requests; everything else the server returns is status.
_SPEC_FIELDS = (
    "name",
    "description",
    "homepage",
    "private",
    "visibility",
    "has_issues",
    "has_projects",
    "has_wiki",
    "is_template",
    "default_branch",
    "team_id",
    "auto_init",
    "gitignore_template",
    "license_template",
    "allow_squash_merge",
    "allow_merge_commit",
    "allow_rebase_merge",
    "delete_branch_on_merge",
)


def _is_not_found(err: BaseException) -> bool:
    if isinstance(err, NotFoundError):
        return True
    return isinstance(err, MultiError) and err.contains(NotFoundError)


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def repository_from_api(api_obj: dict[str, Any]) -> RepositoryInfo:
    """Build a RepositoryInfo from a repository object of the API."""
    visibility = api_obj.get("visibility")
    return RepositoryInfo(
        description=api_obj.get("description"),
        default_branch=api_obj.get("default_branch"),
        visibility=None if visibility is None else validate_repository_visibility(visibility),
    )


def repository_info_to_api_obj(repo: RepositoryInfo, api_obj: dict[str, Any]) -> None:
    """Copy the set fields of repo into api_obj, leaving the others alone."""
    if repo.description is not None:
        api_obj["description"] = repo.description
    if repo.default_branch is not None:
        api_obj["default_branch"] = repo.default_branch
    if repo.visibility is not None:
        api_obj["visibility"] = str(_enum_value(repo.visibility))


def repository_to_api(repo: RepositoryInfo, ref: Any) -> dict[str, Any]:
    """Build the API request object for the repository ref with the data in repo."""
    api_obj: dict[str, Any] = {"name": ref.repository()}
    repository_info_to_api_obj(repo, api_obj)
    return api_obj


def apply_repo_create_options(api_obj: dict[str, Any], options: RepositoryCreateOptions) -> None:
    """Apply the creation options to a repository request object."""
    if options.auto_init is None:
        api_obj.pop("auto_init", None)
    else:
        api_obj["auto_init"] = options.auto_init
    if options.license_template is not None:
        api_obj["license_template"] = str(_enum_value(options.license_template))


def repository_spec(repo: dict[str, Any]) -> dict[str, Any]:
    """Return only the desired-state fields of a repository object."""
    return {name: repo.get(name) for name in _SPEC_FIELDS}


@dataclass
class UserRepository:
    """A repository owned by a user, backed by the API object."""

    context: ClientContext = field(repr=False, compare=False)
    api_object: dict[str, Any]
    ref: Any
    deploy_keys: DeployKeyClient = field(init=False, repr=False, compare=False)
    commits: CommitClient = field(init=False, repr=False, compare=False)
    branches: BranchClient = field(init=False, repr=False, compare=False)
    pull_requests: PullRequestClient = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.deploy_keys = DeployKeyClient(self.context, self.ref)
        self.commits = CommitClient(self.context, self.ref)
        self.branches = BranchClient(self.context, self.ref)
        self.pull_requests = PullRequestClient(self.context, self.ref)

    def get(self) -> RepositoryInfo:
        return repository_from_api(self.api_object)

    def set(self, info: RepositoryInfo) -> None:
        """Validate info and copy it into the API object."""
        info.validate()
        repository_info_to_api_obj(info, self.api_object)

    def update(self) -> None:
        """Apply the local state to the server and keep what the server returns."""
        self.api_object = self.context.api.update_repo(
            self.ref.identity(), self.ref.repository(), self.api_object
        )

    def reconcile(self) -> bool:
        """Make the local state the actual state; return whether anything changed."""
        api = self.context.api
        try:
            actual = api.get_repo(self.ref.identity(), self.ref.repository())
        except GitProviderError as err:
            if not _is_not_found(err):
                raise
            org_name = self.ref.organization if isinstance(self.ref, OrgRepositoryRef) else ""
            self.api_object = api.create_repo(org_name, self.api_object)
            return True
        if repository_spec(self.api_object) == repository_spec(actual):
            return False
        self.update()
        return True

    def delete(self) -> None:
        """Delete the repository irreversibly."""
        self.context.api.delete_repo(self.ref.identity(), self.ref.repository())


@dataclass
class OrgRepository(UserRepository):
    """A repository owned by an organization; it also has a team access list."""

    team_access: TeamAccessClient = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        self.team_access = TeamAccessClient(self.context, self.ref)