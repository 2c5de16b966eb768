"""Team access control lists of a repository."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import GitProviderError, MultiError, NotFoundError
from .models import RepositoryPermission, TeamAccessInfo, validate_and_default
from .util import ClientContext

_PERMISSION_PRIORITY: dict[str, int] = {
    RepositoryPermission.PULL.value: 1,
    RepositoryPermission.TRIAGE.value: 2,
    RepositoryPermission.PUSH.value: 3,
    RepositoryPermission.MAINTAIN.value: 4,
    RepositoryPermission.ADMIN.value: 5,
}


def _is_not_found(err: BaseException) -> bool:
    if isinstance(err, NotFoundError):
        return True
    return isinstance(err, MultiError) and err.contains(NotFoundError)


def get_permission_from_map(permission_map: Mapping[str, bool]) -> RepositoryPermission | None:
    """Return the highest known permission set to true in permission_map, if any."""
    best: RepositoryPermission | None = None
    best_priority = 0
    for key, granted in permission_map.items():
        if not granted:
            continue
        priority = _PERMISSION_PRIORITY.get(getattr(key, "value", key), 0)
        if priority > best_priority:
            best = RepositoryPermission(getattr(key, "value", key))
            best_priority = priority
    return best


@dataclass
class TeamAccess:
    """The access one team has to a repository."""

    client: TeamAccessClient = field(repr=False, compare=False)
    info: TeamAccessInfo

    @property
    def api_object(self) -> None:
        """There is no underlying API object for team access."""
        return None

    def get(self) -> TeamAccessInfo:
        return self.info

    def set(self, info: TeamAccessInfo) -> None:
        """Validate info and make it the local state."""
        info.validate()
        self.info = info

    def repository(self) -> Any:
        return self.client.ref

    def delete(self) -> None:
        """Remove the team from the repository's access list."""
        ref = self.client.ref
        self.client.context.api.remove_team(ref.identity(), ref.repository(), self.info.name)

    def update(self) -> None:
        """Apply the local state to the server."""
        resp = self.client.create(self.get())
        self.set(resp.get())

    def reconcile(self) -> bool:
        """Make the local state the actual state; return whether anything changed."""
        req = self.get()
        try:
            actual = self.client.get(req.name)
        except GitProviderError as err:
            if not _is_not_found(err):
                raise
            resp = self.client.create(req)
            self.set(resp.get())
            return True
        if req == actual.get():
            return False
        self.update()
        return True


@dataclass
class TeamAccessClient:
    """Operates on the team access list of one repository."""

    context: ClientContext
    ref: Any

    def get(self, name: str) -> TeamAccess:
        """Return the access the team name has, or raise if it has none."""
        permission_map = self.context.api.get_team_permissions(
            self.ref.identity(), self.ref.repository(), name
        )
        return TeamAccess(
            self, TeamAccessInfo(name=name, permission=get_permission_from_map(permission_map))
        )

    def list(self) -> list[TeamAccess]:
        """Return the access of every team of the repository."""
        api_objs = self.context.api.list_repo_teams(self.ref.identity(), self.ref.repository())
        return [self.get(api_obj["slug"]) for api_obj in api_objs]

    def create(self, req: TeamAccessInfo) -> TeamAccess:
        """Grant the team in req access to the repository."""
        req = validate_and_default(req)
        self.context.api.add_team(
            self.ref.identity(), self.ref.repository(), req.name, req.permission
        )
        return TeamAccess(self, req)

    def reconcile(self, req: TeamAccessInfo) -> tuple[TeamAccess, bool]:
        """Make req the actual state; return the access and whether an action was taken."""
        req = validate_and_default(req)
        try:
            actual = self.get(req.name)
        except GitProviderError as err:
            if not _is_not_found(err):
                raise
            return self.create(req), True
        if req == actual.get():
            return actual, False
        actual.set(req)
        actual.update()
        return actual, True