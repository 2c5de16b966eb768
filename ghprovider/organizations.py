"""Organizations and their teams."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import NoProviderSupportError
from .models import OrganizationInfo, OrganizationRef, TeamInfo
from .util import ClientContext, validate_organization_ref


def organization_from_api(api_obj: dict[str, Any]) -> OrganizationInfo:
    """Build an OrganizationInfo from an organization object of the API."""
    return OrganizationInfo(name=api_obj.get("name"), description=api_obj.get("description"))


@dataclass
class Team:
    """A team of an organization together with its members."""

    users: list[dict[str, Any]]
    info: TeamInfo
    ref: OrganizationRef

    @property
    def api_object(self) -> list[dict[str, Any]]:
        return self.users

    def get(self) -> TeamInfo:
        return self.info


@dataclass
class TeamsClient:
    """Operates on the teams of one organization."""

    context: ClientContext
    ref: OrganizationRef

    def get(self, team_name: str) -> Team:
        """Return the team team_name with the logins of its members."""
        users = self.context.api.list_org_team_members(self.ref.organization, team_name)
        logins = tuple(user["login"] for user in users)
        return Team(users=users, info=TeamInfo(name=team_name, members=logins), ref=self.ref)

    def list(self) -> list[Team]:
        """Return every team of the organization with its members."""
        api_objs = self.context.api.list_org_teams(self.ref.organization)
        return [self.get(api_obj["slug"]) for api_obj in api_objs]


@dataclass
class Organization:
    """An organization, backed by the API object."""

    context: ClientContext = field(repr=False, compare=False)
    api_object: dict[str, Any]
    ref: OrganizationRef
    teams: TeamsClient = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.teams = TeamsClient(self.context, self.ref)

    def get(self) -> OrganizationInfo:
        return organization_from_api(self.api_object)


@dataclass
class OrganizationsClient:
    """Operates on the organizations the user has access to."""

    context: ClientContext

    def get(self, ref: OrganizationRef) -> Organization:
        """Return the organization ref points to."""
        validate_organization_ref(ref, self.context.domain)
        api_obj = self.context.api.get_org(ref.organization)
        return Organization(self.context, api_obj, ref)

    def list(self) -> list[Organization]:
        """Return every top-level organization the user has access to."""
        return [
            Organization(
                self.context,
                api_obj,
                OrganizationRef(domain=self.context.domain, organization=api_obj["login"]),
            )
            for api_obj in self.context.api.list_orgs()
        ]

    def children(self, ref: OrganizationRef) -> list[Organization]:
        """Sub-organizations do not exist on GitHub; always raises."""
        raise NoProviderSupportError("github doesn't support sub-organizations")