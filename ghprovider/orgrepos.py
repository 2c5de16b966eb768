"""Repositories of organizations."""

from __future__ import annotations

from typing import Any

from .errors import GitProviderError, MultiError, NotFoundError
from .models import (
    OrganizationRef,
    OrgRepositoryRef,
    RepositoryCreateOptions,
    RepositoryInfo,
    validate_and_default,
)
from .repositories import (
    OrgRepository,
    UserRepository,
    apply_repo_create_options,
    repository_to_api,
)
from .util import ClientContext, validate_org_repository_ref, validate_organization_ref


def _is_not_found(err: BaseException) -> bool:
    if isinstance(err, NotFoundError):
        return True
    return isinstance(err, MultiError) and err.contains(NotFoundError)


def create_repository(
    api: Any,
    ref: Any,
    org_name: str,
    req: RepositoryInfo,
    options: RepositoryCreateOptions | None = None,
) -> dict[str, Any]:
    """Default and validate req, then create the repository; return the API object."""
    req = validate_and_default(req)
    data = repository_to_api(req, ref)
    apply_repo_create_options(data, options or RepositoryCreateOptions())
    return api.create_repo(org_name, data)


def reconcile_repository(actual: UserRepository, req: RepositoryInfo) -> bool:
    """Make req the state of actual; return whether an update was made."""
    if req == actual.get():
        return False
    actual.set(req)
    actual.update()
    return True


class OrgRepositoriesClient:
    """Operates on the repositories of organizations."""

    def __init__(self, context: ClientContext) -> None:
        self.context = context

    def get(self, ref: OrgRepositoryRef) -> OrgRepository:
        """Return the repository ref points to."""
        validate_org_repository_ref(ref, self.context.domain)
        api_obj = self.context.api.get_repo(ref.identity(), ref.repository())
        return OrgRepository(self.context, api_obj, ref)

    def list(self, ref: OrganizationRef) -> list[OrgRepository]:
        """Return every repository of the organization ref points to."""
        validate_organization_ref(ref, self.context.domain)
        return [
            OrgRepository(
                self.context,
                api_obj,
                OrgRepositoryRef(
                    domain=ref.domain,
                    organization=ref.organization,
                    repository_name=api_obj["name"],
                    sub_organizations=ref.sub_organizations,
                ),
            )
            for api_obj in self.context.api.list_org_repos(ref.organization)
        ]

    def create(
        self,
        ref: OrgRepositoryRef,
        req: RepositoryInfo,
        options: RepositoryCreateOptions | None = None,
    ) -> OrgRepository:
        """Create the repository ref points to with the data in req."""
        validate_org_repository_ref(ref, self.context.domain)
        api_obj = create_repository(self.context.api, ref, ref.organization, req, options)
        return OrgRepository(self.context, api_obj, ref)

    def reconcile(
        self,
        ref: OrgRepositoryRef,
        req: RepositoryInfo,
        options: RepositoryCreateOptions | None = None,
    ) -> tuple[OrgRepository, bool]:
        """Make req the actual state; return the repository and whether an action was taken."""
        req = validate_and_default(req)
        try:
            actual = self.get(ref)
        except GitProviderError as err:
            if not _is_not_found(err):
                raise
            return self.create(ref, req, options), True
        return actual, reconcile_repository(actual, req)