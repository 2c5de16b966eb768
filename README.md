# ghprovider

A resource layer for GitHub and GitHub Enterprise. It models organizations,
teams, organization and user repositories, deploy keys, team access lists,
branches, commits and pull requests, validates references and requests, and
can *reconcile* a desired state: create a resource when it is missing, update
it when it differs, and leave it alone when it already matches.

It has no dependencies outside the standard library.

## What the package does not do

The package does not talk HTTP itself and has no client factory. Every
sub-client works through a `ClientContext` whose `api` member you supply: an
object with one method per GitHub REST call (listed below) that returns the
API objects as dictionaries and raises the package's errors on failure. There
is no command-line tool.

## The API object

The modules call these methods on `ClientContext.api`:

| Method | Used by |
| --- | --- |
| `get_org(org_name)`, `list_orgs()` | `organizations` |
| `list_org_team_members(org_name, team_name)`, `list_org_teams(org_name)` | `organizations` |
| `get_repo(owner, repo)`, `list_org_repos(org)`, `create_repo(org_name, req)`, `update_repo(owner, repo, req)`, `delete_repo(owner, repo)` | `repositories`, `orgrepos` |
| `list_keys(owner, repo)`, `create_key(owner, repo, req)`, `delete_key(owner, repo, key_id)` | `deploykeys` |
| `list_commits_page(owner, repo, branch, per_page, page)`, `create_tree(owner, repo, base_tree, entries)`, `create_commit(owner, repo, message, tree_sha, parents)`, `update_ref(owner, repo, ref, sha, force)` | `commits` |
| `create_ref(owner, repo, ref, sha)`, `create_pull_request(owner, repo, title, head, base, body)` | `branches` |
| `get_team_permissions(org_name, repo, team_name)`, `list_repo_teams(org_name, repo)`, `add_team(org_name, repo, team_name, permission)`, `remove_team(org_name, repo, team_name)` | `teamaccess` |

`create_repo` is called with an empty `org_name` for user repositories.

`ghprovider.util` has helpers for writing such an object:

- `all_pages(options, fn)` calls `fn()` once per page, advancing
  `options.page` (a `ListOptions`) to each `PageResponse.next_page`, and
  returns all items collected.
- `handle_http_error(err)` turns an `APIErrorResponse` or `APIRateLimitError`
  into a `MultiError` that also holds a typed error (`NotFoundError` for 404,
  `InvalidCredentialsError` for 401 and 403, `AlreadyExistsError` when the
  response lists "name already exists on this account", `RateLimitError`,
  or a generic `HTTPError`). `all_pages` applies it for you. The reconcile
  methods only recognise a missing resource by a `NotFoundError`, so raise
  translated errors.
- `validate_api_object(name, fn)` runs `fn` with a `Validator` and raises a
  `MultiError` marked with `InvalidServerDataError` if a field was reported.

## Organizations and teams

```python
from ghprovider.models import OrganizationRef
from ghprovider.organizations import OrganizationsClient
from ghprovider.util import ClientContext

context = ClientContext(api=my_api, domain="github.com")
orgs = OrganizationsClient(context)

org = orgs.get(OrganizationRef(domain="github.com", organization="example-org"))
print(org.get().name, org.get().description)

for team in org.teams.list():
    print(team.get().name, team.get().members)
```

References are checked against the context's domain (`DomainUnsupportedError`
otherwise) and for empty fields (a `MultiError` of `FieldRequiredError`).
References with sub-organizations, and `orgs.children(ref)`, raise
`NoProviderSupportError`.

## Repositories

```python
from ghprovider.models import (
    LicenseTemplate,
    OrgRepositoryRef,
    RepositoryCreateOptions,
    RepositoryInfo,
)
from ghprovider.orgrepos import OrgRepositoriesClient

repos = OrgRepositoriesClient(context)
ref = OrgRepositoryRef(domain="github.com", organization="example-org", repository_name="demo")

repo, action_taken = repos.reconcile(
    ref,
    RepositoryInfo(description="Demo repository"),
    RepositoryCreateOptions(auto_init=True, license_template=LicenseTemplate.MIT),
)
```

Requests are defaulted before use: a missing visibility becomes `private` and
a missing default branch becomes `main`. `reconcile` creates the repository
when `get` raises `NotFoundError`, updates it when its information differs,
and returns the repository with a flag telling whether anything was done.

A `UserRepository` or `OrgRepository` offers `get`, `set`, `update`,
`delete` and `reconcile`; its `reconcile` compares only the desired-state
fields (see `repository_spec`). Each repository exposes the sub-clients
`deploy_keys`, `commits`, `branches` and `pull_requests`; an `OrgRepository`
also has `team_access`.

## Deploy keys and team access

`DeployKeyClient` and `TeamAccessClient` have `get`, `list`, `create` and
`reconcile`. A deploy key defaults to read-only; a team access entry defaults
to the `pull` permission. Updating a deploy key deletes and recreates it. The
permission of a team is the highest granted one in `pull`, `triage`, `push`,
`maintain`, `admin` order (`get_permission_from_map`).

## Branches, commits and pull requests

```python
from ghprovider.models import CommitFile

repo.branches.create("feature", sha)
repo.commits.create("feature", "add config", [CommitFile(path="config.txt", content="data")])
pr = repo.pull_requests.create("Add config", "feature", "main", "Adds a config file")
print(pr.get().web_url)
```

`CommitClient.create` raises `InvalidArgumentError` when no files are given
and `NotFoundError` when the branch has no commits.

## Errors

All errors derive from `ghprovider.errors.GitProviderError`. A `MultiError`
holds several errors; ask it for one kind with `err.contains(NotFoundError)`.