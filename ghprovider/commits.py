"""Commits of a repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import InvalidArgumentError, NotFoundError
from .models import Commit, CommitFile
from .util import ClientContext

NEW_FILE_MODE = "100644"
BLOB_TYPE_FILE = "blob"


@dataclass
class CommitClient:
    """Operates on the commits of one repository."""

    context: ClientContext
    ref: Any

    def list_page(self, branch: str, per_page: int, page: int) -> list[Commit]:
        """Return one page of the commits of branch."""
        api_objs = self.context.api.list_commits_page(
            self.ref.identity(), self.ref.repository(), branch, per_page, page
        )
        return [Commit(api_obj, self) for api_obj in api_objs]

    def create(self, branch: str, message: str, files: list[CommitFile]) -> Commit:
        """Commit files on top of the latest commit of branch and move the branch to it."""
        if not files:
            raise InvalidArgumentError("no files added")
        entries = [
            {
                "path": item.path,
                "mode": NEW_FILE_MODE,
                "type": BLOB_TYPE_FILE,
                "content": item.content,
            }
            for item in files
        ]
        commits = self.list_page(branch, 1, 0)
        if not commits:
            raise NotFoundError(f"no commits found on branch {branch!r}")
        latest = commits[0].get()

        api = self.context.api
        owner, repo = self.ref.identity(), self.ref.repository()
        tree = api.create_tree(owner, repo, latest.tree_sha, entries)
        new_commit = api.create_commit(owner, repo, message, tree["sha"], [latest.sha])
        api.update_ref(owner, repo, "refs/heads/" + branch, new_commit["sha"], True)
        return Commit(new_commit, self)