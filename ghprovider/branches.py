"""Branch and pull request clients of a repository."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .models import PullRequest
from .util import ClientContext


@dataclass
class BranchClient:
    """Operates on the branches of one repository."""

    context: ClientContext
    ref: Any

    def create(self, branch: str, sha: str) -> None:
        """Create branch pointing at the commit sha."""
        self.context.api.create_ref(
            self.ref.identity(), self.ref.repository(), "refs/heads/" + branch, sha
        )


@dataclass
class PullRequestClient:
    """Operates on the pull requests of one repository."""

    context: ClientContext
    ref: Any

    def create(self, title: str, branch: str, base_branch: str, description: str) -> PullRequest:
        """Open a pull request merging branch into base_branch."""
        api_obj = self.context.api.create_pull_request(
            self.ref.identity(),
            self.ref.repository(),
            title,
            branch,
            base_branch,
            description,
        )
        return PullRequest(api_obj, self.context)