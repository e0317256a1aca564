"""Module for Bitbucket branch and commit operations."""

import logging
from typing import Any

from .client import BitbucketClient
from .descriptors import Operation

logger = logging.getLogger("mcp-bitbucket")


class BranchesMixin(BitbucketClient):
    """Mixin for Bitbucket branch operations.

    This mixin provides methods for listing and creating branches and for
    reading commit history.
    """

    def list_branches(self, workspace: str, repo_slug: str) -> Any:
        """
        List branches of a repository.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)
            repo_slug: Repository slug

        Returns:
            One page of the decoded API response

        Raises:
            BitbucketError: If the request fails
        """
        logger.debug(f"[list_branches] workspace={workspace}, repoSlug={repo_slug}")
        return self._request(
            Operation.LIST_BRANCHES, workspace=workspace, repo_slug=repo_slug
        )

    def create_branch(
        self, workspace: str, repo_slug: str, name: str, target_hash: str
    ) -> Any:
        """
        Create a branch pointing at a commit.

        Re-issuing this after a timeout may hit CONFLICT_ERROR if the first
        attempt went through.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)
            repo_slug: Repository slug
            name: New branch name
            target_hash: Commit hash the branch starts from

        Returns:
            Decoded JSON of the created branch

        Raises:
            BitbucketError: If the request fails
        """
        logger.debug(
            f"[create_branch] workspace={workspace}, repoSlug={repo_slug}, "
            f"name={name}, targetHash={target_hash}"
        )
        return self._request(
            Operation.CREATE_BRANCH,
            workspace=workspace,
            repo_slug=repo_slug,
            name=name,
            target_hash=target_hash,
        )

    def list_commits(
        self, workspace: str, repo_slug: str, spec: str | None = None
    ) -> Any:
        """
        List commits, optionally reachable from a branch, tag or hash.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)
            repo_slug: Repository slug
            spec: Optional branch name, tag or commit hash

        Returns:
            One page of the decoded API response
        """
        logger.debug(
            f"[list_commits] workspace={workspace}, repoSlug={repo_slug}, "
            f"spec={spec or 'none'}"
        )
        return self._request(
            Operation.LIST_COMMITS, workspace=workspace, repo_slug=repo_slug, spec=spec
        )
