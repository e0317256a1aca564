"""Module for Bitbucket pull request operations."""

import logging
from typing import Any

from .client import BitbucketClient
from .constants import DEFAULT_PR_STATE, PR_STATES
from .descriptors import Operation

logger = logging.getLogger("mcp-bitbucket")


class PullRequestsMixin(BitbucketClient):
    """Mixin for Bitbucket pull request operations.

    This mixin provides methods for listing, reading, creating and commenting
    on pull requests, including their diff and changed files.
    """

    def list_pull_requests(
        self, workspace: str, repo_slug: str, state: str = DEFAULT_PR_STATE
    ) -> Any:
        """
        List pull requests of a repository.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)
            repo_slug: Repository slug
            state: PR state (OPEN, MERGED, DECLINED, SUPERSEDED)

        Returns:
            One page of the decoded API response

        Raises:
            BitbucketError: If the request fails
        """
        if state not in PR_STATES.values():
            logger.warning(f"Invalid PR state '{state}', using 'OPEN' instead")
            state = DEFAULT_PR_STATE

        logger.debug(
            f"[list_pull_requests] workspace={workspace}, repoSlug={repo_slug}, state={state}"
        )
        return self._request(
            Operation.LIST_PULL_REQUESTS,
            workspace=workspace,
            repo_slug=repo_slug,
            state=state,
        )

    def get_pull_request(self, workspace: str, repo_slug: str, pr_id: int) -> Any:
        """
        Get detailed information about a specific pull request.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)
            repo_slug: Repository slug
            pr_id: Pull request ID

        Returns:
            Decoded pull request JSON

        Raises:
            BitbucketError: If the request fails
        """
        logger.debug(
            f"[get_pull_request] workspace={workspace}, repoSlug={repo_slug}, prId={pr_id}"
        )
        return self._request(
            Operation.GET_PULL_REQUEST,
            workspace=workspace,
            repo_slug=repo_slug,
            pr_id=pr_id,
        )

    def create_pull_request(
        self,
        workspace: str,
        repo_slug: str,
        title: str,
        source_branch: str,
        dest_branch: str | None = None,
        description: str = "",
    ) -> Any:
        """
        Create a pull request.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)
            repo_slug: Repository slug
            title: Pull request title
            source_branch: Branch to merge from
            dest_branch: Branch to merge into; defaults to the configured
                default destination branch
            description: Pull request description

        Returns:
            Decoded JSON of the created pull request

        Raises:
            ValueError: If no destination branch is given or configured
            BitbucketError: If the request fails
        """
        dest_branch = dest_branch or self.config.default_destination_branch
        if not dest_branch:
            raise ValueError(
                "dest_branch is required when no default destination branch is configured."
            )

        logger.debug(
            f"[create_pull_request] workspace={workspace}, repoSlug={repo_slug}, "
            f"title={title}, source={source_branch}, dest={dest_branch}"
        )
        return self._request(
            Operation.CREATE_PULL_REQUEST,
            workspace=workspace,
            repo_slug=repo_slug,
            title=title,
            source_branch=source_branch,
            dest_branch=dest_branch,
            description=description,
        )

    def get_pull_request_diff(self, workspace: str, repo_slug: str, pr_id: int) -> Any:
        """
        Get the diff of a pull request.

        Cloud answers with a plain-text unified diff, Server with a JSON diff.
        """
        logger.debug(
            f"[get_pull_request_diff] workspace={workspace}, repoSlug={repo_slug}, prId={pr_id}"
        )
        return self._request(
            Operation.GET_PULL_REQUEST_DIFF,
            workspace=workspace,
            repo_slug=repo_slug,
            pr_id=pr_id,
        )

    def get_pull_request_changes(
        self, workspace: str, repo_slug: str, pr_id: int
    ) -> Any:
        """
        Get the files changed by a pull request.

        Cloud returns the ``diffstat`` (lines added/removed per file), Server
        the ``changes`` list (changed paths and change types).
        """
        logger.debug(
            f"[get_pull_request_changes] workspace={workspace}, repoSlug={repo_slug}, prId={pr_id}"
        )
        return self._request(
            Operation.GET_PULL_REQUEST_CHANGES,
            workspace=workspace,
            repo_slug=repo_slug,
            pr_id=pr_id,
        )

    def add_pull_request_comment(
        self, workspace: str, repo_slug: str, pr_id: int, text: str
    ) -> Any:
        """
        Add a general comment to a pull request.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)
            repo_slug: Repository slug
            pr_id: Pull request ID
            text: Comment text (markdown)

        Returns:
            Decoded JSON of the created comment

        Raises:
            BitbucketError: If the request fails
        """
        logger.debug(
            f"[add_pull_request_comment] workspace={workspace}, repoSlug={repo_slug}, "
            f"prId={pr_id}, textLength={len(text)}"
        )
        return self._request(
            Operation.ADD_PULL_REQUEST_COMMENT,
            workspace=workspace,
            repo_slug=repo_slug,
            pr_id=pr_id,
            text=text,
        )

    def get_pull_request_activities(
        self, workspace: str, repo_slug: str, pr_id: int
    ) -> list[dict[str, Any]]:
        """Get the activity stream (comments, approvals, updates) of a pull request.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)
            repo_slug: Repository slug
            pr_id: Pull request ID

        Returns:
            List of activity dictionaries from the first page
        """
        logger.debug(
            f"[get_pull_request_activities] workspace={workspace}, "
            f"repoSlug={repo_slug}, prId={pr_id}"
        )
        response = self._request(
            Operation.LIST_PULL_REQUEST_ACTIVITIES,
            workspace=workspace,
            repo_slug=repo_slug,
            pr_id=pr_id,
        )

        # Handle paginated response
        if isinstance(response, dict) and "values" in response:
            return response["values"]
        elif isinstance(response, list):
            return response
        else:
            return []
