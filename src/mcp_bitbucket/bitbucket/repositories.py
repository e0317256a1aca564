"""Module for Bitbucket repository operations."""

import logging
from typing import Any

from .client import BitbucketClient
from .descriptors import Operation, ResponseFormat, build_descriptor

logger = logging.getLogger("mcp-bitbucket")


def join_file_lines(payload: Any) -> str:
    """Rebuild file text from a Server ``browse`` response.

    Server returns ``{"lines": [{"text": ...}, ...]}``; the texts are joined
    with newlines in order. A missing or empty ``lines`` array gives "".
    """
    if not isinstance(payload, dict):
        return ""
    lines = payload.get("lines")
    if not isinstance(lines, list):
        return ""
    return "\n".join(
        str(line.get("text") or "") if isinstance(line, dict) else "" for line in lines
    )


class RepositoriesMixin(BitbucketClient):
    """Mixin for Bitbucket repository operations.

    This mixin provides methods for retrieving repositories and their file content.
    """

    def get_repo(self, workspace: str, repo_slug: str) -> Any:
        """
        Get detailed information about a specific repository.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)
            repo_slug: Repository slug

        Returns:
            Decoded repository JSON

        Raises:
            BitbucketError: If the request fails
        """
        logger.debug(f"[get_repo] workspace={workspace}, repoSlug={repo_slug}")
        return self._request(
            Operation.GET_REPO, workspace=workspace, repo_slug=repo_slug
        )

    def list_repositories(self, workspace: str) -> Any:
        """
        List repositories of a workspace or project.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)

        Returns:
            One page of the decoded API response

        Raises:
            BitbucketError: If the request fails
        """
        logger.debug(f"[list_repositories] workspace={workspace}")
        return self._request(Operation.LIST_REPOSITORIES, workspace=workspace)

    def get_file_content(
        self, workspace: str, repo_slug: str, file_path: str, commit_hash: str
    ) -> str:
        """
        Get the text of a file at a given commit.

        Args:
            workspace: Workspace name (Cloud) or project key (Server/DC)
            repo_slug: Repository slug
            file_path: Path of the file in the repository
            commit_hash: Commit hash, branch or tag to read the file at

        Returns:
            File content as a string

        Raises:
            BitbucketError: FILE_NOT_FOUND / FILE_FETCH_ERROR on Cloud, the
                generic classification on Server
        """
        logger.debug(
            f"[get_file_content] workspace={workspace}, repoSlug={repo_slug}, "
            f"filePath={file_path}, commitHash={commit_hash}"
        )
        descriptor = build_descriptor(
            Operation.GET_FILE_CONTENT,
            self.config.dialect,
            workspace=workspace,
            repo_slug=repo_slug,
            file_path=file_path,
            commit_hash=commit_hash,
        )
        context = {
            "workspace": workspace,
            "repo_slug": repo_slug,
            "file_path": file_path,
            "commit_hash": commit_hash,
        }
        if descriptor.response_format is ResponseFormat.TEXT:
            return self.execute(descriptor, context=context)

        content = join_file_lines(self.execute(descriptor, context=context))
        logger.debug(f"[get_file_content] Retrieved {len(content)} characters")
        return content
