"""Bitbucket module for MCP Bitbucket integration."""

from .branches import BranchesMixin
from .client import BitbucketClient
from .config import BitbucketConfig, DialectResolution, resolve_dialect
from .descriptors import (
    DESCRIPTOR_BUILDERS,
    Dialect,
    Operation,
    RequestDescriptor,
    ResponseFormat,
    build_descriptor,
)
from .pullrequests import PullRequestsMixin
from .repositories import RepositoriesMixin
from .workspaces import WorkspacesMixin


class BitbucketFetcher(
    WorkspacesMixin,
    RepositoriesMixin,
    BranchesMixin,
    PullRequestsMixin,
):
    """
    The main Bitbucket client class providing access to all Bitbucket operations.

    This class inherits from multiple mixins that provide specific functionality:
    - WorkspacesMixin: Workspace/project listing and the connection check
    - RepositoriesMixin: Repository details, listing and file content
    - BranchesMixin: Branch listing/creation and commit history
    - PullRequestsMixin: Pull request operations, diffs, changes and comments

    Every operation speaks Bitbucket Cloud or Server/Data Center depending on
    the configured base URL.
    """

    pass


__all__ = [
    "BitbucketClient",
    "BitbucketConfig",
    "BitbucketFetcher",
    "BranchesMixin",
    "DESCRIPTOR_BUILDERS",
    "Dialect",
    "DialectResolution",
    "Operation",
    "PullRequestsMixin",
    "RepositoriesMixin",
    "RequestDescriptor",
    "ResponseFormat",
    "WorkspacesMixin",
    "build_descriptor",
    "resolve_dialect",
]
