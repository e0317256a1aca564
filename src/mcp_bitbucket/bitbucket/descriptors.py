"""Request descriptors for every logical Bitbucket operation.

Bitbucket Cloud (API 2.0) and Bitbucket Server/Data Center (API 1.0) expose
the same concepts under different paths and payloads. Each logical operation
is declared here once, with one pure builder per dialect, in the
``DESCRIPTOR_BUILDERS`` table. ``build_descriptor`` looks up the builder for
the active dialect and returns a fresh RequestDescriptor.

All interpolated values go through ``encode_segment`` individually.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Literal

from ..utils.urls import encode_segment

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]


class Dialect(str, Enum):
    """Bitbucket REST API dialects."""

    CLOUD = "cloud"
    SERVER = "server"


class Operation(str, Enum):
    """Dialect-independent Bitbucket operations."""

    GET_REPO = "get_repo"
    LIST_WORKSPACES = "list_workspaces"
    LIST_REPOSITORIES = "list_repositories"
    LIST_PULL_REQUESTS = "list_pull_requests"
    GET_PULL_REQUEST = "get_pull_request"
    CREATE_PULL_REQUEST = "create_pull_request"
    GET_PULL_REQUEST_DIFF = "get_pull_request_diff"
    GET_PULL_REQUEST_CHANGES = "get_pull_request_changes"
    ADD_PULL_REQUEST_COMMENT = "add_pull_request_comment"
    LIST_PULL_REQUEST_ACTIVITIES = "list_pull_request_activities"
    LIST_BRANCHES = "list_branches"
    CREATE_BRANCH = "create_branch"
    LIST_COMMITS = "list_commits"
    GET_FILE_CONTENT = "get_file_content"


class ResponseFormat(str, Enum):
    """How a successful response body is handed back to the caller."""

    JSON = "json"
    TEXT = "text"


@dataclass(frozen=True)
class RequestDescriptor:
    """Dialect-specific request for one invocation of an operation."""

    path: str
    method: HttpMethod = "GET"
    body: dict[str, Any] | None = None
    response_format: ResponseFormat = ResponseFormat.JSON
    operation: Operation | None = None


DescriptorBuilder = Callable[..., RequestDescriptor]

DESCRIPTOR_BUILDERS: dict[Operation, dict[Dialect, DescriptorBuilder]] = {}


def descriptor_builder(
    operation: Operation, dialect: Dialect
) -> Callable[[DescriptorBuilder], DescriptorBuilder]:
    """Register a builder for an (operation, dialect) pair."""

    def decorator(func: DescriptorBuilder) -> DescriptorBuilder:
        builders = DESCRIPTOR_BUILDERS.setdefault(operation, {})
        if dialect in builders:
            msg = f"Duplicate descriptor builder for {operation.value}/{dialect.value}"
            raise ValueError(msg)
        builders[dialect] = func
        return func

    return decorator


def build_descriptor(
    operation: Operation, dialect: Dialect, **params: Any
) -> RequestDescriptor:
    """Build the request descriptor for an operation in the given dialect.

    Args:
        operation: The logical operation
        dialect: Cloud or Server
        **params: The operation's logical parameters

    Returns:
        A new RequestDescriptor tagged with the operation

    Raises:
        KeyError: If no builder is registered for the pair
    """
    builder = DESCRIPTOR_BUILDERS[operation][dialect]
    return replace(builder(**params), operation=operation)


def _cloud_repo(workspace: str, repo_slug: str) -> str:
    return f"/repositories/{encode_segment(workspace)}/{encode_segment(repo_slug)}"


def _server_repo(workspace: str, repo_slug: str) -> str:
    return f"/projects/{encode_segment(workspace)}/repos/{encode_segment(repo_slug)}"


def _cloud_pull_request(workspace: str, repo_slug: str, pr_id: int | str) -> str:
    return f"{_cloud_repo(workspace, repo_slug)}/pullrequests/{encode_segment(pr_id)}"


def _server_pull_request(workspace: str, repo_slug: str, pr_id: int | str) -> str:
    return f"{_server_repo(workspace, repo_slug)}/pull-requests/{encode_segment(pr_id)}"


def _server_ref(branch: str, workspace: str, repo_slug: str) -> dict[str, Any]:
    return {
        "id": f"refs/heads/{branch}",
        "repository": {
            "slug": repo_slug,
            "name": None,
            "project": {"key": workspace},
        },
    }


# region Repositories and workspaces


@descriptor_builder(Operation.GET_REPO, Dialect.CLOUD)
def _get_repo_cloud(workspace: str, repo_slug: str) -> RequestDescriptor:
    return RequestDescriptor(_cloud_repo(workspace, repo_slug))


@descriptor_builder(Operation.GET_REPO, Dialect.SERVER)
def _get_repo_server(workspace: str, repo_slug: str) -> RequestDescriptor:
    return RequestDescriptor(_server_repo(workspace, repo_slug))


@descriptor_builder(Operation.LIST_WORKSPACES, Dialect.CLOUD)
def _list_workspaces_cloud() -> RequestDescriptor:
    return RequestDescriptor("/workspaces")


@descriptor_builder(Operation.LIST_WORKSPACES, Dialect.SERVER)
def _list_workspaces_server() -> RequestDescriptor:
    return RequestDescriptor("/projects")


@descriptor_builder(Operation.LIST_REPOSITORIES, Dialect.CLOUD)
def _list_repositories_cloud(workspace: str) -> RequestDescriptor:
    return RequestDescriptor(f"/repositories/{encode_segment(workspace)}")


@descriptor_builder(Operation.LIST_REPOSITORIES, Dialect.SERVER)
def _list_repositories_server(workspace: str) -> RequestDescriptor:
    return RequestDescriptor(f"/projects/{encode_segment(workspace)}/repos")


# Cloud serves the raw file, Server a JSON page of lines
@descriptor_builder(Operation.GET_FILE_CONTENT, Dialect.CLOUD)
def _get_file_content_cloud(
    workspace: str, repo_slug: str, file_path: str, commit_hash: str
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_cloud_repo(workspace, repo_slug)}/src/"
        f"{encode_segment(commit_hash)}/{encode_segment(file_path)}",
        response_format=ResponseFormat.TEXT,
    )


@descriptor_builder(Operation.GET_FILE_CONTENT, Dialect.SERVER)
def _get_file_content_server(
    workspace: str, repo_slug: str, file_path: str, commit_hash: str
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_server_repo(workspace, repo_slug)}/browse/"
        f"{encode_segment(file_path)}?at={encode_segment(commit_hash)}"
    )


# endregion

# region Pull requests


@descriptor_builder(Operation.LIST_PULL_REQUESTS, Dialect.CLOUD)
def _list_pull_requests_cloud(
    workspace: str, repo_slug: str, state: str
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_cloud_repo(workspace, repo_slug)}/pullrequests?state={encode_segment(state)}"
    )


@descriptor_builder(Operation.LIST_PULL_REQUESTS, Dialect.SERVER)
def _list_pull_requests_server(
    workspace: str, repo_slug: str, state: str
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_server_repo(workspace, repo_slug)}/pull-requests?state={encode_segment(state)}"
    )


@descriptor_builder(Operation.GET_PULL_REQUEST, Dialect.CLOUD)
def _get_pull_request_cloud(
    workspace: str, repo_slug: str, pr_id: int
) -> RequestDescriptor:
    return RequestDescriptor(_cloud_pull_request(workspace, repo_slug, pr_id))


@descriptor_builder(Operation.GET_PULL_REQUEST, Dialect.SERVER)
def _get_pull_request_server(
    workspace: str, repo_slug: str, pr_id: int
) -> RequestDescriptor:
    return RequestDescriptor(_server_pull_request(workspace, repo_slug, pr_id))


@descriptor_builder(Operation.CREATE_PULL_REQUEST, Dialect.CLOUD)
def _create_pull_request_cloud(
    workspace: str,
    repo_slug: str,
    title: str,
    source_branch: str,
    dest_branch: str,
    description: str = "",
) -> RequestDescriptor:
    body = {
        "title": title,
        "description": description or "",
        "source": {"branch": {"name": source_branch}},
        "destination": {"branch": {"name": dest_branch}},
    }
    return RequestDescriptor(
        f"{_cloud_repo(workspace, repo_slug)}/pullrequests", method="POST", body=body
    )


@descriptor_builder(Operation.CREATE_PULL_REQUEST, Dialect.SERVER)
def _create_pull_request_server(
    workspace: str,
    repo_slug: str,
    title: str,
    source_branch: str,
    dest_branch: str,
    description: str = "",
) -> RequestDescriptor:
    body = {
        "title": title,
        "description": description or "",
        "state": "OPEN",
        "open": True,
        "closed": False,
        "fromRef": _server_ref(source_branch, workspace, repo_slug),
        "toRef": _server_ref(dest_branch, workspace, repo_slug),
        "locked": False,
        "reviewers": [],
    }
    return RequestDescriptor(
        f"{_server_repo(workspace, repo_slug)}/pull-requests", method="POST", body=body
    )


@descriptor_builder(Operation.GET_PULL_REQUEST_DIFF, Dialect.CLOUD)
def _get_pull_request_diff_cloud(
    workspace: str, repo_slug: str, pr_id: int
) -> RequestDescriptor:
    return RequestDescriptor(f"{_cloud_pull_request(workspace, repo_slug, pr_id)}/diff")


@descriptor_builder(Operation.GET_PULL_REQUEST_DIFF, Dialect.SERVER)
def _get_pull_request_diff_server(
    workspace: str, repo_slug: str, pr_id: int
) -> RequestDescriptor:
    return RequestDescriptor(f"{_server_pull_request(workspace, repo_slug, pr_id)}/diff")


# Cloud reports per-file line stats, Server the list of changed paths
@descriptor_builder(Operation.GET_PULL_REQUEST_CHANGES, Dialect.CLOUD)
def _get_pull_request_changes_cloud(
    workspace: str, repo_slug: str, pr_id: int
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_cloud_pull_request(workspace, repo_slug, pr_id)}/diffstat"
    )


@descriptor_builder(Operation.GET_PULL_REQUEST_CHANGES, Dialect.SERVER)
def _get_pull_request_changes_server(
    workspace: str, repo_slug: str, pr_id: int
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_server_pull_request(workspace, repo_slug, pr_id)}/changes"
    )


@descriptor_builder(Operation.ADD_PULL_REQUEST_COMMENT, Dialect.CLOUD)
def _add_pull_request_comment_cloud(
    workspace: str, repo_slug: str, pr_id: int, text: str
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_cloud_pull_request(workspace, repo_slug, pr_id)}/comments",
        method="POST",
        body={"content": {"raw": text}},
    )


@descriptor_builder(Operation.ADD_PULL_REQUEST_COMMENT, Dialect.SERVER)
def _add_pull_request_comment_server(
    workspace: str, repo_slug: str, pr_id: int, text: str
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_server_pull_request(workspace, repo_slug, pr_id)}/comments",
        method="POST",
        body={"text": text},
    )


@descriptor_builder(Operation.LIST_PULL_REQUEST_ACTIVITIES, Dialect.CLOUD)
def _list_pull_request_activities_cloud(
    workspace: str, repo_slug: str, pr_id: int
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_cloud_pull_request(workspace, repo_slug, pr_id)}/activity"
    )


@descriptor_builder(Operation.LIST_PULL_REQUEST_ACTIVITIES, Dialect.SERVER)
def _list_pull_request_activities_server(
    workspace: str, repo_slug: str, pr_id: int
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_server_pull_request(workspace, repo_slug, pr_id)}/activities"
    )


# endregion

# region Branches and commits


@descriptor_builder(Operation.LIST_BRANCHES, Dialect.CLOUD)
def _list_branches_cloud(workspace: str, repo_slug: str) -> RequestDescriptor:
    return RequestDescriptor(f"{_cloud_repo(workspace, repo_slug)}/refs/branches")


@descriptor_builder(Operation.LIST_BRANCHES, Dialect.SERVER)
def _list_branches_server(workspace: str, repo_slug: str) -> RequestDescriptor:
    return RequestDescriptor(f"{_server_repo(workspace, repo_slug)}/branches")


@descriptor_builder(Operation.CREATE_BRANCH, Dialect.CLOUD)
def _create_branch_cloud(
    workspace: str, repo_slug: str, name: str, target_hash: str
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_cloud_repo(workspace, repo_slug)}/refs/branches",
        method="POST",
        body={"name": name, "target": {"hash": target_hash}},
    )


@descriptor_builder(Operation.CREATE_BRANCH, Dialect.SERVER)
def _create_branch_server(
    workspace: str, repo_slug: str, name: str, target_hash: str
) -> RequestDescriptor:
    return RequestDescriptor(
        f"{_server_repo(workspace, repo_slug)}/branches",
        method="POST",
        body={"name": name, "target": {"hash": target_hash}},
    )


@descriptor_builder(Operation.LIST_COMMITS, Dialect.CLOUD)
def _list_commits_cloud(
    workspace: str, repo_slug: str, spec: str | None = None
) -> RequestDescriptor:
    path = f"{_cloud_repo(workspace, repo_slug)}/commits"
    if spec:
        path = f"{path}/{encode_segment(spec)}"
    return RequestDescriptor(path)


@descriptor_builder(Operation.LIST_COMMITS, Dialect.SERVER)
def _list_commits_server(
    workspace: str, repo_slug: str, spec: str | None = None
) -> RequestDescriptor:
    path = f"{_server_repo(workspace, repo_slug)}/commits"
    if spec:
        path = f"{path}?until={encode_segment(spec)}"
    return RequestDescriptor(path)


# endregion
