"""gitlab MCP server - provides tools and resources for a gitlab instance"""

import logging
import sys
from typing import Annotated, Any

from fastmcp import FastMCP
from pydantic import Field

from gitlab_mcp import _gitlab
from gitlab_mcp.settings import settings
from gitlab_mcp.types import (
    BranchExistsResult,
    CommitAction,
    CommitResult,
    FileExistsResult,
    ListBranchesResult,
    ProjectInfo,
    RawFileResult,
    VersionInfo,
    build_commit_payload,
)

gitlab_mcp = FastMCP("gitlab MCP server")

ProjectArg = Annotated[
    int | str,
    Field(
        description="project id, namespace path, or project URL "
        "(e.g., 42, 'group/project', 'https://gitlab.com/group/project')"
    ),
]
ProjectIdArg = Annotated[
    int | str,
    Field(description="numeric project id or URL-encoded path (e.g., 42)"),
]


# resources - read-only operations
@gitlab_mcp.resource("gitlab://version")
def gitlab_version() -> dict[str, Any]:
    """report the version of the configured gitlab instance"""
    with _gitlab.get_driver() as driver:
        response = driver.get_version()

    if response is None:
        return {"url": settings.gitlab_url, "reachable": False}

    version = VersionInfo.model_validate(response)
    return {"url": settings.gitlab_url, "reachable": True, **version.model_dump()}


# tools - actions that query or modify state
@gitlab_mcp.tool
def get_project(project: ProjectArg) -> ProjectInfo:
    """look up a project

    Args:
        project: project id, namespace path, or project URL

    Returns:
        ProjectInfo with id, path and default branch
    """
    with _gitlab.get_driver() as driver:
        response = driver.get_project(project)

    return ProjectInfo.model_validate(response)


@gitlab_mcp.tool
def list_project_branches(project: ProjectArg) -> ListBranchesResult:
    """list branches for a project

    Args:
        project: project id, namespace path, or project URL

    Returns:
        list of branches
    """
    with _gitlab.get_driver() as driver:
        response = driver.get_branches(project)

    return ListBranchesResult.from_api_response(response)


@gitlab_mcp.tool
def check_branch_exists(
    project_id: ProjectIdArg,
    branch: Annotated[str, Field(description="branch name (e.g., 'main')")],
) -> BranchExistsResult:
    """check whether a branch exists in a project"""
    with _gitlab.get_driver() as driver:
        exists = driver.branch_exists(project_id, branch)

    return BranchExistsResult(project_id=project_id, branch=branch, exists=exists)


@gitlab_mcp.tool
def check_file_exists(
    project_id: ProjectIdArg,
    branch: Annotated[str, Field(description="branch name (e.g., 'main')")],
    file_path: Annotated[
        str, Field(description="path within the repository (e.g., 'docs/index.md')")
    ],
) -> FileExistsResult:
    """check whether a file exists on a branch"""
    with _gitlab.get_driver() as driver:
        exists = driver.file_exists(project_id, branch, file_path)

    return FileExistsResult(
        project_id=project_id, branch=branch, file_path=file_path, exists=exists
    )


@gitlab_mcp.tool
def get_raw_file(
    project: ProjectArg,
    file_path: Annotated[
        str, Field(description="path within the repository (e.g., 'README.md')")
    ],
    branch: Annotated[
        str | None,
        Field(description="branch to read from; defaults to the project's default branch"),
    ] = None,
) -> RawFileResult:
    """read the raw content of a file

    Args:
        project: project id, namespace path, or project URL
        file_path: path within the repository
        branch: optional branch, the default branch is looked up when omitted

    Returns:
        RawFileResult with the file content
    """
    with _gitlab.get_driver() as driver:
        if branch is None:
            branch = driver.get_project(project).get("default_branch")
        content = driver.get_raw_file(project, file_path, branch)

    return RawFileResult(file_path=file_path, branch=branch, content=content)


@gitlab_mcp.tool
def create_commit(
    project_id: ProjectIdArg,
    branch: Annotated[str, Field(description="branch to commit to")],
    commit_message: Annotated[str, Field(description="commit message")],
    actions: Annotated[
        list[CommitAction],
        Field(
            min_length=1,
            description="file actions to apply (create, delete, move, update, chmod)",
        ),
    ],
    start_branch: Annotated[
        str | None,
        Field(description="branch to start from when `branch` does not exist yet"),
    ] = None,
) -> CommitResult:
    """create a commit containing one or more file actions

    Args:
        project_id: numeric project id or URL-encoded path
        branch: branch to commit to
        commit_message: commit message
        actions: file actions to apply
        start_branch: optional branch to create `branch` from

    Returns:
        CommitResult, `created` is only true for a 201 response
    """
    payload = build_commit_payload(branch, commit_message, actions, start_branch)
    with _gitlab.get_driver() as driver:
        created = driver.post_commit(project_id, payload)

    return CommitResult(target=f"project {project_id}@{branch}", created=created)


@gitlab_mcp.tool
def update_snippet(
    snippet_id: Annotated[int, Field(description="snippet id")],
    payload: Annotated[
        dict[str, Any],
        Field(description="body for PUT /snippets/:id (title, files, ...)"),
    ],
) -> CommitResult:
    """update a snippet's content

    Args:
        snippet_id: snippet id
        payload: request body, passed through unchanged

    Returns:
        CommitResult, `created` is only true for a 201 response
    """
    with _gitlab.get_driver() as driver:
        created = driver.post_snippet_commit(snippet_id, payload)

    return CommitResult(target=f"snippet {snippet_id}", created=created)


def main() -> None:
    # stdout carries the MCP stdio protocol
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    gitlab_mcp.run()
