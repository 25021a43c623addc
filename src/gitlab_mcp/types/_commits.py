"""commit-related types"""

from typing import Any, Literal

from pydantic import BaseModel


class CommitAction(BaseModel):
    """a single file action within a commit

    mirrors the `actions[]` entries of POST /projects/:id/repository/commits
    """

    action: Literal["create", "delete", "move", "update", "chmod"]
    file_path: str
    content: str | None = None
    previous_path: str | None = None
    encoding: Literal["text", "base64"] | None = None
    execute_filemode: bool | None = None


def build_commit_payload(
    branch: str,
    commit_message: str,
    actions: list[CommitAction],
    start_branch: str | None = None,
) -> dict[str, Any]:
    """assemble the JSON body for a commit request, dropping unset fields"""
    payload: dict[str, Any] = {
        "branch": branch,
        "commit_message": commit_message,
        "actions": [action.model_dump(exclude_none=True) for action in actions],
    }
    if start_branch:
        payload["start_branch"] = start_branch
    return payload


class CommitResult(BaseModel):
    """result of submitting a commit"""

    target: str
    # False when the API answered with a success status other than 201
    created: bool
