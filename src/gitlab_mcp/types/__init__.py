"""public types API for gitlab MCP server"""

from gitlab_mcp.types._branches import BranchExistsResult, BranchInfo, ListBranchesResult
from gitlab_mcp.types._commits import CommitAction, CommitResult, build_commit_payload
from gitlab_mcp.types._common import (
    ProjectId,
    ProjectIdentifier,
    ProjectPath,
    encode_uri_component,
    resolve_project_identifier,
    trim_slashes,
    trim_trailing_slash,
)
from gitlab_mcp.types._files import FileExistsResult, RawFileResult
from gitlab_mcp.types._projects import ProjectInfo, VersionInfo

__all__ = [
    "BranchExistsResult",
    "BranchInfo",
    "CommitAction",
    "CommitResult",
    "FileExistsResult",
    "ListBranchesResult",
    "ProjectId",
    "ProjectIdentifier",
    "ProjectInfo",
    "ProjectPath",
    "RawFileResult",
    "VersionInfo",
    "build_commit_payload",
    "encode_uri_component",
    "resolve_project_identifier",
    "trim_slashes",
    "trim_trailing_slash",
]
