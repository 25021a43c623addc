"""branch-related types"""

from typing import Any

from pydantic import BaseModel


class BranchInfo(BaseModel):
    """branch information"""

    name: str
    sha: str
    default: bool = False
    protected: bool = False


class ListBranchesResult(BaseModel):
    """result of listing branches"""

    branches: list[BranchInfo]

    @classmethod
    def from_api_response(cls, response: list[dict[str, Any]]) -> "ListBranchesResult":
        """construct from raw API response

        Args:
            response: raw response from gitlab API with structure:
                [
                    {
                        "name": "main",
                        "commit": {"id": "abc123", ...},
                        "default": true,
                        "protected": true,
                        ...
                    },
                    ...
                ]

        Returns:
            ListBranchesResult with parsed branches
        """
        branches = []
        for branch_data in response:
            commit = branch_data.get("commit") or {}
            branches.append(
                BranchInfo(
                    name=branch_data.get("name", ""),
                    sha=commit.get("id", ""),
                    default=branch_data.get("default", False),
                    protected=branch_data.get("protected", False),
                )
            )
        return cls(branches=branches)


class BranchExistsResult(BaseModel):
    """result of checking for a branch"""

    project_id: int | str
    branch: str
    exists: bool
