"""repository file types"""

from pydantic import BaseModel


class FileExistsResult(BaseModel):
    """result of checking for a file on a branch"""

    project_id: int | str
    branch: str
    file_path: str
    exists: bool


class RawFileResult(BaseModel):
    """raw content of a repository file"""

    file_path: str
    # the branch actually read; None only for projects without a repository
    branch: str | None
    # None when the API answered with a non-200 success status
    content: str | None
