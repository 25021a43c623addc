"""project and instance types"""

from pydantic import BaseModel, ConfigDict


class ProjectInfo(BaseModel):
    """project information"""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    path_with_namespace: str
    # null for projects with an empty repository
    default_branch: str | None = None
    web_url: str | None = None
    description: str | None = None


class VersionInfo(BaseModel):
    """gitlab instance version"""

    model_config = ConfigDict(extra="ignore")

    version: str
    revision: str | None = None
