"""shared types and identifier resolution"""

from typing import Any
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from gitlab_mcp.errors import InvalidIdentifier

# characters encodeURIComponent leaves alone besides alphanumerics and -_.~
_URI_COMPONENT_SAFE = "!~*'()"


class ProjectId(BaseModel):
    """project referenced by its numeric id"""

    model_config = ConfigDict(frozen=True)

    id: int


class ProjectPath(BaseModel):
    """project referenced by its namespace path (e.g. 'group/subgroup/project')"""

    model_config = ConfigDict(frozen=True)

    path: str


ProjectIdentifier = ProjectId | ProjectPath


def trim_slashes(value: str) -> str:
    return value.strip("/")


def trim_trailing_slash(value: str) -> str:
    return value.rstrip("/")


def encode_uri_component(value: str) -> str:
    """percent-encode a single URL component, slashes included"""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def resolve_project_identifier(base_url: str, identifier: Any) -> ProjectIdentifier:
    """resolve a caller supplied project reference

    Args:
        base_url: normalized instance URL (e.g. "https://gitlab.com")
        identifier: numeric id, integer-valued string, namespace path, or a
            full project URL on the same instance
            (e.g. 42, "42", "group/proj", "https://gitlab.com/group/proj/")

    Returns:
        ProjectId for numeric references, ProjectPath otherwise

    Raises:
        InvalidIdentifier: if the reference is empty or of an unsupported type
    """
    # bool is an int subclass but never a project id
    if isinstance(identifier, bool):
        raise InvalidIdentifier(identifier)

    if isinstance(identifier, int):
        return ProjectId(id=identifier)

    if not isinstance(identifier, str) or not identifier.strip():
        raise InvalidIdentifier(identifier)

    stripped = identifier.strip()
    if stripped.isascii() and stripped.isdigit():
        return ProjectId(id=int(stripped))

    path = stripped
    # only strip at a path boundary so "https://gitlab.com" never eats
    # the front of "https://gitlab.company.com/..."
    if base_url and path.startswith(base_url):
        remainder = path[len(base_url) :]
        if not remainder or remainder.startswith("/"):
            path = remainder

    path = trim_slashes(path)
    if not path:
        raise InvalidIdentifier(identifier)

    return ProjectPath(path=path)
