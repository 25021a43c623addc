"""errors raised by the gitlab client"""

from typing import Any

import httpx


class GitlabError(Exception):
    """base class for every error the gitlab client raises"""


class InvalidIdentifier(GitlabError, ValueError):
    """a project reference could not be resolved to an id or a path"""

    def __init__(self, identifier: Any):
        self.identifier = identifier
        super().__init__(f"'{identifier}' is an invalid identifier for a project")


class GitlabApiError(GitlabError):
    """a request failed at the transport level or returned an unexpected status

    Args:
        description: human readable summary of what was being requested
        operation: name of the client method that failed (e.g. 'get_project')
        cause: the underlying httpx error, or the decode error for a
            success response whose body is not JSON
        context: identifiers involved in the request
    """

    def __init__(
        self,
        description: str,
        *,
        operation: str,
        cause: Exception,
        context: dict[str, Any] | None = None,
    ):
        self.description = description
        self.operation = operation
        self.cause = cause
        self.context = context or {}
        super().__init__(f"{description}\n\nOriginal Error:\n{cause}")

    @property
    def status_code(self) -> int | None:
        """HTTP status of the failed response, None for transport failures"""
        if isinstance(self.cause, httpx.HTTPStatusError):
            return self.cause.response.status_code
        return None
