"""gitlab REST client implementation"""

import logging
from typing import Any

import httpx

from gitlab_mcp.errors import GitlabApiError
from gitlab_mcp.settings import API_PATH, PRIVATE_TOKEN_HEADER, settings
from gitlab_mcp.types._common import (
    ProjectId,
    encode_uri_component,
    resolve_project_identifier,
    trim_slashes,
    trim_trailing_slash,
)

logger = logging.getLogger(__name__)


def normalize_base_url(base_url: str) -> str:
    """force https and drop the trailing slash

    "http://gitlab.example.com/" -> "https://gitlab.example.com"
    "gitlab.example.com"         -> "https://gitlab.example.com"
    """
    url = trim_trailing_slash(base_url.strip())
    if url.startswith("http://"):
        url = "https://" + url[len("http://") :]
    if not url.startswith("https://"):
        url = f"https://{url}"
    return url


class GitlabApiDriver:
    """thin client over the gitlab v4 REST API

    every method issues a single request. transport failures and non-2xx
    responses surface as GitlabApiError, except for the existence checks
    which answer False on 404.

    Args:
        base_url: instance URL, scheme optional (e.g. "gitlab.com")
        access_token: personal/project access token sent as PRIVATE-TOKEN
        verbose: log each request line at INFO instead of DEBUG
        http_client: optional preconfigured httpx.Client (proxies, transports,
            timeouts); the driver only closes clients it created itself
        timeout: timeout in seconds for the client created by the driver
    """

    def __init__(
        self,
        base_url: str,
        access_token: str,
        verbose: bool = False,
        *,
        http_client: httpx.Client | None = None,
        timeout: float = 10.0,
    ):
        self._base_url = normalize_base_url(base_url)
        self._api_url = f"{self._base_url}{API_PATH}"
        self._verbose = verbose
        self._headers = {PRIVATE_TOKEN_HEADER: access_token}
        self._owns_http_client = http_client is None
        self._http = (
            http_client
            if http_client is not None
            else httpx.Client(timeout=timeout, follow_redirects=True)
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def verbose(self) -> bool:
        return self._verbose

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> "GitlabApiDriver":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        description: str,
        context: dict[str, Any],
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """send one request and wrap any httpx failure in GitlabApiError"""
        full_url = httpx.URL(url, params=params) if params else httpx.URL(url)
        logger.log(
            logging.INFO if self._verbose else logging.DEBUG,
            "%s > %s",
            method,
            full_url,
        )

        headers = dict(self._headers)
        if json is not None:
            headers["Content-Type"] = "application/json"

        try:
            response = self._http.request(method, full_url, headers=headers, json=json)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise GitlabApiError(
                description, operation=operation, cause=e, context=context
            ) from e
        return response

    def _json(
        self,
        response: httpx.Response,
        *,
        operation: str,
        description: str,
        context: dict[str, Any],
    ) -> Any:
        """decode a JSON body, e.g. an HTML sign-in page after an SSO redirect fails here"""
        try:
            return response.json()
        except ValueError as e:
            raise GitlabApiError(
                description, operation=operation, cause=e, context=context
            ) from e

    def get_project_url(self, identifier: int | str) -> str:
        """build the project endpoint for an id, path, or project URL

        Raises:
            InvalidIdentifier: if the identifier cannot be resolved
        """
        resolved = resolve_project_identifier(self._base_url, identifier)
        if isinstance(resolved, ProjectId):
            return f"{self._api_url}/projects/{resolved.id}"
        encoded_path = encode_uri_component(trim_slashes(resolved.path))
        return f"{self._api_url}/projects/{encoded_path}"

    def get_project(self, identifier: int | str) -> dict[str, Any]:
        url = self.get_project_url(identifier)
        failure = {
            "operation": "get_project",
            "description": f"Error requesting project identified by '{identifier}'",
            "context": {"identifier": identifier},
        }
        response = self._request("GET", url, **failure)
        return self._json(response, **failure)

    def get_branches(self, identifier: int | str) -> list[dict[str, Any]]:
        url = f"{self.get_project_url(identifier)}/repository/branches"
        failure = {
            "operation": "get_branches",
            "description": f"Error requesting branches for project identified by '{identifier}'",
            "context": {"identifier": identifier},
        }
        response = self._request("GET", url, **failure)
        return self._json(response, **failure)

    def branch_exists(self, project_id: int | str, branch_name: str) -> bool:
        """check whether a branch exists

        the branch name is placed in the path as given; names containing
        slashes (e.g. "feature/x") must be URL-encoded by the caller,
        otherwise gitlab answers 404 and this returns False

        Returns:
            True on 200, False on 404

        Raises:
            GitlabApiError: for any other failure
        """
        url = f"{self._api_url}/projects/{project_id}/repository/branches/{branch_name}"
        try:
            response = self._request(
                "GET",
                url,
                operation="branch_exists",
                description=(
                    f"Error requesting branch '{branch_name}' "
                    f"for project ID '{project_id}'"
                ),
                context={"project_id": project_id, "branch_name": branch_name},
            )
        except GitlabApiError as e:
            if e.status_code == 404:
                return False
            raise
        return response.status_code == 200

    def file_exists(self, project_id: int | str, branch_name: str, file_path: str) -> bool:
        """check whether a file exists on a branch

        Returns:
            True on 200, False on 404

        Raises:
            GitlabApiError: for any other failure
        """
        encoded_file_path = encode_uri_component(trim_slashes(file_path))
        url = f"{self._api_url}/projects/{project_id}/repository/files/{encoded_file_path}"
        try:
            response = self._request(
                "GET",
                url,
                operation="file_exists",
                description=(
                    f"Error requesting file '{file_path}' from branch '{branch_name}' "
                    f"for project ID '{project_id}'"
                ),
                context={
                    "project_id": project_id,
                    "branch_name": branch_name,
                    "file_path": file_path,
                },
                params={"ref": branch_name},
            )
        except GitlabApiError as e:
            if e.status_code == 404:
                return False
            raise
        return response.status_code == 200

    def post_commit(self, project_id: int | str, commit: dict[str, Any]) -> bool:
        """create a commit with one or more file actions

        the payload is sent as-is, see POST /projects/:id/repository/commits

        Returns:
            True only when the API answers 201 Created
        """
        url = f"{self._api_url}/projects/{project_id}/repository/commits"
        response = self._request(
            "POST",
            url,
            operation="post_commit",
            description=f"Error executing commit on project ID '{project_id}'",
            context={"project_id": project_id},
            json=commit,
        )
        return response.status_code == 201

    def post_snippet_commit(self, snippet_id: int | str, commit: dict[str, Any]) -> bool:
        """update a snippet's files, see PUT /snippets/:id

        Returns:
            True only when the API answers 201 Created
        """
        url = f"{self._api_url}/snippets/{snippet_id}"
        response = self._request(
            "PUT",
            url,
            operation="post_snippet_commit",
            description=f"Error executing commit on snippet ID '{snippet_id}'",
            context={"snippet_id": snippet_id},
            json=commit,
        )
        return response.status_code == 201

    def get_raw_file(
        self,
        identifier: int | str,
        file_path: str,
        branch_name: str | None = None,
    ) -> str | None:
        """fetch the raw content of a file

        Args:
            identifier: project id, path, or URL
            file_path: path of the file within the repository
            branch_name: ref to read from; the project's default branch if omitted

        Returns:
            file content on 200, None for any other success status
        """
        if branch_name is None:
            branch_name = self.get_project(identifier).get("default_branch")

        encoded_file_path = encode_uri_component(trim_slashes(file_path))
        url = f"{self.get_project_url(identifier)}/repository/files/{encoded_file_path}/raw"
        response = self._request(
            "GET",
            url,
            operation="get_raw_file",
            description=(
                f"Error requesting raw file '{file_path}' from branch '{branch_name}' "
                f"for project identified by '{identifier}'"
            ),
            context={
                "identifier": identifier,
                "branch_name": branch_name,
                "file_path": file_path,
            },
            params={"ref": branch_name} if branch_name is not None else None,
        )
        if response.status_code == 200:
            return response.text
        return None

    def get_version(self) -> dict[str, Any] | None:
        url = f"{self._api_url}/version"
        failure = {
            "operation": "get_version",
            "description": "Error retrieving API version.",
            "context": {},
        }
        response = self._request("GET", url, **failure)
        if response.status_code == 200:
            return self._json(response, **failure)
        return None


def get_driver() -> GitlabApiDriver:
    """build a driver from the configured settings"""
    return GitlabApiDriver(
        settings.gitlab_url,
        settings.gitlab_token,
        settings.gitlab_verbose,
        timeout=settings.gitlab_timeout,
    )
