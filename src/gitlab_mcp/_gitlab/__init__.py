"""gitlab API client"""

from gitlab_mcp._gitlab._client import GitlabApiDriver, get_driver, normalize_base_url

__all__ = [
    "GitlabApiDriver",
    "get_driver",
    "normalize_base_url",
]
