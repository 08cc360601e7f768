"""Gitea REST API client."""

from gitea_mcp.gitea.client import API_PREFIX, GiteaClient
from gitea_mcp.gitea.errors import APIError, GiteaError, RequestError, ResponseDecodeError

__all__ = [
    "API_PREFIX",
    "APIError",
    "GiteaClient",
    "GiteaError",
    "RequestError",
    "ResponseDecodeError",
]
