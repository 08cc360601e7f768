"""Error types for the Gitea REST client."""

from __future__ import annotations


class GiteaError(Exception):
    """Base error for all Gitea API failures."""


class APIError(GiteaError):
    """The API answered with an HTTP status of 400 or above."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error {status_code}: {body}")


class RequestError(GiteaError):
    """The request could not be sent or the response could not be read."""

    def __init__(self, method: str, path: str, detail: str = "") -> None:
        self.method = method
        self.path = path
        self.detail = detail
        super().__init__(f"request {method} {path}" + (f": {detail}" if detail else ""))


class ResponseDecodeError(GiteaError):
    """The response body was not valid JSON."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("invalid JSON response" + (f": {detail}" if detail else ""))
