"""Exceptions for the sprint burn-up board."""

from typing import Any, Optional

import httpx


class BurnupError(Exception):
    """Base error for everything the burn-up run can fail with."""


class ConfigError(BurnupError):
    """Required configuration is missing or invalid."""


class NoActiveSprintError(BurnupError):
    """The board has no active sprint, or more than one."""


class APIError(BurnupError):
    """Error from an external REST API."""

    service = "API"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.body = body  # Parsed JSON when the response had one, else raw text
        super().__init__(message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        """Build an error from a non-2xx response."""
        try:
            body = response.json()
        except ValueError:
            body = response.text or None

        request = response.request
        message = (
            f"{cls.service} API returned {response.status_code} "
            f"for {request.method} {request.url}"
        )
        return cls(message, status_code=response.status_code, body=body)

    @classmethod
    def from_invalid_body(cls, response: httpx.Response) -> "APIError":
        """Build an error from a success response whose body is not JSON."""
        request = response.request
        message = (
            f"{cls.service} API returned a non-JSON body "
            f"for {request.method} {request.url}"
        )
        return cls(message, status_code=response.status_code, body=response.text or None)

    @classmethod
    def from_transport_error(cls, exc: httpx.HTTPError) -> "APIError":
        """Build an error from a network-level failure."""
        return cls(f"{cls.service} request failed: {exc!r}")

    @property
    def detail(self) -> Any:
        """Response body if the server sent one, otherwise the message."""
        return self.body if self.body is not None else self.message


class JiraAPIError(APIError):
    """Error from the Jira REST API."""

    service = "Jira"


class MiroAPIError(APIError):
    """Error from the Miro REST API."""

    service = "Miro"
