"""
Jira Integration for Sprint Burn-Up Board

Pulls sprints and per-sprint issue counts from the Jira agile API.
"""

import logging
from datetime import datetime
from typing import Optional
from dataclasses import dataclass

import httpx

from ..exceptions import JiraAPIError

logger = logging.getLogger(__name__)

DONE_CATEGORY = "done"


def parse_jira_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a Jira ISO-8601 timestamp, tolerating the trailing Z."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class Sprint:
    """Represents a Jira Sprint."""
    id: int
    name: str
    state: str  # active, closed, future
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    goal: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.state == "active"

    @property
    def is_closed(self) -> bool:
        return self.state == "closed"

    @classmethod
    def from_api(cls, data: dict) -> "Sprint":
        return cls(
            id=data["id"],
            name=data["name"],
            state=data["state"],
            start_date=parse_jira_date(data.get("startDate")),
            end_date=parse_jira_date(data.get("endDate")),
            goal=data.get("goal"),
        )


@dataclass(frozen=True)
class SprintStats:
    """Issue counts for one sprint."""
    total: int = 0
    done: int = 0

    def __post_init__(self):
        if self.total < 0 or self.done < 0:
            raise ValueError("Issue counts cannot be negative")
        if self.done > self.total:
            raise ValueError(f"done ({self.done}) cannot exceed total ({self.total})")

    @property
    def remaining(self) -> int:
        return self.total - self.done

    @classmethod
    def from_issues(cls, issues: list[dict]) -> "SprintStats":
        """Count issues whose status category is done."""
        done = sum(1 for issue in issues if issue_status_category(issue) == DONE_CATEGORY)
        return cls(total=len(issues), done=done)


def issue_status_category(issue: dict) -> Optional[str]:
    """Status category key of a raw Jira issue, if present."""
    status = (issue.get("fields") or {}).get("status") or {}
    return (status.get("statusCategory") or {}).get("key")


class JiraClient:
    """
    Jira Cloud agile API client for fetching sprint data.

    Usage:
        client = JiraClient(
            url="https://company.atlassian.net",
            email="user@company.com",
            token="api_token"
        )
        sprints = await client.get_sprints("42", state="active,closed")
        stats = await client.get_sprint_stats(sprints[0].id)
    """

    def __init__(
        self,
        url: str,
        email: str,
        token: str,
        timeout: float = 30.0,
        page_size: int = 50,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        if not all([url, email, token]):
            raise ValueError("Jira url, email and token are required")

        self.url = url.rstrip("/")
        self.auth = (email, token)
        self.timeout = timeout
        self.page_size = page_size
        self.transport = transport

    async def _agile_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None
    ) -> dict:
        """Make authenticated request to Jira Agile API."""
        url = f"{self.url}/rest/agile/1.0{endpoint}"
        logger.debug("%s %s params=%s", method, url, params)

        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    auth=self.auth,
                    params=params,
                    headers={"Accept": "application/json"},
                    timeout=self.timeout
                )
            except httpx.HTTPError as e:
                raise JiraAPIError.from_transport_error(e) from e

            if response.is_error:
                raise JiraAPIError.from_response(response)
            if not response.content:
                return {}
            try:
                return response.json()
            except ValueError as e:
                raise JiraAPIError.from_invalid_body(response) from e

    async def get_sprints(
        self,
        board_id: str,
        state: Optional[str] = None
    ) -> list[Sprint]:
        """
        Get sprints for a board.

        Args:
            board_id: Jira board ID
            state: Comma-separated state filter (active, closed, future)
        """
        sprints = []
        start_at = 0

        while True:
            params = {"startAt": start_at, "maxResults": self.page_size}
            if state:
                params["state"] = state

            result = await self._agile_request("GET", f"/board/{board_id}/sprint", params)
            values = result.get("values", [])
            try:
                sprints.extend(Sprint.from_api(s) for s in values)
            except (KeyError, TypeError, ValueError) as e:
                raise JiraAPIError(f"Malformed sprint on board {board_id}: {e!r}") from e

            # Sprint listings page with isLast rather than a total
            if result.get("isLast", True) or not values:
                break
            start_at += len(values)

        logger.debug("Board %s has %d sprints (state=%s)", board_id, len(sprints), state)
        return sprints

    async def get_sprint_issues(self, sprint_id: int) -> list[dict]:
        """Get every issue in a sprint, following startAt pagination."""
        issues = []
        start_at = 0

        while True:
            result = await self._agile_request(
                "GET",
                f"/sprint/{sprint_id}/issue",
                params={
                    "startAt": start_at,
                    "maxResults": self.page_size,
                    "fields": "status"
                }
            )
            page = result.get("issues", [])
            issues.extend(page)

            total = result.get("total", len(issues))
            if not page or len(issues) >= total:
                break
            start_at = len(issues)

        return issues

    async def get_sprint_stats(self, sprint_id: int) -> SprintStats:
        """Count total and done issues for a sprint."""
        issues = await self.get_sprint_issues(sprint_id)
        stats = SprintStats.from_issues(issues)
        logger.debug("Sprint %s: %d/%d done", sprint_id, stats.done, stats.total)
        return stats
