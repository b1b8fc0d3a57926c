"""
Fake Jira and Miro APIs behind httpx.MockTransport.
"""

import json
from datetime import datetime, timedelta, timezone

import httpx

from sprint_burnup.integrations import Sprint

JIRA_URL = "https://example.atlassian.net"
BOARD_ID = "42"
MIRO_BOARD = "uXjVO123="

ENV = {
    "JIRA_BASE_URL": JIRA_URL,
    "JIRA_EMAIL": "user@example.com",
    "JIRA_TOKEN": "jira-token",
    "JIRA_BOARD_ID": BOARD_ID,
    "MIRO_TOKEN": "miro-token",
    "MIRO_BOARD_ID": MIRO_BOARD,
}


def make_sprint(sprint_id: int, state: str = "closed", end_day: int = None) -> Sprint:
    end_date = None
    if end_day is not None:
        end_date = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(days=end_day)
    return Sprint(id=sprint_id, name=f"S{sprint_id}", state=state, end_date=end_date)


def sprint_payload(sprint_id: int, state: str = "closed", end_day: int = None) -> dict:
    payload = {"id": sprint_id, "name": f"S{sprint_id}", "state": state}
    if end_day is not None:
        end = datetime(2024, 1, 1) + timedelta(days=end_day)
        payload["endDate"] = end.strftime("%Y-%m-%dT%H:%M:%S.000Z")
    return payload


def issue(category: str) -> dict:
    return {"fields": {"status": {"statusCategory": {"key": category}}}}


def issues(total: int, done: int) -> list[dict]:
    return [issue("done")] * done + [issue("indeterminate")] * (total - done)


class FakeServices:
    """Records requests and answers them like Jira and Miro would."""

    def __init__(self, sprints: list[dict], sprint_issues: dict[int, list[dict]]):
        self.sprints = sprints
        self.sprint_issues = sprint_issues
        self.requests: list[httpx.Request] = []
        self.fail_shape_content = None
        self.jira_status = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.startswith("/rest/agile/1.0/"):
            if self.jira_status:
                return httpx.Response(self.jira_status, json={"errorMessages": ["Unauthorized"]})
            if path == f"/rest/agile/1.0/board/{BOARD_ID}/sprint":
                return httpx.Response(200, json={"isLast": True, "values": self.sprints})
            sprint_id = int(path.split("/")[-2])
            found = self.sprint_issues.get(sprint_id, [])
            return httpx.Response(200, json={"startAt": 0, "total": len(found), "issues": found})

        if path == f"/v2/boards/{MIRO_BOARD}/shapes":
            body = json.loads(request.content)
            if body["data"]["content"] == self.fail_shape_content:
                return httpx.Response(429, json={"status": 429, "message": "Rate limit exceeded"})
            return httpx.Response(201, json={"id": f"shape-{len(self.requests)}", "type": "shape"})

        if path == f"/v2/boards/{MIRO_BOARD}/images":
            return httpx.Response(201, json={"id": "image-1", "type": "image"})

        return httpx.Response(404, json={"message": "not found"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requests_to(self, suffix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(suffix)]
