"""
Shared fixtures for the burn-up tests.
"""

import pytest

from sprint_burnup.config import Config
from sprint_burnup.integrations import JiraClient, MiroClient

from helpers import ENV, JIRA_URL, MIRO_BOARD, FakeServices, issues, sprint_payload


@pytest.fixture
def services():
    """Five closed sprints S1..S5, active S6."""
    sprints = [sprint_payload(i, "closed", end_day=i * 14) for i in range(1, 6)]
    sprints.append(sprint_payload(6, "active"))
    sprint_issues = {i: issues(total=10, done=i) for i in range(1, 7)}
    return FakeServices(sprints, sprint_issues)


@pytest.fixture
def jira_client(services):
    return JiraClient(
        url=JIRA_URL,
        email="user@example.com",
        token="jira-token",
        transport=services.transport
    )


@pytest.fixture
def miro_client(services):
    return MiroClient(token="miro-token", board_id=MIRO_BOARD, transport=services.transport)


@pytest.fixture
def config(tmp_path):
    return Config(str(tmp_path / "missing.yaml"), env=dict(ENV))
