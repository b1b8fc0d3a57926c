"""
Sprint Selector

Picks the sprints shown on the burn-up board: the most recent closed
sprints in chronological order, followed by the active sprint.
"""

import logging
from datetime import datetime, timezone

from .exceptions import NoActiveSprintError
from .integrations import JiraClient, Sprint

logger = logging.getLogger(__name__)

DEFAULT_CLOSED_SPRINTS = 4
SPRINT_STATES = "active,closed"

# Closed sprints without an end date sort as the oldest
_MISSING_END_DATE = datetime.min.replace(tzinfo=timezone.utc)


def _end_date_key(sprint: Sprint) -> datetime:
    end_date = sprint.end_date or _MISSING_END_DATE
    if end_date.tzinfo is None:
        end_date = end_date.replace(tzinfo=timezone.utc)
    return end_date


def select_sprints(
    sprints: list[Sprint],
    closed_limit: int = DEFAULT_CLOSED_SPRINTS
) -> list[Sprint]:
    """
    Select the sprints to report on, oldest first.

    Returns up to ``closed_limit`` closed sprints with the latest end dates,
    in chronological order, followed by the active sprint.

    Raises:
        NoActiveSprintError: if there is no active sprint or more than one.
    """
    if closed_limit < 0:
        raise ValueError("closed_limit cannot be negative")

    active = [s for s in sprints if s.is_active]
    if not active:
        raise NoActiveSprintError("No active sprint found on the board")
    if len(active) > 1:
        names = ", ".join(s.name for s in active)
        raise NoActiveSprintError(f"Expected one active sprint, found {len(active)}: {names}")

    closed = sorted(
        (s for s in sprints if s.is_closed),
        key=_end_date_key,
        reverse=True
    )[:closed_limit]
    closed.reverse()

    return closed + active


class SprintSelector:
    """Fetches a board's sprints and selects the ones to report on."""

    def __init__(self, jira: JiraClient, closed_limit: int = DEFAULT_CLOSED_SPRINTS):
        self.jira = jira
        self.closed_limit = closed_limit

    async def select(self, board_id: str) -> list[Sprint]:
        sprints = await self.jira.get_sprints(board_id, state=SPRINT_STATES)
        selected = select_sprints(sprints, self.closed_limit)
        logger.info(
            "Selected %d sprints from board %s: %s",
            len(selected), board_id, ", ".join(s.name for s in selected)
        )
        return selected
