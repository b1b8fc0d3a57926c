"""
Sprint Burn-Up Board - Integrations

This module provides integrations with external services:
- Jira: sprints and sprint issue counts
- Miro: shapes and images on a board
"""

from .jira import JiraClient, Sprint, SprintStats
from .miro import MiroClient

__all__ = [
    # Jira
    "JiraClient",
    "Sprint",
    "SprintStats",

    # Miro
    "MiroClient",
]
