"""
Sprint Burn-Up Board

Reads sprint completion data from Jira and draws a burn-up table and chart
on a Miro board.
"""

__version__ = "1.0.0"

from .exceptions import (
    BurnupError,
    ConfigError,
    NoActiveSprintError,
    APIError,
    JiraAPIError,
    MiroAPIError
)

from .selector import SprintSelector, select_sprints

from .table import BurnupTable, TableRow, build_table

from .chart import build_burnup_chart_config, chart_url

from .renderer import BoardRenderer, CellPlacement, layout_grid

from .pipeline import BurnupPipeline, BurnupResult

__all__ = [
    # Version
    "__version__",

    # Errors
    "BurnupError",
    "ConfigError",
    "NoActiveSprintError",
    "APIError",
    "JiraAPIError",
    "MiroAPIError",

    # Selector
    "SprintSelector",
    "select_sprints",

    # Table
    "BurnupTable",
    "TableRow",
    "build_table",

    # Chart
    "build_burnup_chart_config",
    "chart_url",

    # Renderer
    "BoardRenderer",
    "CellPlacement",
    "layout_grid",

    # Pipeline
    "BurnupPipeline",
    "BurnupResult",
]
