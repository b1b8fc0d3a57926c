"""
Burn-Up Chart

Builds a Chart.js line chart of the burn-up table and the QuickChart URL
that renders it as an image.
"""

import json
from urllib.parse import quote

from .table import BurnupTable

QUICKCHART_URL = "https://quickchart.io/chart"
CHART_TITLE = "Jira Sprint Burn-Up Chart"

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def _series(label: str, data: list[int], color: str, dashed: bool = False) -> dict:
    series = {
        "label": label,
        "data": data,
        "borderColor": color,
        "fill": False,
        "tension": 0.3
    }
    if dashed:
        series["borderDash"] = [5, 5]
    return series


def build_burnup_chart_config(table: BurnupTable) -> dict:
    """Chart.js config with done, cumulative done and scope lines."""
    return {
        "type": "line",
        "data": {
            "labels": table.labels,
            "datasets": [
                _series("Done (per sprint)", table.done, "green"),
                _series("Cumulative Done", table.cumulative_done, "blue"),
                _series("Scope (Total)", table.totals, "red", dashed=True),
            ]
        },
        "options": {
            "plugins": {
                "backgroundColor": "white",
                "title": {
                    "display": True,
                    "text": CHART_TITLE
                }
            },
            "scales": {
                "y": {"beginAtZero": True}
            }
        },
        "backgroundColor": "white"
    }


def chart_url(config: dict, base_url: str = QUICKCHART_URL) -> str:
    """Embed the chart config as the ``c`` query parameter."""
    encoded = quote(json.dumps(config, separators=(",", ":")), safe=_URI_COMPONENT_SAFE)
    return f"{base_url}?c={encoded}"
