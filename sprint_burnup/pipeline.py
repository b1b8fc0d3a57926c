"""
Burn-Up Pipeline

Runs the whole report once: select sprints, count their issues, build the
table, then draw the table and chart on the board.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from .chart import QUICKCHART_URL, build_burnup_chart_config, chart_url
from .config import Config
from .integrations import JiraClient, MiroClient, Sprint
from .renderer import BoardRenderer
from .selector import DEFAULT_CLOSED_SPRINTS, SprintSelector
from .table import BurnupTable, build_table

logger = logging.getLogger(__name__)


@dataclass
class BurnupResult:
    """What a pipeline run produced."""
    sprints: list[Sprint]
    table: BurnupTable
    chart_url: str
    shapes: list[dict] = field(default_factory=list)
    image: Optional[dict] = None

    @property
    def written(self) -> bool:
        return self.image is not None


class BurnupPipeline:
    """
    Linear burn-up report run.

    Usage:
        pipeline = BurnupPipeline.from_config(Config().require())
        result = await pipeline.run()
    """

    def __init__(
        self,
        jira: JiraClient,
        miro: MiroClient,
        board_id: str,
        closed_sprints: int = DEFAULT_CLOSED_SPRINTS,
        chart_base_url: str = QUICKCHART_URL
    ):
        self.jira = jira
        self.board_id = board_id
        self.selector = SprintSelector(jira, closed_limit=closed_sprints)
        self.renderer = BoardRenderer(miro)
        self.chart_base_url = chart_base_url

    @classmethod
    def from_config(
        cls,
        config: Config,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "BurnupPipeline":
        jira = JiraClient(
            url=config.jira_url,
            email=config.jira_email,
            token=config.jira_token,
            timeout=config.timeout,
            transport=transport
        )
        miro = MiroClient(
            token=config.miro_token,
            board_id=config.miro_board_id,
            url=config.miro_url,
            timeout=config.timeout,
            transport=transport
        )
        return cls(
            jira,
            miro,
            board_id=config.jira_board_id,
            closed_sprints=config.closed_sprints,
            chart_base_url=config.chart_url
        )

    async def build_table(self) -> tuple[list[Sprint], BurnupTable]:
        """Select sprints and fetch their stats one sprint at a time."""
        sprints = await self.selector.select(self.board_id)

        sprint_stats = []
        for sprint in sprints:
            stats = await self.jira.get_sprint_stats(sprint.id)
            sprint_stats.append((sprint, stats))

        return sprints, build_table(sprint_stats)

    async def run(self, dry_run: bool = False) -> BurnupResult:
        """Run the report; with dry_run nothing is written to the board."""
        sprints, table = await self.build_table()
        url = chart_url(build_burnup_chart_config(table), self.chart_base_url)
        result = BurnupResult(sprints=sprints, table=table, chart_url=url)

        if dry_run:
            logger.info("Dry run, skipping Miro writes")
            return result

        result.shapes = await self.renderer.render_table(table.cells())
        result.image = await self.renderer.render_chart(url)
        return result
