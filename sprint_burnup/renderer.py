"""
Board Renderer

Draws the burn-up table as a grid of shapes on a Miro board and places the
chart image next to it.
"""

import asyncio
import logging
from dataclasses import dataclass

from .integrations import MiroClient

logger = logging.getLogger(__name__)

CELL_WIDTH = 150
CELL_HEIGHT = 50
CHART_POSITION = (1000, 0)


@dataclass(frozen=True)
class CellPlacement:
    """Centre position of one table cell on the canvas."""
    row: int
    column: int
    text: str
    x: float
    y: float


def layout_grid(
    cells: list[list[str]],
    cell_width: float = CELL_WIDTH,
    cell_height: float = CELL_HEIGHT
) -> list[CellPlacement]:
    """
    Lay out a cell matrix as a grid centred on the canvas origin.

    The grid's top-left corner sits at (-columns/2 * width, -rows/2 * height)
    using true division. Shapes are positioned by their centre, so each cell
    is offset by half a cell from its corner and the centroid of all cells
    is exactly (0, 0).
    """
    if not cells:
        return []

    row_count = len(cells)
    column_count = max(len(row) for row in cells)
    start_x = -(column_count / 2 * cell_width)
    start_y = -(row_count / 2 * cell_height)

    placements = []
    for row_index, row in enumerate(cells):
        for column_index, text in enumerate(row):
            placements.append(CellPlacement(
                row=row_index,
                column=column_index,
                text=text,
                x=start_x + column_index * cell_width + cell_width / 2,
                y=start_y + row_index * cell_height + cell_height / 2
            ))

    return placements


class BoardRenderer:
    """Writes burn-up widgets to one Miro board."""

    def __init__(
        self,
        miro: MiroClient,
        cell_width: float = CELL_WIDTH,
        cell_height: float = CELL_HEIGHT,
        chart_position: tuple[float, float] = CHART_POSITION
    ):
        self.miro = miro
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.chart_position = chart_position

    async def render_table(self, cells: list[list[str]]) -> list[dict]:
        """
        Create one shape per cell, all requests in flight at once.

        Fails with the first error raised. Requests already sent are not
        cancelled, so a failure can leave some cells on the board.
        """
        placements = layout_grid(cells, self.cell_width, self.cell_height)

        shapes = await asyncio.gather(*(
            self.miro.create_shape(
                p.text,
                x=p.x,
                y=p.y,
                width=self.cell_width,
                height=self.cell_height
            )
            for p in placements
        ))

        logger.info("Miro table created successfully (%d shapes)", len(shapes))
        return list(shapes)

    async def render_chart(self, image_url: str) -> dict:
        """Place the chart image at the chart position."""
        x, y = self.chart_position
        image = await self.miro.create_image(image_url, x=x, y=y)
        logger.info("Chart uploaded to Miro: %s", image.get("id"))
        return image
