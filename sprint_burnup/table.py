"""
Burn-Up Table

Turns per-sprint issue counts into a table with a running total of
completed issues.
"""

from dataclasses import dataclass, field
from typing import Iterable

from .integrations import Sprint, SprintStats

HEADER = ("Sprint", "Total", "Done", "Cumulative Done")


@dataclass(frozen=True)
class TableRow:
    """One sprint's row in the burn-up table."""
    sprint_name: str
    total: int
    done: int
    cumulative_done: int

    def cells(self) -> list[str]:
        return [self.sprint_name, str(self.total), str(self.done), str(self.cumulative_done)]


@dataclass
class BurnupTable:
    """Header plus one row per sprint, in display order."""
    rows: list[TableRow] = field(default_factory=list)
    header: tuple[str, ...] = HEADER

    @property
    def labels(self) -> list[str]:
        return [row.sprint_name for row in self.rows]

    @property
    def totals(self) -> list[int]:
        return [row.total for row in self.rows]

    @property
    def done(self) -> list[int]:
        return [row.done for row in self.rows]

    @property
    def cumulative_done(self) -> list[int]:
        return [row.cumulative_done for row in self.rows]

    def cells(self) -> list[list[str]]:
        """Cell text matrix including the header row."""
        return [list(self.header)] + [row.cells() for row in self.rows]

    def to_text(self) -> str:
        """Render the table as aligned plain text for the console."""
        matrix = self.cells()
        widths = [max(len(row[i]) for row in matrix) for i in range(len(self.header))]

        def line(row: list[str]) -> str:
            first = row[0].ljust(widths[0])
            rest = [cell.rjust(width) for cell, width in zip(row[1:], widths[1:])]
            return "  ".join([first] + rest)

        lines = [line(matrix[0]), "  ".join("-" * w for w in widths)]
        lines.extend(line(row) for row in matrix[1:])
        return "\n".join(lines)


def build_table(sprint_stats: Iterable[tuple[Sprint, SprintStats]]) -> BurnupTable:
    """Build the burn-up table, accumulating done counts in sprint order."""
    table = BurnupTable()
    cumulative_done = 0

    for sprint, stats in sprint_stats:
        cumulative_done += stats.done
        table.rows.append(TableRow(
            sprint_name=sprint.name,
            total=stats.total,
            done=stats.done,
            cumulative_done=cumulative_done
        ))

    return table
