"""
Rich-based timeline renderer for staffline.

Draws a Timeline as a terminal Gantt chart: one block of lines per staff
member, one line per lane, one column per day.
"""

from datetime import date

from rich.console import Console
from rich.table import Table
from rich.text import Text

from staffline.core.timeline.models import OwnerRow, Timeline

WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class TimelineRenderer:
    """
    Render a laid-out Timeline using Rich.

    Bars are drawn with their category color as background. A bar's title is
    written into its first cell; completed tasks are dimmed.

    Example:
        >>> renderer = TimelineRenderer()
        >>> renderer.print(service.week())
    """

    def __init__(self, console: Console | None = None, today: date | None = None):
        """
        Initialize the renderer.

        Args:
            console: Rich console for output. If None, creates a new one.
            today: Day to highlight (defaults to date.today())
        """
        self.console = console or Console()
        self.today = today or date.today()

    def render(self, timeline: Timeline) -> Table:
        """Build the Rich table for a timeline."""
        table = Table(
            title=f"Timeline {timeline.window.start:%Y-%m-%d} to {timeline.window.end:%Y-%m-%d}",
            show_lines=False,
            expand=False,
        )
        table.add_column("Staff", style="bold", no_wrap=True)
        for day in timeline.days:
            style = "bold cyan" if day == self.today else ""
            table.add_column(
                f"{day.month}/{day.day}\n{WEEKDAY_ABBR[day.weekday()]}",
                header_style=style or "bold",
                justify="left",
                no_wrap=True,
                min_width=5,
            )

        for row in timeline.rows:
            for lane_index, cells in enumerate(self._lane_cells(row, len(timeline.days))):
                label = self._owner_label(row) if lane_index == 0 else Text("")
                table.add_row(label, *cells, end_section=lane_index == row.max_lane)

        return table

    def print(self, timeline: Timeline) -> None:
        self.console.print(self.render(timeline))

    def _owner_label(self, row: OwnerRow) -> Text:
        label = Text(row.name or row.owner_id, style="bold")
        if row.role:
            label.append(f"\n{row.role.replace('_', ' ')}", style="dim")
        return label

    def _lane_cells(self, row: OwnerRow, day_count: int) -> list[list[Text]]:
        lanes = [[Text("") for _ in range(day_count)] for _ in range(row.max_lane + 1)]

        for bar in row.bars:
            first = bar.start_offset_days
            last = min(day_count, first + max(bar.duration_days, 1))
            style = f"white on {bar.color}"
            if bar.completed:
                style += " dim"
            for day in range(first, last):
                content = bar.title if day == first else ""
                lanes[bar.lane][day] = Text(content, style=style, overflow="ellipsis")

        return lanes
