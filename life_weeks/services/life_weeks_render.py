"""Terminal rendering for Life Weeks.

Maps a LifeWeeksView to rich renderables: header, progress bar, countdown
line and the year-by-year grid. Pure presentation with no storage or
clock access.
"""

from typing import List

from rich.console import Group, RenderableType
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from ..core.defaults_loader import get_config_value, get_message, get_terminal_style
from .life_weeks_domain import (
    LIFE_EXPECTANCY_YEARS,
    WeekRecord,
    describe_week,
    iter_year_rows,
    year_labels,
)
from .life_weeks_progress import (
    CountdownSnapshot,
    ProgressSnapshot,
    format_countdown,
)
from .life_weeks_session import LifeWeeksView


def cell_style(week: WeekRecord) -> str:
    if week.is_birth:
        return get_terminal_style("birth", "green")
    if week.is_death:
        return get_terminal_style("death", "red")
    if week.is_current_week:
        return get_terminal_style("current", "bold blue")
    if week.is_lived:
        return get_terminal_style("lived", "grey35")
    return get_terminal_style("unlived", "grey82")


def render_header() -> Text:
    header = Text(get_message("title", "Life in Weeks"), style="bold", justify="center")
    header.append(
        "\n" + get_message("tagline", "Time's ticking, make every moment matter!"),
        style="dim",
    )
    return header


def render_status(
    progress: ProgressSnapshot, countdown: CountdownSnapshot
) -> Table:
    """Days lived, remaining time and percentage above a progress bar."""
    table = Table.grid(expand=True)
    table.add_column(justify="left")
    table.add_column(justify="right")

    left = Text(f"{progress.days_lived:,} days lived")
    left.append(f" (remaining: {format_countdown(countdown)})", style="dim")
    right = Text(f"{progress.percentage:.1f}% of {LIFE_EXPECTANCY_YEARS} years")
    table.add_row(left, right)
    table.add_row(
        ProgressBar(
            total=100,
            completed=progress.percentage,
            complete_style=get_terminal_style("progress_bar", "blue"),
        ),
        "",
    )
    return table


def render_grid(view: LifeWeeksView) -> Text:
    """One line per year: the calendar year, then 52 week glyphs."""
    glyph = get_config_value("display.terminal.glyphs.cell", "■")
    current_glyph = get_config_value("display.terminal.glyphs.current", "▣")
    label_style = get_terminal_style("year_label", "dim")

    lines: List[Text] = []
    for year, row in zip(year_labels(view.birth_date), iter_year_rows(view.weeks)):
        line = Text(f"{year:>6} ", style=label_style)
        for week in row:
            line.append(
                current_glyph if week.is_current_week else glyph,
                style=cell_style(week),
            )
        lines.append(line)

    return Text("\n").join(lines)


def render_current_week(view: LifeWeeksView) -> Text:
    current = next((w for w in view.weeks if w.is_current_week), None)
    if current is None:
        if view.weeks and view.weeks[-1].is_lived:
            return Text("Beyond life expectancy", style="dim")
        return Text("No week lived yet", style="dim")
    return Text(describe_week(current), style=get_terminal_style("current", "bold blue"))


def render_view(view: LifeWeeksView) -> RenderableType:
    """Full screen: header, status, grid and the expectancy source note."""
    return Group(
        render_header(),
        Text(""),
        render_status(view.progress, view.countdown),
        Text(""),
        render_grid(view),
        Text(""),
        render_current_week(view),
        Text(
            get_message(
                "expectancy_source",
                "Life expectancy at birth. Data based on the latest United "
                "Nations Population Division estimates (2024)",
            ),
            style="dim italic",
        ),
    )
