"""Command line interface for Life Weeks.

Usage:
    life-weeks set 1990-05-15
    life-weeks show [--date YYYY-MM-DD] [--live] [--json]
    life-weeks image [--date YYYY-MM-DD] [--output DIR]
    life-weeks clear
"""

import asyncio
import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.live import Live

from .core.config import get_settings
from .core.defaults_loader import get_message
from .services.birth_date_store import BirthDateStore
from .services.life_weeks_domain import parse_birth_date
from .services.life_weeks_image import generate_life_weeks_image
from .services.life_weeks_progress import CountdownSnapshot
from .services.life_weeks_render import render_view
from .services.life_weeks_session import LifeWeeksSession, LifeWeeksView
from .services.scheduler import AsyncioScheduler
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

console = Console()
app = typer.Typer(help="Your life in weeks, with a countdown to life expectancy")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override LIFE_WEEKS_LOG_LEVEL"
    ),
) -> None:
    settings = get_settings()
    setup_logging(
        log_level=log_level or settings.log_level,
        log_to_file=settings.log_to_file,
        logs_dir=settings.logs_dir,
    )


def _parse_date_option(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return parse_birth_date(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def _build_session(
    scheduler: Optional[AsyncioScheduler] = None, persist: bool = True
) -> LifeWeeksSession:
    """Session over the saved state; with persist=False a --date never touches it."""
    settings = get_settings()
    return LifeWeeksSession(
        store=BirthDateStore(settings.state_path) if persist else None,
        scheduler=scheduler,
        tick_interval_seconds=settings.tick_interval_seconds,
    )


def _activate(session: LifeWeeksSession, birth_date: Optional[date]) -> None:
    """Use an explicit date for this run, else the persisted one."""
    if birth_date is not None:
        session.submit(birth_date)
        return

    if session.restore() is None:
        console.print(
            get_message(
                "no_birth_date",
                "No birth date set. Run `life-weeks set YYYY-MM-DD` to get started.",
            )
        )
        raise typer.Exit(1)


async def _run_live(
    session: LifeWeeksSession, scheduler: AsyncioScheduler, seconds: Optional[float]
) -> None:
    """Redraw the countdown every tick until interrupted or ``seconds`` pass."""
    weeks = session.weeks()
    progress = session.progress()

    def frame(countdown: CountdownSnapshot) -> LifeWeeksView:
        return LifeWeeksView(
            birth_date=session.birth_date,
            weeks=weeks,
            progress=progress,
            countdown=countdown,
        )

    with Live(
        render_view(frame(session.countdown())), console=console, auto_refresh=False
    ) as live:

        def on_tick(countdown: CountdownSnapshot) -> None:
            live.update(render_view(frame(countdown)), refresh=True)

        session.start_ticker(on_tick)
        try:
            if seconds is None:
                await asyncio.Event().wait()
            else:
                await asyncio.sleep(seconds)
        finally:
            session.stop()
            await scheduler.stop()


@app.command("set")
def set_birth_date(
    birth_date: str = typer.Argument(..., help="Birth date as YYYY-MM-DD"),
) -> None:
    """Save your birth date and show the grid."""
    parsed = _parse_date_option(birth_date)
    session = _build_session()
    session.submit(parsed)
    console.print(render_view(session.view()))


@app.command()
def show(
    birth_date: Optional[str] = typer.Option(
        None, "--date", "-d", help="Use this date instead of the saved one"
    ),
    live: bool = typer.Option(False, "--live", help="Keep the countdown ticking"),
    json_output: bool = typer.Option(False, "--json", help="Print the data as JSON"),
    seconds: Optional[float] = typer.Option(
        None, "--seconds", help="Stop live mode after this many seconds"
    ),
) -> None:
    """Show the life grid, progress and countdown."""
    parsed = _parse_date_option(birth_date)

    if live and not json_output:
        scheduler = AsyncioScheduler()
        session = _build_session(scheduler, persist=parsed is None)
        _activate(session, parsed)
        try:
            asyncio.run(_run_live(session, scheduler, seconds))
        except KeyboardInterrupt:
            logger.info("Live countdown interrupted")
        return

    session = _build_session(persist=parsed is None)
    _activate(session, parsed)
    view = session.view()

    if json_output:
        typer.echo(json.dumps(view.to_dict()))
        return

    console.print(render_view(view))


@app.command()
def image(
    birth_date: Optional[str] = typer.Option(
        None, "--date", "-d", help="Use this date instead of the saved one"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory for the PNG"
    ),
) -> None:
    """Render the life grid to a PNG file."""
    parsed = _parse_date_option(birth_date)
    session = _build_session(persist=parsed is None)
    _activate(session, parsed)

    output_dir = output or get_settings().image_output_path
    path = generate_life_weeks_image(session.view(), output_dir)
    console.print(f"Saved {path}")


@app.command()
def clear() -> None:
    """Forget the saved birth date."""
    session = _build_session()
    session.clear()
    console.print("Birth date cleared.")


if __name__ == "__main__":
    app()
