"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import PlannerConfig, get_default_config_path
from ..domain.clock import Time
from ..domain.day import Day
from ..domain.exceptions import PlannerError
from ..domain.options import SeriesOptions
from ..domain.task import Task
from ..domain.timeslot import Timeslot
from ..services.planner import PlannerService, describe_day

app = typer.Typer(
    name="weekplanner",
    help="Plan tasks into the free timeslots of a week",
    add_completion=False
)

console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


def _build_options(start: Optional[str], end: Optional[str]) -> SeriesOptions:
    defaults = SeriesOptions()
    return SeriesOptions(
        default_start_limit=Time.parse(start) if start else defaults.default_start_limit,
        default_end_limit=Time.parse(end) if end else defaults.default_end_limit,
    )


def _day_table(day: Day, title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Timeslot", style="bold yellow")
    table.add_column("Minutes", justify="right")
    table.add_column("Task", style="dim")

    for row in describe_day(day):
        table.add_row(row["timeslot"], row["duration"], row["task"] or "[green]free[/green]")

    return table


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """
    Plan tasks into the free timeslots of a week.
    """
    if verbose:
        _configure_logging("DEBUG")


@app.command()
def show(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./weekplanner.yaml")] = None,
):
    """
    Show the configured week with its timeslots.
    """
    try:
        config_path = config_file or get_default_config_path()
        config = PlannerConfig.load_from_yaml(config_path)
        _configure_logging(config.log_level)

        service = PlannerService.from_config(config)

        console.print("\n" + "="*60)
        console.print("[bold cyan]Weekplanner - configured week[/bold cyan]")
        console.print("="*60 + "\n")
        console.print(f"   Day limits: {config.limits.start} - {config.limits.end}")
        console.print()

        for label, day in service.week.items():
            if not day.timeslots:
                console.print(f"[dim]{label.capitalize()}: no timeslots[/dim]")
                continue
            console.print(_day_table(day, label.capitalize()))

        console.print()
    except (FileNotFoundError, ValueError, PlannerError) as e:
        _fail(e)


@app.command()
def gaps(
    day: Annotated[str, typer.Argument(help="Day string, e.g. '0;08:00-12:00,13:00-17:00'")],
    extend: Annotated[bool, typer.Option("--extend", help="Include the gaps up to the day limits")] = False,
    start: Annotated[Optional[str], typer.Option("--start", help="Start limit (HH:MM)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="End limit (HH:MM)")] = None,
):
    """
    List the uncovered ranges of a day.

    Examples:

        weekplanner gaps "0;06:30-07:30,08:30-10:30"

        weekplanner gaps "0;06:30-07:30,08:30-10:30" --extend --start 06:00 --end 20:00
    """
    try:
        parsed = Day.from_string(day, _build_options(start, end))
        empty = parsed.get_empty_timeslots(extend_to_limit=extend)
    except PlannerError as e:
        _fail(e)

    if not empty:
        console.print("[yellow]No gaps found.[/yellow]")
        return

    for timeslot in empty:
        console.print(f"  {timeslot} ({timeslot.duration} min)")


@app.command()
def split(
    timeslot: Annotated[str, typer.Argument(help="Timeslot to split, e.g. 09:00-11:00")],
    cuts: Annotated[List[str], typer.Argument(help="Cut points (HH:MM), ascending")],
):
    """
    Split a timeslot at the given times.
    """
    try:
        pieces = Timeslot.split(Timeslot.parse(timeslot), [Time.parse(cut) for cut in cuts])
    except PlannerError as e:
        _fail(e)

    console.print(",".join(piece.format() for piece in pieces))


@app.command()
def book(
    day: Annotated[str, typer.Argument(help="Day string, e.g. '2;12:00-14:00'")],
    timeslot: Annotated[str, typer.Argument(help="Timeslot to book, e.g. 12:00-13:00")],
    name: Annotated[str, typer.Option("--name", "-n", help="Task name")] = "task",
):
    """
    Insert a task into a free range of a day and print the resulting day.
    """
    try:
        parsed = Day.from_string(day)
        parsed.insert(timeslot, Task(data=None, name=name))
    except PlannerError as e:
        _fail(e)

    console.print(_day_table(parsed, parsed.day_of_week.capitalize()))
    console.print(parsed.format())


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]weekplanner[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
