import datetime
from typing import Optional

import typer
from rich import print as rprint
from tabulate import tabulate

from trainmice_admin.app import AdminApp
from trainmice_admin.availability.calendar import leading_blank_cells, parse_date
from trainmice_admin.cli.async_cli import AsyncTyper
from trainmice_admin.consts import SHORT_WEEKDAY_NAMES
from trainmice_admin.errors import AvailabilityError
from trainmice_admin.schemas.availability import (
    AvailabilityStatus,
    CalendarDay,
    DayStatus,
)

calendar_cli = AsyncTyper()
availability_cli = AsyncTyper()

DAY_STATUS_STYLES = {
    DayStatus.AVAILABLE: "green",
    DayStatus.NOT_AVAILABLE: "dim",
    DayStatus.BLOCKED: "red",
    DayStatus.TENTATIVE: "yellow",
    DayStatus.BOOKED: "blue",
}


def _weeks(year: int, month: int, days: list[CalendarDay]) -> list[list[str]]:
    cells = ["   "] * leading_blank_cells(year, month)
    for day in days:
        style = DAY_STATUS_STYLES[day.status]
        cells.append(f"[{style}]{day.date.day:>3}[/{style}]")
    return [cells[i : i + 7] for i in range(0, len(cells), 7)]


@calendar_cli.command(name="show")
async def show_calendar(
    trainer_id: str,
    year: Optional[int] = typer.Option(None, help="Year, defaults to current"),
    month: Optional[int] = typer.Option(
        None, min=1, max=12, help="Month (1-12), defaults to current"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List bookings per day"),
):
    """
    Show a trainer's month with the resolved status of every day
    """
    async with AdminApp() as app:
        calendar = app.trainer_calendar(trainer_id, year, month)
        if not await calendar.refresh():
            raise typer.Exit(1)
        days = calendar.days
        rprint(f"[bold]{datetime.date(calendar.year, calendar.month, 1):%B %Y}[/bold]")
        rprint(" ".join(f"{name:>3}" for name in SHORT_WEEKDAY_NAMES))
        for week in _weeks(calendar.year, calendar.month, days):
            rprint(" ".join(week))
        counts = calendar.counts
        print(
            tabulate(
                [[status, count] for status, count in counts.items()],
                headers=["status", "days"],
                tablefmt="rounded_outline",
            )
        )
        if verbose:
            print(
                tabulate(
                    [
                        [day.date, e.title, e.status]
                        for day in days
                        for e in day.bookings
                    ],
                    headers=["date", "title", "status"],
                    tablefmt="rounded_outline",
                )
            )


@availability_cli.command(name="create")
async def create_availability(
    trainer_id: str,
    start: str = typer.Option(..., help="First date (YYYY-MM-DD)"),
    end: str = typer.Option(..., help="Last date (YYYY-MM-DD)"),
    status: AvailabilityStatus = typer.Option(
        AvailabilityStatus.AVAILABLE, help="Status given to every date in the range"
    ),
):
    """
    Set one availability status for every date from start to end
    """
    try:
        start_date, end_date = parse_date(start), parse_date(end)
    except ValueError:
        rprint("[red]Dates must be formatted as YYYY-MM-DD[/red]")
        raise typer.Exit(1)
    async with AdminApp() as app:
        calendar = app.trainer_calendar(trainer_id, start_date.year, start_date.month)
        result = await calendar.create_availability(start_date, end_date, status)
        if isinstance(result, AvailabilityError):
            raise typer.Exit(1)
