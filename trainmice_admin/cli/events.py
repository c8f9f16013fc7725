from typing import Optional

import typer
from rich import print as rprint
from tabulate import tabulate

from trainmice_admin.app import AdminApp
from trainmice_admin.availability.calendar import format_date
from trainmice_admin.cli.async_cli import AsyncTyper
from trainmice_admin.errors import ApiRequestError, EventCreationError
from trainmice_admin.events.board import filter_events
from trainmice_admin.schemas.course import CourseMode, CourseType
from trainmice_admin.schemas.event import EventStatus

events_cli = AsyncTyper()


@events_cli.command(name="list")
async def list_events(
    trainer_id: Optional[str] = typer.Option(None, "--trainer", help="Trainer id"),
    course_id: Optional[str] = typer.Option(None, "--course", help="Course id"),
    search: str = typer.Option("", help="Search term"),
    status: Optional[EventStatus] = typer.Option(None, help="Status filter"),
    month: Optional[int] = typer.Option(None, min=1, max=12, help="Month (1-12)"),
):
    """
    List events, completing past active events on the backend first
    """
    async with AdminApp() as app:
        board = app.events_board()
        if not await board.refresh(trainer_id=trainer_id, course_id=course_id):
            raise typer.Exit(1)
        events = filter_events(
            board.events, search, status.value if status else None, month
        )
        print(
            tabulate(
                [
                    [
                        e.id,
                        e.display_title,
                        e.trainer.full_name if e.trainer else None,
                        format_date(e.event_date) if e.event_date else None,
                        format_date(e.end_date) if e.end_date else None,
                        e.status,
                    ]
                    for e in events
                ],
                headers=["id", "title", "trainer", "start", "end", "status"],
                tablefmt="rounded_outline",
            )
        )


@events_cli.command(name="status")
async def update_event_status(event_id: str, status: EventStatus):
    async with AdminApp() as app:
        if not await app.events_board().update_status(event_id, status):
            raise typer.Exit(1)


@events_cli.command(name="create-from-course")
async def create_event_from_course(
    course_id: str,
    availability_ids: list[str] = typer.Option(
        [], "--availability", help="Trainer availability slot id, repeat per day"
    ),
    course_type: Optional[CourseType] = typer.Option(None, help="Course type"),
    course_mode: Optional[CourseMode] = typer.Option(None, help="Course mode"),
    price: Optional[str] = typer.Option(None),
    venue: Optional[str] = typer.Option(None),
    city: Optional[str] = typer.Option(None),
    state: Optional[str] = typer.Option(None),
):
    """
    Create an event directly from a course using the trainer's availability
    """
    async with AdminApp() as app:
        try:
            form = await app.event_creation_form(course_id)
        except ApiRequestError as e:
            app.toasts.error(e.message or "Error loading course")
            raise typer.Exit(1)
        if len(availability_ids) == 0:
            print(
                tabulate(
                    [[s.id, format_date(s.date), s.status] for s in form.options],  # type: ignore[arg-type]
                    headers=["id", "date", "status"],
                    tablefmt="rounded_outline",
                )
            )
            rprint(f"Select {form.days_needed} date(s) with --availability")
            raise typer.Exit(1)
        for availability_id in availability_ids:
            form.toggle(availability_id)
        if course_type is not None:
            form.course_type = course_type
        if course_mode is not None:
            form.course_mode = course_mode
        for attr, value in (
            ("price", price),
            ("venue", venue),
            ("city", city),
            ("state", state),
        ):
            if value is not None:
                setattr(form, attr, value)
        result = await form.submit()
        if isinstance(result, EventCreationError):
            raise typer.Exit(1)
        if result.event is not None:
            rprint(f"Event '{result.event.id}' created")
