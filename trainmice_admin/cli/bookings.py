from typing import Optional

import typer
from rich import print as rprint
from tabulate import tabulate

from trainmice_admin.app import AdminApp
from trainmice_admin.availability.calendar import format_date
from trainmice_admin.bookings.confirmation import ConfirmationForm
from trainmice_admin.bookings.conflicts import ConflictReview
from trainmice_admin.bookings.grouping import (
    ALL_STATUSES,
    BookingsTab,
    group_bookings_by_trainer_and_date,
    group_registrations_by_trainer_and_event,
)
from trainmice_admin.cli.async_cli import AsyncTyper
from trainmice_admin.errors import ConfirmationError, NotificationError
from trainmice_admin.schemas.booking import BookingRequest

bookings_cli = AsyncTyper()
registrations_cli = AsyncTyper()


def _booking_row(booking: BookingRequest) -> list:
    return [
        booking.id,
        booking.course.title if booking.course else None,
        (booking.client.user_name if booking.client else None) or booking.client_name,
        booking.status,
        booking.request_type,
    ]


def _print_bookings(bookings: list[BookingRequest], grouped: bool) -> None:
    headers = ["id", "course", "client", "status", "type"]
    if not grouped:
        print(
            tabulate(
                [
                    _booking_row(b) + [b.trainer.full_name if b.trainer else None]
                    for b in bookings
                ],
                headers=headers + ["trainer"],
                tablefmt="rounded_outline",
            )
        )
        return
    for trainer_group in group_bookings_by_trainer_and_date(bookings):
        rprint(f"[bold]{trainer_group.trainer_name}[/bold] {trainer_group.trainer_email}")
        for date_group in trainer_group.dates:
            rprint(f"  [cyan]{date_group.label}[/cyan]")
            print(
                tabulate(
                    [_booking_row(b) for b in date_group.bookings],
                    headers=headers,
                    tablefmt="rounded_outline",
                )
            )


@bookings_cli.command(name="list")
async def list_bookings(
    tab: BookingsTab = typer.Option(BookingsTab.INHOUSE, help="Request type tab"),
    status: str = typer.Option(ALL_STATUSES, help="Status filter"),
    search: str = typer.Option("", help="Search term"),
    grouped: bool = typer.Option(
        False, "--grouped", help="Group in-house requests by trainer and date"
    ),
):
    async with AdminApp() as app:
        desk = app.bookings_desk()
        if not await desk.refresh():
            raise typer.Exit(1)
        if tab == BookingsTab.BOOKNOW:
            registrations = desk.filtered_registrations(status, search)
            for trainer_group in group_registrations_by_trainer_and_event(
                registrations
            ):
                rprint(f"[bold]{trainer_group.trainer_name}[/bold]")
                for event_group in trainer_group.events:
                    date = (
                        format_date(event_group.event_date)
                        if event_group.event_date
                        else "-"
                    )
                    rprint(f"  [cyan]{event_group.event_title}[/cyan] {date}")
                    print(
                        tabulate(
                            [
                                [
                                    r.id,
                                    r.client_name,
                                    r.number_of_participants,
                                    r.status,
                                ]
                                for r in event_group.registrations
                            ],
                            headers=["id", "client", "participants", "status"],
                            tablefmt="rounded_outline",
                        )
                    )
            return
        bookings = desk.filtered_bookings(tab, status, search)
        _print_bookings(bookings, grouped and tab == BookingsTab.INHOUSE)


def _print_conflicts(review: ConflictReview) -> None:
    rprint(
        f"[yellow]Booking '{review.booking.id}' conflicts with "
        f"{len(review.conflicts)} other booking(s)[/yellow]"
    )
    print(
        tabulate(
            [_booking_row(b) for b in review.conflicts],
            headers=["id", "course", "client", "status", "type"],
            tablefmt="rounded_outline",
        )
    )


async def _resolve_conflicts(review: ConflictReview) -> Optional[ConfirmationForm]:
    _print_conflicts(review)
    if typer.confirm("Notify the conflicting clients by email?", default=False):
        title = typer.prompt("Email title")
        message = typer.prompt("Email message")
        while True:
            result = await review.notify_clients(title, message)
            if result == NotificationError.MISSING_CONTENT:
                title = typer.prompt("Email title", default=title)
                message = typer.prompt("Email message", default=message)
            elif result == NotificationError.REQUEST_FAILED:
                if not typer.confirm("Send the email again?", default=True):
                    break
            else:
                break
    if not typer.confirm("Confirm anyway?", default=False):
        rprint("Confirmation aborted")
        return None
    form = await review.confirm_anyway()
    if form is None:
        raise typer.Exit(1)
    return form


@bookings_cli.command(name="confirm")
async def confirm_booking(
    booking_id: str,
    total_slots: Optional[int] = typer.Option(None, "--slots", help="Total slots"),
    registered_participants: Optional[int] = typer.Option(
        None, "--participants", help="Registered participants"
    ),
    availability_id: Optional[str] = typer.Option(
        None, "--availability", help="Id of the trainer availability slot to use"
    ),
):
    """
    Confirm a booking request, reviewing conflicts with other bookings first
    """
    async with AdminApp() as app:
        desk = app.bookings_desk()
        if not await desk.refresh():
            raise typer.Exit(1)
        opened = await desk.begin_confirmation(booking_id)
        if opened is None:
            raise typer.Exit(1)
        if isinstance(opened, ConflictReview):
            form = await _resolve_conflicts(opened)
            if form is None:
                return
        else:
            form = opened
        if availability_id is None:
            if len(form.options) == 0:
                rprint("[red]Trainer has no selectable availability[/red]")
                raise typer.Exit(1)
            print(
                tabulate(
                    [[s.id, format_date(s.date), s.status] for s in form.options],  # type: ignore[arg-type]
                    headers=["id", "date", "status"],
                    tablefmt="rounded_outline",
                )
            )
            availability_id = typer.prompt("Availability id")
        form.selected_availability_id = availability_id
        form.total_slots = (
            total_slots
            if total_slots is not None
            else typer.prompt("Total slots", type=int)
        )
        form.registered_participants = (
            registered_participants
            if registered_participants is not None
            else typer.prompt("Registered participants", type=int)
        )
        result = await form.submit()
        # entered values stay on the form, so a failed request can be resent as is
        while result == ConfirmationError.REQUEST_FAILED and typer.confirm(
            "Retry confirmation?", default=True
        ):
            result = await form.submit()
        if isinstance(result, ConfirmationError):
            raise typer.Exit(1)
        if result.event is not None:
            rprint(f"Event '{result.event.id}' created")


@bookings_cli.command(name="cancel")
async def cancel_booking(booking_id: str):
    async with AdminApp() as app:
        if not await app.bookings_desk().cancel_booking(booking_id):
            raise typer.Exit(1)


@registrations_cli.command(name="approve")
async def approve_registration(
    registration_id: str,
    participants: int = typer.Option(..., help="Number of participants to approve"),
):
    async with AdminApp() as app:
        desk = app.bookings_desk()
        if not await desk.approve_registration(registration_id, participants):
            raise typer.Exit(1)


@registrations_cli.command(name="cancel")
async def cancel_registration(registration_id: str):
    async with AdminApp() as app:
        if not await app.bookings_desk().cancel_registration(registration_id):
            raise typer.Exit(1)
