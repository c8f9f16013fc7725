from trainmice_admin.cli.async_cli import AsyncTyper
from trainmice_admin.cli.bookings import bookings_cli, registrations_cli
from trainmice_admin.cli.calendar import availability_cli, calendar_cli
from trainmice_admin.cli.events import events_cli

cli = AsyncTyper()
cli.add_typer(bookings_cli, name="bookings", help="Review and confirm booking requests")
cli.add_typer(
    registrations_cli, name="registrations", help="Approve or cancel event registrations"
)
cli.add_typer(calendar_cli, name="calendar", help="Inspect trainer calendars")
cli.add_typer(availability_cli, name="availability", help="Manage trainer availability")
cli.add_typer(events_cli, name="events", help="Manage events")
