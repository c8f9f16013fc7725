import pytest
from typer.testing import CliRunner

from trainmice_admin.bookings.desk import BookingsDesk
from trainmice_admin.cli import bookings as bookings_commands
from trainmice_admin.cli.cli import cli
from trainmice_admin.errors import ApiRequestError
from trainmice_admin.notify.toast import ToastBus
from trainmice_admin.schemas.availability import AvailabilitySlot
from trainmice_admin.schemas.booking import (
    BookingConfirmation,
    BookingRequest,
    ClientEmailResult,
)

runner = CliRunner()

BOOKING = BookingRequest(
    id="booking-1", trainer_id="t1", request_type="INHOUSE", status="APPROVED"
)
CONFLICT = BookingRequest(
    id="booking-2", trainer_id="t1", client_id="c2", status="APPROVED"
)

CONFIRM_ARGS = [
    "bookings",
    "confirm",
    "booking-1",
    "--slots",
    "20",
    "--participants",
    "5",
    "--availability",
    "avail-1",
]


class FakeClient:
    def __init__(self, conflicts=(), confirm_failures=0, email_failures=0):
        self.calls: list[tuple[str, dict]] = []
        self.conflicts = list(conflicts)
        self.confirm_failures = confirm_failures
        self.email_failures = email_failures

    def named(self, name):
        return [params for n, params in self.calls if n == name]

    async def get_bookings(self):
        return [BOOKING, CONFLICT]

    async def get_event_registrations(self):
        return []

    async def get_conflicting_bookings(self, booking_id):
        return self.conflicts

    async def get_trainer_availability(self, trainer_id, start_date, end_date):
        return [AvailabilitySlot(id="avail-1", date="2025-03-10", status="AVAILABLE")]

    async def send_email_to_clients(self, client_ids, title, message):
        self.calls.append(
            ("send_email_to_clients", {"client_ids": client_ids, "title": title})
        )
        if self.email_failures > 0:
            self.email_failures -= 1
            raise ApiRequestError("Mail server unavailable", 503)
        return ClientEmailResult(message="Emails sent", sent_count=len(client_ids))

    async def confirm_booking(self, booking_id, payload):
        self.calls.append(("confirm_booking", {"payload": payload}))
        if self.confirm_failures > 0:
            self.confirm_failures -= 1
            raise ApiRequestError("Service unavailable", 503)
        return BookingConfirmation(message="Booking confirmed")


class FakeApp:
    def __init__(self, client):
        self.client = client
        self.toasts = ToastBus()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        pass

    def bookings_desk(self):
        return BookingsDesk(self.client, self.toasts)


@pytest.fixture
def use_client(monkeypatch):
    def install(client):
        monkeypatch.setattr(bookings_commands, "AdminApp", lambda: FakeApp(client))
        return client

    return install


def test_failed_confirmation_is_resent_with_same_values(use_client):
    client = use_client(FakeClient(confirm_failures=1))
    result = runner.invoke(cli, CONFIRM_ARGS, input="y\n")
    assert result.exit_code == 0
    payloads = [c["payload"] for c in client.named("confirm_booking")]
    assert len(payloads) == 2
    assert payloads[0] == payloads[1]
    assert (payloads[1].total_slots, payloads[1].registered_participants) == (20, 5)


def test_declining_retry_exits_with_failure(use_client):
    client = use_client(FakeClient(confirm_failures=1))
    result = runner.invoke(cli, CONFIRM_ARGS, input="n\n")
    assert result.exit_code == 1
    assert len(client.named("confirm_booking")) == 1


def test_failed_conflict_email_is_resent_before_confirming(use_client):
    client = use_client(FakeClient(conflicts=[CONFLICT], email_failures=1))
    # notify, title, message, send again, confirm anyway
    result = runner.invoke(
        cli, CONFIRM_ARGS, input="y\nDate taken\nPlease rebook\ny\ny\n"
    )
    assert result.exit_code == 0
    emails = client.named("send_email_to_clients")
    assert emails == [
        {"client_ids": ["c2"], "title": "Date taken"},
        {"client_ids": ["c2"], "title": "Date taken"},
    ]
    assert len(client.named("confirm_booking")) == 1


def test_conflicts_without_override_never_confirm(use_client):
    client = use_client(FakeClient(conflicts=[CONFLICT]))
    # skip the email, refuse to confirm anyway
    result = runner.invoke(cli, CONFIRM_ARGS, input="n\nn\n")
    assert result.exit_code == 0
    assert client.named("confirm_booking") == []
