import pytest

from trainmice_admin.bookings.confirmation import ConfirmationForm
from trainmice_admin.bookings.conflicts import ConflictReview
from trainmice_admin.bookings.desk import BookingsDesk
from trainmice_admin.bookings.grouping import BookingsTab
from trainmice_admin.errors import ApiRequestError
from trainmice_admin.schemas.availability import AvailabilitySlot
from trainmice_admin.schemas.booking import (
    BookingConfirmation,
    BookingRequest,
    ClientEmailResult,
)
from trainmice_admin.schemas.event import EventRegistration
from trainmice_admin.schemas.responses import BookingUpdate, RegistrationUpdate

BOOKINGS = [
    BookingRequest(
        id="booking-1",
        trainer_id="t1",
        request_type="INHOUSE",
        status="APPROVED",
        requested_date="2025-03-10",
    ),
    BookingRequest(
        id="booking-2",
        trainer_id="t1",
        client_id="c2",
        request_type="INHOUSE",
        status="APPROVED",
        requested_date="2025-03-10",
    ),
    BookingRequest(id="booking-3", request_type="PUBLIC", status="PENDING"),
]

REGISTRATIONS = [
    EventRegistration(id="reg-1", status="REGISTERED", client_name="Acme"),
]


class FakeClient:
    def __init__(self, conflicts=None, fail=()):
        self.calls: list[tuple[str, dict]] = []
        self.conflicts = conflicts or {}
        self.fail = set(fail)

    def _record(self, name, **params):
        self.calls.append((name, params))
        if name in self.fail:
            raise ApiRequestError(f"{name} failed", 500)

    def names(self):
        return [name for name, _ in self.calls]

    async def get_bookings(self):
        self._record("get_bookings")
        return list(BOOKINGS)

    async def get_event_registrations(self):
        self._record("get_event_registrations")
        return list(REGISTRATIONS)

    async def get_conflicting_bookings(self, booking_id):
        self._record("get_conflicting_bookings", booking_id=booking_id)
        return self.conflicts.get(booking_id, [])

    async def get_trainer_availability(self, trainer_id, start_date, end_date):
        self._record("get_trainer_availability", trainer_id=trainer_id)
        return [AvailabilitySlot(id="avail-1", date="2025-03-10", status="AVAILABLE")]

    async def confirm_booking(self, booking_id, payload):
        self._record("confirm_booking", booking_id=booking_id)
        return BookingConfirmation(message="Booking confirmed")

    async def send_email_to_clients(self, client_ids, title, message):
        self._record("send_email_to_clients", client_ids=client_ids)
        return ClientEmailResult(message="Emails sent", sent_count=len(client_ids))

    async def cancel_booking(self, booking_id):
        self._record("cancel_booking", booking_id=booking_id)
        return BookingUpdate(message="Booking cancelled")

    async def approve_event_registration(self, registration_id, number_of_participants):
        self._record(
            "approve_event_registration",
            registration_id=registration_id,
            number_of_participants=number_of_participants,
        )
        return RegistrationUpdate(message="Approved")

    async def cancel_event_registration(self, registration_id):
        self._record("cancel_event_registration", registration_id=registration_id)
        return RegistrationUpdate(message="Cancelled")


async def _desk(client, toasts):
    desk = BookingsDesk(client, toasts)
    assert await desk.refresh()
    client.calls.clear()
    return desk


@pytest.mark.asyncio
async def test_refresh_loads_bookings_and_registrations(toasts):
    desk = BookingsDesk(FakeClient(), toasts)
    assert await desk.refresh()
    assert [b.id for b in desk.bookings] == ["booking-1", "booking-2", "booking-3"]
    assert [r.id for r in desk.registrations] == ["reg-1"]
    public = desk.filtered_bookings(BookingsTab.PUBLIC)
    assert [b.id for b in public] == ["booking-3"]


@pytest.mark.asyncio
async def test_refresh_failure_keeps_previous_data(toasts, recorder):
    client = FakeClient()
    desk = await _desk(client, toasts)
    client.fail.add("get_bookings")
    assert not await desk.refresh()
    assert len(desk.bookings) == 3
    assert recorder.errors == ["get_bookings failed"]


@pytest.mark.asyncio
async def test_without_conflicts_opens_form_directly(toasts):
    client = FakeClient()
    desk = await _desk(client, toasts)
    form = await desk.begin_confirmation("booking-1")
    assert isinstance(form, ConfirmationForm)
    assert [s.id for s in form.options] == ["avail-1"]
    assert client.names() == ["get_conflicting_bookings", "get_trainer_availability"]


@pytest.mark.asyncio
async def test_conflicts_never_confirm_without_override(toasts):
    client = FakeClient(conflicts={"booking-1": [BOOKINGS[1]]})
    desk = await _desk(client, toasts)
    review = await desk.begin_confirmation("booking-1")
    assert isinstance(review, ConflictReview)
    assert review.client_ids == ["c2"]
    await review.notify_clients("Date taken", "Please choose another date")
    assert "confirm_booking" not in client.names()

    form = await review.confirm_anyway()
    assert isinstance(form, ConfirmationForm)
    assert "confirm_booking" not in client.names()

    form.total_slots = 10
    form.registered_participants = 3
    form.selected_availability_id = "avail-1"
    assert isinstance(await form.submit(), BookingConfirmation)
    assert client.names().count("confirm_booking") == 1
    # successful confirmation refetches the lists
    assert client.names()[-2:] == ["get_bookings", "get_event_registrations"]


@pytest.mark.asyncio
async def test_conflict_check_failure_aborts(toasts, recorder):
    client = FakeClient(fail=["get_conflicting_bookings"])
    desk = await _desk(client, toasts)
    assert await desk.begin_confirmation("booking-1") is None
    assert recorder.errors == ["get_conflicting_bookings failed"]


@pytest.mark.asyncio
async def test_availability_failure_aborts_form(toasts, recorder):
    client = FakeClient(fail=["get_trainer_availability"])
    desk = await _desk(client, toasts)
    assert await desk.begin_confirmation("booking-1") is None
    assert recorder.errors == ["get_trainer_availability failed"]


@pytest.mark.asyncio
async def test_unknown_booking(toasts, recorder):
    client = FakeClient()
    desk = await _desk(client, toasts)
    assert await desk.begin_confirmation("missing") is None
    assert client.calls == []
    assert recorder.errors == ["Booking 'missing' not found"]


@pytest.mark.asyncio
async def test_booking_without_trainer_gets_empty_form(toasts):
    client = FakeClient()
    desk = await _desk(client, toasts)
    form = await desk.begin_confirmation("booking-3")
    assert isinstance(form, ConfirmationForm)
    assert form.options == []
    assert "get_trainer_availability" not in client.names()


@pytest.mark.asyncio
async def test_cancel_booking_refetches(toasts, recorder):
    client = FakeClient()
    desk = await _desk(client, toasts)
    assert await desk.cancel_booking("booking-2")
    assert client.names() == [
        "cancel_booking",
        "get_bookings",
        "get_event_registrations",
    ]
    assert recorder.successes == ["Booking cancelled successfully"]


@pytest.mark.asyncio
async def test_approve_registration_requires_participants(toasts, recorder):
    client = FakeClient()
    desk = await _desk(client, toasts)
    assert not await desk.approve_registration("reg-1", 0)
    assert not await desk.approve_registration("reg-1", None)
    assert client.calls == []
    assert await desk.approve_registration("reg-1", 2)
    assert client.calls[0] == (
        "approve_event_registration",
        {"registration_id": "reg-1", "number_of_participants": 2},
    )


@pytest.mark.asyncio
async def test_cancel_registration_failure(toasts, recorder):
    client = FakeClient(fail=["cancel_event_registration"])
    desk = await _desk(client, toasts)
    assert not await desk.cancel_registration("reg-1")
    assert recorder.errors == ["cancel_event_registration failed"]


@pytest.mark.asyncio
async def test_refresh_applies_each_list_independently(toasts, recorder):
    client = FakeClient(fail=["get_event_registrations"])
    desk = BookingsDesk(client, toasts)
    desk.registrations = [EventRegistration(id="reg-old")]
    assert not await desk.refresh()
    assert [b.id for b in desk.bookings] == ["booking-1", "booking-2", "booking-3"]
    assert [r.id for r in desk.registrations] == ["reg-old"]
    assert recorder.errors == ["get_event_registrations failed"]
