import pytest

from trainmice_admin.api.client import dump_payload
from trainmice_admin.bookings.confirmation import ConfirmationForm, selectable_slots
from trainmice_admin.errors import ApiRequestError, ConfirmationError
from trainmice_admin.schemas.availability import AvailabilitySlot
from trainmice_admin.schemas.booking import BookingConfirmation, BookingRequest

SLOTS = [
    AvailabilitySlot(id="avail-2", date="2025-03-12", status="TENTATIVE"),
    AvailabilitySlot(id="avail-1", date="2025-03-10T00:00:00.000Z", status="AVAILABLE"),
    AvailabilitySlot(id="avail-3", date="2025-03-11", status="BOOKED"),
    AvailabilitySlot(id="avail-4", date="2025-03-13", status="NOT_AVAILABLE"),
]


class FakeClient:
    def __init__(self, fail=False):
        self.calls: list[tuple[str, dict]] = []
        self.fail = fail

    async def confirm_booking(self, booking_id, payload):
        self.calls.append(("confirm_booking", {"id": booking_id, "payload": payload}))
        if self.fail:
            raise ApiRequestError("availabilityId: Slot already booked", 400)
        return BookingConfirmation(
            message="Booking confirmed and event created",
            event={"id": "event-1", "eventDate": "2025-03-10"},
        )


def _form(client, toasts, request_type="INHOUSE", **kwargs):
    booking = BookingRequest(id="booking-1", trainer_id="t1", request_type=request_type)
    return ConfirmationForm(client, toasts, booking, SLOTS, **kwargs)


def _fill(form, total_slots=20, registered_participants=5, availability_id="avail-1"):
    form.total_slots = total_slots
    form.registered_participants = registered_participants
    form.selected_availability_id = availability_id


def test_selectable_slots_keeps_available_and_tentative_in_date_order():
    assert [s.id for s in selectable_slots(SLOTS)] == ["avail-1", "avail-2"]


@pytest.mark.parametrize(
    "fields, error",
    [
        ({"total_slots": None}, ConfirmationError.INVALID_TOTAL_SLOTS),
        ({"total_slots": 0}, ConfirmationError.INVALID_TOTAL_SLOTS),
        (
            {"registered_participants": None},
            ConfirmationError.INVALID_REGISTERED_PARTICIPANTS,
        ),
        (
            {"registered_participants": 0},
            ConfirmationError.INVALID_REGISTERED_PARTICIPANTS,
        ),
        (
            {"total_slots": 4, "registered_participants": 5},
            ConfirmationError.PARTICIPANTS_EXCEED_SLOTS,
        ),
        ({"availability_id": None}, ConfirmationError.MISSING_AVAILABILITY),
        ({"availability_id": "avail-3"}, ConfirmationError.UNSELECTABLE_AVAILABILITY),
    ],
)
@pytest.mark.asyncio
async def test_submit_is_gated(toasts, recorder, fields, error):
    client = FakeClient()
    form = _form(client, toasts)
    _fill(form, **fields)
    assert not form.can_submit
    assert await form.submit() == error
    assert client.calls == []
    assert len(recorder.errors) == 1


def test_validation_errors_are_independent(toasts):
    form = _form(FakeClient(), toasts)
    assert form.validation_errors() == [
        ConfirmationError.INVALID_TOTAL_SLOTS,
        ConfirmationError.INVALID_REGISTERED_PARTICIPANTS,
        ConfirmationError.MISSING_AVAILABILITY,
    ]


def test_participants_may_equal_slots(toasts):
    form = _form(FakeClient(), toasts)
    _fill(form, total_slots=5, registered_participants=5)
    assert form.can_submit


@pytest.mark.asyncio
async def test_inhouse_payload_has_no_event_date(toasts, recorder):
    client = FakeClient()
    confirmed = []

    async def on_confirmed(confirmation):
        confirmed.append(confirmation)

    form = _form(client, toasts, on_confirmed=on_confirmed)
    _fill(form)
    result = await form.submit()
    assert isinstance(result, BookingConfirmation)
    name, params = client.calls[0]
    assert name == "confirm_booking"
    assert params["id"] == "booking-1"
    assert dump_payload(params["payload"]) == {
        "totalSlots": 20,
        "availabilityId": "avail-1",
        "registeredParticipants": 5,
    }
    assert recorder.successes == ["Booking confirmed and event created"]
    assert confirmed == [result]


@pytest.mark.asyncio
async def test_public_payload_carries_event_date(toasts):
    client = FakeClient()
    form = _form(client, toasts, request_type="PUBLIC")
    _fill(form)
    await form.submit()
    _, params = client.calls[0]
    assert dump_payload(params["payload"]) == {
        "totalSlots": 20,
        "availabilityId": "avail-1",
        "registeredParticipants": 5,
        "eventDate": "2025-03-10",
    }


@pytest.mark.asyncio
async def test_tentative_slot_can_be_confirmed(toasts):
    client = FakeClient()
    form = _form(client, toasts)
    _fill(form, availability_id="avail-2")
    assert isinstance(await form.submit(), BookingConfirmation)


@pytest.mark.asyncio
async def test_request_failure_keeps_form_values(toasts, recorder):
    client = FakeClient(fail=True)
    confirmed = []

    async def on_confirmed(confirmation):
        confirmed.append(confirmation)

    form = _form(client, toasts, on_confirmed=on_confirmed)
    _fill(form)
    assert await form.submit() == ConfirmationError.REQUEST_FAILED
    assert recorder.errors == ["availabilityId: Slot already booked"]
    assert (form.total_slots, form.registered_participants) == (20, 5)
    assert form.selected_availability_id == "avail-1"
    assert confirmed == []
