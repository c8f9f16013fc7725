import datetime
from typing import Any, Awaitable, Callable, Optional, Union

from trainmice_admin.api.client import ApiClient
from trainmice_admin.consts import (
    ADMIN_SELECTABLE_AVAILABILITY_STATUSES,
    DEFAULT_CONFIRMATION_MESSAGE,
)
from trainmice_admin.errors import ApiRequestError, ConfirmationError
from trainmice_admin.notify.toast import ToastBus
from trainmice_admin.schemas.availability import AvailabilitySlot
from trainmice_admin.schemas.booking import (
    BookingConfirmation,
    BookingRequest,
    ConfirmBookingPayload,
    RequestType,
)
from trainmice_admin.utils.logging_utils import log

CONFIRMATION_ERROR_MESSAGES = {
    ConfirmationError.INVALID_TOTAL_SLOTS: "Please enter a valid total number of slots",
    ConfirmationError.INVALID_REGISTERED_PARTICIPANTS: "Please enter a valid number of registered participants",
    ConfirmationError.PARTICIPANTS_EXCEED_SLOTS: "Registered participants cannot exceed total slots",
    ConfirmationError.MISSING_AVAILABILITY: "Please select a date from trainer availability calendar",
    ConfirmationError.UNSELECTABLE_AVAILABILITY: "Selected date is not available for this trainer",
}


def selectable_slots(slots: list[AvailabilitySlot]) -> list[AvailabilitySlot]:
    return sorted(
        (
            s
            for s in slots
            if s.status in ADMIN_SELECTABLE_AVAILABILITY_STATUSES and s.date is not None
        ),
        key=lambda s: s.date,  # type: ignore[arg-type,return-value]
    )


class ConfirmationForm:
    """
    Admin-entered capacity and trainer slot for turning a booking into an event

    Field values survive a failed submit so the admin can adjust and retry.
    """

    def __init__(
        self,
        client: ApiClient,
        toasts: ToastBus,
        booking: BookingRequest,
        slots: list[AvailabilitySlot],
        on_confirmed: Optional[Callable[[BookingConfirmation], Awaitable[Any]]] = None,
    ):
        self.client = client
        self.toasts = toasts
        self.booking = booking
        self.options = selectable_slots(slots)
        self.on_confirmed = on_confirmed
        self.selected_availability_id: Optional[str] = None
        self.total_slots: Optional[int] = None
        self.registered_participants: Optional[int] = None

    @property
    def selected_slot(self) -> Optional[AvailabilitySlot]:
        return next(
            (s for s in self.options if s.id == self.selected_availability_id), None
        )

    @property
    def event_date(self) -> Optional[datetime.date]:
        if self.booking.request_type != RequestType.PUBLIC.value:
            return None
        slot = self.selected_slot
        return slot.date if slot is not None else None

    def validation_errors(self) -> list[ConfirmationError]:
        errors = []
        if self.total_slots is None or self.total_slots < 1:
            errors.append(ConfirmationError.INVALID_TOTAL_SLOTS)
        if self.registered_participants is None or self.registered_participants < 1:
            errors.append(ConfirmationError.INVALID_REGISTERED_PARTICIPANTS)
        if (
            self.total_slots is not None
            and self.registered_participants is not None
            and self.registered_participants > self.total_slots
        ):
            errors.append(ConfirmationError.PARTICIPANTS_EXCEED_SLOTS)
        if not self.selected_availability_id:
            errors.append(ConfirmationError.MISSING_AVAILABILITY)
        elif self.selected_slot is None:
            errors.append(ConfirmationError.UNSELECTABLE_AVAILABILITY)
        return errors

    @property
    def can_submit(self) -> bool:
        return len(self.validation_errors()) == 0

    def payload(self) -> ConfirmBookingPayload:
        return ConfirmBookingPayload(
            total_slots=self.total_slots,
            availability_id=self.selected_availability_id,
            registered_participants=self.registered_participants,
            event_date=self.event_date,
        )

    async def submit(self) -> Union[BookingConfirmation, ConfirmationError]:
        errors = self.validation_errors()
        if len(errors) > 0:
            self.toasts.error(CONFIRMATION_ERROR_MESSAGES[errors[0]])
            return errors[0]
        log.debug(
            f"Confirming booking '{self.booking.id}' "
            f"with availability '{self.selected_availability_id}'"
        )
        try:
            confirmation = await self.client.confirm_booking(
                self.booking.id, self.payload()
            )
        except ApiRequestError as e:
            self.toasts.error(e.message or "Error confirming booking")
            return ConfirmationError.REQUEST_FAILED
        self.toasts.success(confirmation.message or DEFAULT_CONFIRMATION_MESSAGE)
        if self.on_confirmed is not None:
            await self.on_confirmed(confirmation)
        return confirmation
