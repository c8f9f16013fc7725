import asyncio
from typing import Optional, Union

from trainmice_admin.api.client import ApiClient
from trainmice_admin.availability.calendar import lookahead_window
from trainmice_admin.bookings.confirmation import ConfirmationForm
from trainmice_admin.bookings.conflicts import ConflictReview
from trainmice_admin.bookings.grouping import (
    ALL_STATUSES,
    BookingsTab,
    filter_bookings,
    filter_registrations,
)
from trainmice_admin.consts import DEFAULT_AVAILABILITY_LOOKAHEAD_MONTHS
from trainmice_admin.errors import ApiRequestError
from trainmice_admin.notify.toast import ToastBus
from trainmice_admin.schemas.availability import AvailabilitySlot
from trainmice_admin.schemas.booking import BookingConfirmation, BookingRequest
from trainmice_admin.schemas.event import EventRegistration
from trainmice_admin.utils.logging_utils import log


class BookingsDesk:
    """Booking requests and event registrations as seen by an admin."""

    def __init__(
        self,
        client: ApiClient,
        toasts: ToastBus,
        availability_lookahead_months: int = DEFAULT_AVAILABILITY_LOOKAHEAD_MONTHS,
    ):
        self.client = client
        self.toasts = toasts
        self.availability_lookahead_months = availability_lookahead_months
        self.bookings: list[BookingRequest] = []
        self.registrations: list[EventRegistration] = []

    async def refresh(self) -> bool:
        bookings, registrations = await asyncio.gather(
            self.client.get_bookings(),
            self.client.get_event_registrations(),
            return_exceptions=True,
        )
        # each list is kept independently, a failed fetch leaves its previous data
        ok = True
        for result, description in (
            (bookings, "bookings"),
            (registrations, "event registrations"),
        ):
            if isinstance(result, BaseException):
                if not isinstance(result, ApiRequestError):
                    raise result
                log.error(f"Error fetching {description}")
                self.toasts.error(result.message or f"Error fetching {description}")
                ok = False
        if not isinstance(bookings, BaseException):
            self.bookings = bookings
        if not isinstance(registrations, BaseException):
            self.registrations = registrations
        return ok

    def find_booking(self, booking_id: str) -> Optional[BookingRequest]:
        return next((b for b in self.bookings if b.id == booking_id), None)

    def filtered_bookings(
        self,
        tab: BookingsTab = BookingsTab.INHOUSE,
        status_filter: str = ALL_STATUSES,
        search: str = "",
    ) -> list[BookingRequest]:
        return filter_bookings(self.bookings, tab, status_filter, search)

    def filtered_registrations(
        self, status_filter: str = ALL_STATUSES, search: str = ""
    ) -> list[EventRegistration]:
        return filter_registrations(self.registrations, status_filter, search)

    async def _fetch_selectable_availability(
        self, trainer_id: str
    ) -> list[AvailabilitySlot]:
        start, end = lookahead_window(self.availability_lookahead_months)
        return await self.client.get_trainer_availability(trainer_id, start, end)

    async def _on_confirmed(self, confirmation: BookingConfirmation) -> None:
        if confirmation.event is not None:
            log.info(f"Event '{confirmation.event.id}' created from booking")
        await self.refresh()

    async def open_confirmation_form(
        self, booking: BookingRequest
    ) -> Optional[ConfirmationForm]:
        slots: list[AvailabilitySlot] = []
        trainer_id = booking.resolved_trainer_id
        if trainer_id is not None:
            try:
                slots = await self._fetch_selectable_availability(trainer_id)
            except ApiRequestError as e:
                log.error(f"Error fetching availability for trainer '{trainer_id}'")
                self.toasts.error(e.message or "Error loading trainer availability")
                return None
        return ConfirmationForm(
            self.client, self.toasts, booking, slots, on_confirmed=self._on_confirmed
        )

    async def begin_confirmation(
        self, booking_id: str
    ) -> Union[ConfirmationForm, ConflictReview, None]:
        booking = self.find_booking(booking_id)
        if booking is None:
            self.toasts.error(f"Booking '{booking_id}' not found")
            return None
        try:
            conflicts = await self.client.get_conflicting_bookings(booking_id)
        except ApiRequestError as e:
            self.toasts.error(e.message or "Error checking conflicts")
            return None
        if len(conflicts) > 0:
            log.debug(f"Booking '{booking_id}' conflicts with {len(conflicts)} other(s)")
            return ConflictReview(
                self.client,
                self.toasts,
                booking,
                conflicts,
                open_form=self.open_confirmation_form,
            )
        return await self.open_confirmation_form(booking)

    async def cancel_booking(self, booking_id: str) -> bool:
        try:
            await self.client.cancel_booking(booking_id)
        except ApiRequestError as e:
            self.toasts.error(e.message or "Error cancelling booking")
            return False
        self.toasts.success("Booking cancelled successfully")
        await self.refresh()
        return True

    async def approve_registration(
        self, registration_id: str, number_of_participants: Optional[int]
    ) -> bool:
        if number_of_participants is None or number_of_participants < 1:
            self.toasts.error("Please enter a valid number of participants")
            return False
        try:
            await self.client.approve_event_registration(
                registration_id, number_of_participants
            )
        except ApiRequestError as e:
            self.toasts.error(e.message or "Error approving registration")
            return False
        self.toasts.success("Registration approved successfully")
        await self.refresh()
        return True

    async def cancel_registration(self, registration_id: str) -> bool:
        try:
            await self.client.cancel_event_registration(registration_id)
        except ApiRequestError as e:
            self.toasts.error(e.message or "Error cancelling registration")
            return False
        self.toasts.success("Registration cancelled successfully")
        await self.refresh()
        return True
