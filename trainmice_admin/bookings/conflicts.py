from typing import Awaitable, Callable, Optional, Union

from trainmice_admin.api.client import ApiClient
from trainmice_admin.bookings.confirmation import ConfirmationForm
from trainmice_admin.errors import ApiRequestError, NotificationError
from trainmice_admin.notify.toast import ToastBus
from trainmice_admin.schemas.booking import BookingRequest, ClientEmailResult

NOTIFICATION_ERROR_MESSAGES = {
    NotificationError.MISSING_CONTENT: "Please provide both title and message",
    NotificationError.NO_CONFLICTS: "No clients to send email to",
    NotificationError.NO_CLIENT_IDS: "No valid client IDs found",
}


def conflicting_client_ids(conflicts: list[BookingRequest]) -> list[str]:
    return [
        client_id
        for client_id in (b.resolved_client_id for b in conflicts)
        if client_id is not None
    ]


class ConflictReview:
    """
    Approved but unconfirmed bookings that collide with the one being confirmed

    Nothing is confirmed from here until the admin explicitly overrides with
    `confirm_anyway`.
    """

    def __init__(
        self,
        client: ApiClient,
        toasts: ToastBus,
        booking: BookingRequest,
        conflicts: list[BookingRequest],
        open_form: Callable[[BookingRequest], Awaitable[Optional[ConfirmationForm]]],
    ):
        self.client = client
        self.toasts = toasts
        self.booking = booking
        self.conflicts = conflicts
        self._open_form = open_form

    @property
    def client_ids(self) -> list[str]:
        return conflicting_client_ids(self.conflicts)

    async def notify_clients(
        self, title: str, message: str
    ) -> Union[ClientEmailResult, NotificationError]:
        error = None
        if not title.strip() or not message.strip():
            error = NotificationError.MISSING_CONTENT
        elif len(self.conflicts) == 0:
            error = NotificationError.NO_CONFLICTS
        elif len(self.client_ids) == 0:
            error = NotificationError.NO_CLIENT_IDS
        if error is not None:
            self.toasts.error(NOTIFICATION_ERROR_MESSAGES[error])
            return error
        client_ids = self.client_ids
        try:
            result = await self.client.send_email_to_clients(client_ids, title, message)
        except ApiRequestError as e:
            self.toasts.error(e.message or "Error sending email")
            return NotificationError.REQUEST_FAILED
        self.toasts.success(f"Email sent to {len(client_ids)} client(s)")
        return result

    async def confirm_anyway(self) -> Optional[ConfirmationForm]:
        return await self._open_form(self.booking)
