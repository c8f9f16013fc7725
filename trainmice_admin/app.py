from typing import Optional

from trainmice_admin.api.client import ApiClient
from trainmice_admin.api.token import TokenStore
from trainmice_admin.availability.calendar_view import TrainerCalendar
from trainmice_admin.bookings.desk import BookingsDesk
from trainmice_admin.events.board import EventsBoard
from trainmice_admin.events.creation import EventCreationForm
from trainmice_admin.notify.apprise import apprise_sink
from trainmice_admin.notify.toast import ToastBus, log_sink
from trainmice_admin.settings import Settings, get_settings


class AdminApp:
    """
    Root object owning the backend client and the toast bus

    Workflows are created from here so that they all share one session
    and report through the same sinks.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[ApiClient] = None,
        toasts: Optional[ToastBus] = None,
    ):
        self.settings = settings or get_settings()
        if toasts is None:
            toasts = ToastBus([log_sink])
            if self.settings.APPRISE_CONFIG_FILE is not None:
                toasts.subscribe(apprise_sink(self.settings.APPRISE_CONFIG_FILE))
        self.toasts = toasts
        if client is None:
            client = ApiClient(
                self.settings.API_URL,
                TokenStore(self.settings.API_TOKEN, self.settings.TOKEN_FILE),
            )
        self.client = client
        self.client.on_logout(
            lambda: self.toasts.warning("Session expired, please log in again")
        )

    def bookings_desk(self) -> BookingsDesk:
        return BookingsDesk(
            self.client,
            self.toasts,
            availability_lookahead_months=self.settings.AVAILABILITY_LOOKAHEAD_MONTHS,
        )

    def trainer_calendar(
        self, trainer_id: str, year: Optional[int] = None, month: Optional[int] = None
    ) -> TrainerCalendar:
        return TrainerCalendar(self.client, self.toasts, trainer_id, year, month)

    def events_board(self) -> EventsBoard:
        return EventsBoard(self.client, self.toasts)

    async def event_creation_form(self, course_id: str) -> EventCreationForm:
        course = await self.client.get_admin_course(course_id)
        form = EventCreationForm(self.client, self.toasts, course)
        await form.load_availability(self.settings.AVAILABILITY_LOOKAHEAD_MONTHS)
        return form

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
