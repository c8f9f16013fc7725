import datetime
from typing import Optional, Union

from trainmice_admin.api.client import ApiClient
from trainmice_admin.availability.calendar import (
    expand_date_range,
    format_date,
    month_bounds,
    shift_month,
)
from trainmice_admin.availability.status import build_calendar_days, count_by_status
from trainmice_admin.errors import (
    ApiRequestError,
    AvailabilityError,
    OptionalFeatureError,
)
from trainmice_admin.notify.toast import ToastBus
from trainmice_admin.schemas.availability import (
    AvailabilitySlot,
    AvailabilityStatus,
    CalendarDay,
    CalendarEntry,
)
from trainmice_admin.schemas.booking import BookingRequest
from trainmice_admin.schemas.event import Event, EventStatus
from trainmice_admin.utils.logging_utils import log


def entries_from_bookings(
    bookings: list[BookingRequest],
    trainer_id: str,
    start: datetime.date,
    end: datetime.date,
) -> list[CalendarEntry]:
    return [
        CalendarEntry(
            id=b.id,
            start_date=b.requested_date,
            end_date=b.end_date,
            status=b.status.lower(),
            title=b.course.title if b.course is not None else None,
        )
        for b in bookings
        if b.resolved_trainer_id == trainer_id
        and b.requested_date is not None
        and start <= b.requested_date <= end
    ]


def entries_from_events(
    events: list[Event], start: datetime.date, end: datetime.date
) -> list[CalendarEntry]:
    entries = []
    for event in events:
        if event.event_date is None:
            continue
        starts_in_month = start <= event.event_date <= end
        ends_in_month = event.end_date is not None and start <= event.end_date <= end
        if not (starts_in_month or ends_in_month):
            continue
        entries.append(
            CalendarEntry(
                id=event.id,
                start_date=event.event_date,
                end_date=event.end_date,
                status="confirmed",
                title=event.display_title,
            )
        )
    return entries


class TrainerCalendar:
    """Month view of one trainer's bookings, events and availability."""

    def __init__(
        self,
        client: ApiClient,
        toasts: ToastBus,
        trainer_id: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ):
        today = datetime.date.today()
        self.client = client
        self.toasts = toasts
        self.trainer_id = trainer_id
        self.year = year or today.year
        self.month = month or today.month
        self.entries: list[CalendarEntry] = []
        self.availability: list[AvailabilitySlot] = []
        self.blocked_weekdays: list[int] = []
        self.error: Optional[str] = None

    @property
    def bounds(self) -> tuple[datetime.date, datetime.date]:
        return month_bounds(self.year, self.month)

    @property
    def days(self) -> list[CalendarDay]:
        return build_calendar_days(
            self.year,
            self.month,
            self.entries,
            self.availability,
            self.blocked_weekdays,
        )

    @property
    def counts(self) -> dict[str, int]:
        return count_by_status(self.days)

    async def refresh(self) -> bool:
        start, end = self.bounds
        self.error = None
        try:
            bookings = await self.client.get_booking_requests()
            events = await self.client.get_events(
                trainer_id=self.trainer_id, status=EventStatus.ACTIVE.value
            )
            availability = await self.client.get_trainer_availability(
                self.trainer_id, start, end
            )
        except ApiRequestError as e:
            log.error(f"Error fetching calendar data for trainer '{self.trainer_id}'")
            self.error = e.message or "Failed to load calendar data"
            self.toasts.error(self.error)
            return False
        blocked = await self.client.get_trainer_blocked_days(self.trainer_id)
        self.entries = entries_from_bookings(
            bookings, self.trainer_id, start, end
        ) + entries_from_events(events, start, end)
        self.availability = availability
        self.blocked_weekdays = (
            [] if isinstance(blocked, OptionalFeatureError) else blocked
        )
        return True

    async def go_to(self, year: int, month: int) -> bool:
        self.year, self.month = year, month
        return await self.refresh()

    async def previous_month(self) -> bool:
        return await self.go_to(*shift_month(self.year, self.month, -1))

    async def next_month(self) -> bool:
        return await self.go_to(*shift_month(self.year, self.month, 1))

    async def go_to_today(self) -> bool:
        today = datetime.date.today()
        return await self.go_to(today.year, today.month)

    async def create_availability(
        self,
        start: Optional[datetime.date],
        end: Optional[datetime.date],
        status: AvailabilityStatus = AvailabilityStatus.AVAILABLE,
    ) -> Union[list[AvailabilitySlot], AvailabilityError]:
        if start is None or end is None:
            self.toasts.error("Please select both start and end dates")
            return AvailabilityError.MISSING_DATES
        if end < start:
            self.toasts.error("End date must be after start date")
            return AvailabilityError.END_BEFORE_START
        dates = expand_date_range(start, end)
        log.debug(
            f"Setting {status.value} for trainer '{self.trainer_id}' "
            f"from {format_date(start)} to {format_date(end)}"
        )
        try:
            created = await self.client.create_trainer_availability(
                self.trainer_id, dates, status
            )
        except ApiRequestError as e:
            self.toasts.error(e.message or "Error creating availability")
            return AvailabilityError.REQUEST_FAILED
        self.toasts.success(
            f"Availability created successfully for {len(dates)} date(s)"
        )
        await self.refresh()
        return created
