import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from trainmice_admin.availability.calendar import format_date
from trainmice_admin.consts import (
    NO_DATE_GROUP_KEY,
    UNKNOWN_EVENT_TITLE,
    UNKNOWN_GROUP_KEY,
    UNKNOWN_TRAINER_NAME,
)
from trainmice_admin.schemas.booking import BookingRequest, RequestType
from trainmice_admin.schemas.event import EventRegistration

ALL_STATUSES = "all"


class BookingsTab(str, Enum):
    INHOUSE = "inhouse"
    PUBLIC = "public"
    BOOKNOW = "booknow"


TAB_REQUEST_TYPES = {
    BookingsTab.INHOUSE: RequestType.INHOUSE.value,
    BookingsTab.PUBLIC: RequestType.PUBLIC.value,
}


def _contains(term: str, *values: Optional[str]) -> bool:
    return any(v is not None and term in v.lower() for v in values)


def _status_matches(status: str, status_filter: str) -> bool:
    return status_filter == ALL_STATUSES or status.lower() == status_filter.lower()


def _trainer_name(booking: BookingRequest) -> str:
    return (booking.trainer.full_name if booking.trainer else None) or ""


def _created_timestamp(created_at: Optional[datetime.datetime]) -> float:
    return created_at.timestamp() if created_at is not None else 0


def filter_bookings(
    bookings: list[BookingRequest],
    tab: BookingsTab,
    status_filter: str = ALL_STATUSES,
    search: str = "",
) -> list[BookingRequest]:
    request_type = TAB_REQUEST_TYPES.get(tab)
    term = search.lower()
    filtered = [
        b
        for b in bookings
        if (request_type is None or b.request_type == request_type)
        and _status_matches(b.status, status_filter)
        and (
            not term
            or _contains(
                term,
                b.course.title if b.course else None,
                b.trainer.full_name if b.trainer else None,
                b.client.user_name if b.client else None,
                b.client_name,
                b.client_email,
            )
        )
    ]
    if tab == BookingsTab.INHOUSE:
        # trainer first, oldest request first within a trainer
        filtered.sort(
            key=lambda b: (
                _trainer_name(b).casefold(),
                _created_timestamp(b.created_at),
            )
        )
    return filtered


def _registration_trainer_name(registration: EventRegistration) -> str:
    event = registration.event
    if event is None or event.trainer is None:
        return ""
    return event.trainer.full_name or ""


def _registration_event_title(registration: EventRegistration) -> str:
    event = registration.event
    if event is None:
        return ""
    return event.title or (event.course.title if event.course else None) or ""


def filter_registrations(
    registrations: list[EventRegistration],
    status_filter: str = ALL_STATUSES,
    search: str = "",
) -> list[EventRegistration]:
    term = search.lower()
    filtered = []
    for r in registrations:
        if not _status_matches(r.status, status_filter):
            continue
        event = r.event
        if term and not _contains(
            term,
            event.title if event else None,
            event.course.title if event and event.course else None,
            event.trainer.full_name if event and event.trainer else None,
            r.client.user_name if r.client else None,
            r.client_name,
            r.client_email,
        ):
            continue
        filtered.append(r)
    filtered.sort(
        key=lambda r: (
            _registration_trainer_name(r).casefold(),
            _registration_event_title(r).casefold(),
        )
    )
    return filtered


class DateGroup(BaseModel):
    date_key: str
    label: str
    bookings: list[BookingRequest] = []


class TrainerBookingGroup(BaseModel):
    trainer_id: str
    trainer_name: str
    trainer_email: str = ""
    dates: list[DateGroup] = []


class EventGroup(BaseModel):
    event_id: str
    event_title: str
    event_date: Optional[datetime.date] = None
    course_code: str = ""
    registrations: list[EventRegistration] = []


class TrainerRegistrationGroup(BaseModel):
    trainer_id: str
    trainer_name: str
    trainer_email: str = ""
    events: list[EventGroup] = []


def group_bookings_by_trainer_and_date(
    bookings: list[BookingRequest],
) -> list[TrainerBookingGroup]:
    trainers: dict[str, TrainerBookingGroup] = {}
    dates: dict[str, dict[str, DateGroup]] = {}
    for booking in bookings:
        trainer = booking.trainer
        trainer_id = (trainer.id if trainer else None) or UNKNOWN_GROUP_KEY
        if trainer_id not in trainers:
            trainers[trainer_id] = TrainerBookingGroup(
                trainer_id=trainer_id,
                trainer_name=(trainer.full_name if trainer else None)
                or UNKNOWN_TRAINER_NAME,
                trainer_email=(trainer.email if trainer else None) or "",
            )
            dates[trainer_id] = {}
        if booking.requested_date is not None:
            date_key = format_date(booking.requested_date)
            label = booking.requested_date.strftime("%d %b %Y")
        else:
            date_key, label = NO_DATE_GROUP_KEY, "No Date"
        trainer_dates = dates[trainer_id]
        if date_key not in trainer_dates:
            trainer_dates[date_key] = DateGroup(date_key=date_key, label=label)
        trainer_dates[date_key].bookings.append(booking)
    for trainer_id, group in trainers.items():
        # canonical keys sort chronologically, undated requests go last
        group.dates = sorted(
            dates[trainer_id].values(),
            key=lambda d: (d.date_key == NO_DATE_GROUP_KEY, d.date_key),
        )
    return list(trainers.values())


def group_registrations_by_trainer_and_event(
    registrations: list[EventRegistration],
) -> list[TrainerRegistrationGroup]:
    trainers: dict[str, TrainerRegistrationGroup] = {}
    events: dict[str, dict[str, EventGroup]] = {}
    for registration in registrations:
        event = registration.event
        trainer = event.trainer if event else None
        trainer_id = (trainer.id if trainer else None) or UNKNOWN_GROUP_KEY
        if trainer_id not in trainers:
            trainers[trainer_id] = TrainerRegistrationGroup(
                trainer_id=trainer_id,
                trainer_name=(trainer.full_name if trainer else None)
                or UNKNOWN_TRAINER_NAME,
                trainer_email=(trainer.email if trainer else None) or "",
            )
            events[trainer_id] = {}
        event_id = (event.id if event else None) or UNKNOWN_GROUP_KEY
        trainer_events = events[trainer_id]
        if event_id not in trainer_events:
            trainer_events[event_id] = EventGroup(
                event_id=event_id,
                event_title=_registration_event_title(registration)
                or UNKNOWN_EVENT_TITLE,
                event_date=event.event_date if event else None,
                course_code=(
                    event.course.course_code if event and event.course else None
                )
                or "",
            )
        trainer_events[event_id].registrations.append(registration)
    for trainer_id, group in trainers.items():
        group.events = list(events[trainer_id].values())
    return list(trainers.values())
