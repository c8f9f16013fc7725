import datetime
from typing import Iterable, Optional

from trainmice_admin.availability.calendar import calendar_grid, js_weekday
from trainmice_admin.schemas.availability import (
    AvailabilitySlot,
    CalendarDay,
    CalendarEntry,
    DayStatus,
)

BOOKED_ENTRY_STATUSES = {"booked", "confirmed"}
TENTATIVE_ENTRY_STATUSES = {"approved", "tentative"}

SLOT_DAY_STATUSES = {
    "not_available": DayStatus.NOT_AVAILABLE,
    "available": DayStatus.AVAILABLE,
    "booked": DayStatus.BOOKED,
    "tentative": DayStatus.TENTATIVE,
}


def resolve_day_status(
    entries: Iterable[CalendarEntry],
    availability: Optional[AvailabilitySlot],
    is_blocked: bool,
) -> DayStatus:
    if is_blocked:
        return DayStatus.BLOCKED
    statuses = [(e.status or "").lower() for e in entries]
    if any(s in BOOKED_ENTRY_STATUSES for s in statuses):
        return DayStatus.BOOKED
    if any(s in TENTATIVE_ENTRY_STATUSES for s in statuses):
        return DayStatus.TENTATIVE
    if availability is not None:
        slot_status = SLOT_DAY_STATUSES.get((availability.status or "").lower())
        if slot_status is not None:
            return slot_status
    return DayStatus.NOT_AVAILABLE


def bookings_for_date(
    entries: Iterable[CalendarEntry], day: datetime.date
) -> list[CalendarEntry]:
    matches = []
    for entry in entries:
        if entry.start_date is None:
            continue
        if entry.end_date is not None:
            if entry.start_date <= day <= entry.end_date:
                matches.append(entry)
        elif entry.start_date == day:
            matches.append(entry)
    return matches


def availability_by_date(
    availability: Iterable[AvailabilitySlot],
) -> dict[datetime.date, AvailabilitySlot]:
    by_date: dict[datetime.date, AvailabilitySlot] = {}
    for slot in availability:
        # first record for a date wins
        if slot.date is not None and slot.date not in by_date:
            by_date[slot.date] = slot
    return by_date


def build_calendar_days(
    year: int,
    month: int,
    entries: list[CalendarEntry],
    availability: list[AvailabilitySlot],
    blocked_weekdays: Iterable[int],
) -> list[CalendarDay]:
    slots = availability_by_date(availability)
    blocked = set(blocked_weekdays)
    days = []
    for day in calendar_grid(year, month):
        day_entries = bookings_for_date(entries, day)
        days.append(
            CalendarDay(
                date=day,
                status=resolve_day_status(
                    day_entries, slots.get(day), js_weekday(day) in blocked
                ),
                bookings=day_entries,
            )
        )
    return days


def count_by_status(days: list[CalendarDay]) -> dict[str, int]:
    counts = {"all": len(days)} | {status.value: 0 for status in DayStatus}
    for day in days:
        counts[day.status.value] += 1
    return counts
