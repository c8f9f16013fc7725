import math
from typing import Optional, Union

from trainmice_admin.api.client import ApiClient
from trainmice_admin.availability.calendar import lookahead_window
from trainmice_admin.bookings.confirmation import selectable_slots
from trainmice_admin.consts import (
    DEFAULT_AVAILABILITY_LOOKAHEAD_MONTHS,
    HOURS_PER_COURSE_DAY,
)
from trainmice_admin.errors import ApiRequestError, EventCreationError
from trainmice_admin.notify.toast import ToastBus
from trainmice_admin.schemas.availability import AvailabilitySlot
from trainmice_admin.schemas.course import Course, CourseMode, CourseType
from trainmice_admin.schemas.event import EventCreationPayload
from trainmice_admin.schemas.responses import EventUpdate
from trainmice_admin.utils.logging_utils import log

EVENT_CREATION_ERROR_MESSAGES = {
    EventCreationError.MISSING_TRAINER: "This course doesn't have a trainer assigned",
    EventCreationError.WRONG_DATE_COUNT: "Please select exactly {days} date(s) from trainer availability",
    EventCreationError.MISSING_COURSE_TYPE: "Course type is required",
    EventCreationError.MISSING_COURSE_MODE: "Course mode is required",
}


def days_needed(course: Course) -> int:
    if course.duration_hours is None or course.duration_hours <= 0:
        return 1
    unit = (course.duration_unit or "hours").lower()
    if unit == "days":
        return math.ceil(course.duration_hours)
    if unit == "half_day":
        return math.ceil(course.duration_hours * 0.5)
    return math.ceil(course.duration_hours / HOURS_PER_COURSE_DAY)


def default_course_type(course: Course) -> Optional[CourseType]:
    for course_type in (CourseType.PUBLIC, CourseType.IN_HOUSE):
        if course_type.value in course.course_type:
            return course_type
    return None


def default_course_mode(course: Course) -> Optional[CourseMode]:
    for course_mode in (CourseMode.PHYSICAL, CourseMode.ONLINE, CourseMode.HYBRID):
        if course_mode.value in course.course_mode:
            return course_mode
    return None


def _price_str(price: Optional[float]) -> Optional[str]:
    if price is None:
        return None
    return f"{price:g}"


class EventCreationForm:
    """Materializes an event directly from a course and selected trainer slots."""

    def __init__(self, client: ApiClient, toasts: ToastBus, course: Course):
        self.client = client
        self.toasts = toasts
        self.course = course
        self.days_needed = days_needed(course)
        self.options: list[AvailabilitySlot] = []
        self.selected_availability_ids: list[str] = []
        self.course_type = default_course_type(course) or CourseType.PUBLIC
        self.course_mode = default_course_mode(course) or CourseMode.PHYSICAL
        self.price = _price_str(course.price)
        self.venue = course.venue
        self.city = course.city
        self.state = course.state

    async def load_availability(
        self, lookahead_months: int = DEFAULT_AVAILABILITY_LOOKAHEAD_MONTHS
    ) -> list[AvailabilitySlot]:
        if self.course.trainer_id is None:
            self.options = []
            return self.options
        start, end = lookahead_window(lookahead_months)
        try:
            slots = await self.client.get_trainer_availability(
                self.course.trainer_id, start, end
            )
        except ApiRequestError as e:
            log.error(f"Error fetching trainer availability: {e}")
            slots = []
        self.options = selectable_slots(slots)
        return self.options

    def toggle(self, availability_id: str) -> bool:
        if availability_id in self.selected_availability_ids:
            self.selected_availability_ids.remove(availability_id)
            return False
        if len(self.selected_availability_ids) >= self.days_needed:
            return False
        self.selected_availability_ids.append(availability_id)
        return True

    @property
    def selected_slots(self) -> list[AvailabilitySlot]:
        return [s for s in self.options if s.id in self.selected_availability_ids]

    def validation_errors(self) -> list[EventCreationError]:
        errors = []
        if self.course.trainer_id is None:
            errors.append(EventCreationError.MISSING_TRAINER)
        if len(self.selected_availability_ids) != self.days_needed:
            errors.append(EventCreationError.WRONG_DATE_COUNT)
        if self.course_type is None:
            errors.append(EventCreationError.MISSING_COURSE_TYPE)
        if self.course_mode is None:
            errors.append(EventCreationError.MISSING_COURSE_MODE)
        return errors

    def payload(self) -> EventCreationPayload:
        return EventCreationPayload(
            availability_ids=list(self.selected_availability_ids),
            course_type=self.course_type.value,
            course_mode=self.course_mode.value,
            price=self.price or None,
            venue=self.venue or None,
            city=self.city or None,
            state=self.state or None,
        )

    async def submit(self) -> Union[EventUpdate, EventCreationError]:
        errors = self.validation_errors()
        if len(errors) > 0:
            self.toasts.error(
                EVENT_CREATION_ERROR_MESSAGES[errors[0]].format(days=self.days_needed)
            )
            return errors[0]
        try:
            update = await self.client.create_event_from_course(
                self.course.id, self.payload()
            )
        except ApiRequestError as e:
            self.toasts.error(e.message or "Error creating event")
            return EventCreationError.REQUEST_FAILED
        self.toasts.success(update.message or "Event created successfully")
        return update
