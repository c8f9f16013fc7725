import datetime
from enum import Enum
from typing import Optional

from trainmice_admin.schemas.camel import CamelModel
from trainmice_admin.schemas.common import (
    CanonicalDate,
    Id,
    OptionalId,
    UpperStr,
)
from trainmice_admin.schemas.refs import ClientRef, CourseRef, TrainerRef


class EventStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class RegistrationStatus(str, Enum):
    REGISTERED = "REGISTERED"
    APPROVED = "APPROVED"
    CANCELLED = "CANCELLED"


class Event(CamelModel):
    id: Id
    course_id: OptionalId = None
    trainer_id: OptionalId = None
    title: Optional[str] = None
    event_date: CanonicalDate = None
    end_date: CanonicalDate = None
    status: UpperStr = EventStatus.ACTIVE.value
    venue: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    price: Optional[float] = None
    course: Optional[CourseRef] = None
    trainer: Optional[TrainerRef] = None

    @property
    def display_title(self) -> str:
        if self.title:
            return self.title
        if self.course is not None and self.course.title:
            return self.course.title
        return "Event"

    @property
    def last_date(self) -> Optional[datetime.date]:
        return self.end_date or self.event_date


class EventRegistration(CamelModel):
    id: Id
    event_id: OptionalId = None
    client_id: OptionalId = None
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    pack_number: Optional[int] = None
    number_of_participants: Optional[int] = None
    status: UpperStr = RegistrationStatus.REGISTERED.value
    created_at: Optional[datetime.datetime] = None
    event: Optional[Event] = None
    client: Optional[ClientRef] = None


class EventCreationPayload(CamelModel):
    availability_ids: list[str]
    course_type: str
    course_mode: str
    price: Optional[str] = None
    venue: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
