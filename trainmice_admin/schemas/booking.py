import datetime
from enum import Enum
from typing import Optional

from trainmice_admin.schemas.camel import CamelModel
from trainmice_admin.schemas.common import (
    CanonicalDate,
    Id,
    OptionalId,
    OptionalUpperStr,
    UpperStr,
)
from trainmice_admin.schemas.event import Event
from trainmice_admin.schemas.refs import ClientRef, CourseRef, TrainerRef


class RequestType(str, Enum):
    PUBLIC = "PUBLIC"
    INHOUSE = "INHOUSE"


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    DENIED = "DENIED"


class BookingRequest(CamelModel):
    id: Id
    course_id: OptionalId = None
    trainer_id: OptionalId = None
    client_id: OptionalId = None
    request_type: OptionalUpperStr = None
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    requested_date: CanonicalDate = None
    end_date: CanonicalDate = None
    requested_time: Optional[str] = None
    # the backend owns the status set, so unknown values are kept verbatim
    status: UpperStr = ""
    location: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    course: Optional[CourseRef] = None
    trainer: Optional[TrainerRef] = None
    client: Optional[ClientRef] = None

    @property
    def resolved_client_id(self) -> Optional[str]:
        if self.client_id:
            return self.client_id
        if self.client is not None and self.client.id:
            return self.client.id
        return None

    @property
    def resolved_trainer_id(self) -> Optional[str]:
        if self.trainer_id:
            return self.trainer_id
        if self.trainer is not None:
            return self.trainer.id
        return None


class ConfirmBookingPayload(CamelModel):
    total_slots: int
    availability_id: str
    registered_participants: Optional[int] = None
    event_date: Optional[datetime.date] = None


class BookingConfirmation(CamelModel):
    message: Optional[str] = None
    booking: Optional[BookingRequest] = None
    event: Optional[Event] = None


class ClientEmailPayload(CamelModel):
    client_ids: list[str]
    title: str
    message: str


class ClientEmailResult(CamelModel):
    message: Optional[str] = None
    sent_count: int = 0
