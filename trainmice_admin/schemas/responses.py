from typing import Optional

from trainmice_admin.schemas.booking import BookingRequest
from trainmice_admin.schemas.camel import CamelModel
from trainmice_admin.schemas.event import Event, EventRegistration


class BookingUpdate(CamelModel):
    message: Optional[str] = None
    booking: Optional[BookingRequest] = None


class RegistrationUpdate(CamelModel):
    message: Optional[str] = None
    registration: Optional[EventRegistration] = None


class EventUpdate(CamelModel):
    message: Optional[str] = None
    event: Optional[Event] = None


class AutoCompleteResult(CamelModel):
    message: Optional[str] = None
    count: int = 0
    events: list[Event] = []
