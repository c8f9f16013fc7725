import datetime
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, Field

from trainmice_admin.schemas.camel import CamelModel
from trainmice_admin.schemas.common import CanonicalDate, Id, OptionalId


class AvailabilityStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    NOT_AVAILABLE = "NOT_AVAILABLE"
    TENTATIVE = "TENTATIVE"
    BOOKED = "BOOKED"


class DayStatus(str, Enum):
    AVAILABLE = "available"
    NOT_AVAILABLE = "not_available"
    BLOCKED = "blocked"
    TENTATIVE = "tentative"
    BOOKED = "booked"


def _slot_status(value: Any) -> str:
    if value is None or value == "":
        return AvailabilityStatus.AVAILABLE.value
    return str(value).upper()


class AvailabilitySlot(CamelModel):
    id: Id
    trainer_id: OptionalId = None
    date: CanonicalDate = Field(
        default=None, validation_alias=AliasChoices("date", "dateString")
    )
    status: Annotated[str, BeforeValidator(_slot_status)] = (
        AvailabilityStatus.AVAILABLE.value
    )


class CreateAvailabilityPayload(CamelModel):
    dates: list[datetime.date]
    status: AvailabilityStatus


class CalendarEntry(BaseModel):
    id: str
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    status: str = ""
    title: Optional[str] = None


class CalendarDay(BaseModel):
    date: datetime.date
    status: DayStatus
    bookings: list[CalendarEntry] = []
