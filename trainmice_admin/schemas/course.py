from enum import Enum
from typing import Optional

from trainmice_admin.schemas.camel import CamelModel
from trainmice_admin.schemas.common import (
    Id,
    OptionalId,
    OptionalUpperStr,
    UpperStrList,
)


class CourseStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    DENIED = "DENIED"


class CourseType(str, Enum):
    PUBLIC = "PUBLIC"
    IN_HOUSE = "IN_HOUSE"


class CourseMode(str, Enum):
    PHYSICAL = "PHYSICAL"
    ONLINE = "ONLINE"
    HYBRID = "HYBRID"


class CourseScheduleItem(CamelModel):
    day_number: int
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    session_name: Optional[str] = None
    module_title: Optional[str] = None
    submodule_title: Optional[str] = None


class Course(CamelModel):
    id: Id
    title: str = ""
    description: Optional[str] = None
    trainer_id: OptionalId = None
    duration_hours: Optional[float] = None
    duration_unit: Optional[str] = None
    course_type: UpperStrList = []
    course_mode: UpperStrList = []
    status: OptionalUpperStr = None
    price: Optional[float] = None
    venue: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    schedule: list[CourseScheduleItem] = []
