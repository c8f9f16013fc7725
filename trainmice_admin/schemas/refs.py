from typing import Optional

from trainmice_admin.schemas.camel import CamelModel
from trainmice_admin.schemas.common import OptionalId, OptionalUpperStr


class TrainerRef(CamelModel):
    id: OptionalId = None
    full_name: Optional[str] = None
    email: Optional[str] = None


class ClientRef(CamelModel):
    id: OptionalId = None
    user_name: Optional[str] = None
    company_email: Optional[str] = None
    contact_number: Optional[str] = None


class CourseRef(CamelModel):
    id: OptionalId = None
    title: Optional[str] = None
    course_code: Optional[str] = None
    course_type: OptionalUpperStr = None
