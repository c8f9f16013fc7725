import datetime
from typing import Annotated, Any, Optional

from pydantic import BeforeValidator


def canonical_date(value: Any) -> Any:
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        # backend mixes plain dates and ISO timestamps, only the date part matters
        return datetime.date.fromisoformat(value.split("T")[0])
    return value


def optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def upper_str(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


def upper_str_or_empty(value: Any) -> Any:
    return "" if value is None else upper_str(value)


def str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).upper() for v in value]
    return [str(value).upper()]


Id = Annotated[str, BeforeValidator(str)]
OptionalId = Annotated[Optional[str], BeforeValidator(optional_str)]
CanonicalDate = Annotated[Optional[datetime.date], BeforeValidator(canonical_date)]
UpperStr = Annotated[str, BeforeValidator(upper_str_or_empty)]
OptionalUpperStr = Annotated[Optional[str], BeforeValidator(upper_str)]
UpperStrList = Annotated[list[str], BeforeValidator(str_list)]
