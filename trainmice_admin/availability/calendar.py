import calendar
import datetime
from typing import Optional

from dateutil.relativedelta import relativedelta


def format_date(day: datetime.date) -> str:
    return day.strftime("%Y-%m-%d")


def parse_date(value: str) -> datetime.date:
    return datetime.date.fromisoformat(value.split("T")[0])


def is_today(day: datetime.date, today: Optional[datetime.date] = None) -> bool:
    # compare canonical strings so datetimes in other zones never drift a day
    return format_date(day) == format_date(today or datetime.date.today())


def js_weekday(day: datetime.date) -> int:
    """Day of week with Sunday as 0, the numbering used for blocked weekdays."""
    return (day.weekday() + 1) % 7


def calendar_grid(year: int, month: int) -> list[datetime.date]:
    _, days_in_month = calendar.monthrange(year, month)
    return [datetime.date(year, month, d) for d in range(1, days_in_month + 1)]


def leading_blank_cells(year: int, month: int) -> int:
    return js_weekday(datetime.date(year, month, 1))


def month_bounds(year: int, month: int) -> tuple[datetime.date, datetime.date]:
    _, days_in_month = calendar.monthrange(year, month)
    return datetime.date(year, month, 1), datetime.date(year, month, days_in_month)


def shift_month(year: int, month: int, months: int) -> tuple[int, int]:
    shifted = datetime.date(year, month, 1) + relativedelta(months=months)
    return shifted.year, shifted.month


def expand_date_range(
    start: datetime.date, end: datetime.date
) -> list[datetime.date]:
    if end < start:
        return []
    return [start + datetime.timedelta(days=i) for i in range((end - start).days + 1)]


def lookahead_window(
    months: int, today: Optional[datetime.date] = None
) -> tuple[datetime.date, datetime.date]:
    start = today or datetime.date.today()
    return start, start + relativedelta(months=months)
