import datetime

from trainmice_admin.availability.calendar import (
    calendar_grid,
    expand_date_range,
    format_date,
    is_today,
    js_weekday,
    leading_blank_cells,
    lookahead_window,
    month_bounds,
    parse_date,
    shift_month,
)


def test_js_weekday_starts_on_sunday():
    assert js_weekday(datetime.date(2025, 3, 9)) == 0  # Sunday
    assert js_weekday(datetime.date(2025, 3, 10)) == 1  # Monday
    assert js_weekday(datetime.date(2025, 3, 15)) == 6  # Saturday


def test_calendar_grid_covers_whole_month():
    days = calendar_grid(2024, 2)
    assert len(days) == 29
    assert days[0] == datetime.date(2024, 2, 1)
    assert days[-1] == datetime.date(2024, 2, 29)


def test_leading_blank_cells():
    # 1 March 2025 is a Saturday
    assert leading_blank_cells(2025, 3) == 6
    # 1 June 2025 is a Sunday
    assert leading_blank_cells(2025, 6) == 0


def test_month_bounds():
    assert month_bounds(2025, 4) == (
        datetime.date(2025, 4, 1),
        datetime.date(2025, 4, 30),
    )


def test_shift_month_crosses_years():
    assert shift_month(2025, 1, -1) == (2024, 12)
    assert shift_month(2025, 12, 1) == (2026, 1)
    assert shift_month(2025, 6, 0) == (2025, 6)


def test_parse_date_ignores_time_part():
    assert parse_date("2025-03-10T23:30:00.000Z") == datetime.date(2025, 3, 10)
    assert format_date(parse_date("2025-03-10")) == "2025-03-10"


def test_is_today():
    today = datetime.date(2025, 3, 10)
    assert is_today(datetime.date(2025, 3, 10), today)
    assert not is_today(datetime.date(2025, 3, 11), today)


def test_expand_date_range_is_inclusive():
    dates = expand_date_range(datetime.date(2025, 3, 30), datetime.date(2025, 4, 2))
    assert [format_date(d) for d in dates] == [
        "2025-03-30",
        "2025-03-31",
        "2025-04-01",
        "2025-04-02",
    ]


def test_expand_date_range_single_and_reversed():
    day = datetime.date(2025, 3, 10)
    assert expand_date_range(day, day) == [day]
    assert expand_date_range(day, day - datetime.timedelta(days=1)) == []


def test_lookahead_window():
    start, end = lookahead_window(12, today=datetime.date(2025, 1, 31))
    assert start == datetime.date(2025, 1, 31)
    assert end == datetime.date(2026, 1, 31)
