"""Calendar engine: month grids, date keys and local-date comparisons."""

from tripboard.dates.engine import (
    CalendarState,
    DayCell,
    MonthGrid,
    build_month_grid,
    days_in_month,
    first_weekday_of_month,
    format_date_key,
    is_disabled,
    is_same_local_date,
    is_selected,
    local_datetime,
    parse_date_key,
    shift_month,
    to_local_date,
)

__all__ = [
    "CalendarState",
    "DayCell",
    "MonthGrid",
    "build_month_grid",
    "days_in_month",
    "first_weekday_of_month",
    "format_date_key",
    "is_disabled",
    "is_same_local_date",
    "is_selected",
    "local_datetime",
    "parse_date_key",
    "shift_month",
    "to_local_date",
]
