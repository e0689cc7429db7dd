"""Calendar arithmetic for the date picker and local-time scheduling.

Every function here works on local calendar components (year, month, day).
Canonical date keys are built from those components directly so a selection
can never drift across a timezone boundary.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo


@dataclass(frozen=True)
class DayCell:
    """A single selectable day in a month grid."""

    day: int
    date_key: str
    selected: bool
    disabled: bool
    today: bool


@dataclass(frozen=True)
class MonthGrid:
    """A month laid out for a Sunday-first calendar."""

    year: int
    month: int
    leading_blanks: int
    cells: tuple[DayCell, ...]

    @property
    def weeks(self) -> list[list[DayCell | None]]:
        """Cells split into rows of seven, padded with None."""
        slots: list[DayCell | None] = [None] * self.leading_blanks + list(self.cells)
        slots += [None] * (-len(slots) % 7)
        return [slots[i : i + 7] for i in range(0, len(slots), 7)]


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month (1-12)."""
    return calendar.monthrange(year, month)[1]


def first_weekday_of_month(year: int, month: int) -> int:
    """Weekday of the 1st, with 0 = Sunday through 6 = Saturday."""
    # date.weekday() is Monday-first; shift to a Sunday-first index
    return (date(year, month, 1).weekday() + 1) % 7


def format_date_key(year: int, month: int, day: int) -> str:
    """Build the canonical YYYY-MM-DD string from local components."""
    return f"{year:04d}-{month:02d}-{day:02d}"


def parse_date_key(value: str) -> date:
    """Parse a YYYY-MM-DD string without any timezone interpretation."""
    year, month, day = (int(part) for part in value.split("-"))
    return date(year, month, day)


def to_local_date(value: date | datetime | str) -> date:
    """Reduce a date, aware/naive datetime or date key to a local calendar date."""
    if isinstance(value, str):
        return parse_date_key(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def is_same_local_date(a: date | datetime | str, b: date | datetime | str) -> bool:
    """Whether two moments fall on the same local calendar day."""
    return to_local_date(a) == to_local_date(b)


def is_disabled(
    year: int, month: int, day: int, min_date: date | datetime | str | None
) -> bool:
    """A day is disabled when strictly before the minimum's local date."""
    if min_date is None:
        return False
    return date(year, month, day) < to_local_date(min_date)


def is_selected(year: int, month: int, day: int, value: str | None) -> bool:
    """Whether the date key ``value`` names this day."""
    if not value:
        return False
    return parse_date_key(value) == date(year, month, day)


def is_today(year: int, month: int, day: int, today: date | None = None) -> bool:
    today = today or date.today()
    return date(year, month, day) == today


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (or backward) from year/month."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def build_month_grid(
    year: int,
    month: int,
    *,
    selected: str | None = None,
    min_date: date | datetime | str | None = None,
    today: date | None = None,
) -> MonthGrid:
    """Lay out a month with per-day selection, disabled and today flags."""
    today = today or date.today()
    cells = tuple(
        DayCell(
            day=day,
            date_key=format_date_key(year, month, day),
            selected=is_selected(year, month, day, selected),
            disabled=is_disabled(year, month, day, min_date),
            today=is_today(year, month, day, today),
        )
        for day in range(1, days_in_month(year, month) + 1)
    )
    return MonthGrid(
        year=year,
        month=month,
        leading_blanks=first_weekday_of_month(year, month),
        cells=cells,
    )


@dataclass
class CalendarState:
    """Viewed month and current selection of a date picker."""

    year: int
    month: int
    value: str | None = None
    min_date: date | datetime | str | None = None
    today: date | None = field(default=None, compare=False)

    @classmethod
    def for_value(
        cls,
        value: str | None,
        min_date: date | datetime | str | None = None,
        today: date | None = None,
    ) -> CalendarState:
        """Open the picker on the month of ``value`` (or of today)."""
        anchor = parse_date_key(value) if value else (today or date.today())
        return cls(anchor.year, anchor.month, value, min_date, today)

    def previous_month(self) -> None:
        self.year, self.month = shift_month(self.year, self.month, -1)

    def next_month(self) -> None:
        self.year, self.month = shift_month(self.year, self.month, 1)

    def grid(self) -> MonthGrid:
        return build_month_grid(
            self.year,
            self.month,
            selected=self.value,
            min_date=self.min_date,
            today=self.today,
        )

    def select(self, day: int) -> str | None:
        """Select a day of the viewed month; disabled or nonexistent days are ignored."""
        if not 1 <= day <= days_in_month(self.year, self.month):
            return None
        if is_disabled(self.year, self.month, day, self.min_date):
            return None
        self.value = format_date_key(self.year, self.month, day)
        return self.value


def local_datetime(day: date, at: time, tz: tzinfo | None = None) -> datetime:
    """Combine a calendar day and a time of day into an aware local datetime.

    Without ``tz`` the system's local zone is used, including its DST rules
    for that particular day.
    """
    naive = datetime.combine(day, at)
    if tz is not None:
        return naive.replace(tzinfo=tz)
    return naive.astimezone()
