"""Calendar grid layout for a single year.

Columns follow `%U` week numbering: weeks start on Sunday and the first
Sunday of the year opens column 1, so days before it sit in column 0.
When January 1 is a Sunday, column 0 is empty and the year starts in
column 1. This is not ISO week numbering.
"""

from dataclasses import dataclass
from datetime import date
from datetime import timedelta


DAYS_PER_WEEK = 7
MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class GridCoordinate:
    week_column: int
    day_row: int


@dataclass(frozen=True)
class MonthColumn:
    month: int
    label: str
    week_column: int


def day_row(day: date) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""

    return (day.weekday() + 1) % DAYS_PER_WEEK


def week_column(day: date, year_start: date | None = None) -> int:
    start = year_start or date(day.year, 1, 1)
    # Same as int(day.strftime("%U")).
    return ((day - start).days + DAYS_PER_WEEK - day_row(day)) // DAYS_PER_WEEK


def coordinate(day: date, year_start: date | None = None) -> GridCoordinate:
    return GridCoordinate(week_column=week_column(day, year_start), day_row=day_row(day))


def year_dates(year: int) -> list[date]:
    """Every calendar day from January 1 (inclusive) to next January 1 (exclusive)."""

    start = date(year, 1, 1)
    end = date(year + 1, 1, 1)
    return [start + timedelta(days=offset) for offset in range((end - start).days)]


def date_at(cell: GridCoordinate, year: int) -> date | None:
    """Inverse of `coordinate`: the date shown in a cell, if the year has one."""

    if not 0 <= cell.day_row < DAYS_PER_WEEK or cell.week_column < 0:
        return None

    start = date(year, 1, 1)
    first_column = 1 if day_row(start) == 0 else 0
    offset = (
        (cell.week_column - first_column) * DAYS_PER_WEEK
        + cell.day_row
        - day_row(start)
    )
    if offset < 0:
        return None

    day = start + timedelta(days=offset)
    return day if day.year == year else None


def column_count(year: int) -> int:
    return week_column(date(year, 12, 31)) + 1


def month_columns(year: int) -> list[MonthColumn]:
    return [
        MonthColumn(
            month=month,
            label=MONTH_LABELS[month - 1],
            week_column=week_column(date(year, month, 1)),
        )
        for month in range(1, 13)
    ]
