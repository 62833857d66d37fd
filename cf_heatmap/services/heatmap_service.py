from dataclasses import dataclass
from datetime import date
from urllib.parse import urlsplit

from cf_heatmap.services.activity_index import ActivityIndex
from cf_heatmap.services.activity_index import Problem
from cf_heatmap.services.grid import GridCoordinate
from cf_heatmap.services.grid import MonthColumn
from cf_heatmap.services.grid import coordinate
from cf_heatmap.services.grid import month_columns
from cf_heatmap.services.grid import year_dates
from cf_heatmap.services.rating import DEFAULT_SCALE
from cf_heatmap.services.rating import RGBA
from cf_heatmap.services.rating import RatingScale
from cf_heatmap.services.submission_cache import SubmissionCache


FIRST_SUPPORTED_YEAR = 2015


@dataclass(frozen=True)
class HeatmapCell:
    """Render instruction for one calendar day."""

    date: date
    coordinate: GridCoordinate
    color: RGBA
    problems: tuple[Problem, ...]


@dataclass(frozen=True)
class HeatmapView:
    handle: str
    year: int
    cells: list[HeatmapCell]
    month_columns: list[MonthColumn]


@dataclass(frozen=True)
class HandleUnavailable:
    """No usable handle could be resolved from the page context."""

    raw_value: str | None = None


def resolve_handle(value: str | None) -> str | None:
    """Extract a handle from a bare handle, a profile path or a profile URL.

    The handle is the last path segment; a path ending in "/" has none.
    """

    if value is None:
        return None

    handle = urlsplit(value.strip()).path.split("/")[-1].strip()
    return handle or None


def supported_years(today: date | None = None) -> list[int]:
    """Selectable years, most recent first."""

    current_year = (today or date.today()).year
    return list(range(current_year, FIRST_SUPPORTED_YEAR - 1, -1))


def is_supported_year(year: int, today: date | None = None) -> bool:
    return FIRST_SUPPORTED_YEAR <= year <= (today or date.today()).year


def assemble(
    year: int,
    index: ActivityIndex,
    scale: RatingScale = DEFAULT_SCALE,
) -> list[HeatmapCell]:
    """Join a year's activity with grid positions and colors, one cell per day."""

    year_start = date(year, 1, 1)
    days = index.year(year)
    cells: list[HeatmapCell] = []

    for day in year_dates(year):
        record = days.get(day.isoformat())
        problems = record.problems if record else ()
        cells.append(
            HeatmapCell(
                date=day,
                coordinate=coordinate(day, year_start),
                color=scale.classify(problems),
                problems=problems,
            )
        )

    return cells


def day_problems(index: ActivityIndex, day: date) -> tuple[Problem, ...]:
    return index.problems_on(day)


async def build_heatmap(
    handle: str | None,
    year: int,
    cache: SubmissionCache,
    scale: RatingScale = DEFAULT_SCALE,
) -> HeatmapView | HandleUnavailable:
    """Build the render payload for a profile and year.

    The handle is resolved before any request is made; an unusable handle
    yields `HandleUnavailable` instead of fetching.
    """

    resolved = resolve_handle(handle)
    if resolved is None:
        return HandleUnavailable(raw_value=handle)

    index = await cache.get(resolved)
    return HeatmapView(
        handle=resolved,
        year=year,
        cells=assemble(year, index, scale),
        month_columns=month_columns(year),
    )
