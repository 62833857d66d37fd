from datetime import date

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query
from fastapi import Request

from cf_heatmap.api.schemas.heatmap import DayProblemsResponse
from cf_heatmap.api.schemas.heatmap import HeatmapCellItem
from cf_heatmap.api.schemas.heatmap import HeatmapResponse
from cf_heatmap.api.schemas.heatmap import MonthColumnItem
from cf_heatmap.api.schemas.heatmap import ProblemItem
from cf_heatmap.api.schemas.heatmap import YearsResponse
from cf_heatmap.services.activity_index import Problem
from cf_heatmap.services.heatmap_service import HandleUnavailable
from cf_heatmap.services.heatmap_service import build_heatmap
from cf_heatmap.services.heatmap_service import day_problems
from cf_heatmap.services.heatmap_service import is_supported_year
from cf_heatmap.services.heatmap_service import resolve_handle
from cf_heatmap.services.heatmap_service import supported_years
from cf_heatmap.services.submission_cache import SubmissionCache


router = APIRouter()


def get_submission_cache(request: Request) -> SubmissionCache:
    return request.app.state.submission_cache


def _problem_items(problems: tuple[Problem, ...]) -> list[ProblemItem]:
    return [
        ProblemItem(name=problem.name, rating=problem.rating, link=problem.link)
        for problem in problems
    ]


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "Hello World"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/years")
def list_years() -> YearsResponse:
    """Return the years offered by the year selector, newest first."""

    return YearsResponse(years=supported_years())


@router.get("/heatmap/{handle}")
async def get_heatmap(
    handle: str,
    year: int | None = Query(default=None),
    cache: SubmissionCache = Depends(get_submission_cache),
) -> HeatmapResponse:
    """Return per-day cells for a handle's activity in one calendar year."""

    selected_year = year if year is not None else date.today().year
    if not is_supported_year(selected_year):
        raise HTTPException(status_code=400, detail="year is not supported")

    view = await build_heatmap(handle, selected_year, cache)
    if isinstance(view, HandleUnavailable):
        raise HTTPException(status_code=400, detail="handle unavailable")

    return HeatmapResponse(
        handle=view.handle,
        year=view.year,
        cells=[
            HeatmapCellItem(
                date=cell.date,
                week_column=cell.coordinate.week_column,
                day_row=cell.coordinate.day_row,
                color=cell.color.to_css(),
                problems=_problem_items(cell.problems),
            )
            for cell in view.cells
        ],
        month_columns=[
            MonthColumnItem(
                month=column.month, label=column.label, week_column=column.week_column
            )
            for column in view.month_columns
        ],
    )


@router.get("/heatmap/{handle}/days/{day}")
async def get_day_problems(
    handle: str,
    day: date,
    cache: SubmissionCache = Depends(get_submission_cache),
) -> DayProblemsResponse:
    """Return problems solved on one date, as shown when hovering a cell."""

    resolved = resolve_handle(handle)
    if resolved is None:
        raise HTTPException(status_code=400, detail="handle unavailable")

    index = await cache.get(resolved)
    return DayProblemsResponse(
        handle=resolved,
        date=day,
        problems=_problem_items(day_problems(index, day)),
    )
