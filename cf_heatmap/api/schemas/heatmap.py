from datetime import date

from pydantic import BaseModel
from pydantic import Field


class ProblemItem(BaseModel):
    """Solved problem shown in a day's hover list."""

    name: str
    rating: int = Field(ge=0)
    link: str


class HeatmapCellItem(BaseModel):
    """Single calendar cell: grid position, fill color and solved problems."""

    date: date
    week_column: int = Field(ge=0)
    day_row: int = Field(ge=0, le=6)
    color: str
    problems: list[ProblemItem]


class MonthColumnItem(BaseModel):
    month: int
    label: str
    week_column: int


class HeatmapResponse(BaseModel):
    """Heatmap payload for one handle and year."""

    handle: str
    year: int
    cells: list[HeatmapCellItem]
    month_columns: list[MonthColumnItem]


class DayProblemsResponse(BaseModel):
    handle: str
    date: date
    problems: list[ProblemItem]


class YearsResponse(BaseModel):
    years: list[int]
