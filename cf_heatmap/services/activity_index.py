import logging
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from datetime import datetime
from datetime import tzinfo
from types import MappingProxyType
from typing import Any

from cf_heatmap.services.links import CODEFORCES_BASE_URL
from cf_heatmap.services.links import problem_url


logger = logging.getLogger(__name__)

ACCEPTED_VERDICT = "OK"


@dataclass(frozen=True)
class Problem:
    name: str
    rating: int
    link: str


@dataclass(frozen=True)
class DayRecord:
    """Problems solved on one calendar date, unique by name."""

    problems: tuple[Problem, ...]


class ActivityIndex:
    """Read-only year -> "YYYY-MM-DD" -> DayRecord lookup."""

    def __init__(self, years: Mapping[int, Mapping[str, DayRecord]] | None = None) -> None:
        self._years: Mapping[int, Mapping[str, DayRecord]] = MappingProxyType(
            {
                year: MappingProxyType(dict(days))
                for year, days in (years or {}).items()
                if days
            }
        )

    @classmethod
    def empty(cls) -> "ActivityIndex":
        return cls()

    def __bool__(self) -> bool:
        return bool(self._years)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._years))

    def __contains__(self, year: object) -> bool:
        return year in self._years

    def year(self, year: int) -> Mapping[str, DayRecord]:
        return self._years.get(year, MappingProxyType({}))

    def day(self, year: int, date_key: str) -> DayRecord | None:
        return self.year(year).get(date_key)

    def problems_on(self, day: date) -> tuple[Problem, ...]:
        record = self.day(day.year, day.isoformat())
        return record.problems if record else ()


@dataclass(frozen=True)
class _AcceptedSubmission:
    day: date
    problem: Problem


def _parse_submission(
    record: Any, tz: tzinfo | None, base_url: str
) -> _AcceptedSubmission | None:
    if not isinstance(record, Mapping):
        return None
    if record.get("verdict") != ACCEPTED_VERDICT:
        return None

    created_at = record.get("creationTimeSeconds")
    problem = record.get("problem")
    if isinstance(created_at, bool) or not isinstance(created_at, int):
        return None
    if not isinstance(problem, Mapping):
        return None

    name = problem.get("name")
    index = problem.get("index")
    if not isinstance(name, str) or not name or not isinstance(index, str):
        return None

    rating = problem.get("rating")
    if rating is None:
        rating = 0
    if isinstance(rating, bool) or not isinstance(rating, int) or rating < 0:
        return None

    contest_id = record.get("contestId", problem.get("contestId"))
    if contest_id is not None and (
        isinstance(contest_id, bool) or not isinstance(contest_id, (int, str))
    ):
        return None

    try:
        # tz=None yields the host's local calendar date.
        day = datetime.fromtimestamp(created_at, tz).date()
    except (OverflowError, OSError, ValueError):
        return None

    return _AcceptedSubmission(
        day=day,
        problem=Problem(
            name=name,
            rating=rating,
            link=problem_url(contest_id, index, base_url=base_url),
        ),
    )


def build_activity_index(
    records: Iterable[Any],
    tz: tzinfo | None = None,
    base_url: str = CODEFORCES_BASE_URL,
) -> ActivityIndex:
    """Group accepted submissions into per-day problem lists.

    Records that are not accepted or are malformed are skipped. Within a
    day the first submission of a problem name wins; later ones with the
    same name are ignored even if their rating or link differ.
    """

    buckets: dict[int, dict[str, list[Problem]]] = {}
    skipped = 0

    for record in records:
        submission = _parse_submission(record, tz, base_url)
        if submission is None:
            skipped += 1
            continue

        day_problems = buckets.setdefault(submission.day.year, {}).setdefault(
            submission.day.isoformat(), []
        )
        # Linear scan: a day holds a few dozen problems at most.
        if any(existing.name == submission.problem.name for existing in day_problems):
            continue
        day_problems.append(submission.problem)

    if skipped:
        logger.debug("Skipped %d non-accepted or malformed submissions", skipped)

    return ActivityIndex(
        {
            year: {
                date_key: DayRecord(problems=tuple(problems))
                for date_key, problems in days.items()
            }
            for year, days in buckets.items()
        }
    )
