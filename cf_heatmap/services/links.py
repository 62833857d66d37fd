CODEFORCES_BASE_URL = "https://codeforces.com"

# Regular round ids have at most four digits; gym contests start at 100001.
MAX_ROUND_ID_DIGITS = 4


def problem_url(
    contest_id: int | str | None,
    index: str,
    base_url: str = CODEFORCES_BASE_URL,
) -> str:
    """Build the canonical problem URL for a contest id and problem index."""

    base = base_url.rstrip("/")
    if contest_id and len(str(contest_id)) <= MAX_ROUND_ID_DIGITS:
        return f"{base}/problemset/problem/{contest_id}/{index}"

    segment = "" if contest_id is None else str(contest_id)
    return f"{base}/problemset/gymProblem/{segment}/{index}"
