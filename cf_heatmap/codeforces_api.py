from collections.abc import Mapping
from typing import Any

import httpx


USER_AGENT = "cf-heatmap"


class CodeforcesAPIError(Exception):
    """Base error for failed Codeforces API requests."""


class TransportError(CodeforcesAPIError):
    """Raised on network failures and non-success HTTP or API statuses."""


class DecodeError(CodeforcesAPIError):
    """Raised when the response body is not the expected JSON document."""


async def fetch_user_submissions(
    handle: str,
    api_url: str,
    timeout: float = 20.0,
    client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    """Fetch accepted submissions of a handle from the `user.status` method."""

    if not handle:
        raise ValueError("handle is required for user.status requests")

    url = f"{api_url.rstrip('/')}/user.status"
    params = {"handle": handle, "status": "OK"}
    headers = {"Accept": "application/json", "User-Agent": USER_AGENT}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as owned_client:
                response = await owned_client.get(url, params=params, headers=headers)
        else:
            response = await client.get(url, params=params, headers=headers, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise TransportError(
            f"Codeforces API returned HTTP {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise TransportError("Codeforces API request failed") from exc

    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise DecodeError("Codeforces response is not valid JSON") from exc

    if not isinstance(payload, Mapping):
        raise DecodeError("Codeforces response is invalid")

    status = payload.get("status")
    if status != "OK":
        comment = payload.get("comment")
        raise TransportError(f"Codeforces API status {status!r}: {comment}")

    result = payload.get("result")
    if not isinstance(result, list):
        raise DecodeError("Codeforces submissions result is missing")

    return [item for item in result if isinstance(item, dict)]
