import asyncio
import logging
from collections.abc import Awaitable
from collections.abc import Callable
from datetime import tzinfo
from typing import Any

import httpx

from cf_heatmap.codeforces_api import CodeforcesAPIError
from cf_heatmap.services.activity_index import ActivityIndex
from cf_heatmap.services.activity_index import build_activity_index
from cf_heatmap.services.links import CODEFORCES_BASE_URL


logger = logging.getLogger(__name__)

SubmissionFetcher = Callable[[str], Awaitable[list[dict[str, Any]]]]


class SubmissionCache:
    """Single-flight cache of activity indexes, one fetch per handle.

    Callers that arrive while a fetch is running await the same task, so
    the fetcher runs at most once per handle until it succeeds. Failures
    are logged and resolve to an empty index without being cached; the
    next call fetches again.
    """

    def __init__(
        self,
        fetch: SubmissionFetcher,
        tz: tzinfo | None = None,
        base_url: str = CODEFORCES_BASE_URL,
    ) -> None:
        self._fetch = fetch
        self._tz = tz
        self._base_url = base_url
        self._indexes: dict[str, ActivityIndex] = {}
        self._pending: dict[str, asyncio.Task[ActivityIndex]] = {}
        self._generation = 0

    def is_cached(self, handle: str) -> bool:
        return handle in self._indexes

    def reset(self) -> None:
        """Forget cached indexes; fetches already running will not store theirs."""

        self._generation += 1
        self._indexes.clear()
        self._pending.clear()

    async def get(self, handle: str) -> ActivityIndex:
        cached = self._indexes.get(handle)
        if cached is not None:
            return cached

        task = self._pending.get(handle)
        if task is None:
            task = asyncio.ensure_future(self._load(handle, self._generation))
            self._pending[handle] = task

        # A cancelled caller must not cancel the fetch other callers share.
        return await asyncio.shield(task)

    async def _load(self, handle: str, generation: int) -> ActivityIndex:
        try:
            records = await self._fetch(handle)
            index = build_activity_index(records, tz=self._tz, base_url=self._base_url)
        except (CodeforcesAPIError, httpx.HTTPError) as exc:
            logger.error("Fetching submissions for %s failed: %s", handle, exc)
            return ActivityIndex.empty()
        finally:
            if generation == self._generation:
                self._pending.pop(handle, None)

        if generation != self._generation:
            logger.info("Discarding activity index for %s fetched before reset", handle)
            return index

        self._indexes[handle] = index
        logger.info("Cached activity index for %s (%d years)", handle, len(list(index)))
        return index
